from .deck import Deck, DeckCreate
from .card import Card, CardCreate, Stage

__all__ = ['Deck', 'DeckCreate', 'Card', 'CardCreate', 'Stage']
