# Routes package __init__.py - re-exports routers for main.py convenience
from .decks import router as decks_router
from .cards import router as cards_router
from .learning import router as learning_router

__all__ = ['decks_router', 'cards_router', 'learning_router']
