from __future__ import annotations

from typing import Sequence

from models.card import Card
from utils.errors import EmptyCandidateSet, MalformedDueDate


def most_due_card(cards: Sequence[Card]) -> Card:
    """Return the card with the earliest due date.

    Ties keep the card seen first. Raises EmptyCandidateSet when there is
    nothing to choose from and MalformedDueDate when a card has no due date.
    """
    if not cards:
        raise EmptyCandidateSet("No cards to present")
    best = None
    for card in cards:
        if card.review_due_date is None:
            raise MalformedDueDate(None, card.id)
        if best is None or card.review_due_date < best.review_due_date:
            best = card
    return best
