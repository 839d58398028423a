"""Alternative cards shown next to the due card in multiple-choice mode."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Sequence

from models.card import Card

MULTIPLE_CHOICE_MIN = 4


def distractor_count(candidate_count: int) -> int:
    """How many distractors to draw from ``candidate_count`` other cards."""
    if candidate_count < 3:
        return 0
    if candidate_count < 5:
        return 3
    return 5


def sample_distractors(cards: Sequence[Card], exclude_id: int, rng: random.Random) -> List[Card]:
    """Uniform sample without replacement, never including ``exclude_id``."""
    candidates = [card for card in cards if card.id != exclude_id]
    size = distractor_count(len(candidates))
    if size == 0:
        return []
    return rng.sample(candidates, size)


@dataclass(frozen=True)
class Choices:
    cards: List[Card]
    multiple_choice: bool


def build_choices(due_card: Card, distractors: Sequence[Card], rng: random.Random) -> Choices:
    """Shuffle the due card in with its distractors."""
    combined = list(distractors) + [due_card]
    rng.shuffle(combined)
    return Choices(cards=combined, multiple_choice=len(combined) >= MULTIPLE_CHOICE_MIN)
