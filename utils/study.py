"""Request-level orchestration: pick the next card and record answers.

Every collaborator (repository, clock, random source, rules) is passed in by
the caller. The caller must not run two answers for the same card at once;
``record_answer`` saves against the fetched snapshot so a lost race surfaces
as ``StaleCard`` instead of overwriting counters.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from db.repository import CardRepository
from models.card import Card, Stage
from utils.clock import Clock
from utils.distractors import build_choices, sample_distractors
from utils.due import most_due_card
from utils.errors import EmptyCandidateSet
from utils.grading import DEFAULT_MATCH_THRESHOLD, is_answer_correct
from utils.scheduler import DEFAULT_RULES, SchedulingRules, apply_answer


@dataclass(frozen=True)
class Prompt:
    card: Optional[Card]
    choices: List[Card]
    multiple_choice: bool

    @property
    def card_available(self) -> bool:
        return self.card is not None


@dataclass(frozen=True)
class AnswerResult:
    previous: Card
    card: Card
    correct: bool
    user_answer: str


def candidate_cards(repo: CardRepository, deck_id: int, stage: Stage, clock: Clock) -> List[Card]:
    """Learning cards are always eligible; Review cards only once due."""
    if stage == Stage.REVIEW:
        return repo.list_cards(deck_id, stage=Stage.REVIEW, due_before=clock.now())
    return repo.list_cards(deck_id, stage=Stage.LEARNING)


def next_prompt(
    repo: CardRepository,
    deck_id: int,
    stage: Stage,
    clock: Clock,
    rng: random.Random,
) -> Prompt:
    repo.get_deck(deck_id)
    try:
        card = most_due_card(candidate_cards(repo, deck_id, stage, clock))
    except EmptyCandidateSet:
        logger.info("No {} cards left in deck {}", stage.value, deck_id)
        return Prompt(card=None, choices=[], multiple_choice=False)
    distractors = sample_distractors(repo.list_cards(deck_id), card.id, rng)
    choices = build_choices(card, distractors, rng)
    return Prompt(card=card, choices=choices.cards, multiple_choice=choices.multiple_choice)


def record_answer(
    repo: CardRepository,
    card_id: int,
    user_answer: str,
    clock: Clock,
    rules: SchedulingRules = DEFAULT_RULES,
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> AnswerResult:
    card = repo.get_card(card_id)
    correct = is_answer_correct(user_answer, card.answer, threshold)
    updated = apply_answer(card, correct, clock.now(), rules)
    repo.save_card(updated, expected=card)
    return AnswerResult(previous=card, card=updated, correct=correct, user_answer=user_answer)
