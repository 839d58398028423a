"""Learning/Review state machine applied once per answered card."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from loguru import logger

from models.card import Card, Stage


@dataclass(frozen=True)
class SchedulingRules:
    learning_step_minutes: int = 1
    graduating_interval_hours: int = 24
    learning_growth: float = 2.0
    graduating_growth: float = 1.0
    review_growth: float = 2.0
    lapse_demotes_to_learning: bool = False

    def __post_init__(self):
        if self.learning_step_minutes <= 0 or self.graduating_interval_hours <= 0:
            raise ValueError("Scheduling intervals must be positive")
        if min(self.learning_growth, self.graduating_growth, self.review_growth) < 1:
            raise ValueError("Growth factors must be at least 1")
        if self.learning_growth <= 1:
            raise ValueError("Learning growth must exceed 1 so cards can leave Learning")

    @property
    def learning_step(self) -> timedelta:
        return timedelta(minutes=self.learning_step_minutes)

    @property
    def graduating_interval(self) -> timedelta:
        return timedelta(hours=self.graduating_interval_hours)


DEFAULT_RULES = SchedulingRules()


def rules_from_config(config: Optional[Dict[str, Any]]) -> SchedulingRules:
    """Build rules from the [scheduling] config table, falling back to defaults."""
    section = (config or {}).get("scheduling", {})
    return SchedulingRules(
        learning_step_minutes=int(section.get("learning_step_minutes", DEFAULT_RULES.learning_step_minutes)),
        graduating_interval_hours=int(section.get("graduating_interval_hours", DEFAULT_RULES.graduating_interval_hours)),
        learning_growth=float(section.get("learning_growth", DEFAULT_RULES.learning_growth)),
        graduating_growth=float(section.get("graduating_growth", DEFAULT_RULES.graduating_growth)),
        review_growth=float(section.get("review_growth", DEFAULT_RULES.review_growth)),
        lapse_demotes_to_learning=bool(section.get("lapse_demotes_to_learning", DEFAULT_RULES.lapse_demotes_to_learning)),
    )


def next_ease(current_ease: int, growth_factor: float) -> int:
    """Grow ease by a factor, rounding up. Never drops below 1."""
    return max(1, int(math.ceil(current_ease * growth_factor)))


def stage_after_lapse(card: Card, rules: SchedulingRules) -> Stage:
    """Stage a Review card lands in after a lapse resets its ease."""
    if rules.lapse_demotes_to_learning:
        return Stage.LEARNING
    return card.stage


def _answer_learning(card: Card, is_correct: bool, now: datetime, rules: SchedulingRules) -> Dict[str, Any]:
    if not is_correct:
        return {
            "incorrect": card.incorrect + 1,
            "ease": 1,
            "review_due_date": now + rules.learning_step,
        }
    if card.ease > 1:
        return {
            "correct": card.correct + 1,
            "ease": next_ease(card.ease, rules.graduating_growth),
            "stage": Stage.REVIEW,
            "review_due_date": now + rules.graduating_interval,
        }
    return {
        "correct": card.correct + 1,
        "ease": next_ease(card.ease, rules.learning_growth),
        "review_due_date": now + rules.learning_step,
    }


def _answer_review(card: Card, is_correct: bool, now: datetime, rules: SchedulingRules) -> Dict[str, Any]:
    if is_correct:
        ease = next_ease(card.ease, rules.review_growth)
        return {
            "correct": card.correct + 1,
            "ease": ease,
            "review_due_date": now + timedelta(days=ease),
        }
    changes: Dict[str, Any] = {
        "incorrect": card.incorrect + 1,
        "review_due_date": now + rules.learning_step,
    }
    if card.ease != 1:
        changes.update(
            lapses=card.lapses + 1,
            ease=1,
            stage=stage_after_lapse(card, rules),
        )
    return changes


def apply_answer(card: Card, is_correct: bool, now: datetime, rules: SchedulingRules = DEFAULT_RULES) -> Card:
    """Return the card as it stands after one answer given at ``now``.

    The input card is left untouched. Learning cards step by minutes until a
    correct answer arrives with ease above 1, then graduate to Review where the
    interval in days equals the new ease.
    """
    if card.stage == Stage.REVIEW:
        changes = _answer_review(card, is_correct, now, rules)
    else:
        changes = _answer_learning(card, is_correct, now, rules)
    changes["last_reviewed_at"] = now
    updated = card.model_copy(update=changes)
    logger.debug(
        "card {} {} -> stage={} ease={} due={}",
        card.id,
        "correct" if is_correct else "incorrect",
        updated.stage.value,
        updated.ease,
        updated.review_due_date.isoformat(),
    )
    return updated
