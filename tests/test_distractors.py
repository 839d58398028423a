import random
from datetime import datetime, timezone

import pytest

from models.card import Card
from utils.distractors import build_choices, distractor_count, sample_distractors

NOW = datetime(2024, 8, 30, 12, 0, tzinfo=timezone.utc)


def _deck(size: int) -> list:
    return [
        Card(id=i, deck_id=1, question=f"q{i}", answer=f"a{i}", created_at=NOW, review_due_date=NOW)
        for i in range(1, size + 1)
    ]


@pytest.mark.parametrize(
    "candidates, expected",
    [(0, 0), (1, 0), (2, 0), (3, 3), (4, 3), (5, 5), (10, 5), (200, 5)],
)
def test_distractor_count(candidates, expected):
    assert distractor_count(candidates) == expected


def test_sample_excludes_due_card_and_has_no_repeats():
    cards = _deck(11)
    for seed in range(20):
        sample = sample_distractors(cards, exclude_id=4, rng=random.Random(seed))
        ids = [card.id for card in sample]
        assert len(ids) == 5
        assert len(set(ids)) == 5
        assert 4 not in ids


def test_sample_is_reproducible_with_seeded_random():
    cards = _deck(8)
    first = sample_distractors(cards, 1, random.Random(42))
    second = sample_distractors(cards, 1, random.Random(42))
    assert [c.id for c in first] == [c.id for c in second]


def test_single_card_deck_has_no_multiple_choice():
    cards = _deck(1)
    rng = random.Random(0)
    sample = sample_distractors(cards, exclude_id=1, rng=rng)
    assert sample == []
    choices = build_choices(cards[0], sample, rng)
    assert [c.id for c in choices.cards] == [1]
    assert choices.multiple_choice is False


def test_three_card_deck_falls_back_to_typed_answer():
    cards = _deck(3)
    rng = random.Random(0)
    choices = build_choices(cards[0], sample_distractors(cards, 1, rng), rng)
    assert choices.multiple_choice is False


def test_four_card_deck_renders_multiple_choice():
    cards = _deck(4)
    rng = random.Random(0)
    choices = build_choices(cards[0], sample_distractors(cards, 1, rng), rng)
    assert sorted(c.id for c in choices.cards) == [1, 2, 3, 4]
    assert choices.multiple_choice is True
