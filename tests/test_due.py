from datetime import datetime, timedelta, timezone

import pytest

from models.card import Card
from utils.due import most_due_card
from utils.errors import EmptyCandidateSet, MalformedDueDate

NOW = datetime(2024, 8, 30, 12, 0, tzinfo=timezone.utc)


def _card(card_id: int, due: datetime) -> Card:
    return Card(id=card_id, deck_id=1, question=f"q{card_id}", answer=f"a{card_id}", created_at=NOW, review_due_date=due)


def test_earliest_due_date_wins():
    early = _card(1, NOW - timedelta(hours=2))
    late = _card(2, NOW - timedelta(hours=1))
    assert most_due_card([early, late]).id == 1
    assert most_due_card([late, early]).id == 1


def test_single_card_is_returned():
    card = _card(7, NOW + timedelta(days=3))
    assert most_due_card([card]) is card


def test_ties_keep_first_seen():
    cards = [_card(3, NOW), _card(1, NOW), _card(2, NOW)]
    assert most_due_card(cards).id == 3


def test_empty_candidates_signal_nothing_to_show():
    with pytest.raises(EmptyCandidateSet):
        most_due_card([])


def test_missing_due_date_is_a_data_error():
    broken = _card(2, NOW).model_copy(update={"review_due_date": None})
    with pytest.raises(MalformedDueDate) as exc_info:
        most_due_card([_card(1, NOW), broken])
    assert exc_info.value.card_id == 2
    assert not isinstance(exc_info.value, EmptyCandidateSet)
