from datetime import datetime, timedelta, timezone

import pytest

from utils.errors import MalformedDueDate, MalformedTimestamp
from utils.timestamps import format_instant, parse_due_date, parse_instant, parse_optional_instant


def test_format_is_fixed_width_utc():
    value = datetime(2024, 8, 30, 14, 57, 22, tzinfo=timezone(timedelta(hours=2)))
    assert format_instant(value) == "2024-08-30T12:57:22.000000Z"


def test_parse_returns_aware_utc():
    parsed = parse_instant("2024-08-30T12:57:22.141705Z")
    assert parsed == datetime(2024, 8, 30, 12, 57, 22, 141705, tzinfo=timezone.utc)


def test_lexical_order_matches_time_order():
    earlier = datetime(2024, 8, 30, 9, 0, tzinfo=timezone.utc)
    later = earlier + timedelta(microseconds=1)
    assert format_instant(earlier) < format_instant(later)


def test_naive_datetimes_are_rejected():
    with pytest.raises(ValueError):
        format_instant(datetime(2024, 8, 30))


@pytest.mark.parametrize(
    "raw",
    ["", None, "2024-08-30 12:57:22.141705 +0000 UTC", "2024-08-30T12:57:22.141705535Z", "2024/08/08"],
)
def test_other_formats_are_malformed(raw):
    with pytest.raises(MalformedDueDate):
        parse_due_date(raw, card_id=3)
    with pytest.raises(MalformedTimestamp):
        parse_instant(raw)


def test_optional_instant_allows_blank():
    assert parse_optional_instant("") is None
    assert parse_optional_instant(None) is None
