from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Type

from utils.errors import MalformedDueDate, MalformedTimestamp

# Fixed width UTC so that string order in SQLite equals time order.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def format_instant(value: datetime) -> str:
    """Render an aware datetime in the canonical stored form."""
    if value.tzinfo is None:
        raise ValueError("naive datetimes are not accepted")
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def parse_instant(
    raw: Optional[str],
    card_id: Optional[int] = None,
    error: Type[MalformedTimestamp] = MalformedTimestamp,
) -> datetime:
    """Parse a canonical timestamp, raising ``error`` on anything else."""
    if not raw:
        raise error(raw, card_id)
    try:
        parsed = datetime.strptime(raw, TIMESTAMP_FORMAT)
    except (TypeError, ValueError):
        raise error(raw, card_id) from None
    return parsed.replace(tzinfo=timezone.utc)


def parse_due_date(raw: Optional[str], card_id: Optional[int] = None) -> datetime:
    return parse_instant(raw, card_id, error=MalformedDueDate)


def parse_optional_instant(raw: Optional[str], card_id: Optional[int] = None) -> Optional[datetime]:
    if not raw:
        return None
    return parse_instant(raw, card_id)
