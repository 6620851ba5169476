'''
Datetime helpers. Every datetime stored or compared by the app is naive UTC.
'''
from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Converts an offset-aware datetime to the same instant in naive UTC.
    Naive values are assumed to be UTC already and are returned unchanged.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
