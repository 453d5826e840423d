"""
Week anchors for the activity grid.

Column c of the grid (1..53) means "the week starting on anchors[c-1]".
Anchors are consecutive Sundays derived from a fixed reference instant, so a
column always means the same week no matter when the tool runs.
"""

from datetime import datetime, timedelta, timezone

from .errors import ConfigurationError

ANCHOR_COUNT = 53

# Noon UTC keeps the calendar day stable for viewers in any time zone.
DEFAULT_REFERENCE = datetime(2024, 1, 7, 12, 0, 0, tzinfo=timezone.utc)


def as_utc(instant: datetime) -> datetime:
    # Naive values are taken to already be UTC.
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def sunday_on_or_before(instant: datetime) -> datetime:
    # Python weekday: Mon=0..Sun=6. We want the prior or same Sunday.
    instant = as_utc(instant)
    return instant - timedelta(days=(instant.weekday() + 1) % 7)


def compute_anchors(reference: datetime = DEFAULT_REFERENCE) -> tuple:
    """
    Returns the 53 weekly anchors for `reference`.

    anchors[0] is the most recent Sunday at or before the reference; every
    following anchor is exactly 7 days later. The reference's time of day is
    carried through unchanged.
    """
    try:
        start = sunday_on_or_before(reference)
        return tuple(start + timedelta(weeks=i) for i in range(ANCHOR_COUNT))
    except OverflowError as e:
        raise ConfigurationError(
            f"Reference {reference.isoformat()} leaves no room for {ANCHOR_COUNT} weekly anchors"
        ) from e


def parse_instant(text: str) -> datetime:
    """
    Parse an ISO 8601 date or date-time into an aware UTC datetime.

    Accepts forms like 2024-01-07, 2024-01-07T09:00:00Z and
    2024-01-07T09:00:00+02:00. Never falls back to "now".
    """
    raw = (text or "").strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        raise ConfigurationError(
            f"Invalid date {text!r}. Use an ISO string like 2025-12-19 or 2025-12-19T09:00:00Z."
        ) from None
    return as_utc(parsed)
