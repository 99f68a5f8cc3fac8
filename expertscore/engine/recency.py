"""Elapsed-time helpers for decay and recency calculations.

Every helper takes ``now`` explicitly so a scoring run is reproducible.
Missing or unparsable dates never raise: they are reported as stale
(``stale_days``), so one bad record cannot abort scoring of a candidate.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Any, Sequence

from expertscore.config.defaults import RECENCY_BONUS_FLOOR, RECENCY_BONUS_STEPS, STALE_DAYS

_SECONDS_PER_DAY = 24 * 60 * 60
_SECONDS_PER_YEAR = 365 * _SECONDS_PER_DAY


def to_datetime(value: Any) -> datetime:
    """Coerce a date-like value to an aware UTC datetime.

    Accepts datetime, date, ISO-8601 strings (including a trailing ``Z``)
    and epoch milliseconds. Naive values are taken as UTC.

    Raises ValueError or TypeError for anything else.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    else:
        raise TypeError(f"Unsupported date value: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _elapsed_seconds(value: Any, now: datetime) -> float | None:
    try:
        then = to_datetime(value)
    except (TypeError, ValueError, OverflowError, OSError):
        return None
    return (to_datetime(now) - then).total_seconds()


def days_since(value: Any, now: datetime, stale_days: int = STALE_DAYS) -> int:
    """Whole days elapsed since ``value``; ``stale_days`` if missing or unparsable."""
    if value is None or value == "":
        return stale_days
    seconds = _elapsed_seconds(value, now)
    if seconds is None:
        return stale_days
    return math.floor(seconds / _SECONDS_PER_DAY)


def years_since(value: Any, now: datetime, stale_days: int = STALE_DAYS) -> float:
    """Years elapsed since ``value``, rounded to one decimal place.

    A missing date counts as 0 years (an open-ended past role is treated as
    just ended). An unparsable date counts as ``stale_days`` worth of years.
    """
    if value is None or value == "":
        return 0.0
    seconds = _elapsed_seconds(value, now)
    if seconds is None:
        seconds = stale_days * _SECONDS_PER_DAY
    return math.floor(seconds / _SECONDS_PER_YEAR * 10 + 0.5) / 10


def recency_bonus(
    value: Any,
    now: datetime,
    steps: Sequence[tuple[int, float]] | None = None,
    floor: float = RECENCY_BONUS_FLOOR,
    stale_days: int = STALE_DAYS,
) -> float:
    """Step-function bonus for how recently something was observed.

    Default steps: <30d 1.2, <90d 1.0, <180d 0.8, otherwise 0.6.
    """
    if steps is None:
        steps = RECENCY_BONUS_STEPS
    days = days_since(value, now, stale_days)
    for max_days, bonus in steps:
        if days < max_days:
            return bonus
    return floor
