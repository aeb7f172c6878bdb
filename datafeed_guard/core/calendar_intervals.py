"""Calendar Intervals — convert calendar-aware date_histogram units to milliseconds.

Invariants:
    - One calendar unit is measured forward from CALENDAR_REFERENCE_INSTANT, never from "now"
    - Same expression + same reference → same millis, on every call
    - Unit names are case-sensitive: "1m" is a minute, "1M" is a month

Design Decisions:
    - Pinned to the Unix epoch (1970-01-01T00:00:00Z): months, quarters and years have no
      constant length, so a fixed instant keeps validation reproducible. At the epoch a
      month is 31 days, a quarter 90 days, a year 365 days.
    - Only single units are calendar intervals ("2d" is a fixed interval, not a calendar one)
"""

import calendar
from datetime import datetime, timedelta, timezone

from datafeed_guard.core.domain_types import Millis
from datafeed_guard.core.errors import AggregationTreeError


CALENDAR_REFERENCE_INSTANT = datetime(1970, 1, 1, tzinfo=timezone.utc)

_CALENDAR_UNITS: dict[str, str] = {
    "1s": "second", "second": "second",
    "1m": "minute", "minute": "minute",
    "1h": "hour", "hour": "hour",
    "1d": "day", "day": "day",
    "1w": "week", "week": "week",
    "1M": "month", "month": "month",
    "1q": "quarter", "quarter": "quarter",
    "1y": "year", "year": "year",
}

_FIXED_LENGTH: dict[str, timedelta] = {
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
}

_MONTHS_PER_UNIT: dict[str, int] = {"month": 1, "quarter": 3, "year": 12}


def is_calendar_interval(expression: str) -> bool:
    return expression.strip() in _CALENDAR_UNITS


def calendar_interval_millis(
    expression: str, reference: datetime = CALENDAR_REFERENCE_INSTANT,
) -> Millis:
    """Length of one calendar unit starting at reference, in milliseconds."""
    unit = _CALENDAR_UNITS.get(expression.strip())
    if unit is None:
        raise AggregationTreeError(
            f"The supplied interval [{expression}] could not be parsed as a "
            f"calendar interval.",
        )
    if unit in _FIXED_LENGTH:
        end = reference + _FIXED_LENGTH[unit]
    else:
        end = _add_months(reference, _MONTHS_PER_UNIT[unit])
    return Millis((end - reference) // timedelta(milliseconds=1))


def _add_months(moment: datetime, months: int) -> datetime:
    """Calendar month arithmetic, clamping the day to the target month's length."""
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
