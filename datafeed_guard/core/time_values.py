"""Time Values — parse and render the duration strings used in job and datafeed configs.

Invariants:
    - Accepted form is <integer><unit>, unit one of nanos, micros, ms, s, m, h, d
    - "0" is zero, "-1" is the explicit "unset" marker and parses to None
    - Amounts beyond the timedelta range are parse errors, never OverflowError
    - to_millis floors to whole milliseconds

Design Decisions:
    - timedelta as the in-memory duration: stdlib, comparable, hashable
    - Errors name the offending setting so API users can find the bad field
"""

import re
from datetime import timedelta

from datafeed_guard.core.domain_types import Millis
from datafeed_guard.core.errors import TimeValueParseError


_UNITS: dict[str, timedelta] = {
    "micros": timedelta(microseconds=1),
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}

_TIME_VALUE = re.compile(r"^(\d+)\s*(nanos|micros|ms|s|m|h|d)$")

_ONE_MS = timedelta(milliseconds=1)


def parse_time_value(
    value: str | timedelta | None, setting_name: str,
) -> timedelta | None:
    """Parse a duration setting. None and "-1" mean unset."""
    if value is None or isinstance(value, timedelta):
        return value
    if not isinstance(value, str):
        raise TimeValueParseError(value, setting_name)

    normalized = value.strip()
    if normalized == "-1":
        return None
    if normalized == "0":
        return timedelta(0)

    match = _TIME_VALUE.match(normalized)
    if match is None:
        raise TimeValueParseError(value, setting_name)
    amount, unit = match.groups()
    try:
        if unit == "nanos":
            # timedelta resolution is 1 microsecond
            return timedelta(microseconds=int(amount) // 1000)
        return int(amount) * _UNITS[unit]
    except (OverflowError, ValueError):
        raise TimeValueParseError(value, setting_name) from None


def to_millis(duration: timedelta) -> Millis:
    return Millis(duration // _ONE_MS)
