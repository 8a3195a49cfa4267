"""Opening hours resolution for free-text facility timings.

Directory entries only carry a human-written ``timings`` string such as
"9 AM - 9 PM", "24/7" or "Mon-Sat: 9 AM - 8 PM". ``resolve_open_status``
turns that text plus a moment in time into an ``OpenStatus``. It is a pure
function: the caller supplies ``now`` and nothing here reads the clock.
"""

import re
from datetime import datetime

from portal.domain.value import OpenStatus

# "24", "24x7", "24/7", "24 hours" ...
_ALWAYS_OPEN = re.compile(r"24")

# Day-range markers and the weekdays they leave out (Monday == 0)
_DAY_RANGES: list[tuple[re.Pattern[str], frozenset[int]]] = [
    (re.compile(r"\bmon\s*-\s*sat\b"), frozenset({6})),
    (re.compile(r"\bmon\s*-\s*fri\b"), frozenset({5, 6})),
]

_HOUR_RANGE = re.compile(
    r"(?<![\d:])(?P<open>\d{1,2})\s*(?P<open_mer>am|pm)?\s*[-–]\s*"
    r"(?P<close>\d{1,2})(?![\d:])\s*(?P<close_mer>am|pm)?\b"
)


def _to_24h(hour: int, meridiem: str | None) -> int | None:
    """Convert a parsed hour to 24-hour form, or None if it is out of range."""
    if meridiem is None:
        return hour if 0 <= hour <= 24 else None
    if not 1 <= hour <= 12:
        return None
    if meridiem == "pm":
        return hour if hour == 12 else hour + 12
    return 0 if hour == 12 else hour


def parse_hour_range(timings: str) -> tuple[int, int] | None:
    """Extract the first opening/closing hour pair from ``timings``.

    Hours without a meridiem are read as 24-hour values, so "7-21" and
    "9 - 5 PM" both parse. A bare pair that would run past midnight, such
    as "9-5", is rejected.

    Args:
        timings: Free-text timings, any case

    Returns:
        ``(open_hour, close_hour)`` in 24-hour form, or None
    """
    match = _HOUR_RANGE.search(timings.lower())
    if not match:
        return None

    open_hour = _to_24h(int(match["open"]), match["open_mer"])
    close_hour = _to_24h(int(match["close"]), match["close_mer"])
    if open_hour is None or close_hour is None:
        return None
    # "9-5" is ambiguous: only an am/pm marker makes an overnight range
    if open_hour > close_hour and not (match["open_mer"] or match["close_mer"]):
        return None
    return open_hour, close_hour


def resolve_open_status(timings: str | None, now: datetime) -> OpenStatus:
    """Decide whether a facility is open at ``now``.

    Rules, in order:

    1. Any 24-hour marker means always open.
    2. A "Mon-Sat" (or "Mon-Fri") range is closed on the excluded days.
    3. An hour range is open on ``open <= hour < close``. A range whose
       closing hour is earlier than its opening hour runs past midnight.
    4. Anything else is unknown.

    Args:
        timings: Free-text timings; None or blank resolves to unknown
        now: Moment to evaluate, in the facility's local time

    Returns:
        OPEN, CLOSED or UNKNOWN; never raises
    """
    if not timings or not timings.strip():
        return OpenStatus.UNKNOWN

    text = timings.lower()
    if _ALWAYS_OPEN.search(text):
        return OpenStatus.OPEN

    weekday = now.weekday()
    for pattern, closed_days in _DAY_RANGES:
        if pattern.search(text) and weekday in closed_days:
            return OpenStatus.CLOSED

    hours = parse_hour_range(text)
    if hours is None:
        return OpenStatus.UNKNOWN

    open_hour, close_hour = hours
    if open_hour <= close_hour:
        is_open = open_hour <= now.hour < close_hour
    else:
        # Overnight, e.g. "9 PM - 6 AM"
        is_open = now.hour >= open_hour or now.hour < close_hour

    return OpenStatus.OPEN if is_open else OpenStatus.CLOSED
