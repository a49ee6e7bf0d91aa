"""Opening-hours checks for restaurants and the parcel service.

Hours are stored as 12-hour clock strings such as ``"9:00 AM"``. Every check
here fails open: a schedule that cannot be read reports the place as open so
that bad listing data never blocks checkout.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, time
from typing import Optional, Union

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"(\d{1,2}):(\d{2})\s*(AM|PM)")

Clock = Union[datetime, time]


def _minutes(value: str) -> int:
    match = _TIME_RE.search(value.strip().upper())
    if not match:
        raise ValueError(f"not a 12-hour time: {value!r}")

    hours, minutes, period = int(match.group(1)), int(match.group(2)), match.group(3)
    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0
    return hours * 60 + minutes


def _try_minutes(value) -> Optional[int]:
    try:
        return _minutes(value)
    except (AttributeError, TypeError, ValueError):
        logger.warning("Could not parse time string %r", value)
        return None


def parse_time_string(value: str) -> int:
    """Return minutes since midnight for ``"H:MM AM|PM"``, or 0 if it does not parse."""
    minutes = _try_minutes(value)
    return 0 if minutes is None else minutes


def is_open(opens_at: str, closes_at: str, now: Clock) -> bool:
    """Whether ``now`` falls inside the daily window, bounds included.

    A window whose close time is earlier than its open time runs past
    midnight. A single unreadable bound counts as midnight; when neither
    bound can be read the place counts as open.
    """
    try:
        current = now.hour * 60 + now.minute
    except (AttributeError, TypeError):
        logger.warning("Error checking opening hours at %r, assuming open", now)
        return True

    open_minute = _try_minutes(opens_at)
    close_minute = _try_minutes(closes_at)
    if open_minute is None and close_minute is None:
        return True
    open_minute = open_minute or 0
    close_minute = close_minute or 0

    if close_minute < open_minute:
        return current >= open_minute or current <= close_minute
    return open_minute <= current <= close_minute


def is_service_open(opens_at: Optional[str], closes_at: Optional[str], now: Clock) -> bool:
    # no configured hours means always open
    if not opens_at or not closes_at:
        return True
    return is_open(opens_at, closes_at, now)


def format_operating_hours(opens_at: str, closes_at: str) -> str:
    return f"{opens_at} - {closes_at}"
