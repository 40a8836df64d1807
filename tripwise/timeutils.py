"""
Clock time utilities for TripWise.

This module handles the small amount of time arithmetic the planner
needs: parsing and formatting ``HH:MM`` clock times, adding minutes with
24‑hour wraparound, and turning provider time strings (either
``3:45 PM`` or ``15:45``) into timestamps bound to a trip date.

A timestamp is a plain ``datetime.datetime`` whose seconds are zero.
Binding clock times to a date keeps weekday lookups and overnight
arithmetic well defined.

Example usage:

    start = parse_clock_time("09:00").on(date(2024, 5, 6))
    resolve_timestamp("3:45 PM", start.date())  # -> 2024-05-06 15:45
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_CLOCK_RE = re.compile(r"(\d{1,2}):(\d{2})")
_TWELVE_HOUR_RE = re.compile(r"(\d{1,2}):(\d{2})\s*([AP]M)\b", re.IGNORECASE)


class FormatError(ValueError):
    """Raised when a time string does not match the expected format."""


@dataclass(frozen=True, order=True)
class ClockTime:
    hours: int
    minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.hours <= 23 or not 0 <= self.minutes <= 59:
            raise ValueError(f"Clock time out of range: {self.hours}:{self.minutes}")

    @classmethod
    def from_minutes(cls, total: int) -> "ClockTime":
        """Build a clock time from minutes since midnight, wrapping modulo one day."""
        total = total % MINUTES_PER_DAY
        return cls(hours=total // 60, minutes=total % 60)

    def to_minutes(self) -> int:
        return self.hours * 60 + self.minutes

    def on(self, day: date) -> datetime:
        """Bind this clock time to a calendar date."""
        return datetime(day.year, day.month, day.day, self.hours, self.minutes)

    def __str__(self) -> str:
        return format_clock_time(self)


def parse_clock_time(text: str) -> ClockTime:
    """Parse a strict 24‑hour ``H:MM`` or ``HH:MM`` string.

    Raises:
        FormatError: if the text is not exactly one hour/minute pair or
            either field is out of range.
    """
    match = _CLOCK_RE.fullmatch(text.strip())
    if not match:
        raise FormatError(f"Invalid time format {text!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise FormatError(f"Time {text!r} is out of range")
    return ClockTime(hours, minutes)


def format_clock_time(t: ClockTime) -> str:
    return f"{t.hours:02d}:{t.minutes:02d}"


def add_minutes(t: ClockTime, delta: int) -> ClockTime:
    """Add ``delta`` minutes (may be negative), wrapping around 24 hours.

    ``23:50 + 20`` gives ``00:10`` and ``00:05 - 10`` gives ``23:55``.
    """
    return ClockTime.from_minutes(t.to_minutes() + delta)


def add_minutes_to_timestamp(ts: datetime, delta: int) -> datetime:
    """Date‑aware version of :func:`add_minutes`; crossing midnight moves the date."""
    return ts + timedelta(minutes=delta)


def parse_twelve_hour(text: str, base_date: date) -> Optional[datetime]:
    """Find an ``H:MM AM|PM`` time anywhere in ``text`` and bind it to ``base_date``.

    Returns ``None`` rather than raising when no such time is present so
    that callers can try another parser.
    """
    match = _TWELVE_HOUR_RE.search(text)
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not 1 <= hours <= 12 or minutes > 59:
        return None
    period = match.group(3).upper()
    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0
    return ClockTime(hours, minutes).on(base_date)


def parse_twenty_four_hour(text: str, base_date: date) -> datetime:
    """Parse a strict ``HH:MM`` time and bind it to ``base_date``.

    Raises:
        FormatError: if ``text`` is not a valid 24‑hour time.
    """
    return parse_clock_time(text).on(base_date)


TimeParser = Callable[[str, date], Optional[datetime]]

# Tried in order until one returns a timestamp.
TIME_PARSERS: Sequence[TimeParser] = (parse_twelve_hour, parse_twenty_four_hour)


def resolve_timestamp(
    text: str,
    base_date: date,
    parsers: Sequence[TimeParser] = TIME_PARSERS,
) -> Optional[datetime]:
    """Turn a time string of unknown format into a timestamp on ``base_date``.

    Each parser either returns a timestamp, returns ``None`` or raises
    :class:`FormatError`; the first timestamp wins. ``None`` means every
    parser failed and the time should be treated as unknown.
    """
    for parser in parsers:
        try:
            result = parser(text, base_date)
        except FormatError:
            continue
        if result is not None:
            return result
    logger.debug("Could not resolve time %r", text)
    return None


def format_timestamp(ts: datetime, twelve_hour: bool = False) -> str:
    """Format a timestamp's clock time for display."""
    if twelve_hour:
        hours = ts.hour % 12 or 12
        period = "AM" if ts.hour < 12 else "PM"
        return f"{hours}:{ts.minute:02d} {period}"
    return ts.strftime("%H:%M")
