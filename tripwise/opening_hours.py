"""
Opening hours model and open/closed prediction for TripWise.

Places report their opening hours as one text line per weekday, for
example::

    Monday: 9:00 AM – 5:00 PM
    Tuesday: 10:00 PM – 2:00 AM
    Wednesday: Closed
    Thursday: Open 24 hours
    Friday: 11:00 AM – 2:00 PM, 5:00 – 10:00 PM

``parse_weekly_schedule`` turns these lines into a :class:`WeeklySchedule`
and ``predict_status`` decides whether a stop will be open when the
traveller arrives. Missing or unreadable hours never raise; they degrade
to an ``Unknown`` prediction.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from tripwise.timeutils import ClockTime, resolve_timestamp

logger = logging.getLogger(__name__)

# Index matches ``date.weekday()`` (Monday == 0).
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_DAY_LINE_RE = re.compile(r"^\s*(%s)\b\s*:?\s*(.*)$" % "|".join(WEEKDAYS), re.IGNORECASE)
_RANGE_SPLIT_RE = re.compile(r"\s*[-–—]\s*")
# The meridiem may be glued to the digits ("10:00PM").
_MERIDIEM_RE = re.compile(r"(?<![A-Za-z])([AP]M)\b", re.IGNORECASE)
# Providers pad times with thin and narrow no-break spaces.
_SPACES = str.maketrans({"\u202f": " ", "\u2009": " ", "\xa0": " "})
# Any date works for reading clock times out of resolved timestamps.
_PARSE_ANCHOR = date(2000, 1, 3)


class DayStatus(Enum):
    ALWAYS_OPEN = "always_open"
    ALWAYS_CLOSED = "always_closed"
    UNKNOWN = "unknown"


class OpenStatus(str, Enum):
    OPEN = "Will be Open"
    CLOSED = "Will be Closed"
    UNKNOWN = "Unknown"
    # Shown before a route has produced arrival times.
    PENDING = "Pending"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OpenInterval:
    open: ClockTime
    close: ClockTime

    @property
    def is_overnight(self) -> bool:
        return self.close <= self.open

    def bounds(self, anchor: date) -> Tuple[datetime, datetime]:
        """Return the open and close timestamps for this interval on ``anchor``.

        An overnight interval closes on the following calendar day.
        """
        opens = self.open.on(anchor)
        closes = self.close.on(anchor)
        if closes <= opens:
            closes += timedelta(days=1)
        return opens, closes

    def contains(self, moment: datetime, anchor: date) -> bool:
        """Whether ``moment`` lies in the interval anchored on ``anchor``, bounds included."""
        opens, closes = self.bounds(anchor)
        return opens <= moment <= closes


DayEntry = Union[DayStatus, Tuple[OpenInterval, ...]]


@dataclass(frozen=True)
class WeeklySchedule:
    """Opening hours keyed by weekday name.

    Each present day maps to ``DayStatus.ALWAYS_OPEN``,
    ``DayStatus.ALWAYS_CLOSED`` or a tuple of intervals. Absent days are
    unknown.
    """

    days: Mapping[str, DayEntry] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.days

    def intervals_for(self, weekday: str) -> DayEntry:
        return self.days.get(weekday.capitalize(), DayStatus.UNKNOWN)


def intervals_for(schedule: WeeklySchedule, weekday: str) -> DayEntry:
    return schedule.intervals_for(weekday)


def _resolve_clock(text: str) -> Optional[ClockTime]:
    ts = resolve_timestamp(text, _PARSE_ANCHOR)
    if ts is None:
        return None
    return ClockTime(ts.hour, ts.minute)


def parse_interval(text: str) -> Optional[OpenInterval]:
    """Parse one ``<open> – <close>`` range, or return ``None`` if it is unreadable."""
    parts = _RANGE_SPLIT_RE.split(text.strip())
    if len(parts) != 2:
        return None
    open_text, close_text = parts
    # "5:00 – 10:00 PM": the opening time shares the closing meridiem.
    close_meridiem = _MERIDIEM_RE.search(close_text)
    if close_meridiem and not _MERIDIEM_RE.search(open_text):
        open_text = f"{open_text} {close_meridiem.group(1)}"
    opens = _resolve_clock(open_text)
    closes = _resolve_clock(close_text)
    if opens is None or closes is None:
        return None
    return OpenInterval(opens, closes)


def _parse_day(body: str) -> Optional[DayEntry]:
    lowered = body.lower()
    if "closed" in lowered:
        return DayStatus.ALWAYS_CLOSED
    if "open 24 hours" in lowered:
        return DayStatus.ALWAYS_OPEN
    intervals = []
    for chunk in re.split(r",\s*", body):
        if not chunk.strip():
            continue
        interval = parse_interval(chunk)
        if interval is None:
            logger.debug("Skipping unreadable opening hours range %r", chunk)
            continue
        intervals.append(interval)
    if not intervals:
        return None
    return tuple(intervals)


def parse_weekly_schedule(lines: Iterable[str]) -> WeeklySchedule:
    """Parse weekday text lines into a :class:`WeeklySchedule`.

    Lines that do not start with a weekday are ignored, and the first
    line for a weekday wins, even when it is unreadable. A day whose
    ranges are all unreadable is left out so that it reads as unknown
    rather than closed.
    """
    days: Dict[str, DayEntry] = {}
    seen = set()
    for line in lines:
        match = _DAY_LINE_RE.match(line.translate(_SPACES))
        if not match:
            continue
        weekday = match.group(1).capitalize()
        if weekday in seen:
            continue
        seen.add(weekday)
        entry = _parse_day(match.group(2))
        if entry is not None:
            days[weekday] = entry
    return WeeklySchedule(days)


def predict_status(schedule: WeeklySchedule, arrival: datetime) -> OpenStatus:
    """Predict whether a place will be open at ``arrival``.

    Intervals are anchored to the arrival's own date and checked in
    listed order; the first one containing the arrival wins.
    """
    weekday = WEEKDAYS[arrival.weekday()]
    entry = schedule.intervals_for(weekday)
    if entry is DayStatus.UNKNOWN:
        return OpenStatus.UNKNOWN
    if entry is DayStatus.ALWAYS_CLOSED:
        return OpenStatus.CLOSED
    if entry is DayStatus.ALWAYS_OPEN:
        return OpenStatus.OPEN
    anchor = arrival.date()
    for interval in entry:
        if interval.contains(arrival, anchor):
            return OpenStatus.OPEN
    return OpenStatus.CLOSED


def predict_status_text(weekday_text: Iterable[str], arrival_text: str, base_date: date) -> OpenStatus:
    """Predict open status from raw weekday text and an arrival time string."""
    arrival = resolve_timestamp(arrival_text, base_date)
    if arrival is None:
        return OpenStatus.UNKNOWN
    return predict_status(parse_weekly_schedule(weekday_text), arrival)
