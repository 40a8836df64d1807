"""
Schedule calculation utilities for TripWise.

This module holds the trip model (stops in visiting order, a start
timestamp and the walking time between consecutive stops) and builds
a time‑based itinerary from it. Each stop gets an arrival time and an
open/closed prediction from its weekly opening hours.

Plans are immutable: every edit returns a new :class:`TripPlan`, and
edits that change which stops are visited or their order drop the
travel durations until the route is recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from tripwise.opening_hours import OpenStatus, WeeklySchedule, parse_weekly_schedule, predict_status
from tripwise.timeutils import add_minutes_to_timestamp


class TripPlanError(ValueError):
    """Raised when plan data breaks the scheduler's input contract."""


@dataclass(frozen=True)
class Stop:
    name: str
    category: str = "Other"
    dwell_minutes: int = 0
    weekday_text: Tuple[str, ...] = ()
    position: Optional[Tuple[float, float]] = None
    rating: Optional[float] = None

    def __post_init__(self) -> None:
        if self.dwell_minutes < 0:
            raise ValueError(f"Dwell time for {self.name!r} must not be negative")
        # Accept any sequence of lines but store a hashable tuple.
        object.__setattr__(self, "weekday_text", tuple(self.weekday_text))

    @property
    def opening_hours(self) -> WeeklySchedule:
        return parse_weekly_schedule(self.weekday_text)

    def with_dwell(self, minutes: int) -> "Stop":
        return replace(self, dwell_minutes=minutes)


@dataclass
class StopSchedule:
    index: int
    arrival: datetime
    departure: datetime
    status: OpenStatus


@dataclass
class TripSchedule:
    stops: List[StopSchedule] = field(default_factory=list)
    end: Optional[datetime] = None


def _check_travel_durations(stop_count: int, travel_durations: Sequence[int]) -> None:
    expected = max(0, stop_count - 1)
    if len(travel_durations) != expected:
        raise TripPlanError(
            f"Expected {expected} travel durations for {stop_count} stops, got {len(travel_durations)}"
        )
    if any(minutes < 0 for minutes in travel_durations):
        raise TripPlanError("Travel durations must not be negative")


@dataclass(frozen=True)
class TripPlan:
    """An ordered list of stops plus the trip start.

    ``travel_durations`` holds one walking time in minutes per pair of
    consecutive stops, or ``None`` while the route has not been computed.
    """

    start: datetime
    stops: Tuple[Stop, ...] = ()
    travel_durations: Optional[Tuple[int, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stops", tuple(self.stops))
        if self.travel_durations is not None:
            durations = tuple(self.travel_durations)
            _check_travel_durations(len(self.stops), durations)
            object.__setattr__(self, "travel_durations", durations)

    @property
    def is_routed(self) -> bool:
        return self.travel_durations is not None

    def _with_stops(self, stops: Sequence[Stop]) -> "TripPlan":
        return replace(self, stops=tuple(stops), travel_durations=None)

    def add_stop(self, stop: Stop) -> "TripPlan":
        return self._with_stops(self.stops + (stop,))

    def remove_stop(self, index: int) -> "TripPlan":
        stops = list(self.stops)
        del stops[index]
        return self._with_stops(stops)

    def move_stop(self, src: int, dst: int) -> "TripPlan":
        """Move the stop at ``src`` so that it ends up at position ``dst``."""
        stops = list(self.stops)
        if not (0 <= src < len(stops) and 0 <= dst < len(stops)):
            raise IndexError(f"Cannot move stop {src} to {dst} in a plan of {len(stops)} stops")
        stops.insert(dst, stops.pop(src))
        return self._with_stops(stops)

    def with_dwell(self, index: int, minutes: int) -> "TripPlan":
        stops = list(self.stops)
        stops[index] = stops[index].with_dwell(minutes)
        return replace(self, stops=tuple(stops))

    def with_opening_hours(self, index: int, weekday_text: Sequence[str]) -> "TripPlan":
        stops = list(self.stops)
        stops[index] = replace(stops[index], weekday_text=tuple(weekday_text))
        return replace(self, stops=tuple(stops))

    def with_start(self, start: datetime) -> "TripPlan":
        return replace(self, start=start)

    def with_travel_durations(self, durations: Sequence[int]) -> "TripPlan":
        return replace(self, travel_durations=tuple(durations))

    def cleared(self) -> "TripPlan":
        return TripPlan(start=self.start)


def compute_arrivals(
    start: datetime,
    stops: Sequence[Stop],
    travel_durations: Sequence[int],
) -> List[datetime]:
    """Compute the arrival time at each stop.

    For each stop the current time is recorded as its arrival, then the
    walk to the next stop is added, then the dwell time at this stop.
    The dwell at the final stop therefore only moves the trip end.

    Args:
        start: Trip start timestamp (arrival at the first stop).
        stops: Stops in visiting order.
        travel_durations: Walking minutes between consecutive stops.

    Returns:
        One arrival timestamp per stop.

    Raises:
        TripPlanError: if there is not exactly one travel duration per
            pair of consecutive stops.
    """
    _check_travel_durations(len(stops), travel_durations)
    arrivals: List[datetime] = []
    current = start
    for i, stop in enumerate(stops):
        arrivals.append(current)
        if i < len(travel_durations):
            current = add_minutes_to_timestamp(current, travel_durations[i])
        current = add_minutes_to_timestamp(current, stop.dwell_minutes)
    return arrivals


def compute_trip_end(last_arrival: datetime, last_dwell_minutes: int) -> datetime:
    return add_minutes_to_timestamp(last_arrival, last_dwell_minutes)


def schedule_trip(plan: TripPlan) -> TripSchedule:
    """Generate the itinerary for a routed plan.

    A single stop needs no route; any longer plan must have travel
    durations.

    Returns:
        A ``TripSchedule`` with arrival, departure and predicted open
        status for each stop, and the time the last stop is left.
    """
    if not plan.stops:
        return TripSchedule()
    travel = plan.travel_durations
    if travel is None:
        if len(plan.stops) > 1:
            raise TripPlanError("Plan has no travel durations; compute the route first")
        travel = ()
    arrivals = compute_arrivals(plan.start, plan.stops, travel)
    rows = []
    for idx, (stop, arrival) in enumerate(zip(plan.stops, arrivals)):
        departure = add_minutes_to_timestamp(arrival, stop.dwell_minutes)
        status = predict_status(stop.opening_hours, arrival)
        rows.append(StopSchedule(index=idx, arrival=arrival, departure=departure, status=status))
    end = compute_trip_end(arrivals[-1], plan.stops[-1].dwell_minutes)
    return TripSchedule(stops=rows, end=end)
