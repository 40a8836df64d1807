"""
Itinerary table and export helpers for TripWise.

The same rows feed the on‑screen table, the plain text itinerary and
the CSV download. Before a route has been computed the rows have no
arrival time and a ``Pending`` status.
"""

from __future__ import annotations

import csv
import io
from typing import Dict, List, Optional

from tripwise.opening_hours import OpenStatus
from tripwise.schedule import TripPlan, TripSchedule
from tripwise.timeutils import format_timestamp

COLUMNS = ["#", "Name", "Category", "Arrival", "Status", "Time spent (min)", "Walk to next (min)"]


def itinerary_rows(plan: TripPlan, schedule: Optional[TripSchedule] = None) -> List[Dict[str, object]]:
    rows = []
    computed = schedule.stops if schedule else []
    travel = plan.travel_durations or ()
    for i, stop in enumerate(plan.stops):
        arrival = ""
        status = OpenStatus.PENDING
        if i < len(computed):
            arrival = format_timestamp(computed[i].arrival)
            status = computed[i].status
        rows.append({
            "#": i + 1,
            "Name": stop.name,
            "Category": stop.category,
            "Arrival": arrival,
            "Status": status.value,
            "Time spent (min)": stop.dwell_minutes,
            "Walk to next (min)": travel[i] if i < len(travel) else "",
        })
    return rows


def format_itinerary_text(plan: TripPlan, schedule: TripSchedule) -> str:
    """Format itinerary text for display or download."""
    lines = [f"Your itinerary for {plan.start:%A %d %B %Y}:\n"]
    for row in schedule.stops:
        stop = plan.stops[row.index]
        arr = format_timestamp(row.arrival)
        dep = format_timestamp(row.departure)
        status_text = "" if row.status is OpenStatus.OPEN else f" ({row.status.value})"
        lines.append(f"{row.index + 1}. {stop.name}: arrive {arr}, leave {dep}{status_text}")
        if plan.travel_durations and row.index < len(plan.travel_durations):
            lines.append(f"   Walk to next stop: {plan.travel_durations[row.index]} min")
    if schedule.end is not None:
        lines.append(f"\nTrip ends at {format_timestamp(schedule.end)}")
    if plan.travel_durations:
        total_m = sum(plan.travel_durations)
        lines.append(f"Total walking time: {total_m // 60}h {total_m % 60}m")
    return "\n".join(lines)


def itinerary_csv(plan: TripPlan, schedule: Optional[TripSchedule] = None) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=COLUMNS)
    writer.writeheader()
    writer.writerows(itinerary_rows(plan, schedule))
    return buf.getvalue()
