"""
Plan persistence for TripWise.

Plans are kept in a single JSON file with two parts: the ``session``
slot holds the plan being edited so that it survives restarts, and
``plans`` holds plans the user saved under a name. Travel durations are
not stored; a reloaded plan has to be routed again.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from tripwise.schedule import Stop, TripPlan
from tripwise.timeutils import format_timestamp, parse_clock_time

logger = logging.getLogger(__name__)


class PlanNotFoundError(KeyError):
    """Raised when a named plan does not exist or has no stops."""


def stop_to_dict(stop: Stop) -> Dict[str, Any]:
    lat, lng = stop.position if stop.position else (None, None)
    return {
        "name": stop.name,
        "category": stop.category,
        "time": stop.dwell_minutes,
        "weekdayText": list(stop.weekday_text),
        "lat": lat,
        "lng": lng,
        "rating": stop.rating,
    }


def stop_from_dict(data: Dict[str, Any]) -> Stop:
    position = None
    if data.get("lat") is not None and data.get("lng") is not None:
        position = (float(data["lat"]), float(data["lng"]))
    return Stop(
        name=data["name"],
        category=data.get("category") or "Other",
        dwell_minutes=int(data.get("time") or 0),
        weekday_text=tuple(data.get("weekdayText") or ()),
        position=position,
        rating=data.get("rating"),
    )


def plan_to_dict(plan: TripPlan) -> Dict[str, Any]:
    return {
        "startDate": plan.start.date().isoformat(),
        "startTime": format_timestamp(plan.start),
        "stops": [stop_to_dict(stop) for stop in plan.stops],
    }


def plan_from_dict(data: Dict[str, Any]) -> TripPlan:
    start_date = date.fromisoformat(data["startDate"])
    start = parse_clock_time(data.get("startTime") or "09:00").on(start_date)
    return TripPlan(start=start, stops=tuple(stop_from_dict(s) for s in data.get("stops", [])))


class PlanStore:
    """JSON file backed store for the session plan and named plans."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {"session": None, "plans": {}}
        try:
            with self.path.open(encoding="utf-8") as fh:
                data = json.load(fh)
        except ValueError as exc:
            logger.warning("Ignoring unreadable plans file %s: %s", self.path, exc)
            return {"session": None, "plans": {}}
        if not isinstance(data, dict):
            logger.warning("Ignoring plans file %s with unexpected layout", self.path)
            return {"session": None, "plans": {}}
        data.setdefault("session", None)
        data.setdefault("plans", {})
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
        tmp.replace(self.path)

    def save_session(self, plan: TripPlan) -> None:
        data = self._read()
        data["session"] = plan_to_dict(plan)
        self._write(data)

    def load_session(self) -> Optional[TripPlan]:
        session = self._read()["session"]
        if not session:
            return None
        return plan_from_dict(session)

    def clear_session(self) -> None:
        data = self._read()
        data["session"] = None
        self._write(data)

    def plan_names(self) -> List[str]:
        return list(self._read()["plans"])

    def save_plan(self, name: str, plan: TripPlan) -> None:
        name = name.strip()
        if not name:
            raise ValueError("Plan name must not be empty")
        data = self._read()
        data["plans"][name] = plan_to_dict(plan)
        self._write(data)
        logger.info("Saved plan %r with %d stops", name, len(plan.stops))

    def load_plan(self, name: str) -> TripPlan:
        saved = self._read()["plans"].get(name)
        if not saved or not saved.get("stops"):
            raise PlanNotFoundError(name)
        return plan_from_dict(saved)

    def delete_plan(self, name: str) -> None:
        data = self._read()
        if name not in data["plans"]:
            raise PlanNotFoundError(name)
        del data["plans"][name]
        self._write(data)
        logger.info("Deleted plan %r", name)


def default_start(now: Optional[datetime] = None) -> datetime:
    """Start of a fresh plan: 09:00 today."""
    today = (now or datetime.now()).date()
    return parse_clock_time("09:00").on(today)
