"""
Streamlit application for TripWise trip planning.

This script defines the user interface and orchestrates the
underlying modules to search places, collect them as ordered stops,
compute a walking route, predict arrival times and opening status for
each stop, display an interactive map, and save or export the plan.

To run this app locally for development, install the package and
execute:

    streamlit run tripwise/app.py

Settings are read from the environment or a ``.env`` file, see
``tripwise.config``.
"""

from __future__ import annotations

from typing import List, Optional

import streamlit as st
from streamlit_folium import folium_static

import os
import sys
# Ensure the package modules can be imported when run as a script via
# `streamlit run tripwise/app.py` from a source checkout.
parent_dir = os.path.dirname(os.path.dirname(__file__))
if parent_dir not in sys.path:
    sys.path.append(parent_dir)

from tripwise.config import settings
from tripwise.export import format_itinerary_text, itinerary_csv, itinerary_rows
from tripwise.geocode import search_place
from tripwise.logging_config import setup_logging
from tripwise.routing import compute_leg_durations
from tripwise.schedule import TripPlan, TripSchedule, schedule_trip
from tripwise.storage import PlanNotFoundError, PlanStore, default_start
from tripwise.timeutils import FormatError, format_timestamp, parse_clock_time
from tripwise.visualisation import create_folium_map

setup_logging(settings.log_level)


@st.cache_resource
def get_store() -> PlanStore:
    return PlanStore(settings.plans_path)


def current_plan() -> TripPlan:
    """Return the plan being edited, restoring the saved session on first use."""
    if "plan" not in st.session_state:
        st.session_state["plan"] = get_store().load_session() or TripPlan(start=default_start())
        st.session_state["geometry"] = []
    return st.session_state["plan"]


def update_plan(plan: TripPlan) -> None:
    """Store a new version of the plan in the session and on disk."""
    st.session_state["plan"] = plan
    if not plan.is_routed:
        st.session_state["geometry"] = []
    get_store().save_session(plan)
    st.rerun()


def render_sidebar(plan: TripPlan) -> None:
    store = get_store()
    st.sidebar.header("Trip start")
    start_date = st.sidebar.date_input("Date", value=plan.start.date())
    start_text = st.sidebar.text_input("Start time (HH:MM)", value=format_timestamp(plan.start))
    try:
        start = parse_clock_time(start_text).on(start_date)
    except FormatError as exc:
        st.sidebar.error(str(exc))
    else:
        if start != plan.start:
            update_plan(plan.with_start(start))

    st.sidebar.header("Saved plans")
    names = store.plan_names()
    selected = st.sidebar.selectbox("Plan", ["-- Load a saved plan --"] + names)
    col_load, col_delete = st.sidebar.columns(2)
    if col_load.button("Load", disabled=selected not in names):
        try:
            loaded = store.load_plan(selected)
        except PlanNotFoundError:
            st.sidebar.error("Selected plan is empty or not found.")
        else:
            update_plan(loaded)
    if col_delete.button("Delete", disabled=selected not in names):
        store.delete_plan(selected)
        st.rerun()

    plan_name = st.sidebar.text_input("Save current plan as")
    if st.sidebar.button("Save plan", disabled=not plan.stops):
        if not plan_name.strip():
            st.sidebar.error("Enter a name for this plan.")
        else:
            store.save_plan(plan_name, plan)
            update_plan(plan.cleared())

    if st.sidebar.button("Clear all stops"):
        st.session_state["plan"] = plan.cleared()
        st.session_state["geometry"] = []
        store.clear_session()
        st.rerun()


def render_search(plan: TripPlan) -> None:
    with st.form("search_form", clear_on_submit=True):
        col_query, col_dwell = st.columns([3, 1])
        with col_query:
            query = st.text_input("Search a place", placeholder="e.g. Tokyo Tower")
        with col_dwell:
            dwell = st.number_input("Time spent (min)", min_value=0, max_value=1440, value=30, step=5)
        submitted = st.form_submit_button("Add stop")
    if submitted and query.strip():
        with st.spinner("Searching…"):
            place = search_place(query)
        if place is None:
            st.error(f"No place found for {query!r}.")
            return
        st.session_state.setdefault("hints", {})[place.name] = place.osm_opening_hours
        update_plan(plan.add_stop(place.to_stop(int(dwell))))


def render_stops(plan: TripPlan) -> None:
    hints = st.session_state.get("hints", {})
    for i, stop in enumerate(plan.stops):
        # Widget keys follow the stop's content so moved or edited stops get fresh widgets.
        key = f"{i}_{hash(stop)}"
        with st.expander(f"{i + 1}. {stop.name} ({stop.category})", expanded=False):
            dwell = st.number_input(
                "Time spent (min)", min_value=0, max_value=1440, value=stop.dwell_minutes, key=f"dwell_{key}"
            )
            hint = hints.get(stop.name)
            hours = st.text_area(
                "Opening hours (one line per weekday)",
                value="\n".join(stop.weekday_text),
                key=f"hours_{key}",
                placeholder="Monday: 9:00 AM – 5:00 PM\nTuesday: Closed",
                help=f"OpenStreetMap lists: {hint}" if hint else None,
            )
            lines = [line for line in hours.splitlines() if line.strip()]
            col_up, col_down, col_remove = st.columns(3)
            if col_up.button("Move up", key=f"up_{key}", disabled=i == 0):
                update_plan(plan.move_stop(i, i - 1))
            if col_down.button("Move down", key=f"down_{key}", disabled=i == len(plan.stops) - 1):
                update_plan(plan.move_stop(i, i + 1))
            if col_remove.button("Remove", key=f"remove_{key}"):
                update_plan(plan.remove_stop(i))
            if int(dwell) != stop.dwell_minutes:
                update_plan(plan.with_dwell(i, int(dwell)))
            if tuple(lines) != stop.weekday_text:
                update_plan(plan.with_opening_hours(i, lines))


def compute_route(plan: TripPlan) -> None:
    if len(plan.stops) < 2:
        st.error("Please add at least 2 stops.")
        return
    coords = [stop.position for stop in plan.stops]
    if any(c is None for c in coords):
        st.error("Every stop needs a location to compute the route.")
        return
    with st.spinner("Computing walking route…"):
        legs = compute_leg_durations(coords)
    st.session_state["geometry"] = legs.geometry
    st.session_state["route_source"] = legs.source
    update_plan(plan.with_travel_durations(legs.durations_min))


def current_schedule(plan: TripPlan) -> Optional[TripSchedule]:
    if plan.is_routed or len(plan.stops) == 1:
        return schedule_trip(plan)
    return None


def main():
    st.set_page_config(page_title="TripWise", layout="wide")
    st.title("🚶 TripWise walking trip planner")
    plan = current_plan()
    render_sidebar(plan)
    render_search(plan)
    render_stops(plan)

    if st.button("Compute walking route", type="primary"):
        compute_route(plan)

    if plan.is_routed and st.session_state.get("route_source") == "haversine":
        st.warning("Routing service unavailable; walking times are straight-line estimates.")
    schedule = current_schedule(plan)
    rows: List[dict] = itinerary_rows(plan, schedule)
    if rows:
        st.table(rows)
    if schedule is not None and schedule.end is not None:
        st.success(f"Trip ends at {format_timestamp(schedule.end)} on {schedule.end:%A}.")
        col_text, col_csv = st.columns(2)
        col_text.download_button(
            "Download itinerary (text)", format_itinerary_text(plan, schedule), file_name="itinerary.txt"
        )
        col_csv.download_button(
            "Download itinerary (CSV)", itinerary_csv(plan, schedule), file_name="itinerary.csv", mime="text/csv"
        )
    # Display map with the computed route
    fol_map = create_folium_map(plan, schedule, st.session_state.get("geometry"))
    folium_static(fol_map, width=900, height=500)


if __name__ == "__main__":
    main()
