"""
Map visualisation utilities for TripWise.

This module provides a helper function to build an interactive map
using the Folium library. It renders numbered markers for each stop,
coloured by category, and draws the walking route as a polyline. The
map can be embedded directly in a Streamlit app via ``streamlit_folium``.
"""

from __future__ import annotations

import html
from typing import Dict, Optional, Sequence, Tuple

import folium

from tripwise.categories import marker_colour
from tripwise.export import itinerary_rows
from tripwise.schedule import Stop, TripPlan, TripSchedule

_MARKER_STYLE = (
    "font-size: 12px; color: white; background-color: {colour}; border-radius: 50%; "
    "width: 24px; height: 24px; text-align: center; line-height: 24px;"
)


def _popup_html(stop: Stop, row: Dict[str, object]) -> str:
    """Popup text for a stop; names come from search results and saved files."""
    parts = [f"{row['#']}. {html.escape(stop.name)}", html.escape(stop.category)]
    if stop.rating is not None:
        parts.append(f"\u2b50 {stop.rating:.1f}")
    if row["Arrival"]:
        parts.append(f"Arrive {row['Arrival']} ({row['Status']})")
    return "<br>".join(parts)


def create_folium_map(
    plan: TripPlan,
    schedule: Optional[TripSchedule] = None,
    geometry: Optional[Sequence[Tuple[float, float]]] = None,
) -> folium.Map:
    """Create a Folium map with numbered markers and a polyline for the route.

    Args:
        plan: Trip plan; stops without a position are not drawn.
        schedule: Computed schedule, used for arrival/status in popups.
        geometry: Route line as (lat, lon) points. Defaults to straight
            segments between the stops.

    Returns:
        A Folium Map object ready for display.
    """
    placed = [(i, stop) for i, stop in enumerate(plan.stops) if stop.position]
    if not placed:
        return folium.Map(location=[0, 0], zoom_start=2)
    # Compute map centre as the mean of all coordinates
    avg_lat = sum(stop.position[0] for _, stop in placed) / len(placed)
    avg_lon = sum(stop.position[1] for _, stop in placed) / len(placed)
    m = folium.Map(location=[avg_lat, avg_lon], zoom_start=14, tiles="OpenStreetMap")
    rows = itinerary_rows(plan, schedule)
    for i, stop in placed:
        folium.Marker(
            location=list(stop.position),
            popup=folium.Popup(_popup_html(stop, rows[i]), max_width=250),
            tooltip=html.escape(stop.name),
            icon=folium.DivIcon(
                html=f"<div style='{_MARKER_STYLE.format(colour=marker_colour(stop.category))}'>{i + 1}</div>"
            ),
        ).add_to(m)
    # Draw polyline for route
    line = list(geometry) if geometry else [stop.position for _, stop in placed]
    if len(line) > 1:
        folium.PolyLine([[lat, lon] for lat, lon in line], color="blue", weight=4, opacity=0.6).add_to(m)
    return m
