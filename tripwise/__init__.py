"""
TripWise package initialization.

This package provides core functionality for the TripWise walking trip
planner. Components include time arithmetic, opening hours prediction,
schedule calculation, place search, routing, persistence and map
visualisation.

Modules:
    timeutils     – Clock time parsing, formatting and wraparound arithmetic.
    opening_hours – Weekly opening hours parsing and open/closed prediction.
    schedule      – Trip plans, arrival times and per‑stop status.
    categories    – Place type to category mapping and marker colours.
    geocode       – Place search using Nominatim.
    routing       – Walking leg durations via OSRM and fallbacks.
    storage       – JSON persistence for the session plan and named plans.
    export        – Itinerary table, text and CSV output.
    visualisation – Folium based map creation utilities.

The arrival and opening status predictions are estimates built from
provider data and should be checked against the venues themselves.
"""

__all__ = [
    "timeutils",
    "opening_hours",
    "schedule",
    "categories",
    "geocode",
    "routing",
    "storage",
    "export",
    "visualisation",
]
