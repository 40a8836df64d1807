"""
Place search utilities for TripWise.

This module provides a thin wrapper around the `geopy` library to
look up places by free‑form text. It uses OpenStreetMap's Nominatim
service via geopy's API. Results are cached in memory to avoid repeated
queries for the same text.

Example usage:

    from tripwise.geocode import search_place
    place = search_place("Tokyo Tower")
    stop = place.to_stop()

The search function returns ``None`` if the place cannot be found.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from geopy.exc import GeocoderServiceError, GeocoderTimedOut, GeopyError
from geopy.geocoders import Nominatim

from tripwise.categories import categorise
from tripwise.config import settings
from tripwise.schedule import Stop

logger = logging.getLogger(__name__)

_geocoder: Optional[Nominatim] = None


@dataclass(frozen=True)
class Place:
    name: str
    latitude: float
    longitude: float
    category: str
    place_type: Optional[str] = None
    address: Optional[str] = None
    # OpenStreetMap "opening_hours" tag, shown to the user as a hint.
    osm_opening_hours: Optional[str] = None

    def to_stop(self, dwell_minutes: int = 0) -> Stop:
        return Stop(
            name=self.name,
            category=self.category,
            dwell_minutes=dwell_minutes,
            position=(self.latitude, self.longitude),
        )


def _get_geocoder() -> Nominatim:
    """Return a singleton Nominatim geocoder instance."""
    global _geocoder
    if _geocoder is None:
        # Provide a custom user agent to comply with Nominatim's usage policy.
        _geocoder = Nominatim(user_agent=settings.user_agent)
    return _geocoder


def place_from_raw(raw: dict, query: str) -> Place:
    """Build a :class:`Place` from a Nominatim result dictionary."""
    place_type = raw.get("type")
    display_name = raw.get("display_name") or query
    name = raw.get("name") or display_name.split(",")[0].strip()
    extratags = raw.get("extratags") or {}
    return Place(
        name=name,
        latitude=float(raw["lat"]),
        longitude=float(raw["lon"]),
        category=categorise([place_type, extratags.get("amenity"), raw.get("class")]),
        place_type=place_type,
        address=display_name,
        osm_opening_hours=extratags.get("opening_hours"),
    )


def _geocode(query: str, timeout: int):
    return _get_geocoder().geocode(query, exactly_one=True, timeout=timeout, extratags=True)


@lru_cache(maxsize=128)
def search_place(query: str) -> Optional[Place]:
    """Look up a place and return it, or ``None`` if nothing is found.

    If a timeout or service error occurs the request is retried once
    with a longer timeout. Other geocoder errors are logged and
    ``None`` is returned.

    Args:
        query: Free form text such as a place name or address.
    """
    query = query.strip()
    if not query:
        return None
    try:
        location = _geocode(query, timeout=10)
    except (GeocoderTimedOut, GeocoderServiceError) as exc:
        logger.info("Geocoding %r failed (%s), retrying once", query, exc)
        try:
            location = _geocode(query, timeout=20)
        except GeopyError as retry_exc:
            logger.warning("Geocoding %r failed after retry: %s", query, retry_exc)
            return None
    except GeopyError as exc:
        logger.warning("Geocoding %r failed: %s", query, exc)
        return None
    if location is None:
        return None
    return place_from_raw(location.raw, query)
