"""
Routing utilities for TripWise.

This module wraps network calls to OSRM (Open Source Routing Machine)
to get walking times between consecutive stops of a trip. If OSRM is
unavailable or returns an unusable response, the legs are estimated
with the Haversine distance and an average walking speed instead.

Example usage:

    coords = [(35.6586, 139.7454), (35.6812, 139.7671)]
    legs = compute_leg_durations(coords)
    legs.durations_min  # -> [36]

The public OSRM demo server is rate limited. Point
``TRIPWISE_OSRM_URL`` at your own server in production.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import requests

from tripwise.config import settings

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0


@dataclass
class RouteLegs:
    """Walking minutes per leg, plus the route line as (lat, lon) points when known."""

    durations_min: List[int]
    geometry: List[Tuple[float, float]] = field(default_factory=list)
    source: str = "osrm"


def haversine_distance(coord1: Tuple[float, float], coord2: Tuple[float, float]) -> float:
    """Compute the great‑circle distance between two coordinates in kilometers."""
    lat1, lon1 = coord1
    lat2, lon2 = coord2
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def _to_minutes(seconds: float) -> int:
    return int(round(seconds / 60.0))


def compute_osrm_route(
    coords: Sequence[Tuple[float, float]],
    profile: str = settings.osrm_profile,
    base_url: str = settings.osrm_url,
    timeout: float = settings.request_timeout,
) -> Optional[RouteLegs]:
    """Call the OSRM route service for the stops in visiting order.

    Args:
        coords: List of (lat, lon) tuples in visiting order.
        profile: OSRM profile, ``foot`` for walking.
        base_url: OSRM server root URL.
        timeout: Request timeout in seconds.

    Returns:
        ``RouteLegs`` with one duration per consecutive pair, or ``None``
        if the request fails or the response does not match the stops.
    """
    if len(coords) < 2:
        return None
    # OSRM expects lon,lat order and semicolon separated list
    locs = ";".join([f"{lon},{lat}" for lat, lon in coords])
    url = f"{base_url.rstrip('/')}/route/v1/{profile}/{locs}"
    params = {"overview": "full", "geometries": "geojson", "steps": "false"}
    try:
        resp = requests.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("OSRM route request failed: %s", exc)
        return None
    routes = data.get("routes") or []
    if data.get("code") != "Ok" or not routes:
        logger.warning("OSRM returned no route (code=%s)", data.get("code"))
        return None
    legs = routes[0].get("legs", [])
    if len(legs) != len(coords) - 1:
        logger.warning("OSRM returned %d legs for %d stops", len(legs), len(coords))
        return None
    durations = [_to_minutes(leg.get("duration") or 0.0) for leg in legs]
    line = routes[0].get("geometry", {}).get("coordinates", [])
    geometry = [(lat, lon) for lon, lat in line]
    return RouteLegs(durations_min=durations, geometry=geometry, source="osrm")


def compute_haversine_legs(coords: Sequence[Tuple[float, float]], speed_kmh: float) -> RouteLegs:
    """Estimate walking minutes between consecutive coordinates.

    Args:
        coords: List of (lat, lon) tuples in visiting order.
        speed_kmh: Assumed constant walking speed in km/h.
    """
    durations = []
    for i in range(len(coords) - 1):
        dist = haversine_distance(coords[i], coords[i + 1])
        durations.append(_to_minutes(dist / speed_kmh * 3600.0))
    return RouteLegs(durations_min=durations, geometry=list(coords), source="haversine")


def compute_leg_durations(
    coords: Sequence[Tuple[float, float]],
    speed_kmh: float = settings.walk_speed_kmh,
) -> RouteLegs:
    """Compute walking minutes for each leg of a trip.

    OSRM is tried first. If it fails, a straight‑line estimate at
    ``speed_kmh`` is used so that a schedule can still be produced.

    Args:
        coords: List of (lat, lon) coordinate tuples in visiting order.
        speed_kmh: Walking speed for the fallback estimate.

    Returns:
        ``RouteLegs`` with ``len(coords) - 1`` durations (none for fewer
        than two stops).
    """
    if len(coords) < 2:
        return RouteLegs(durations_min=[], geometry=list(coords), source="none")
    legs = compute_osrm_route(coords)
    if legs is not None:
        return legs
    logger.info("Falling back to Haversine estimate for %d stops", len(coords))
    return compute_haversine_legs(coords, speed_kmh)
