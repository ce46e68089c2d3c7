"""Geospatial helper functions."""

from __future__ import annotations

import math

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in meters between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    return haversine_m(lat1, lon1, lat2, lon2) / 1000.0


def within_radius(lat: float, lon: float, center_lat: float, center_lon: float, radius_m: float) -> bool:
    """Return True if the point lies inside (or on) the circle."""

    return haversine_m(lat, lon, center_lat, center_lon) <= radius_m


def coordinate_bucket(lat: float, lon: float, precision: int = 3) -> str:
    """Group key formed by rounding both coordinates (3 decimals is roughly 111 m)."""

    return f"{lat:.{precision}f},{lon:.{precision}f}"
