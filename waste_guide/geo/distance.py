"""
Waste Guide - Great-Circle Distance

Haversine distance on a spherical Earth (mean radius 6,371 km).

Usage:
    from waste_guide.geo.distance import GeoPoint, distance_meters, haversine_meters

    haversine_meters(33.1599, 131.6046, 33.2847, 131.4913)
    distance_meters(GeoPoint(33.1599, 131.6046), GeoPoint(33.2847, 131.4913))
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

EARTH_RADIUS_METERS = 6_371_000


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in meters between two GPS points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    # Rounding can push a just outside [0, 1] for near-antipodal points
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_meters(p1: GeoPoint, p2: GeoPoint) -> float:
    """Distance in meters between two points."""
    return haversine_meters(p1.latitude, p1.longitude, p2.latitude, p2.longitude)


def haversine_meters_array(
    lats: np.ndarray,
    lons: np.ndarray,
    lat0: float,
    lon0: float,
) -> np.ndarray:
    """
    Vectorised haversine distance from many points to one center.

    Args:
        lats: Latitudes in degrees
        lons: Longitudes in degrees, same shape as ``lats``
        lat0: Center latitude in degrees
        lon0: Center longitude in degrees

    Returns:
        Array of distances in meters; NaN where an input was NaN
    """
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)

    phi1 = np.radians(lats)
    phi2 = math.radians(lat0)
    dphi = np.radians(lat0 - lats)
    dlam = np.radians(lon0 - lons)
    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * math.cos(phi2) * np.sin(dlam / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_METERS * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
