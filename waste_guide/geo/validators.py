"""
Waste Guide - Coordinate Validators

- validate_coordinates: reject NaN, infinities and out-of-range degrees
- is_within_bounds: inclusive rectangle test against a GeoBoundsConfig
"""

from __future__ import annotations

import math
from typing import Any

from waste_guide.geo.exceptions import InputError
from waste_guide.shared.config import GeoBoundsConfig

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def validate_coordinates(latitude: Any, longitude: Any) -> tuple[float, float]:
    """
    Coerce a query point to floats and check it is usable.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        (latitude, longitude) as floats

    Raises:
        InputError: If either value is non-numeric, non-finite or out of range
    """
    try:
        lat = float(latitude)
        lng = float(longitude)
    except (TypeError, ValueError) as e:
        raise InputError(
            f"Coordinates must be numeric, got ({latitude!r}, {longitude!r})",
            latitude=latitude,
            longitude=longitude,
        ) from e

    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise InputError(
            f"Coordinates must be finite, got ({lat}, {lng})",
            latitude=lat,
            longitude=lng,
        )

    if not LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]:
        raise InputError(f"Latitude {lat} outside {LATITUDE_RANGE}", latitude=lat, longitude=lng)
    if not LONGITUDE_RANGE[0] <= lng <= LONGITUDE_RANGE[1]:
        raise InputError(f"Longitude {lng} outside {LONGITUDE_RANGE}", latitude=lat, longitude=lng)

    return lat, lng


def is_within_bounds(latitude: float, longitude: float, bounds: GeoBoundsConfig) -> bool:
    """Check a point against a bounding box, edges included."""
    return (
        bounds.min_lat <= latitude <= bounds.max_lat
        and bounds.min_lon <= longitude <= bounds.max_lon
    )
