"""
Waste Guide - Geographic Utilities

Zone resolution for location-tailored guidance:
- Coordinate validation
- Great-circle distance
- Zone registry (point → zone, id → zone, service area check)
- Batch zone assignment for DataFrames
"""

from waste_guide.geo.assignment import assign_zones, zone_counts
from waste_guide.geo.context import LocationContext, resolve_location
from waste_guide.geo.distance import (
    EARTH_RADIUS_METERS,
    GeoPoint,
    distance_meters,
    haversine_meters,
)
from waste_guide.geo.exceptions import ConfigurationError, InputError
from waste_guide.geo.registry import (
    ZoneRegistry,
    get_zone_registry,
    load_zone_registry,
    reload_zone_registry,
)
from waste_guide.geo.validators import is_within_bounds, validate_coordinates
from waste_guide.geo.zones import Zone

__all__ = [
    # Distance
    "EARTH_RADIUS_METERS",
    "GeoPoint",
    "distance_meters",
    "haversine_meters",
    # Validation
    "validate_coordinates",
    "is_within_bounds",
    # Errors
    "ConfigurationError",
    "InputError",
    # Registry
    "Zone",
    "ZoneRegistry",
    "get_zone_registry",
    "load_zone_registry",
    "reload_zone_registry",
    # Consumers
    "LocationContext",
    "resolve_location",
    "assign_zones",
    "zone_counts",
]
