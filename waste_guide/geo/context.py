"""
Waste Guide - Location Context

Bundles the two registry answers a consumer needs for one reading:
the zone (if any) and whether the point is in the service area at all.
A missing reading degrades to an unzoned context instead of failing.

Usage:
    from waste_guide.geo.context import resolve_location

    context = resolve_location(33.1599, 131.6046)
    context.zone_name("ja")     # "APU キャンパス"
    context.to_event_fields()   # {"detected_zone": "apu_campus", ...}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from waste_guide.geo.registry import ZoneRegistry, get_zone_registry
from waste_guide.geo.zones import Zone


@dataclass(frozen=True)
class LocationContext:
    """Resolved location for one reading."""

    latitude: float | None
    longitude: float | None
    zone: Zone | None = None
    in_service_area: bool = False

    @classmethod
    def unavailable(cls) -> LocationContext:
        """Context for when no reading could be obtained."""
        return cls(latitude=None, longitude=None)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def is_zoned(self) -> bool:
        return self.zone is not None

    @property
    def zone_id(self) -> str | None:
        return self.zone.id if self.zone else None

    def zone_name(self, language: str | None = None) -> str | None:
        """Localized zone name, the default name if no language is given."""
        if self.zone is None:
            return None
        if language is None:
            return self.zone.name
        return self.zone.localized_name(language)

    def to_event_fields(self) -> dict[str, Any]:
        """Fields attached to analytics events."""
        return {
            "detected_zone": self.zone_id,
            "detected_zone_name": self.zone_name(),
            "in_service_area": self.in_service_area,
        }


def resolve_location(
    latitude: float | None,
    longitude: float | None,
    registry: ZoneRegistry | None = None,
) -> LocationContext:
    """
    Resolve a reading against the registry.

    Args:
        latitude: Latitude in degrees, or None if location is unavailable
        longitude: Longitude in degrees, or None if location is unavailable
        registry: Zone registry (uses the process-wide one if not provided)

    Returns:
        LocationContext

    Raises:
        InputError: If the coordinates are present but unusable
    """
    if latitude is None or longitude is None:
        return LocationContext.unavailable()

    if registry is None:
        registry = get_zone_registry()

    zone = registry.resolve_zone(latitude, longitude)
    return LocationContext(
        latitude=float(latitude),
        longitude=float(longitude),
        zone=zone,
        in_service_area=registry.is_within_service_area(latitude, longitude),
    )
