"""
Waste Guide - Zone Model

A zone is a named circle on the map: a center point, a radius in meters,
and a display name for every supported language. Zones are immutable once
loaded.

Example definition (YAML):

    - id: apu_campus
      name: APU Campus
      display_name:
        en: APU Campus
        ja: APU キャンパス
      latitude: 33.1599
      longitude: 131.6046
      radius_meters: 800
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waste_guide.geo.distance import GeoPoint, haversine_meters


class Zone(BaseModel):
    """Circular service zone."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    display_name: Mapping[str, str]
    latitude: float = Field(ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(ge=-180, le=180, allow_inf_nan=False)
    radius_meters: float = Field(gt=0, allow_inf_nan=False)

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Every localized name must be non-blank. Stored read-only."""
        blank = sorted(lang for lang, text in v.items() if not text or not text.strip())
        if blank:
            raise ValueError(f"Blank display name for language(s): {blank}")
        return MappingProxyType(dict(v))

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def center(self) -> GeoPoint:
        return GeoPoint(self.latitude, self.longitude)

    def distance_to(self, latitude: float, longitude: float) -> float:
        """Great-circle distance in meters from the zone center."""
        return haversine_meters(latitude, longitude, self.latitude, self.longitude)

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check if a point lies within the zone radius (boundary included)."""
        return self.distance_to(latitude, longitude) <= self.radius_meters

    def localized_name(self, language: str) -> str:
        """Name for ``language``, or the default name for an unknown code."""
        return self.display_name.get(language, self.name)
