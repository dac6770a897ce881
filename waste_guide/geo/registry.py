"""
Waste Guide - Zone Registry

Read-only lookup over a fixed, ordered list of circular zones:
- resolve_zone: which zone contains a point (first listed zone wins)
- lookup_zone_by_id: re-hydrate a stored zone reference
- is_within_service_area: coarse bounding-box check, independent of zones

The registry is validated once when it is built and never changes
afterwards, so one instance can be shared freely between threads.

Usage:
    from waste_guide.geo.registry import get_zone_registry

    registry = get_zone_registry()

    zone = registry.resolve_zone(33.1599, 131.6046)
    if zone is not None:
        print(zone.localized_name("ja"))

    registry.is_within_service_area(33.28, 131.49)  # True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from pydantic import ValidationError

from waste_guide.geo.exceptions import ConfigurationError
from waste_guide.geo.validators import is_within_bounds, validate_coordinates
from waste_guide.geo.zones import Zone
from waste_guide.shared.config import (
    GeoBoundsConfig,
    Settings,
    get_config,
    get_registry_path,
)

logger = logging.getLogger(__name__)


class ZoneRegistry:
    """
    Immutable, ordered collection of zones plus the service area bounds.

    Overlapping zones are resolved by list order, not by proximity: a point
    inside two radii belongs to whichever zone was listed first.
    """

    def __init__(
        self,
        zones: Iterable[Zone],
        service_area: GeoBoundsConfig | None = None,
        supported_languages: Iterable[str] = ("en",),
    ):
        """
        Build and validate a registry.

        Args:
            zones: Zones in priority order
            service_area: Service area bounds (defaults to GeoBoundsConfig())
            supported_languages: Language codes every zone must name

        Raises:
            ConfigurationError: On duplicate ids or missing/unknown languages
        """
        self._zones = tuple(zones)
        self._service_area = service_area or GeoBoundsConfig()
        self._languages = frozenset(supported_languages)

        problems = self._validate()
        if problems:
            raise ConfigurationError(problems)

        self._by_id = MappingProxyType({zone.id: zone for zone in self._zones})

    def _validate(self) -> list[str]:
        """Collect every problem instead of stopping at the first."""
        problems = []

        if not self._languages:
            problems.append("No supported languages configured")

        seen: set[str] = set()
        for index, zone in enumerate(self._zones):
            if zone.id in seen:
                problems.append(f"Duplicate zone id '{zone.id}' at position {index}")
            seen.add(zone.id)

            languages = set(zone.display_name)
            missing = sorted(self._languages - languages)
            if missing:
                problems.append(f"Zone '{zone.id}' has no display name for: {missing}")
            unknown = sorted(languages - self._languages)
            if unknown:
                problems.append(f"Zone '{zone.id}' names unsupported language(s): {unknown}")

        return problems

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[Mapping[str, Any]],
        service_area: GeoBoundsConfig | None = None,
        supported_languages: Iterable[str] = ("en",),
        source: str | None = None,
    ) -> ZoneRegistry:
        """
        Build a registry from raw zone mappings (e.g. parsed YAML).

        Field-level errors from every definition are reported together with
        the registry-level checks.

        Raises:
            ConfigurationError: If any definition or the registry is invalid
        """
        zones = []
        problems = []
        for index, definition in enumerate(definitions):
            label = f"#{index}"
            if isinstance(definition, Mapping) and definition.get("id"):
                label = definition["id"]
            try:
                zones.append(Zone.model_validate(definition))
            except ValidationError as e:
                for error in e.errors():
                    field = ".".join(str(part) for part in error["loc"]) or "<zone>"
                    problems.append(f"Zone '{label}' field '{field}': {error['msg']}")

        try:
            registry = cls(zones, service_area, supported_languages)
        except ConfigurationError as e:
            problems.extend(e.problems)
            registry = None

        if problems:
            raise ConfigurationError(problems, source=source)

        return registry

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def resolve_zone(self, latitude: float, longitude: float) -> Zone | None:
        """
        Find the first zone, in registry order, whose radius covers the point.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            The matching Zone, or None if the point is outside every zone

        Raises:
            InputError: If the coordinates are non-finite or out of range
        """
        lat, lng = validate_coordinates(latitude, longitude)

        for zone in self._zones:
            if zone.contains(lat, lng):
                logger.debug(
                    f"Resolved ({lat}, {lng}) to zone {zone.id}",
                    extra={"zone_id": zone.id, "radius_m": zone.radius_meters},
                )
                return zone

        logger.debug(f"No zone contains ({lat}, {lng})")
        return None

    def lookup_zone_by_id(self, zone_id: str) -> Zone | None:
        """Get a zone by its stable id, or None if unknown."""
        return self._by_id.get(zone_id)

    def is_within_service_area(self, latitude: float, longitude: float) -> bool:
        """
        Check whether a point is inside the service area bounding box.

        This is independent of zone membership: a point can be in the
        service area but in no zone, or (if misconfigured) in a zone but
        outside the box.

        Raises:
            InputError: If the coordinates are non-finite or out of range
        """
        lat, lng = validate_coordinates(latitude, longitude)
        return is_within_bounds(lat, lng, self._service_area)

    # -------------------------------------------------------------------------
    # Read-only accessors
    # -------------------------------------------------------------------------

    @property
    def zones(self) -> tuple[Zone, ...]:
        return self._zones

    @property
    def service_area(self) -> GeoBoundsConfig:
        return self._service_area

    @property
    def supported_languages(self) -> frozenset[str]:
        return self._languages

    def __len__(self) -> int:
        return len(self._zones)

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._by_id

    def __repr__(self) -> str:
        return f"ZoneRegistry(zones={[z.id for z in self._zones]})"


# =============================================================================
# Loading
# =============================================================================


def load_zone_registry(path: str | Path, config: Settings | None = None) -> ZoneRegistry:
    """
    Load a registry from a YAML file with a top-level ``zones`` list.

    Service area bounds and supported languages come from ``config.geo``.

    Args:
        path: Zone definition file
        config: Configuration object (uses default if not provided)

    Returns:
        Validated ZoneRegistry

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid
    """
    config = config or get_config()
    path = Path(path)
    source = str(path)

    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Zone file not found: {path}", source=source) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Zone file is not valid YAML: {e}", source=source) from e

    if not isinstance(document, dict) or "zones" not in document:
        raise ConfigurationError("Expected a mapping with a top-level 'zones' key", source=source)

    definitions = document["zones"]
    if definitions is None:
        definitions = []
    if not isinstance(definitions, list):
        raise ConfigurationError(
            f"'zones' must be a list, got {type(definitions).__name__}", source=source
        )

    registry = ZoneRegistry.from_definitions(
        definitions,
        service_area=config.geo.service_area,
        supported_languages=config.geo.supported_languages,
        source=source,
    )

    logger.info(
        f"Loaded {len(registry)} zones from {path}",
        extra={"zone_count": len(registry), "source": source},
    )
    return registry


@lru_cache(maxsize=4)
def _cached_registry(environment: str) -> ZoneRegistry:
    config = get_config(environment)
    return load_zone_registry(get_registry_path(config), config)


def get_zone_registry(config: Settings | None = None) -> ZoneRegistry:
    """
    Get the process-wide zone registry.

    Loaded and validated on first use, then reused for every call.

    Args:
        config: Optional configuration object; when given, it is used
                directly and the result is not cached

    Returns:
        ZoneRegistry instance
    """
    if config is not None:
        return load_zone_registry(get_registry_path(config), config)
    return _cached_registry(get_config().environment)


def reload_zone_registry() -> ZoneRegistry:
    """Drop the cached registry and load it again."""
    _cached_registry.cache_clear()
    return get_zone_registry()
