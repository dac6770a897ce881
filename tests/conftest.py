"""
Waste Guide - Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Configuration fixtures
- Zone and registry fixtures
"""

import logging
import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

# Set test environment
os.environ["WG_ENVIRONMENT"] = "test"

ALL_LANGUAGES = ["en", "ja", "zh", "my", "ko", "id"]

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def configs_dir(project_root: Path) -> Path:
    """Get the configs directory."""
    return project_root / "configs"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def test_config() -> Any:
    """Get test configuration."""
    from waste_guide.shared.config import get_config, reload_config

    # Ensure fresh config for tests
    reload_config("test")
    return get_config("test")


@pytest.fixture
def sample_coordinates() -> dict[str, tuple[float, float]]:
    """Sample Beppu-area coordinates for testing."""
    return {
        "apu_campus": (33.1599, 131.6046),
        "beppu_station": (33.2847, 131.4913),
        "kannawa": (33.3170, 131.4720),  # in the city, no zone
        "tokyo": (35.0, 139.0),
    }


# =============================================================================
# Zone Fixtures
# =============================================================================


def make_zone_definition(
    zone_id: str,
    latitude: float,
    longitude: float,
    radius_meters: float,
    languages: list[str] | None = None,
) -> dict[str, Any]:
    """Build a raw zone mapping with a name for every language."""
    languages = ALL_LANGUAGES if languages is None else languages
    name = zone_id.replace("_", " ").title()
    return {
        "id": zone_id,
        "name": name,
        "display_name": {lang: f"{name} ({lang})" for lang in languages},
        "latitude": latitude,
        "longitude": longitude,
        "radius_meters": radius_meters,
    }


@pytest.fixture
def zone_definition_factory():
    """Factory for raw zone definitions."""
    return make_zone_definition


@pytest.fixture
def beppu_definitions() -> list[dict[str, Any]]:
    """The two production zones, in production order."""
    return [
        make_zone_definition("apu_campus", 33.1599, 131.6046, 800),
        make_zone_definition("downtown_beppu", 33.2847, 131.4913, 1500),
    ]


@pytest.fixture
def beppu_registry(beppu_definitions):
    """Registry built from the production zone layout."""
    from waste_guide.geo.registry import ZoneRegistry
    from waste_guide.shared.config import GeoBoundsConfig

    return ZoneRegistry.from_definitions(
        beppu_definitions,
        service_area=GeoBoundsConfig(),
        supported_languages=ALL_LANGUAGES,
    )


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def cleanup_env() -> Generator[None, None, None]:
    """Clean up environment, cached registries and log handlers after each test."""
    from waste_guide.geo.registry import _cached_registry
    from waste_guide.shared.config import get_config
    from waste_guide.shared.log_config import ROOT_LOGGER

    original_env = os.environ.copy()
    package_logger = logging.getLogger(ROOT_LOGGER)
    original_handlers = list(package_logger.handlers)
    original_level = package_logger.level

    yield

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_env)

    package_logger.handlers = original_handlers
    package_logger.setLevel(original_level)

    get_config.cache_clear()
    _cached_registry.cache_clear()
