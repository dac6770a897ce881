"""
Tests for Configuration Loader

Tests YAML loading, environment selection and validation of the
geo section.
"""

import pytest
from pydantic import ValidationError

from waste_guide.shared.config import (
    GeoBoundsConfig,
    GeoConfig,
    Settings,
    get_config,
    get_config_dir,
    get_registry_path,
    reload_config,
)


def test_defaults(monkeypatch):
    """Defaults cover Beppu and the six app languages."""
    monkeypatch.delenv("WG_ENVIRONMENT", raising=False)
    settings = Settings()

    assert settings.environment == "dev"
    assert settings.geo.service_area.min_lat == 33.2
    assert settings.geo.service_area.max_lon == 131.6
    assert settings.geo.supported_languages == ["en", "ja", "zh", "my", "ko", "id"]


def test_load_test_environment(test_config):
    assert test_config.environment == "test"
    assert test_config.logging.level == "DEBUG"
    assert test_config.geo.registry_file == "zones/beppu.yaml"


def test_prod_uses_json_logs():
    config = reload_config("prod")

    assert config.environment == "prod"
    assert config.logging.format == "json"


def test_environment_variable_selects_environment(monkeypatch):
    monkeypatch.setenv("WG_ENVIRONMENT", "prod")

    assert reload_config().environment == "prod"


def test_invalid_environment():
    with pytest.raises(ValidationError):
        Settings(environment="staging")


def test_config_is_cached():
    assert get_config("test") is get_config("test")


def test_config_dir_override(tmp_path, monkeypatch):
    env_dir = tmp_path / "environments"
    env_dir.mkdir()
    (env_dir / "base.yaml").write_text(
        "geo:\n  service_area:\n    min_lat: 35.5\n    max_lat: 35.8\n"
        "    min_lon: 139.5\n    max_lon: 139.9\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("WG_CONFIG_DIR", str(tmp_path))

    config = reload_config("dev")

    assert get_config_dir() == tmp_path
    assert config.geo.service_area.min_lat == 35.5
    assert get_registry_path(config) == tmp_path / "zones" / "beppu.yaml"


def test_config_dir_override_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("WG_CONFIG_DIR", str(tmp_path / "nope"))

    with pytest.raises(FileNotFoundError):
        get_config_dir()


def test_registry_path_relative_to_configs(test_config, configs_dir):
    assert get_registry_path(test_config) == configs_dir / "zones" / "beppu.yaml"
    assert get_registry_path(test_config).exists()


def test_registry_path_absolute(tmp_path):
    settings = Settings(geo={"registry_file": str(tmp_path / "zones.yaml")})

    assert get_registry_path(settings) == tmp_path / "zones.yaml"


class TestGeoValidation:
    """Validation of the geo section."""

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValidationError, match="min_lat"):
            GeoBoundsConfig(min_lat=34, max_lat=33)

        with pytest.raises(ValidationError, match="min_lon"):
            GeoBoundsConfig(min_lon=132, max_lon=131)

    def test_out_of_range_bounds_rejected(self):
        with pytest.raises(ValidationError):
            GeoBoundsConfig(max_lat=95)

    def test_duplicate_languages_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            GeoConfig(supported_languages=["en", "ja", "en"])

    def test_empty_languages_rejected(self):
        with pytest.raises(ValidationError):
            GeoConfig(supported_languages=[])
