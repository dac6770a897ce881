"""
Waste Guide - Configuration Loader

Pydantic-based configuration management with:
- Environment-based configuration (dev/test/prod)
- YAML file loading with inheritance
- Environment variable overrides
- Type validation via Pydantic

Usage:
    from waste_guide.shared.config import get_config

    config = get_config()  # Uses WG_ENVIRONMENT env var
    config = get_config("dev")  # Explicit environment

    # Access config values
    bounds = config.geo.service_area
    languages = config.geo.supported_languages
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# Configuration Models
# =============================================================================


class ProjectConfig(BaseModel):
    """Project metadata configuration."""

    name: str = "waste-guide"
    version: str = "0.1.0"
    description: str = "Location-aware waste disposal guidance"


class GeoBoundsConfig(BaseModel):
    """Rectangular service area. All four edges are inclusive."""

    min_lat: float = Field(default=33.2, ge=-90, le=90, allow_inf_nan=False)
    max_lat: float = Field(default=33.4, ge=-90, le=90, allow_inf_nan=False)
    min_lon: float = Field(default=131.4, ge=-180, le=180, allow_inf_nan=False)
    max_lon: float = Field(default=131.6, ge=-180, le=180, allow_inf_nan=False)

    @model_validator(mode="after")
    def check_ordering(self) -> GeoBoundsConfig:
        if self.min_lat > self.max_lat:
            raise ValueError(f"min_lat {self.min_lat} is greater than max_lat {self.max_lat}")
        if self.min_lon > self.max_lon:
            raise ValueError(f"min_lon {self.min_lon} is greater than max_lon {self.max_lon}")
        return self


class GeoConfig(BaseModel):
    """Zone registry and service area configuration."""

    service_area: GeoBoundsConfig = Field(default_factory=GeoBoundsConfig)
    supported_languages: list[str] = Field(
        default_factory=lambda: ["en", "ja", "zh", "my", "ko", "id"]
    )
    registry_file: str = "zones/beppu.yaml"

    @field_validator("supported_languages")
    @classmethod
    def validate_languages(cls, v: list[str]) -> list[str]:
        """Language codes must be non-empty and unique."""
        if not v:
            raise ValueError("At least one supported language is required")
        if any(not code for code in v):
            raise ValueError("Language codes must be non-empty strings")
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate language codes in {v}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["json", "text"] = "text"


# =============================================================================
# Main Settings Class
# =============================================================================


class Settings(BaseSettings):
    """
    Main configuration class for Waste Guide.

    Loads configuration from:
    1. YAML files in configs/environments/
    2. Environment variables (WG_ prefix, __ for nesting)

    Environment variables fill any section the YAML files leave out.
    """

    model_config = SettingsConfigDict(
        env_prefix="WG_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    environment: Literal["dev", "test", "prod"] = "dev"

    # Configuration sections
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    geo: GeoConfig = Field(default_factory=GeoConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"dev", "test", "prod"}
        if v not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v


# =============================================================================
# Configuration Loading Functions
# =============================================================================


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    override = os.getenv("WG_CONFIG_DIR")
    if override:
        config_dir = Path(override)
        if config_dir.exists():
            return config_dir
        raise FileNotFoundError(f"WG_CONFIG_DIR points to a missing directory: {config_dir}")

    # Try relative path from the repository root
    config_dir = Path(__file__).parent.parent.parent / "configs"
    if config_dir.exists():
        return config_dir

    # Try from current working directory
    config_dir = Path.cwd() / "configs"
    if config_dir.exists():
        return config_dir

    raise FileNotFoundError(
        "Could not find configs directory. "
        "Set WG_CONFIG_DIR or run from the project root."
    )


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents."""
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_config_for_environment(environment: str) -> dict[str, Any]:
    """Load and merge configuration for a specific environment."""
    env_dir = get_config_dir() / "environments"

    base_config = _load_yaml_file(env_dir / "base.yaml")
    env_config = _load_yaml_file(env_dir / f"{environment}.yaml")

    # Remove inheritance marker if present
    env_config.pop("_inherit", None)

    merged = _deep_merge(base_config, env_config)
    merged["environment"] = environment

    return merged


@lru_cache(maxsize=4)
def get_config(environment: str | None = None) -> Settings:
    """
    Get configuration for the specified environment.

    Args:
        environment: Environment name (dev, test, prod).
                    If None, uses WG_ENVIRONMENT env var, defaulting to "dev".

    Returns:
        Settings: Validated configuration object.

    Example:
        config = get_config()  # Uses WG_ENVIRONMENT or defaults to dev
        config = get_config("prod")  # Explicit production config

        bounds = config.geo.service_area
    """
    if environment is None:
        environment = os.getenv("WG_ENVIRONMENT", "dev")

    yaml_config = _load_config_for_environment(environment)

    # Create Settings object (also loads env vars)
    return Settings(**yaml_config)


def reload_config(environment: str | None = None) -> Settings:
    """
    Reload configuration, clearing the cache.

    Useful for testing or when config files have changed.
    """
    get_config.cache_clear()
    return get_config(environment)


# =============================================================================
# Convenience Functions
# =============================================================================


def get_registry_path(config: Settings | None = None) -> Path:
    """
    Resolve the zone definition file named by ``geo.registry_file``.

    Relative paths are taken from the configs directory.
    """
    if config is None:
        config = get_config()

    path = Path(config.geo.registry_file)
    if path.is_absolute():
        return path
    return get_config_dir() / path

