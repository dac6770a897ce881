"""
Waste Guide - Geo Exceptions

Two failure channels, kept separate from "not found":
- ConfigurationError: zone definitions are unusable; raised while loading,
  so no registry object is ever built from them
- InputError: a single query carried unusable coordinates

A point outside every zone, or an unknown zone id, is ``None``.
"""

from __future__ import annotations

from typing import Any


class ConfigurationError(Exception):
    """Raised when zone definitions fail validation at load time."""

    def __init__(self, problems: list[str] | str, source: str | None = None):
        if isinstance(problems, str):
            problems = [problems]
        self.problems = list(problems)
        self.source = source

        header = "Invalid zone configuration"
        if source:
            header += f" in {source}"
        details = "\n".join(f"  - {p}" for p in self.problems)
        super().__init__(f"{header}:\n{details}")


class InputError(ValueError):
    """Raised when query coordinates are non-finite or out of range."""

    def __init__(self, message: str, latitude: Any = None, longitude: Any = None):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(message)
