"""
Waste Guide - Batch Zone Assignment

Tag a DataFrame of location readings with their zone, using the same
first-listed-zone-wins rule as ZoneRegistry.resolve_zone.

Usage:
    from waste_guide.geo.assignment import assign_zones, zone_counts

    tagged = assign_zones(events_df, lat_col="latitude", lon_col="longitude")
    zone_counts(tagged)
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from waste_guide.geo.distance import haversine_meters_array
from waste_guide.geo.registry import ZoneRegistry, get_zone_registry
from waste_guide.geo.validators import LATITUDE_RANGE, LONGITUDE_RANGE

logger = logging.getLogger(__name__)

UNZONED = "unzoned"


def assign_zones(
    df: pd.DataFrame,
    registry: ZoneRegistry | None = None,
    lat_col: str = "lat",
    lon_col: str = "long",
    zone_col: str = "zone_id",
    area_col: str = "in_service_area",
) -> pd.DataFrame:
    """
    Add zone id and service-area columns to a copy of ``df``.

    Rows with missing, non-finite or out-of-range coordinates are not
    raised on; they get no zone and ``in_service_area = False``.

    Args:
        df: Source DataFrame
        registry: Zone registry (uses the process-wide one if not provided)
        lat_col: Latitude column
        lon_col: Longitude column
        zone_col: Output column for the zone id (None when unzoned)
        area_col: Output column for the service-area flag

    Returns:
        Copy of ``df`` with ``zone_col`` and ``area_col`` added

    Raises:
        KeyError: If a coordinate column is missing
    """
    missing = [col for col in (lat_col, lon_col) if col not in df.columns]
    if missing:
        raise KeyError(f"Column(s) {missing} not found in DataFrame")

    if registry is None:
        registry = get_zone_registry()
    result = df.copy()

    lats = pd.to_numeric(result[lat_col], errors="coerce").to_numpy(dtype=np.float64)
    lons = pd.to_numeric(result[lon_col], errors="coerce").to_numpy(dtype=np.float64)

    valid = (
        np.isfinite(lats)
        & np.isfinite(lons)
        & (lats >= LATITUDE_RANGE[0])
        & (lats <= LATITUDE_RANGE[1])
        & (lons >= LONGITUDE_RANGE[0])
        & (lons <= LONGITUDE_RANGE[1])
    )

    invalid_count = int((~valid).sum())
    if invalid_count:
        logger.warning(
            f"{invalid_count} rows with unusable coordinates left unzoned",
            extra={"invalid_rows": invalid_count, "rows": len(result)},
        )
        lats = np.where(valid, lats, np.nan)
        lons = np.where(valid, lons, np.nan)

    zone_ids = np.full(len(result), None, dtype=object)
    unassigned = valid.copy()

    # Registry order decides overlaps, so earlier zones claim rows first
    for zone in registry.zones:
        if not unassigned.any():
            break
        distances = haversine_meters_array(lats, lons, zone.latitude, zone.longitude)
        hit = unassigned & (distances <= zone.radius_meters)
        zone_ids[hit] = zone.id
        unassigned &= ~hit

    bounds = registry.service_area
    in_area = (
        valid
        & (lats >= bounds.min_lat)
        & (lats <= bounds.max_lat)
        & (lons >= bounds.min_lon)
        & (lons <= bounds.max_lon)
    )

    # Explicit object dtype keeps None for unzoned rows instead of NaN
    result[zone_col] = pd.Series(zone_ids, index=result.index, dtype=object)
    result[area_col] = in_area

    logger.info(
        f"Assigned zones to {len(result)} rows",
        extra={
            "rows": len(result),
            "zoned_rows": int(pd.notna(zone_ids).sum()),
            "in_service_area_rows": int(in_area.sum()),
        },
    )

    return result


def zone_counts(df: pd.DataFrame, zone_col: str = "zone_id") -> pd.Series:
    """
    Count rows per zone id; rows without a zone are counted under "unzoned".

    Args:
        df: DataFrame produced by assign_zones
        zone_col: Zone id column

    Returns:
        Series indexed by zone id, sorted by count descending
    """
    if zone_col not in df.columns:
        raise KeyError(f"Column '{zone_col}' not found in DataFrame")

    return df[zone_col].fillna(UNZONED).value_counts()
