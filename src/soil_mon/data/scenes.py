"""
Scene and location records consumed by the soil inference engine.

Scenes come from the data-acquisition side (a satellite catalog or the
synthetic generator) and are read-only once built. The validators in this
module belong to the calling orchestrator; the engine assumes validated
input.
"""

import numbers
from datetime import datetime, date
from typing import NamedTuple, Optional, Dict, Any, List, Union

import numpy as np

from ..errors import InvalidInputError

# Canonical band names, keyed by every accepted spelling.
# Sentinel-2 codes: B02 Blue ... B12 SWIR 2
BAND_ALIASES = {
    "B02": "blue",
    "B03": "green",
    "B04": "red",
    "B05": "red_edge1",
    "B06": "red_edge2",
    "B07": "red_edge3",
    "B08": "nir",
    "B8A": "nir_narrow",
    "B09": "water_vapour",
    "B11": "swir1",
    "B12": "swir2",
    "Blue": "blue",
    "Green": "green",
    "Red": "red",
    "RedEdge1": "red_edge1",
    "RedEdge2": "red_edge2",
    "RedEdge3": "red_edge3",
    "NIR": "nir",
    "NarrowNIR": "nir_narrow",
    "WaterVapour": "water_vapour",
    "SWIR1": "swir1",
    "SWIR2": "swir2",
}

CANONICAL_BANDS = (
    "blue", "green", "red", "red_edge1", "red_edge2", "red_edge3",
    "nir", "nir_narrow", "water_vapour", "swir1", "swir2",
)

REQUIRED_BANDS = ("red", "nir", "blue", "swir1", "swir2")


class Location(NamedTuple):
    lat: float
    lon: float
    radius: Optional[float] = None


class Scene(NamedTuple):
    id: str
    captured_at: datetime
    cloud_cover: float
    bands: Dict[str, float]
    metadata: Optional[Dict[str, Any]] = None


def canonical_band_name(name: str) -> str:
    if name in BAND_ALIASES:
        return BAND_ALIASES[name]
    lowered = name.lower()
    if lowered in CANONICAL_BANDS:
        return lowered
    return BAND_ALIASES.get(name.upper(), lowered)


def normalize_bands(bands: Dict[str, Any]) -> Dict[str, float]:
    """
    Maps any accepted band spelling to its canonical name.

    Values are clipped into [0, 1]; non-finite values are dropped so the
    dependent indices fall back to 0.
    """
    normalized = {}
    for name, value in bands.items():
        if value is None:
            continue
        value = float(value)
        if not np.isfinite(value):
            continue
        normalized[canonical_band_name(name)] = float(np.clip(value, 0.0, 1.0))
    return normalized


def validate_bands(bands: Dict[str, Any]) -> None:
    """Rejects band readings that are not numbers in [0, 1]."""
    if not bands:
        raise InvalidInputError("Scene has no band readings")
    for name, value in bands.items():
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidInputError(f"Band {name} must be a number, got {value!r}")
        if not 0 <= value <= 1:
            raise InvalidInputError(f"Band {name} reflectance {value} outside [0, 1]")


def validate_coordinates(lat, lon) -> None:
    if isinstance(lat, bool) or isinstance(lon, bool) \
            or not isinstance(lat, numbers.Real) or not isinstance(lon, numbers.Real):
        raise InvalidInputError("Coordinates must be numbers")
    if not -90 <= lat <= 90:
        raise InvalidInputError("Latitude must be between -90 and 90")
    if not -180 <= lon <= 180:
        raise InvalidInputError("Longitude must be between -180 and 180")


def _to_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_timestamp(value).date()
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid date format: {value!r}")


def validate_date_range(start, end, today: Optional[date] = None, max_days: int = 365):
    """
    Checks a search window: start before end, end not in the future and
    the span no longer than max_days.

    Returns:
        (start_date, end_date) as datetime.date objects.
    """
    start_date = _to_date(start)
    end_date = _to_date(end)
    if today is None:
        today = date.today()

    if start_date > end_date:
        raise InvalidInputError("Start date must be before end date")
    if end_date > today:
        raise InvalidInputError("End date cannot be in the future")
    if (end_date - start_date).days > max_days:
        raise InvalidInputError(f"Date range cannot exceed {max_days} days")
    return start_date, end_date


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    if isinstance(value, datetime):
        return value
    if 'T' in value:
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    return datetime.strptime(value, '%Y-%m-%d')


def parse_scene(record: Dict[str, Any]) -> Scene:
    """
    Builds a Scene from a catalog-style record.

    Expected keys: "id", "date" (ISO string), "cloudCover", "bands" and
    optionally "metadata". Snake-case keys ("captured_at", "cloud_cover")
    are accepted as well.
    """
    try:
        scene_id = str(record["id"])
        raw_date = record.get("date", record.get("captured_at"))
        raw_cloud = record.get("cloudCover", record.get("cloud_cover"))
        raw_bands = record["bands"]
    except (KeyError, TypeError) as e:
        raise InvalidInputError(f"Scene record missing field: {e}")

    if raw_date is None or raw_cloud is None:
        raise InvalidInputError(f"Scene {scene_id} needs a date and a cloud cover value")

    try:
        captured_at = parse_timestamp(raw_date)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Scene {scene_id} has an invalid date: {e}")

    if isinstance(raw_cloud, bool) or not isinstance(raw_cloud, numbers.Real) or not 0 <= raw_cloud <= 100:
        raise InvalidInputError(f"Scene {scene_id} cloud cover must be between 0 and 100")

    validate_bands(raw_bands)

    return Scene(
        id=scene_id,
        captured_at=captured_at,
        cloud_cover=float(raw_cloud),
        bands=normalize_bands(raw_bands),
        metadata=record.get("metadata"),
    )


def summarize_scenes(scenes: List[Scene]) -> Dict[str, Any]:
    """Total scene count and mean cloud cover (2 decimals) for a candidate set."""
    if not scenes:
        return {"total_scenes": 0, "average_cloud_cover": 0.0}
    mean_cloud = float(np.mean([s.cloud_cover for s in scenes]))
    return {
        "total_scenes": len(scenes),
        "average_cloud_cover": round(mean_cloud, 2),
    }


def get_bbox(lat, lon, buffer=0.01):
    """Creates a bounding box around a point."""
    return [
        lon - buffer,
        lat - buffer,
        lon + buffer,
        lat + buffer,
    ]
