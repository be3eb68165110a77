"""
Synthetic Sentinel-2 scenes for when no catalog imagery is available.

Generation is driven by a seedable numpy Generator so the same seed always
produces the same scenes. Nothing in the inference engine depends on this
module.
"""

import numpy as np
from datetime import datetime, timedelta
from typing import List, Optional

from .scenes import Scene, Location, parse_timestamp

# (base reflectance, random spread) per Sentinel-2 band
BASE_REFLECTANCE = {
    "B02": (0.08, 0.04),  # Blue
    "B03": (0.10, 0.04),  # Green
    "B04": (0.12, 0.04),  # Red
    "B05": (0.15, 0.05),  # Red Edge 1
    "B06": (0.18, 0.05),  # Red Edge 2
    "B07": (0.20, 0.05),  # Red Edge 3
    "B08": (0.25, 0.10),  # NIR
    "B8A": (0.24, 0.08),  # NIR Narrow
    "B09": (0.05, 0.02),  # Water Vapour
    "B11": (0.20, 0.08),  # SWIR 1
    "B12": (0.15, 0.06),  # SWIR 2
}

NIR_BANDS = ("B08", "B8A")
SWIR_BANDS = ("B11", "B12")


def generate_mock_bands(lat: float, when: datetime, rng: np.random.Generator) -> dict:
    """
    Draws one band reading with seasonal and latitude modulation.

    NIR rises in the (northern) growing season, SWIR falls with it.
    """
    month_index = when.month - 1
    season_factor = np.cos((month_index - 5) * np.pi / 6)
    latitude_factor = np.cos(np.radians(lat))

    bands = {}
    for band, (base, spread) in BASE_REFLECTANCE.items():
        value = base + rng.random() * spread
        if band in NIR_BANDS:
            value *= 1 + season_factor * latitude_factor * 0.3
        elif band in SWIR_BANDS:
            value *= 1 - season_factor * latitude_factor * 0.2
        bands[band] = float(np.clip(value, 0.0, 1.0))
    return bands


def generate_mock_metadata(when: datetime, rng: np.random.Generator) -> dict:
    return {
        "satellite": "Sentinel-2A",
        "sensor": "MSI",
        "acquisition_date": when.isoformat(),
        "processing_level": "Level-1C",
        "cloud_cover_assessment": float(rng.random() * 20),
        "quality_indicator": "PASSED",
        "format": "SAFE",
        "projection": "EPSG:4326",
    }


def generate_mock_scenes(
    location: Location,
    start,
    end,
    seed: Optional[int] = None,
    include_metadata: bool = False,
) -> List[Scene]:
    """
    Generates 2-5 synthetic scenes spread evenly across [start, end].

    Args:
        location: Point the scenes are synthesised for.
        start: Window start (ISO string, date or datetime).
        end: Window end (ISO string, date or datetime).
        seed: Seed for numpy.random.default_rng; None draws fresh entropy.
        include_metadata: Attach mock mission metadata to each scene.

    Returns:
        List of Scene records, oldest first. Cloud cover is drawn in 5-20%.
    """
    rng = np.random.default_rng(seed)

    start_dt = _as_datetime(start)
    end_dt = _as_datetime(end)
    days = max(0, int(np.ceil((end_dt - start_dt).total_seconds() / 86400)))

    num_scenes = min(max(2, days // 7), 5)

    scenes = []
    for i in range(num_scenes):
        when = start_dt + timedelta(days=i * days / num_scenes)
        scene_id = f"S2_{when.strftime('%Y-%m-%d')}_{location.lat:.3f}_{location.lon:.3f}_{i}"
        cloud_cover = float(rng.random() * 15 + 5)
        bands = generate_mock_bands(location.lat, when, rng)
        metadata = generate_mock_metadata(when, rng) if include_metadata else None

        scenes.append(Scene(
            id=scene_id,
            captured_at=when,
            cloud_cover=cloud_cover,
            bands=bands,
            metadata=metadata,
        ))

    return scenes


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return parse_timestamp(value)
    return datetime(value.year, value.month, value.day)
