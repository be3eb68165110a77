"""
Soil moisture estimation from NDMI and the SWIR band ratio.

Moisture response to NDMI saturates at the wet and dry extremes, so the
index is mapped through four linear segments instead of a single line:

    NDMI > 0.4          70-100 %
    0.1 < NDMI <= 0.4   40-70 %
    -0.1 < NDMI <= 0.1  15-40 %
    NDMI <= -0.1        5-15 %
"""

from typing import NamedTuple, Dict

from ..data.scenes import Location
from ..processing.indices import SpectralIndices, clamp, safe_ratio, round_half_up

MOISTURE_MIN = 5.0
MOISTURE_MAX = 95.0

TROPICS_LAT = 23.5
POLAR_LAT = 60.0

MOISTURE_DESCRIPTIONS = {
    "very_low": "Very dry soil, irrigation strongly recommended",
    "low": "Dry soil, may need irrigation",
    "moderate": "Adequate moisture for most crops",
    "high": "Good moisture content",
    "very_high": "Potentially waterlogged, check drainage",
}


class MoistureResult(NamedTuple):
    percentage: float
    level: str
    description: str
    ndmi_value: float


def ndmi_to_moisture(ndmi: float) -> float:
    """Piecewise-linear NDMI to moisture percentage (before refinements)."""
    if ndmi > 0.4:
        return 70 + (ndmi - 0.4) * 50
    elif ndmi > 0.1:
        return 40 + (ndmi - 0.1) * 100
    elif ndmi > -0.1:
        return 15 + (ndmi + 0.1) * 125
    else:
        return 5 + max(0.0, (ndmi + 0.3) * 50)


def classify_moisture(percentage: float) -> str:
    if percentage < 15:
        return "very_low"
    elif percentage < 30:
        return "low"
    elif percentage < 60:
        return "moderate"
    elif percentage < 80:
        return "high"
    else:
        return "very_high"


def estimate_moisture(bands: Dict[str, float], indices: SpectralIndices, location: Location) -> MoistureResult:
    """
    Estimates volumetric soil moisture (5-95 %) for one scene.

    The NDMI segment value is refined by a small SWIR1/SWIR2 adjustment and
    a latitude correction (tropics wetter, polar regions drier).
    """
    ndmi = indices.ndmi
    moisture = ndmi_to_moisture(ndmi)

    swir_ratio = safe_ratio(bands.get("swir1"), bands.get("swir2"))
    moisture *= 0.9 + (swir_ratio - 1) * 0.1

    abs_lat = abs(location.lat)
    if abs_lat < TROPICS_LAT:
        moisture *= 1.05
    elif abs_lat > POLAR_LAT:
        moisture *= 0.95

    moisture = clamp(moisture, MOISTURE_MIN, MOISTURE_MAX)
    level = classify_moisture(moisture)

    return MoistureResult(
        percentage=round_half_up(moisture, 2),
        level=level,
        description=MOISTURE_DESCRIPTIONS[level],
        ndmi_value=round_half_up(ndmi, 3),
    )
