from decimal import Decimal, ROUND_HALF_UP

import numpy as np
from typing import NamedTuple, Dict, Optional

from ..config import SOIL_BRIGHTNESS_L

# Denominators smaller than this are treated as zero
EPSILON = 1e-12


class SpectralIndices(NamedTuple):
    ndvi: float
    evi: float
    ndmi: float
    bsi: float
    savi: float


def clamp(value, low, high):
    """Clamps value into [low, high]. NaN maps to low."""
    if np.isnan(value):
        return low
    return float(min(high, max(low, value)))


def safe_div(a, b):
    """a / b, or NaN when the denominator is (almost) zero."""
    if a is None or b is None or abs(b) < EPSILON:
        return float("nan")
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(a, b))


def safe_ratio(a, b, default=1.0):
    """
    Band ratio a / b.

    A non-zero reading over a zero band is +/-inf, so values derived from the
    ratio saturate at their clamp bound. Missing bands and 0 / 0 give default.
    """
    if a is None or b is None:
        return default
    if abs(b) < EPSILON:
        if abs(a) < EPSILON:
            return default
        return float(np.copysign(np.inf, a))
    return safe_div(a, b)


def round_half_up(value, digits=0):
    """Rounds to `digits` decimals with ties going up (7.05 -> 7.1)."""
    value = float(value)
    if not np.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _index(value):
    # NaN / inf evaluate to 0, everything else is clipped to [-1, 1]
    if value is None or not np.isfinite(value):
        return 0.0
    return clamp(value, -1.0, 1.0)


def normalized_difference(a, b):
    """(a - b) / (a + b) clamped to [-1, 1]; degenerate input yields 0."""
    if a is None or b is None:
        return 0.0
    return _index(safe_div(a - b, a + b))


def compute_indices(bands: Dict[str, float], soil_brightness: float = SOIL_BRIGHTNESS_L) -> SpectralIndices:
    """
    Derives the vegetation, moisture and bare-soil indices from one band reading.

    Args:
        bands: Canonical band names mapped to reflectance (0-1).
        soil_brightness: SAVI soil brightness correction factor L.

    Returns:
        SpectralIndices with every value clamped to [-1, 1]. An index whose
        band is missing, or whose denominator vanishes, is 0.
    """
    red = bands.get("red")
    nir = bands.get("nir")
    blue = bands.get("blue")
    swir1 = bands.get("swir1")

    # NDVI: (NIR - Red) / (NIR + Red)
    ndvi = normalized_difference(nir, red)

    # EVI: 2.5 * (NIR - Red) / (NIR + 6*Red - 7.5*Blue + 1)
    evi = 0.0
    if None not in (nir, red, blue):
        evi = _index(2.5 * safe_div(nir - red, nir + 6 * red - 7.5 * blue + 1))

    # NDMI: (NIR - SWIR1) / (NIR + SWIR1)
    ndmi = normalized_difference(nir, swir1)

    # BSI: ((SWIR1 + Red) - (NIR + Blue)) / ((SWIR1 + Red) + (NIR + Blue))
    bsi = 0.0
    if None not in (swir1, red, nir, blue):
        bsi = normalized_difference(swir1 + red, nir + blue)

    # SAVI: ((NIR - Red) / (NIR + Red + L)) * (1 + L)
    savi = 0.0
    if None not in (nir, red):
        L = soil_brightness
        savi = _index(safe_div(nir - red, nir + red + L) * (1 + L))

    return SpectralIndices(ndvi=ndvi, evi=evi, ndmi=ndmi, bsi=bsi, savi=savi)
