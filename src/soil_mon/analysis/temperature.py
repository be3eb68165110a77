import numpy as np
from datetime import datetime
from typing import NamedTuple, Dict

from ..data.scenes import Location
from ..processing.indices import round_half_up

BASE_TEMPERATURE_C = 15.0


class TemperatureFactors(NamedTuple):
    seasonal: float
    latitude: float
    surface: float


class TemperatureResult(NamedTuple):
    celsius: float
    fahrenheit: float
    description: str
    factors: TemperatureFactors


def describe_temperature(celsius: float) -> str:
    if celsius < 5:
        return "Very cold - limited biological activity"
    elif celsius < 15:
        return "Cool - slow plant growth"
    elif celsius < 25:
        return "Optimal - good for most crops"
    elif celsius < 35:
        return "Warm - may stress some plants"
    else:
        return "Hot - requires heat-tolerant varieties"


def estimate_temperature(bands: Dict[str, float], location: Location, captured_at: datetime) -> TemperatureResult:
    """
    Estimates soil surface temperature without a thermal band.

    Sum of a 15 degC baseline and three terms, each reported in `factors`:
        seasonal: 10 * sin((m - 3) * pi / 6), m = month index with January = 0
        latitude: (30 - |lat|) * 0.3
        surface:  (SWIR1 - SWIR2) * 20
    """
    month_index = captured_at.month - 1
    seasonal = 10 * np.sin((month_index - 3) * np.pi / 6)
    latitude = (30 - abs(location.lat)) * 0.3
    surface = (bands.get("swir1", 0.0) - bands.get("swir2", 0.0)) * 20

    celsius = float(BASE_TEMPERATURE_C + seasonal + latitude + surface)

    return TemperatureResult(
        celsius=round_half_up(celsius, 1),
        fahrenheit=round_half_up(celsius * 9 / 5 + 32, 1),
        description=describe_temperature(celsius),
        factors=TemperatureFactors(
            seasonal=round_half_up(seasonal, 1),
            latitude=round_half_up(latitude, 1),
            surface=round_half_up(surface, 1),
        ),
    )
