import numpy as np
import pytest

from soil_mon.analysis.moisture import (
    estimate_moisture,
    ndmi_to_moisture,
    classify_moisture,
    MOISTURE_DESCRIPTIONS,
)
from soil_mon.data.scenes import Location
from soil_mon.processing.indices import SpectralIndices

TEMPERATE = Location(lat=45.0, lon=10.0)
# Equal SWIR bands give a fixed 0.9 refinement factor
FLAT_SWIR = {"swir1": 0.2, "swir2": 0.2}


def indices_with_ndmi(ndmi):
    return SpectralIndices(ndvi=0.0, evi=0.0, ndmi=ndmi, bsi=0.0, savi=0.0)


@pytest.mark.parametrize("ndmi, expected", [
    (0.5, 75.0),     # 70 + 0.1 * 50
    (0.4, 70.0),     # upper edge of the 40-70 segment
    (0.2, 50.0),     # 40 + 0.1 * 100
    (0.1, 40.0),
    (0.0, 27.5),     # 15 + 0.1 * 125
    (-0.1, 5 + 10),  # 5 + (0.2 * 50)
    (-0.2, 10.0),
    (-0.5, 5.0),     # floor
])
def test_ndmi_segments(ndmi, expected):
    assert ndmi_to_moisture(ndmi) == pytest.approx(expected)


def test_monotonic_within_each_segment():
    segments = [(-1.0, -0.1), (-0.0999, 0.1), (0.1001, 0.4), (0.4001, 1.0)]
    for low, high in segments:
        values = [ndmi_to_moisture(x) for x in np.linspace(low, high, 50)]
        assert all(b >= a for a, b in zip(values, values[1:]))


def test_percentage_always_in_range():
    for ndmi in np.linspace(-1, 1, 41):
        for swir1, swir2 in [(0.05, 0.5), (0.2, 0.2), (0.6, 0.05), (0.3, 0.0)]:
            for lat in (0.0, 45.0, 75.0):
                result = estimate_moisture(
                    {"swir1": swir1, "swir2": swir2},
                    indices_with_ndmi(float(ndmi)),
                    Location(lat=lat, lon=0.0),
                )
                assert 5 <= result.percentage <= 95


def test_swir_refinement_and_latitude():
    indices = indices_with_ndmi(0.2)

    temperate = estimate_moisture(FLAT_SWIR, indices, TEMPERATE)
    tropical = estimate_moisture(FLAT_SWIR, indices, Location(lat=-10.0, lon=0.0))
    polar = estimate_moisture(FLAT_SWIR, indices, Location(lat=70.0, lon=0.0))

    assert temperate.percentage == pytest.approx(45.0)
    assert tropical.percentage == pytest.approx(47.25)
    assert polar.percentage == pytest.approx(42.75)


def test_very_dry_floor():
    result = estimate_moisture({"swir1": 0.30, "swir2": 0.25}, indices_with_ndmi(-0.5), TEMPERATE)

    assert result.percentage == 5
    assert result.level == "very_low"
    assert result.description == MOISTURE_DESCRIPTIONS["very_low"]
    assert result.ndmi_value == -0.5


def test_very_wet_ceiling():
    result = estimate_moisture({"swir1": 0.4, "swir2": 0.2}, indices_with_ndmi(1.0), TEMPERATE)
    assert result.percentage == 95
    assert result.level == "very_high"


def test_zero_swir2_saturates_wet():
    result = estimate_moisture({"swir1": 0.2, "swir2": 0.0}, indices_with_ndmi(0.111), TEMPERATE)
    assert result.percentage == 95
    assert result.level == "very_high"


def test_zero_swir_pair_is_neutral():
    # 0 / 0 keeps the plain 0.9 refinement
    result = estimate_moisture({"swir1": 0.0, "swir2": 0.0}, indices_with_ndmi(0.2), TEMPERATE)
    assert result.percentage == pytest.approx(45.0)


def test_ndmi_value_rounded():
    result = estimate_moisture(FLAT_SWIR, indices_with_ndmi(0.123456), TEMPERATE)
    assert result.ndmi_value == 0.123


def test_classify_thresholds():
    assert classify_moisture(14.99) == "very_low"
    assert classify_moisture(15) == "low"
    assert classify_moisture(30) == "moderate"
    assert classify_moisture(60) == "high"
    assert classify_moisture(80) == "very_high"
