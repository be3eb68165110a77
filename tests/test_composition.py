import itertools

import pytest

from soil_mon.analysis.composition import (
    estimate_composition,
    estimate_ph,
    classify_soil_type,
    assess_fertility,
    SOIL_TYPES,
)
from soil_mon.data.scenes import Location

CENTRAL_VALLEY = Location(lat=36.7, lon=-119.8)
SCENARIO_A = {"red": 0.12, "nir": 0.25, "blue": 0.08, "swir1": 0.20, "swir2": 0.15}


def test_reference_composition():
    comp = estimate_composition(SCENARIO_A, CENTRAL_VALLEY)

    # SWIR ratio = 0.20 / 0.15 = 1.333
    assert comp.clay == pytest.approx(53.333, abs=1e-3)
    assert comp.sand == pytest.approx(20.0, abs=1e-6)
    assert comp.silt == pytest.approx(26.667, abs=1e-3)
    # (1 - (0.12 + 0.20) / 2) * 8
    assert comp.organic_matter == pytest.approx(6.72)
    # (0.12 / 0.08 - 1) * 15
    assert comp.iron_oxide == pytest.approx(7.5)
    # 7.0 + (0.08 / 0.32) * 2
    assert comp.ph == 7.5
    assert comp.soil_type == "Clay"
    assert comp.description == SOIL_TYPES["Clay"]
    # 50 + 6.72*5 + (20 - 0.75*10), no texture bonus (clay >= 50)
    assert comp.fertility.score == 96
    assert comp.fertility.level == "high"


def test_fractions_in_range_and_silt_is_remainder():
    grid = [0.0, 0.02, 0.1, 0.25, 0.5, 1.0]
    for swir1, swir2, red, blue in itertools.product(grid, repeat=4):
        bands = {"swir1": swir1, "swir2": swir2, "red": red, "blue": blue}
        comp = estimate_composition(bands, CENTRAL_VALLEY)
        for value in (comp.clay, comp.sand, comp.silt):
            assert 0 <= value <= 100
        assert comp.silt == max(0, 100 - comp.clay - comp.sand)
        assert 0 <= comp.organic_matter <= 15
        assert 0 <= comp.iron_oxide <= 10
        assert 4.0 <= comp.ph <= 9.0
        assert 0 <= comp.fertility.score <= 100
        assert comp.soil_type in SOIL_TYPES


def test_high_swir_ratio_saturates_clay():
    comp = estimate_composition({"swir1": 0.3, "swir2": 0.1, "red": 0.1, "blue": 0.1}, CENTRAL_VALLEY)
    assert comp.clay == 100
    assert comp.sand == 0
    assert comp.silt == 0


def test_zero_band_saturates_dependent_values():
    # SWIR1 / 0 and Red / 0 behave like an unbounded ratio
    comp = estimate_composition({"swir1": 0.2, "swir2": 0.0, "red": 0.1, "blue": 0.0}, CENTRAL_VALLEY)
    assert comp.clay == 100
    assert comp.sand == 0
    assert comp.silt == 0
    assert comp.iron_oxide == 10
    assert comp.soil_type == "Clay"


def test_all_zero_bands_use_neutral_ratio():
    comp = estimate_composition({"swir1": 0.0, "swir2": 0.0, "red": 0.0, "blue": 0.0}, CENTRAL_VALLEY)
    assert comp.clay == 40
    assert comp.sand == 30
    assert comp.silt == 30
    assert comp.iron_oxide == 0
    assert comp.soil_type == "Clay Loam"


@pytest.mark.parametrize("clay, sand, silt, expected", [
    (45, 10, 45, "Clay"),
    (10, 75, 15, "Sand"),
    (20, 30, 50, "Silt"),
    (30, 30, 40, "Clay Loam"),
    (10, 55, 35, "Sandy Loam"),
    (20, 40, 40, "Loam"),
])
def test_classify_soil_type(clay, sand, silt, expected):
    assert classify_soil_type(clay, sand, silt) == expected


def test_ph_latitude_adjustments():
    bands = {"swir1": 0.2, "red": 0.2}
    assert estimate_ph(bands, Location(lat=40.0, lon=0.0)) == 7.0
    assert estimate_ph(bands, Location(lat=55.0, lon=0.0)) == 6.5
    assert estimate_ph(bands, Location(lat=-10.0, lon=0.0)) == 7.3
    # Southern high latitudes get no acidity shift
    assert estimate_ph(bands, Location(lat=-55.0, lon=0.0)) == 7.0


def test_ph_clamped():
    # ND = +1 -> 9.0, +0.3 tropical -> clamped to 9.0
    assert estimate_ph({"swir1": 0.5, "red": 0.0}, Location(lat=0.0, lon=0.0)) == 9.0
    # ND = -1 -> 5.0, -0.5 northern
    assert estimate_ph({"swir1": 0.0, "red": 0.5}, Location(lat=60.0, lon=0.0)) == 4.5


def test_fertility_levels():
    best = assess_fertility(organic_matter=2, ph=6.75, clay=30, sand=40)
    assert best.score == 95
    assert best.level == "high"

    assert assess_fertility(organic_matter=1, ph=6.0, clay=10, sand=10).level == "medium"

    poor = assess_fertility(organic_matter=0, ph=4.25, clay=10, sand=80)
    assert poor.score == 45
    assert poor.level == "low"


def test_fertility_clamped():
    assert assess_fertility(organic_matter=15, ph=6.75, clay=30, sand=40).score == 100
    assert assess_fertility(organic_matter=0, ph=14.0, clay=0, sand=0).score == 0


def test_ph_ties_round_up():
    # ND = 0.375 -> 7.75, -0.5 northern -> 7.25 exactly
    assert estimate_ph({"swir1": 0.6875, "red": 0.3125}, Location(lat=55.0, lon=0.0)) == 7.3


def test_fertility_ties_round_up():
    # 50 + 2.5 + 20, no texture bonus
    assert assess_fertility(organic_matter=0.5, ph=6.75, clay=10, sand=10).score == 73
