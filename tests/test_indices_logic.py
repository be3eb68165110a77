import itertools
import unittest

import numpy as np

from soil_mon.processing.indices import (
    compute_indices,
    clamp,
    safe_div,
    safe_ratio,
    round_half_up,
    normalized_difference,
    SpectralIndices,
)


class TestIndices(unittest.TestCase):
    def test_compute_indices(self):
        bands = {
            "red": 0.12,
            "nir": 0.25,
            "blue": 0.08,
            "swir1": 0.20,
            "swir2": 0.15,
        }

        idx = compute_indices(bands)

        # NDVI = (0.25 - 0.12) / (0.25 + 0.12) = 0.13 / 0.37
        self.assertAlmostEqual(idx.ndvi, 0.13 / 0.37, places=6)

        # EVI
        # num = 2.5 * 0.13 = 0.325
        # den = 0.25 + 6*0.12 - 7.5*0.08 + 1 = 1.37
        self.assertAlmostEqual(idx.evi, 0.325 / 1.37, places=6)

        # NDMI = (0.25 - 0.20) / (0.25 + 0.20) = 0.111
        self.assertAlmostEqual(idx.ndmi, 0.05 / 0.45, places=6)

        # BSI = ((0.20 + 0.12) - (0.25 + 0.08)) / 0.65
        self.assertAlmostEqual(idx.bsi, -0.01 / 0.65, places=6)

        # SAVI = (0.13 / (0.37 + 0.5)) * 1.5
        self.assertAlmostEqual(idx.savi, 0.13 / 0.87 * 1.5, places=6)

    def test_zero_denominator_yields_zero(self):
        """All-zero reflectance makes every normalized difference 0, not NaN."""
        bands = {"red": 0.0, "nir": 0.0, "blue": 0.0, "swir1": 0.0, "swir2": 0.0}
        idx = compute_indices(bands)

        self.assertEqual(idx.ndvi, 0.0)
        self.assertEqual(idx.ndmi, 0.0)
        self.assertEqual(idx.bsi, 0.0)
        # SAVI denominator still has L, so 0 / 0.5 = 0
        self.assertEqual(idx.savi, 0.0)
        for value in idx:
            self.assertFalse(np.isnan(value))

    def test_missing_bands_default_to_zero(self):
        """Only NDVI and SAVI can be computed from Red + NIR."""
        idx = compute_indices({"red": 0.1, "nir": 0.4})

        self.assertAlmostEqual(idx.ndvi, 0.6)
        self.assertEqual(idx.evi, 0.0)
        self.assertEqual(idx.ndmi, 0.0)
        self.assertEqual(idx.bsi, 0.0)
        self.assertGreater(idx.savi, 0.0)

    def test_evi_is_clamped(self):
        """A vanishing EVI denominator would blow up; the result stays in [-1, 1]."""
        # 0.3 + 6*0.0 - 7.5*0.17 + 1 = 0.025 -> raw EVI = 30
        idx = compute_indices({"red": 0.0, "nir": 0.3, "blue": 0.17, "swir1": 0.1})
        self.assertEqual(idx.evi, 1.0)

    def test_returns_named_tuple(self):
        idx = compute_indices({"red": 0.1, "nir": 0.4, "blue": 0.05, "swir1": 0.15})
        self.assertIsInstance(idx, SpectralIndices)
        self.assertEqual(idx._fields, ("ndvi", "evi", "ndmi", "bsi", "savi"))


def test_indices_always_within_unit_range():
    """Sweep a reflectance grid; every index must stay in [-1, 1]."""
    grid = [0.0, 0.01, 0.1, 0.3, 0.6, 1.0]
    for red, nir, blue, swir1 in itertools.product(grid, repeat=4):
        idx = compute_indices({"red": red, "nir": nir, "blue": blue, "swir1": swir1, "swir2": 0.2})
        for value in idx:
            assert -1.0 <= value <= 1.0
            assert np.isfinite(value)


def test_clamp_is_idempotent():
    for value in [-5.0, -1.0, -0.3, 0.0, 0.7, 1.0, 42.0]:
        once = clamp(value, -1, 1)
        assert clamp(once, -1, 1) == once
    assert clamp(float("nan"), 5, 95) == 5


def test_safe_helpers():
    assert np.isnan(safe_div(1.0, 0.0))
    assert safe_div(1.0, 4.0) == 0.25
    assert safe_ratio(0.2, 0.0) == float("inf")
    assert safe_ratio(0.0, 0.0) == 1.0
    assert safe_ratio(None, 0.1, default=2.0) == 2.0
    assert abs(safe_ratio(0.3, 0.15) - 2.0) < 1e-12
    assert normalized_difference(0.0, 0.0) == 0.0
    assert normalized_difference(None, 0.3) == 0.0


def test_round_half_up():
    assert round_half_up(7.05, 1) == 7.1
    assert round_half_up(7.25, 1) == 7.3
    assert round_half_up(72.5) == 73
    assert round_half_up(0.123456, 3) == 0.123
    assert round_half_up(-2.26, 1) == -2.3
    assert round_half_up(float("inf"), 2) == float("inf")


if __name__ == '__main__':
    unittest.main()
