from __future__ import annotations

import unittest

from luvatrix_grid.errors import GridConfigurationError
from luvatrix_grid.scales import (
    NICE_STEP_BASES,
    contains,
    format_locale_number,
    linear_ratio,
    log_ratio,
    nice_step,
    order_of_magnitude,
    step_decimals,
)


class ScaleMathTests(unittest.TestCase):
    def test_order_of_magnitude(self) -> None:
        self.assertAlmostEqual(order_of_magnitude(0.037), 0.01)
        self.assertEqual(order_of_magnitude(10.0), 10.0)
        self.assertEqual(order_of_magnitude(999.0), 100.0)
        self.assertEqual(order_of_magnitude(1000.0), 1000.0)

    def test_order_of_magnitude_rejects_non_positive(self) -> None:
        with self.assertRaises(ValueError):
            order_of_magnitude(0.0)

    def test_nice_step_picks_closest_candidate(self) -> None:
        self.assertEqual(nice_step(10.0), 10.0)
        self.assertAlmostEqual(nice_step(0.037), 0.025)
        self.assertEqual(nice_step(2.2), 2.0)
        self.assertEqual(nice_step(8.0), 10.0)

    def test_nice_step_ties_resolve_to_first_candidate(self) -> None:
        self.assertEqual(nice_step(1.5), 1.0)
        self.assertEqual(nice_step(7.5), 5.0)

    def test_nice_step_is_closest_scaled_candidate(self) -> None:
        for raw in (0.0013, 0.07, 0.31, 3.3, 17.0, 44.0, 123.0, 6789.0, 2.1e6):
            step = nice_step(raw)
            order = order_of_magnitude(raw)
            candidates = [b * order for b in NICE_STEP_BASES]
            self.assertTrue(any(abs(step - c) <= 1e-9 * c for c in candidates), raw)
            best = min(abs(raw - c) for c in candidates)
            self.assertAlmostEqual(abs(raw - step), best, delta=1e-9 * raw)

    def test_nice_step_rejects_non_positive(self) -> None:
        with self.assertRaises(ValueError):
            nice_step(0.0)
        with self.assertRaises(ValueError):
            nice_step(-3.0)

    def test_step_decimals_scale_with_step(self) -> None:
        self.assertEqual(step_decimals(10.0), 2)
        self.assertEqual(step_decimals(2.5), 3)
        self.assertEqual(step_decimals(0.025), 5)
        self.assertEqual(step_decimals(2e-13), 16)
        self.assertEqual(step_decimals(5e6), 0)
        with self.assertRaises(ValueError):
            step_decimals(0.0)

    def test_linear_ratio_and_contains(self) -> None:
        self.assertAlmostEqual(linear_ratio(25.0, 0.0, 100.0), 0.25)
        self.assertTrue(contains(0.0, 0.0, 1.0))
        self.assertTrue(contains(1.0, 0.0, 1.0))
        self.assertFalse(contains(1.0001, 0.0, 1.0))

    def test_log_ratio(self) -> None:
        self.assertAlmostEqual(log_ratio(10.0, 1.0, 100.0), 0.5)
        self.assertAlmostEqual(log_ratio(1.0, 1.0, 100.0), 0.0)
        self.assertAlmostEqual(log_ratio(-10.0, -100.0, -1.0), 0.5)

    def test_log_ratio_rejects_ranges_touching_zero(self) -> None:
        for low, high in ((0.0, 10.0), (-5.0, 5.0), (-5.0, 0.0), (0.0, 0.0)):
            with self.assertRaises(GridConfigurationError):
                log_ratio(1.0, low, high)

    def test_locale_number_formatting(self) -> None:
        self.assertEqual(format_locale_number(100), "100")
        self.assertEqual(format_locale_number(1234.5), "1,234.5")
        self.assertEqual(format_locale_number(0.1), "0.1")
        self.assertEqual(format_locale_number(2.5), "2.5")
        self.assertEqual(format_locale_number(1 / 3), "0.333")
        self.assertEqual(format_locale_number(-0.0), "0")
        self.assertEqual(format_locale_number(-25000), "-25,000")


if __name__ == "__main__":
    unittest.main()
