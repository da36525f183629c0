#!/usr/bin/env python3
"""
Unit tests for the weighted final score.
"""

import itertools
import unittest

from core.scorer.final_score import calculate_final_score


class TestFinalScore(unittest.TestCase):

    def test_weights(self):
        final, components = calculate_final_score(100, 50, 20, 80, 0)

        # 40 + 12.5 + 5 + 8
        self.assertEqual(components["raw_score"], 65.5)
        self.assertEqual(final, 66)

    def test_gap_penalty_is_subtracted(self):
        final, _ = calculate_final_score(100, 100, 100, 100, 20)
        self.assertEqual(final, 80)

    def test_floored_at_zero(self):
        final, _ = calculate_final_score(0, 10, 0, 0, 20)
        self.assertEqual(final, 0)

    def test_out_of_range_components_are_clamped(self):
        with self.assertLogs('core.utils', level='WARNING') as logs:
            final, components = calculate_final_score(250, 100, 100, 1000, 0)

        self.assertEqual(final, 100)
        self.assertEqual(components["skill_match_score"], 100.0)
        self.assertEqual(components["semantic_score"], 100.0)
        self.assertTrue(any("skill_match_score" in line for line in logs.output))

    def test_always_within_bounds(self):
        values = [-50, 0, 33.3, 100, 180]
        for skill, exp, proj, sem, gap in itertools.product(values, values, values, values, [0, 10, 20]):
            final, _ = calculate_final_score(skill, exp, proj, sem, gap)
            self.assertGreaterEqual(final, 0)
            self.assertLessEqual(final, 100)

    def test_halves_round_up(self):
        # 40 + 25 + 25 + 0.5 - 10 = 80.5
        final, _ = calculate_final_score(100, 100, 100, 5, 10)
        self.assertEqual(final, 81)

    def test_none_components_count_as_zero(self):
        final, _ = calculate_final_score(None, None, None, None, None)
        self.assertEqual(final, 0)


if __name__ == '__main__':
    unittest.main()
