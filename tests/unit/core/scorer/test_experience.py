#!/usr/bin/env python3
"""
Unit tests for the experience score.
"""

import unittest

from core.scorer.experience import DEFAULT_MIN_EXPERIENCE_YEARS, calculate_experience_score


class TestExperienceScore(unittest.TestCase):

    def test_reference_points(self):
        self.assertEqual(calculate_experience_score(0, 4), 0.0)
        self.assertEqual(calculate_experience_score(4, 4), 100.0)
        self.assertEqual(calculate_experience_score(10, 4), 100.0)

    def test_half_of_requirement(self):
        self.assertEqual(calculate_experience_score(2, 4), 50.0)

    def test_missing_requirement_falls_back(self):
        self.assertEqual(DEFAULT_MIN_EXPERIENCE_YEARS, 4.0)
        self.assertEqual(calculate_experience_score(2, None), 50.0)
        self.assertEqual(calculate_experience_score(2, 0), 50.0)

    def test_requirement_below_one_year_uses_one(self):
        self.assertEqual(calculate_experience_score(0.5, 0.5), 50.0)

    def test_monotonic_in_years(self):
        scores = [calculate_experience_score(years, 6) for years in range(0, 10)]
        self.assertEqual(scores, sorted(scores))
        self.assertTrue(all(0.0 <= s <= 100.0 for s in scores))

    def test_negative_years_corrected_to_zero(self):
        with self.assertLogs('core.utils', level='WARNING'):
            self.assertEqual(calculate_experience_score(-3, 4), 0.0)


if __name__ == '__main__':
    unittest.main()
