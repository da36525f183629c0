#!/usr/bin/env python3
"""
Unit tests for skill normalization and tolerant matching.
"""

import unittest

from core.scorer.skills import dedupe_skills, matches_any, normalize_skill, skills_match


class TestSkillNormalization(unittest.TestCase):

    def test_normalize_trims_and_casefolds(self):
        self.assertEqual(normalize_skill("  PyThon "), "python")
        self.assertEqual(normalize_skill(None), "")

    def test_exact_match_ignores_case(self):
        self.assertTrue(skills_match("SQL", "sql"))

    def test_containment_in_either_direction(self):
        self.assertTrue(skills_match("React", "React.js"))
        self.assertTrue(skills_match("react.js", "REACT"))

    def test_unrelated_skills_do_not_match(self):
        self.assertFalse(skills_match("Java", "Python"))

    def test_empty_token_matches_nothing(self):
        self.assertFalse(skills_match("", "Python"))
        self.assertFalse(skills_match("Python", "   "))
        self.assertFalse(skills_match(None, None))

    def test_matches_any(self):
        self.assertTrue(matches_any("aws", ["Docker", "AWS Lambda"]))
        self.assertFalse(matches_any("aws", []))

    def test_dedupe_keeps_first_spelling_in_order(self):
        self.assertEqual(
            dedupe_skills(["Python", "python ", "", "SQL", "PYTHON", None]),
            ["Python", "SQL"]
        )


if __name__ == '__main__':
    unittest.main()
