#!/usr/bin/env python3
"""
Unit tests for the semantic score adapter.
"""

import unittest

from core.enrichment.schemas import SimilarityResult
from core.scorer.similarity import semantic_score_for, to_semantic_scores


class TestSemanticScores(unittest.TestCase):

    def test_scales_to_100(self):
        result = SimilarityResult.model_validate({"results": [{"id": "a", "score": 0.42}, {"id": "b", "score": 1}]})

        scores = to_semantic_scores(result)

        self.assertAlmostEqual(scores["a"], 42.0)
        self.assertEqual(scores["b"], 100.0)

    def test_missing_id_scores_zero(self):
        scores = to_semantic_scores(SimilarityResult.model_validate({"results": [{"id": "a", "score": 0.5}]}))

        self.assertEqual(semantic_score_for(scores, "missing"), 0.0)

    def test_no_result_is_empty(self):
        self.assertEqual(to_semantic_scores(None), {})
        self.assertEqual(to_semantic_scores(SimilarityResult()), {})

    def test_out_of_range_similarity_is_clamped(self):
        result = SimilarityResult.model_validate({"results": [{"id": "a", "score": 1.7}, {"id": "b", "score": -0.2}]})

        with self.assertLogs('core.utils', level='WARNING'):
            scores = to_semantic_scores(result)

        self.assertEqual(scores, {"a": 100.0, "b": 0.0})

    def test_malformed_item_keeps_rest_of_batch(self):
        with self.assertLogs('core.enrichment.schemas', level='WARNING'):
            result = SimilarityResult.model_validate({"results": [{"id": "a", "score": 0.9}, {"score": 0.5}]})

        scores = to_semantic_scores(result)

        self.assertAlmostEqual(scores["a"], 90.0)
        self.assertEqual(semantic_score_for(scores, "b"), 0.0)

    def test_null_score_counts_as_zero(self):
        result = SimilarityResult.model_validate({"results": [{"id": "a", "score": None}]})

        self.assertEqual(to_semantic_scores(result), {"a": 0.0})


if __name__ == '__main__':
    unittest.main()
