#!/usr/bin/env python3
"""
Semantic Score Adapter - similarity service results on the 0-100 scale.

A resume missing from the result (call failure, timeout, excluded
upstream) gets a zero contribution; absence never raises.
"""

from typing import Dict, Optional
import logging

from core.enrichment.schemas import SimilarityResult
from core.utils import clamp_score

logger = logging.getLogger(__name__)


def to_semantic_scores(result: Optional[SimilarityResult]) -> Dict[str, float]:
    """
    Convert a batch similarity result into resume_id -> score (0-100).

    Formula: semantic_score = similarity * 100, clamped to [0, 100].
    Later duplicates of an id overwrite earlier ones.
    """
    if result is None:
        return {}

    scores: Dict[str, float] = {}
    for item in result.results:
        if not item.id:
            continue
        scores[str(item.id)] = clamp_score(item.score * 100.0, f"semantic score for {item.id}")
    return scores


def semantic_score_for(scores: Dict[str, float], resume_id: str) -> float:
    """Semantic score of one resume, 0 when the service did not score it."""
    score = scores.get(resume_id)
    if score is None:
        logger.debug(f"No semantic score for {resume_id}; using 0")
        return 0.0
    return score
