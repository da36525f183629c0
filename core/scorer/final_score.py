#!/usr/bin/env python3
"""
Final Score - fixed-weight blend of the five relevance signals.

finalScore = 0.40 * skill + 0.25 * experience + 0.25 * project
           + 0.10 * semantic - gap_penalty
finalScore = max(0, round_half_up(finalScore))

Components are clamped to [0, 100] before blending; the weights are
fixed and not configurable.
"""

from typing import Dict, Any, Tuple
import logging

from core.utils import clamp_score, round_half_up, SCORE_MAX

logger = logging.getLogger(__name__)

WEIGHT_SKILL_MATCH = 0.40
WEIGHT_EXPERIENCE = 0.25
WEIGHT_PROJECT = 0.25
WEIGHT_SEMANTIC = 0.10


def calculate_final_score(
    skill_match_score: float,
    experience_score: float,
    project_score: float,
    semantic_score: float,
    gap_penalty: float
) -> Tuple[int, Dict[str, Any]]:
    """
    Blend the component scores into one bounded integer score.

    Returns: (final_score, components)
    """
    skill = clamp_score(skill_match_score, "skill_match_score")
    experience = clamp_score(experience_score, "experience_score")
    project = clamp_score(project_score, "project_score")
    semantic = clamp_score(semantic_score, "semantic_score")
    penalty = clamp_score(gap_penalty, "gap_penalty")

    blended = (
        WEIGHT_SKILL_MATCH * skill
        + WEIGHT_EXPERIENCE * experience
        + WEIGHT_PROJECT * project
        + WEIGHT_SEMANTIC * semantic
    )
    raw_score = blended - penalty
    final_score = int(min(SCORE_MAX, max(0, round_half_up(raw_score))))

    components: Dict[str, Any] = {
        "skill_match_score": skill,
        "experience_score": experience,
        "project_score": project,
        "semantic_score": semantic,
        "gap_penalty": penalty,
        "blended": blended,
        "raw_score": raw_score,
        "final_score": final_score,
    }

    logger.debug(
        "Final score %d (skill=%.1f, exp=%.1f, proj=%.1f, sem=%.1f, gap=-%.0f)",
        final_score, skill, experience, project, semantic, penalty
    )

    return final_score, components
