#!/usr/bin/env python3
"""
Scoring Module - rule-based resume ranking.

Public API:
- RankingService: Scores and orders resumes for one job
- ScoredResume: Dataclass for scored results

Split into focused, single-responsibility modules:

- skills.py: Skill normalization and fuzzy containment matching
- coverage.py: Skill match and project relevance
- experience.py: Experience score against the job minimum
- penalties.py: Employment gap penalty
- similarity.py: Semantic similarity adaptation
- final_score.py: Weighted combination and bounding
- persistence.py: Match store (save/load scored matches)
- service.py: RankingService orchestrator
"""

from core.scorer.models import ScoredResume, SkillMatchResult, ProjectRelevanceResult, RelevantProject
from core.scorer.service import RankingService

__all__ = ['RankingService', 'ScoredResume', 'SkillMatchResult', 'ProjectRelevanceResult', 'RelevantProject']
