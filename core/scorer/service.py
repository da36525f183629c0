#!/usr/bin/env python3
"""
Ranking Service - combines the five relevance signals per resume.

Takes a job (required skills, minimum experience) and its resumes and
produces one bounded final score per resume plus a total order:
- Skill match (declared skills vs required skills)
- Experience (years vs minimum requirement)
- Project relevance (project technologies vs required skills)
- Semantic similarity (external service, 0 when absent)
- Gap penalty (flat deduction)

Pure and non-blocking: all I/O (extraction, similarity calls,
persistence) happens before and after, in the pipeline.
"""

from typing import Dict, List, Optional, Sequence
import logging

from core.scorer.models import ScoredResume
from core.scorer import coverage, experience, penalties, final_score
from core.scorer.similarity import semantic_score_for

logger = logging.getLogger(__name__)


class RankingService:
    """
    Service for scoring and ranking resumes against one job.

    Expects a job with `required_skills` and `min_experience`, and resumes
    with `resume_id`, `skills`, `candidate_experience`, `projects` and
    `total_gap_months`.
    """

    def score_resume(
        self,
        job,
        resume,
        semantic_score: float = 0.0
    ) -> ScoredResume:
        """Calculate all component scores and the final score for one resume.

        Args:
            job: Job being ranked
            resume: Resume (or a job view reading through to one)
            semantic_score: Already-adapted semantic score (0-100)

        Returns:
            ScoredResume with component scores, skill lists and final score
        """
        skill_match = coverage.calculate_skill_match(job.required_skills, resume.skills)

        experience_score = experience.calculate_experience_score(
            resume.candidate_experience,
            job.min_experience
        )

        gap_penalty = penalties.calculate_gap_penalty(resume.total_gap_months)

        project_relevance = coverage.calculate_project_relevance(job.required_skills, resume.projects)

        final, components = final_score.calculate_final_score(
            skill_match_score=skill_match.skill_match_score,
            experience_score=experience_score,
            project_score=project_relevance.project_score,
            semantic_score=semantic_score,
            gap_penalty=gap_penalty
        )

        logger.debug(f"Resume {resume.resume_id}: final={final} "
                     f"(skills {skill_match.total_matched}/{skill_match.total_required})")

        return ScoredResume(
            resume_id=resume.resume_id,
            final_score=final,
            skill_match_score=skill_match.skill_match_score,
            experience_score=components['experience_score'],
            project_score=project_relevance.project_score,
            semantic_score=components['semantic_score'],
            gap_penalty=gap_penalty,
            matched_skills=skill_match.matched_skills,
            missing_skills=skill_match.missing_skills,
            extra_skills=skill_match.extra_skills,
            relevant_projects=project_relevance.relevant_projects,
            components=components
        )

    def rank(
        self,
        job,
        resumes: Sequence,
        semantic_scores: Optional[Dict[str, float]] = None
    ) -> List[ScoredResume]:
        """Score every resume and sort by final score (highest first).

        The sort is stable: ties keep the input order.

        Args:
            job: Job being ranked
            resumes: Resumes or job views to score
            semantic_scores: resume_id -> semantic score (0-100); missing ids score 0

        Returns:
            List of ScoredResume sorted by final_score descending
        """
        semantic_scores = semantic_scores or {}

        scored = [
            self.score_resume(job, resume, semantic_score_for(semantic_scores, resume.resume_id))
            for resume in resumes
        ]
        scored.sort(key=lambda s: s.final_score, reverse=True)

        if scored:
            logger.info(f"Ranked {len(scored)} resumes, top score {scored[0].final_score}")
        return scored
