#!/usr/bin/env python3
"""
Coverage Calculations - required-skill coverage metrics.

- Skill match: required skills found in the resume's declared skill list
- Project relevance: required skills corroborated by technologies used in
  the resume's projects

Both use the required-skill list as denominator and score 0 when it is empty.
"""

from typing import List, Sequence
import logging

from core.scorer.models import SkillMatchResult, ProjectRelevanceResult, RelevantProject
from core.scorer.skills import dedupe_skills, matches_any, normalize_skill

logger = logging.getLogger(__name__)


def calculate_skill_match(
    required_skills: Sequence[str],
    resume_skills: Sequence[str]
) -> SkillMatchResult:
    """
    Calculate required-skill coverage for one resume.

    Formula: skill_match_score = 100 * |matched| / |required|

    Args:
        required_skills: Job's required skills (may contain duplicates)
        resume_skills: Resume's declared skills (may contain duplicates)

    Returns:
        SkillMatchResult with matched/missing lists in required-list order
    """
    required = dedupe_skills(required_skills)
    resume = dedupe_skills(resume_skills)

    if not required:
        return SkillMatchResult(extra_skills=resume)

    matched = [skill for skill in required if matches_any(skill, resume)]
    missing = [skill for skill in required if not matches_any(skill, resume)]
    extra = [skill for skill in resume if not matches_any(skill, required)]

    score = 100.0 * len(matched) / len(required)

    logger.debug(f"Skill match {len(matched)}/{len(required)} = {score:.1f}")

    return SkillMatchResult(
        skill_match_score=score,
        matched_skills=matched,
        missing_skills=missing,
        extra_skills=extra,
        total_required=len(required),
        total_matched=len(matched)
    )


def calculate_project_relevance(
    required_skills: Sequence[str],
    projects: Sequence
) -> ProjectRelevanceResult:
    """
    Calculate how many required skills are backed by project work.

    All technologies across all projects form one pool; a required skill
    is corroborated if any technology in the pool matches it.

    Formula: project_score = 100 * |corroborated| / |required|

    Args:
        required_skills: Job's required skills
        projects: Resume projects (objects with name and technologies_used)

    Returns:
        ProjectRelevanceResult with the score and the relevant projects
    """
    required = dedupe_skills(required_skills)
    if not required:
        return ProjectRelevanceResult()

    technologies: List[str] = []
    seen = set()
    for project in projects or []:
        for tech in getattr(project, 'technologies_used', None) or []:
            key = normalize_skill(tech)
            if key and key not in seen:
                seen.add(key)
                technologies.append(tech)

    corroborated = [skill for skill in required if matches_any(skill, technologies)]
    score = 100.0 * len(corroborated) / len(required)

    relevant_projects = []
    for project in projects or []:
        name = (getattr(project, 'name', '') or '').strip()
        all_tech = list(getattr(project, 'technologies_used', None) or [])
        matching = [tech for tech in all_tech if matches_any(tech, required)]
        if name and matching:
            relevant_projects.append(RelevantProject(
                name=name,
                all_technologies=all_tech,
                matching_technologies=matching
            ))

    logger.debug(f"Project corroboration {len(corroborated)}/{len(required)} = {score:.1f}")

    return ProjectRelevanceResult(
        project_score=score,
        corroborated_skills=corroborated,
        relevant_projects=relevant_projects
    )
