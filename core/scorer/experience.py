#!/usr/bin/env python3
"""
Experience Score - resume years vs the job's minimum requirement.
"""

from typing import Optional
import logging

from core.utils import non_negative

logger = logging.getLogger(__name__)

# Used when the job has no minimum experience recorded
DEFAULT_MIN_EXPERIENCE_YEARS = 4.0


def calculate_experience_score(
    resume_years: Optional[float],
    job_min_years: Optional[float]
) -> float:
    """
    Formula: min(resume_years / max(1, job_min_years), 1) * 100

    Experience beyond the requirement earns no bonus. A missing (or zero)
    requirement falls back to DEFAULT_MIN_EXPERIENCE_YEARS.
    """
    years = non_negative(resume_years, "candidate_experience")
    required = non_negative(job_min_years, "min_experience")
    if required <= 0:
        required = DEFAULT_MIN_EXPERIENCE_YEARS

    return min(years / max(1.0, required), 1.0) * 100.0
