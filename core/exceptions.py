#!/usr/bin/env python3
"""
Exceptions raised by the ranking core.
"""


class RankingError(Exception):
    """Base exception for ranking workflow errors."""
    pass


class JobNotFoundError(RankingError):
    """Raised when a job workspace is not registered."""
    pass


class JobNotSavedError(RankingError):
    """Raised when an operation needs a persisted job id and the job has none."""
    pass


class NoRequiredSkillsError(RankingError):
    """Raised when a job has no required skills to score resumes against."""
    pass


class ResumeNotFoundError(RankingError):
    """Raised when a resume is not tracked in the pool or in a job's views."""
    pass


class InvalidTransitionError(RankingError):
    """Raised on an illegal job status transition."""
    pass


class UpstreamServiceError(RankingError):
    """Raised when an extraction or similarity call fails after retries."""
    pass
