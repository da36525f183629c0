#!/usr/bin/env python3
"""
Association Module - global resume pool and per-job views.

Public API:
- ResumeJobStore: Pool plus per-(job, resume) view sets
- ResumeRecord, JobDescription, JobResumeView, MatchRecord: Data structures
- JobStatus, ReviewStatus: Enums
"""

from core.association.models import (
    IN_FLIGHT_STATUSES,
    JobDescription,
    JobResumeView,
    JobStatus,
    MatchRecord,
    ResumeRecord,
    ReviewStatus,
)
from core.association.store import ResumeJobStore

__all__ = [
    'ResumeJobStore',
    'ResumeRecord',
    'JobDescription',
    'JobResumeView',
    'MatchRecord',
    'JobStatus',
    'ReviewStatus',
    'IN_FLIGHT_STATUSES',
]
