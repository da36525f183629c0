#!/usr/bin/env python3
"""
Persistence Operations - Saving and loading scored matches.

Converts job views into MatchRecord rows and back, and exposes them
through the MatchStore interface. SqlMatchStore is the SQLAlchemy
implementation; each call runs in its own unit of work.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
import logging

from sqlalchemy.orm import sessionmaker

from core.association.models import JobResumeView, MatchRecord, ReviewStatus
from database.models import MatchResult
from database.uow import match_uow

logger = logging.getLogger(__name__)


def _to_float(value):
    """Convert value to native Python float for database compatibility."""
    if value is None:
        return 0.0
    return float(value)


class MatchStore(ABC):
    """Persistent store of scored (job, resume) matches."""

    @abstractmethod
    def save(self, job_id: str, records: Sequence[MatchRecord]) -> int:
        """Upsert records for a job. Returns the number saved."""

    @abstractmethod
    def load(self, job_id: str, limit: Optional[int] = None) -> List[MatchRecord]:
        """Saved matches for a job, highest score first."""

    @abstractmethod
    def update_status(self, job_id: str, resume_id: str, status: str) -> bool:
        """Persist a review decision."""

    @abstractmethod
    def delete_resume(self, resume_id: str) -> int:
        """Delete a resume's matches across all jobs."""

    @abstractmethod
    def delete_job(self, job_id: str) -> int:
        """Delete every match of a job."""


def view_to_match_record(job_id: str, view: JobResumeView) -> MatchRecord:
    """Snapshot a job view's scored fields (plus denormalized resume fields)."""
    status = None if view.review_status == ReviewStatus.NONE else view.review_status.value
    return MatchRecord(
        job_id=job_id,
        resume_id=view.resume_id,
        match_score=_to_float(view.match_score),
        skill_match_score=_to_float(view.skill_match_score),
        experience_score=_to_float(view.experience_score),
        project_score=_to_float(view.project_score),
        semantic_score=_to_float(view.semantic_score),
        gap_penalty=_to_float(view.gap_penalty),
        gap_months=int(view.total_gap_months or 0),
        candidate_name=view.candidate_name,
        resume_name=view.name,
        candidate_experience=_to_float(view.candidate_experience),
        matched_skills=list(view.matched_skills),
        missing_skills=list(view.missing_skills),
        relevant_projects=[p.to_dict() for p in view.relevant_projects],
        status=status,
        view_link=view.resume.view_link
    )


def _record_to_row(record: MatchRecord) -> Dict[str, Any]:
    return {
        'resume_id': record.resume_id,
        'match_score': _to_float(record.match_score),
        'skill_match_score': _to_float(record.skill_match_score),
        'experience_score': _to_float(record.experience_score),
        'project_score': _to_float(record.project_score),
        'semantic_score': _to_float(record.semantic_score),
        'gap_penalty': _to_float(record.gap_penalty),
        'gap_months': int(record.gap_months or 0),
        'candidate_name': record.candidate_name,
        'resume_name': record.resume_name,
        'candidate_experience': _to_float(record.candidate_experience),
        'matched_skills': list(record.matched_skills or []),
        'missing_skills': list(record.missing_skills or []),
        'relevant_projects': list(record.relevant_projects or []),
        'status': record.status,
        'view_link': record.view_link,
    }


def _orm_to_record(match: MatchResult) -> MatchRecord:
    return MatchRecord(
        job_id=match.job_id,
        resume_id=match.resume_id,
        match_score=_to_float(match.match_score),
        skill_match_score=_to_float(match.skill_match_score),
        experience_score=_to_float(match.experience_score),
        project_score=_to_float(match.project_score),
        semantic_score=_to_float(match.semantic_score),
        gap_penalty=_to_float(match.gap_penalty),
        gap_months=match.gap_months or 0,
        candidate_name=match.candidate_name,
        resume_name=match.resume_name,
        candidate_experience=_to_float(match.candidate_experience),
        matched_skills=list(match.matched_skills or []),
        missing_skills=list(match.missing_skills or []),
        relevant_projects=list(match.relevant_projects or []),
        status=match.status,
        view_link=match.view_link
    )


class SqlMatchStore(MatchStore):
    """MatchStore backed by the match_result table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self.session_factory = session_factory

    def save(self, job_id: str, records: Sequence[MatchRecord]) -> int:
        if not records:
            return 0
        with match_uow(self.session_factory) as repo:
            return repo.upsert_matches(job_id, [_record_to_row(r) for r in records])

    def load(self, job_id: str, limit: Optional[int] = None) -> List[MatchRecord]:
        with match_uow(self.session_factory) as repo:
            records = [_orm_to_record(m) for m in repo.get_matches_for_job(job_id, limit=limit)]
        logger.debug(f"Loaded {len(records)} saved matches for job {job_id}")
        return records

    def update_status(self, job_id: str, resume_id: str, status: str) -> bool:
        with match_uow(self.session_factory) as repo:
            return repo.update_status(job_id, resume_id, status)

    def delete_resume(self, resume_id: str) -> int:
        with match_uow(self.session_factory) as repo:
            return repo.delete_matches_for_resume(resume_id)

    def delete_job(self, job_id: str) -> int:
        with match_uow(self.session_factory) as repo:
            return repo.delete_matches_for_job(job_id)
