#!/usr/bin/env python3
"""
Association Models - resumes, job workspaces and their per-job views.

- ResumeRecord: global, one per uploaded document, shared by every job
- JobDescription: one recruiting workspace with its ranking status
- JobResumeView: per-(job, resume) scores and review status; reads the
  shared resume fields through to the pooled ResumeRecord
- MatchRecord: persisted form of a view's scored fields
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional
import logging
import uuid

from core.enrichment.schemas import ParsedProject
from core.exceptions import InvalidTransitionError
from core.scorer.models import RelevantProject
from core.utils import resume_identity

logger = logging.getLogger(__name__)


class ReviewStatus(str, Enum):
    NONE = "none"
    ACCEPTED = "accepted"
    REVIEW = "review"
    REJECTED = "rejected"

    @classmethod
    def parse(cls, value: Any) -> "ReviewStatus":
        """Lenient parse for persisted values; unknown or empty -> NONE."""
        if isinstance(value, ReviewStatus):
            return value
        if not value:
            return cls.NONE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            logger.warning(f"Unknown review status {value!r}; treating as none")
            return cls.NONE


class JobStatus(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    EXTRACTED = "extracted"
    MATCHING = "matching"
    RANKING = "ranking"
    RANKED = "ranked"
    ERROR = "error"


IN_FLIGHT_STATUSES = frozenset({JobStatus.EXTRACTING, JobStatus.MATCHING, JobStatus.RANKING})

# Allowed transitions. Any in-flight state may fail into ERROR; RANKED is
# also reachable from rest states when persisted matches are loaded.
_TRANSITIONS: Dict[JobStatus, frozenset] = {
    JobStatus.IDLE: frozenset({JobStatus.EXTRACTING, JobStatus.MATCHING, JobStatus.RANKED}),
    JobStatus.EXTRACTING: frozenset({JobStatus.EXTRACTED, JobStatus.ERROR}),
    JobStatus.EXTRACTED: frozenset({JobStatus.EXTRACTING, JobStatus.MATCHING, JobStatus.RANKED}),
    JobStatus.MATCHING: frozenset({JobStatus.RANKING, JobStatus.ERROR}),
    JobStatus.RANKING: frozenset({JobStatus.RANKED, JobStatus.ERROR}),
    JobStatus.RANKED: frozenset({JobStatus.EXTRACTING, JobStatus.MATCHING, JobStatus.RANKED}),
    JobStatus.ERROR: frozenset({JobStatus.EXTRACTING, JobStatus.MATCHING, JobStatus.RANKED}),
}


@dataclass
class ResumeRecord:
    """Global resume. Text, skills and experience are never changed per job."""
    name: str
    file_id: Optional[str] = None
    text: str = ""
    candidate_name: Optional[str] = None
    candidate_experience: float = 0.0
    skills: List[str] = field(default_factory=list)
    projects: List[ParsedProject] = field(default_factory=list)
    total_gap_months: int = 0
    view_link: Optional[str] = None

    @property
    def resume_id(self) -> str:
        return resume_identity(self.file_id, self.name)

    @property
    def needs_extraction(self) -> bool:
        return not self.skills or not self.candidate_name


@dataclass
class JobDescription:
    """
    One recruiting workspace.

    `key` identifies the workspace in memory from creation; `job_id` is
    assigned by the persistence layer on first save and is None until then.
    """
    title: str = ""
    text: str = ""
    key: str = field(default_factory=lambda: uuid.uuid4().hex)
    job_id: Optional[str] = None
    required_skills: List[str] = field(default_factory=list)
    preferred_skills: List[str] = field(default_factory=list)
    min_experience: Optional[float] = None
    suggested_keywords: List[str] = field(default_factory=list)
    status: JobStatus = JobStatus.IDLE

    def transition_to(self, new_status: JobStatus) -> None:
        allowed = _TRANSITIONS.get(self.status, frozenset())
        if new_status not in allowed:
            raise InvalidTransitionError(
                f"Job {self.key}: cannot move from {self.status.value} to {new_status.value}"
            )
        logger.info(f"Job {self.title or self.key}: {self.status.value} -> {new_status.value}")
        self.status = new_status

    def fail(self, reason: str) -> None:
        """Move to ERROR from any state."""
        logger.error(f"Job {self.title or self.key} failed in {self.status.value}: {reason}")
        self.status = JobStatus.ERROR

    def add_suggested_keyword(self, keyword: str) -> bool:
        """Append a keyword unless already present (case-insensitive)."""
        if not keyword or not keyword.strip():
            return False
        keyword = keyword.strip()
        if any(k.lower() == keyword.lower() for k in self.suggested_keywords):
            return False
        self.suggested_keywords.append(keyword)
        return True


@dataclass
class JobResumeView:
    """
    A job's view of one resume.

    Shared fields (text, skills, experience, projects, gaps) are read
    through to `resume`; only the scored fields and review status belong
    to the view.
    """
    resume: ResumeRecord

    match_score: int = 0
    skill_match_score: float = 0.0
    experience_score: float = 0.0
    project_score: float = 0.0
    semantic_score: float = 0.0
    gap_penalty: float = 0.0
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    relevant_projects: List[RelevantProject] = field(default_factory=list)
    review_status: ReviewStatus = ReviewStatus.NONE

    @property
    def resume_id(self) -> str:
        return self.resume.resume_id

    @property
    def name(self) -> str:
        return self.resume.name

    @property
    def candidate_name(self) -> Optional[str]:
        return self.resume.candidate_name

    @property
    def text(self) -> str:
        return self.resume.text

    @property
    def skills(self) -> List[str]:
        return self.resume.skills

    @property
    def candidate_experience(self) -> float:
        return self.resume.candidate_experience

    @property
    def total_gap_months(self) -> int:
        return self.resume.total_gap_months

    @property
    def projects(self) -> List[ParsedProject]:
        return self.resume.projects

    def reset_scores(self) -> None:
        self.match_score = 0
        self.skill_match_score = 0.0
        self.experience_score = 0.0
        self.project_score = 0.0
        self.semantic_score = 0.0
        self.gap_penalty = 0.0
        self.matched_skills = []
        self.missing_skills = []
        self.relevant_projects = []

    def reset(self) -> None:
        """Clear scored fields and review status; identity stays."""
        self.reset_scores()
        self.review_status = ReviewStatus.NONE


@dataclass
class MatchRecord:
    """Persisted scored fields of one (job, resume) pair."""
    job_id: str
    resume_id: str
    match_score: float = 0.0
    skill_match_score: float = 0.0
    experience_score: float = 0.0
    project_score: float = 0.0
    semantic_score: float = 0.0
    gap_penalty: float = 0.0
    gap_months: int = 0
    candidate_name: Optional[str] = None
    resume_name: Optional[str] = None
    candidate_experience: float = 0.0
    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    relevant_projects: List[Dict[str, Any]] = field(default_factory=list)
    status: Optional[str] = None
    view_link: Optional[str] = None
