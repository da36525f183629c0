import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Integer, Float, JSON, UniqueConstraint, Index
from sqlalchemy.sql import func

from .base import Base


class MatchResult(Base):
    """
    Stores the scored result of one resume against one job.

    Tracks:
    - Final and component scores
    - Matched / missing skills and relevant projects
    - Reviewer decision (status), kept across re-runs
    - Denormalized resume fields so a job can be reloaded without the pool
    """
    __tablename__ = 'match_result'

    id = Column(Text, primary_key=True, default=lambda: str(uuid.uuid4()))
    job_id = Column(Text, nullable=False)
    resume_id = Column(Text, nullable=False)

    match_score = Column(Float, nullable=False, default=0)
    skill_match_score = Column(Float, default=0)
    experience_score = Column(Float, default=0)
    project_score = Column(Float, default=0)
    semantic_score = Column(Float, default=0)
    gap_penalty = Column(Float, default=0)
    gap_months = Column(Integer, default=0)

    candidate_name = Column(Text, nullable=True)
    resume_name = Column(Text, nullable=True)
    candidate_experience = Column(Float, default=0)
    view_link = Column(Text, nullable=True)

    matched_skills = Column(JSON, default=list)
    missing_skills = Column(JSON, default=list)
    relevant_projects = Column(JSON, default=list)

    status = Column(Text, nullable=False, default='review')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('job_id', 'resume_id', name='uq_match_result_job_resume'),
        Index('idx_match_result_job_score', 'job_id', 'match_score'),
        Index('idx_match_result_resume', 'resume_id'),
    )
