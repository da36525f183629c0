import logging
from typing import Any, Dict, List, Optional, Sequence
from sqlalchemy import select, delete

from database.models import MatchResult
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

DEFAULT_MATCH_STATUS = 'review'


class MatchRepository(BaseRepository):
    def get_existing_match(
        self,
        job_id: str,
        resume_id: str
    ) -> Optional[MatchResult]:
        stmt = select(MatchResult).where(
            MatchResult.job_id == job_id,
            MatchResult.resume_id == resume_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_matches(
        self,
        job_id: str,
        rows: Sequence[Dict[str, Any]]
    ) -> int:
        """Insert or update one row per (job_id, resume_id).

        A row without a status keeps the stored one; new rows default to
        'review'.
        """
        count = 0
        for row in rows:
            resume_id = row['resume_id']
            values = {k: v for k, v in row.items() if k not in ('job_id', 'resume_id', 'status')}
            status = row.get('status')

            match = self.get_existing_match(job_id, resume_id)
            if match is None:
                match = MatchResult(
                    job_id=job_id,
                    resume_id=resume_id,
                    status=status or DEFAULT_MATCH_STATUS,
                    **values
                )
                self.db.add(match)
                self.flush()
            else:
                for key, value in values.items():
                    setattr(match, key, value)
                if status:
                    match.status = status
            count += 1

        self.flush()
        logger.info(f"Upserted {count} matches for job {job_id}")
        return count

    def get_matches_for_job(
        self,
        job_id: str,
        limit: Optional[int] = None
    ) -> List[MatchResult]:
        stmt = select(MatchResult).where(
            MatchResult.job_id == job_id
        ).order_by(MatchResult.match_score.desc())

        if limit is not None:
            stmt = stmt.limit(limit)
        return self.db.execute(stmt).scalars().all()

    def update_status(
        self,
        job_id: str,
        resume_id: str,
        status: str
    ) -> bool:
        match = self.get_existing_match(job_id, resume_id)
        if match is None:
            logger.warning(f"No saved match for job {job_id} / resume {resume_id}")
            return False
        match.status = status
        return True

    def delete_matches_for_resume(self, resume_id: str) -> int:
        stmt = delete(MatchResult).where(MatchResult.resume_id == resume_id)
        count = self.db.execute(stmt).rowcount or 0
        if count > 0:
            logger.info(f"Deleted {count} matches for resume {resume_id}")
        return count

    def delete_matches_for_job(self, job_id: str) -> int:
        stmt = delete(MatchResult).where(MatchResult.job_id == job_id)
        count = self.db.execute(stmt).rowcount or 0
        if count > 0:
            logger.info(f"Deleted {count} matches for job {job_id}")
        return count
