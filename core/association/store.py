#!/usr/bin/env python3
"""
Resume-Job Association Store.

Owns the global resume pool and projects it lazily into each job's view
set. Resumes are uploaded once and shared; scores, skill lists and review
decisions live in per-(job, resume) views so jobs never see each other's
state.

Identity is the resume's file id, falling back to its name.
"""

from typing import Callable, Dict, Iterable, List, Optional, Sequence
import logging
import threading

from core.association.models import (
    JobResumeView, MatchRecord, ResumeRecord, ReviewStatus
)
from core.enrichment.schemas import ExtractionResult
from core.exceptions import ResumeNotFoundError
from core.scorer.models import RelevantProject, ScoredResume
from core.utils import clamp_score, non_negative, round_half_up

logger = logging.getLogger(__name__)


class ResumeJobStore:
    """
    In-memory pool of resumes plus per-job views.

    All operations are safe to call from enrichment worker threads.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._pool: Dict[str, ResumeRecord] = {}
        self._views: Dict[str, Dict[str, JobResumeView]] = {}
        self._removal_listeners: List[Callable[[str], None]] = []

    # ------------------------------------------------------------------
    # Global pool
    # ------------------------------------------------------------------
    def on_resume_removed(self, listener: Callable[[str], None]) -> None:
        """Register a callback invoked with the resume id after a global delete."""
        self._removal_listeners.append(listener)

    def add_global_resume(self, record: ResumeRecord) -> bool:
        """
        Insert a resume into the global pool.

        Returns False (no-op) if a resume with the same identity exists.
        """
        resume_id = record.resume_id
        if not resume_id:
            logger.warning("Skipping resume with neither file id nor name")
            return False

        with self._lock:
            if resume_id in self._pool:
                logger.debug(f"Resume {resume_id} already in pool; skipping")
                return False
            self._pool[resume_id] = record

        logger.info(f"Added resume {record.name} ({resume_id}) to global pool")
        return True

    def get_resume(self, resume_id: str) -> Optional[ResumeRecord]:
        with self._lock:
            return self._pool.get(resume_id)

    def global_resumes(self) -> List[ResumeRecord]:
        with self._lock:
            return list(self._pool.values())

    def apply_extraction(self, resume_id: str, result: ExtractionResult) -> bool:
        """
        Merge a successful extraction into the pooled resume.

        Skills are always replaced; name, experience, gaps and projects only
        when the extraction provides them. Views read through, so every job
        sees the update.
        """
        with self._lock:
            record = self._pool.get(resume_id)
            if record is None:
                record = self._find_view_record(resume_id)
            if record is None:
                logger.warning(f"Extraction result for unknown resume {resume_id}; discarding")
                return False

            record.skills = list(result.skills)
            if result.candidate_name:
                record.candidate_name = result.candidate_name
            if result.candidate_experience:
                record.candidate_experience = non_negative(
                    result.candidate_experience, "candidate_experience"
                )
            details = result.parsed_details
            if details is not None:
                if details.employment_gaps is not None:
                    record.total_gap_months = details.employment_gaps.total_gap_months
                if details.projects is not None:
                    record.projects = list(details.projects)

        logger.debug(f"Applied extraction to {resume_id}: {len(result.skills)} skills")
        return True

    def remove_global_resume(self, resume_id: str) -> bool:
        """
        Irreversibly delete a resume from the pool and from every job's views.

        Removal listeners (match persistence) are notified afterwards.
        """
        with self._lock:
            removed = self._pool.pop(resume_id, None) is not None
            for job_key, views in self._views.items():
                if views.pop(resume_id, None) is not None:
                    removed = True
                    logger.debug(f"Removed resume {resume_id} from job {job_key}")

        if not removed:
            return False

        logger.info(f"Deleted resume {resume_id} from pool and all job views")
        for listener in self._removal_listeners:
            listener(resume_id)
        return True

    # ------------------------------------------------------------------
    # Job views
    # ------------------------------------------------------------------
    def _find_view_record(self, resume_id: str) -> Optional[ResumeRecord]:
        for views in self._views.values():
            view = views.get(resume_id)
            if view is not None:
                return view.resume
        return None

    def _sync(self, job_key: str) -> Dict[str, JobResumeView]:
        """Create a view for every pooled resume missing from this job."""
        views = self._views.setdefault(job_key, {})
        created = 0
        for resume_id, record in self._pool.items():
            view = views.get(resume_id)
            if view is None:
                views[resume_id] = JobResumeView(resume=record)
                created += 1
            elif view.resume is not record:
                # A placeholder from loaded matches; the pooled record wins.
                view.resume = record
        if created:
            logger.debug(f"Synced {created} pooled resumes into job {job_key}")
        return views

    def views_for(self, job_key: str) -> List[JobResumeView]:
        """Return the job's views after lazily syncing the global pool."""
        with self._lock:
            return list(self._sync(job_key).values())

    def get_view(self, job_key: str, resume_id: str) -> JobResumeView:
        with self._lock:
            view = self._sync(job_key).get(resume_id)
        if view is None:
            raise ResumeNotFoundError(f"Resume {resume_id} is not tracked in job {job_key}")
        return view

    def known_resume_ids(self, job_key: str) -> List[str]:
        with self._lock:
            return list(self._sync(job_key).keys())

    def reset_views(self, job_key: str, keep_review_status: bool = False) -> None:
        """Clear scored fields (and review status unless kept) for every view of a job."""
        with self._lock:
            for view in self._sync(job_key).values():
                if keep_review_status:
                    view.reset_scores()
                else:
                    view.reset()

    def apply_scores(self, job_key: str, scored: Iterable[ScoredResume]) -> int:
        """Write ranking results into the job's views. Returns views updated."""
        updated = 0
        with self._lock:
            views = self._sync(job_key)
            for result in scored:
                view = views.get(result.resume_id)
                if view is None:
                    logger.warning(f"No view for scored resume {result.resume_id} in job {job_key}")
                    continue
                view.match_score = result.final_score
                view.skill_match_score = result.skill_match_score
                view.experience_score = result.experience_score
                view.project_score = result.project_score
                view.semantic_score = result.semantic_score
                view.gap_penalty = result.gap_penalty
                view.matched_skills = list(result.matched_skills)
                view.missing_skills = list(result.missing_skills)
                view.relevant_projects = list(result.relevant_projects)
                updated += 1
        return updated

    def apply_loaded_matches(self, job_key: str, matches: Sequence[MatchRecord]) -> int:
        """
        Replace the job's view state with persisted matches.

        Views are reset first so no state from a previously viewed run
        survives. Out-of-range scores are clamped. A match for a resume not
        yet tracked in this job gets a view (backed by a placeholder record
        when the resume is not pooled either).
        """
        applied = 0
        with self._lock:
            views = self._sync(job_key)
            for view in views.values():
                view.reset()

            for match in matches:
                view = views.get(match.resume_id)
                if view is None and match.resume_name:
                    view = next((v for v in views.values() if v.name == match.resume_name), None)
                if view is None:
                    view = self._synthesize_view(match)
                    views[view.resume_id] = view
                    logger.info(f"Tracking resume {view.resume_id} in job {job_key} from saved match")

                view.match_score = round_half_up(clamp_score(match.match_score, "match_score"))
                view.skill_match_score = clamp_score(match.skill_match_score, "skill_match_score")
                view.experience_score = clamp_score(match.experience_score, "experience_score")
                view.project_score = clamp_score(match.project_score, "project_score")
                view.semantic_score = clamp_score(match.semantic_score, "semantic_score")
                view.gap_penalty = clamp_score(match.gap_penalty, "gap_penalty")
                view.matched_skills = list(match.matched_skills or [])
                view.missing_skills = list(match.missing_skills or [])
                view.relevant_projects = [
                    RelevantProject.from_dict(p) for p in (match.relevant_projects or [])
                ]
                view.review_status = ReviewStatus.parse(match.status)
                applied += 1

        logger.info(f"Applied {applied} saved matches to job {job_key}")
        return applied

    def _synthesize_view(self, match: MatchRecord) -> JobResumeView:
        record = self._pool.get(match.resume_id)
        if record is None:
            record = ResumeRecord(
                name=match.resume_name or match.candidate_name or match.resume_id or "Unknown",
                file_id=match.resume_id,
                candidate_name=match.candidate_name,
                candidate_experience=non_negative(match.candidate_experience, "candidate_experience"),
                total_gap_months=int(non_negative(match.gap_months, "gap_months")),
                view_link=match.view_link
            )
        return JobResumeView(resume=record)

    def set_review_status(self, job_key: str, resume_id: str, status) -> JobResumeView:
        """Set the review decision for one resume in one job only."""
        status = ReviewStatus(status) if not isinstance(status, ReviewStatus) else status
        view = self.get_view(job_key, resume_id)
        with self._lock:
            view.review_status = status
        logger.info(f"Job {job_key}: resume {resume_id} marked {status.value}")
        return view

    def remove_job(self, job_key: str) -> bool:
        """Drop a job's views. Pooled resumes are untouched."""
        with self._lock:
            removed = self._views.pop(job_key, None) is not None
        if removed:
            logger.info(f"Removed views for job {job_key}")
        return removed

    # ------------------------------------------------------------------
    # Imports
    # ------------------------------------------------------------------
    @staticmethod
    def deduplicate_import_candidates(
        existing_ids: Iterable[str],
        incoming: Iterable[ResumeRecord]
    ) -> List[ResumeRecord]:
        """
        Keep only incoming candidates whose identity is not already known.

        Duplicates within the incoming batch are dropped as well, so
        rescanning the same external source yields nothing new.
        """
        seen = {i for i in existing_ids if i}
        fresh = []
        for candidate in incoming:
            resume_id = candidate.resume_id
            if not resume_id or resume_id in seen:
                continue
            seen.add(resume_id)
            fresh.append(candidate)
        return fresh

    def import_resumes(self, job_key: str, candidates: Iterable[ResumeRecord]) -> List[ResumeRecord]:
        """Import a scanned batch: dedupe against the job, then pool the rest."""
        with self._lock:
            fresh = self.deduplicate_import_candidates(self.known_resume_ids(job_key), candidates)
            added = [record for record in fresh if self.add_global_resume(record)]
        logger.info(f"Imported {len(added)} new resumes into job {job_key}")
        return added
