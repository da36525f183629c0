"""Ranking pipeline runner module.

Drives one job workspace through extraction, matching and ranking:
- Extraction fans out over the job's resumes on a bounded worker pool
- Matching/ranking combines the scorers with the similarity service
- Results are persisted through the match store and reloaded into views

Every run is stamped with the activation epoch current when it started.
Results arriving after the job was deleted or another activation
happened are discarded rather than applied.
"""

import time
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from core.association import (
    IN_FLIGHT_STATUSES, JobDescription, JobResumeView, JobStatus,
    ResumeJobStore, ResumeRecord
)
from core.config_loader import AppConfig, RankingConfig
from core.enrichment import ExtractionClient, SimilarityClient, SkillExtractor, SimilarityScorer
from core.exceptions import (
    InvalidTransitionError, JobNotFoundError, JobNotSavedError,
    NoRequiredSkillsError, RankingError
)
from core.scorer import RankingService, ScoredResume
from core.scorer.persistence import MatchStore, SqlMatchStore, view_to_match_record
from core.scorer.similarity import to_semantic_scores
from database.database import make_session_factory


logger = logging.getLogger(__name__)

SUPERSEDED_ERROR = "Superseded by a newer activation"
INTERRUPTED_ERROR = "Interrupted by system"


@dataclass
class RankingRunResult:
    """Result of one extraction or match-and-rank run."""
    success: bool
    job_key: str
    resumes_count: int = 0
    extracted_count: int = 0
    failed_count: int = 0
    saved_count: int = 0
    results: List[ScoredResume] = field(default_factory=list)
    discarded: bool = False
    error: Optional[str] = None
    execution_time: float = 0.0


class RankingPipeline:
    """
    Job workflow over a shared ResumeJobStore.

    The extractor and similarity scorer are interfaces; the match store is
    optional (without one, results live in memory only).
    """

    def __init__(
        self,
        store: ResumeJobStore,
        extractor: SkillExtractor,
        similarity: SimilarityScorer,
        match_store: Optional[MatchStore] = None,
        ranking_service: Optional[RankingService] = None,
        config: Optional[RankingConfig] = None
    ):
        self.store = store
        self.extractor = extractor
        self.similarity = similarity
        self.match_store = match_store
        self.ranking_service = ranking_service or RankingService()
        self.config = config or RankingConfig()

        self._lock = threading.RLock()
        self._jobs: Dict[str, JobDescription] = {}
        self._active_key: Optional[str] = None
        self._epoch = 0

        self.store.on_resume_removed(self._on_resume_removed)

    @classmethod
    def from_config(cls, config: AppConfig, store: Optional[ResumeJobStore] = None) -> "RankingPipeline":
        """Wire HTTP clients and the SQL match store from application config."""
        return cls(
            store=store or ResumeJobStore(),
            extractor=ExtractionClient.from_config(config.extraction),
            similarity=SimilarityClient.from_config(config.similarity),
            match_store=SqlMatchStore(make_session_factory(config.database.url)),
            config=config.ranking
        )

    # ------------------------------------------------------------------
    # Job registry and activation
    # ------------------------------------------------------------------
    def add_job(self, job: JobDescription) -> JobDescription:
        with self._lock:
            self._jobs[job.key] = job
        logger.info(f"Registered job {job.title or job.key}")
        return job

    def get_job(self, job_key: str) -> JobDescription:
        with self._lock:
            job = self._jobs.get(job_key)
        if job is None:
            raise JobNotFoundError(f"Job {job_key} is not registered")
        return job

    def jobs(self) -> List[JobDescription]:
        with self._lock:
            return list(self._jobs.values())

    @property
    def active_job_key(self) -> Optional[str]:
        return self._active_key

    def activate(self, job_key: str) -> int:
        """
        Make a job the active selection.

        Bumps the activation epoch (so runs started earlier are discarded on
        arrival), then reloads the job's persisted matches into its views,
        or resets the views when there are none. Returns matches applied.
        """
        job = self.get_job(job_key)
        with self._lock:
            self._epoch += 1
            self._active_key = job_key
            epoch = self._epoch
        logger.info(f"Activated job {job.title or job_key} (epoch {epoch})")

        records = []
        if job.job_id and self.match_store is not None:
            try:
                records = self.match_store.load(job.job_id, limit=self.config.matches_reload_limit)
            except Exception:
                logger.exception(f"Failed to load saved matches for job {job.job_id}")
                records = []

        if not records:
            self.store.reset_views(job_key)
            return 0

        applied = self.store.apply_loaded_matches(job_key, records)
        with self._lock:
            if job.status not in IN_FLIGHT_STATUSES and job.status != JobStatus.RANKED:
                job.transition_to(JobStatus.RANKED)
        return applied

    def _transition(self, job: JobDescription, new_status: JobStatus) -> JobStatus:
        """Check-and-set a job's status under the pipeline lock; returns the status it left."""
        with self._lock:
            previous = job.status
            job.transition_to(new_status)
        return previous

    def _begin(self, job: JobDescription) -> int:
        """Epoch of a new run, activating the job first if needed."""
        with self._lock:
            if self._active_key == job.key:
                return self._epoch
        self.activate(job.key)
        with self._lock:
            return self._epoch

    def _is_current(self, job_key: str, epoch: int) -> bool:
        with self._lock:
            return job_key in self._jobs and self._active_key == job_key and self._epoch == epoch

    def _abandon(
        self,
        job: JobDescription,
        previous: JobStatus,
        start: float,
        error: str = SUPERSEDED_ERROR
    ) -> RankingRunResult:
        with self._lock:
            if job.key in self._jobs:
                job.status = previous
        logger.info(f"Discarding results for job {job.title or job.key}: {error}")
        return RankingRunResult(
            success=False,
            job_key=job.key,
            discarded=True,
            error=error,
            execution_time=time.time() - start
        )

    def _fail(self, job: JobDescription, error: str, start: float) -> RankingRunResult:
        with self._lock:
            job.fail(error)
        return RankingRunResult(
            success=False,
            job_key=job.key,
            error=error,
            execution_time=time.time() - start
        )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    def run_extraction(
        self,
        job_key: str,
        stop_event: Optional[threading.Event] = None
    ) -> RankingRunResult:
        """Extract the JD's skills, then every resume still missing skills or a name."""
        if stop_event is None:
            stop_event = threading.Event()

        start = time.time()
        job = self.get_job(job_key)
        try:
            previous = self._transition(job, JobStatus.EXTRACTING)
        except InvalidTransitionError as e:
            logger.warning(str(e))
            return RankingRunResult(success=False, job_key=job_key, error=str(e))
        epoch = self._begin(job)

        logger.info("=== EXTRACTION STEP 1: Job description ===")
        if job.text and job.text.strip():
            try:
                jd = self.extractor.extract(job.text, doc_type="JD")
            except Exception as e:
                if not self._is_current(job_key, epoch):
                    return self._abandon(job, previous, start)
                logger.exception(f"JD extraction failed for job {job.title or job_key}")
                return self._fail(job, f"JD extraction failed: {e}", start)

            if not self._is_current(job_key, epoch):
                return self._abandon(job, previous, start)

            if jd.skills:
                job.required_skills = list(jd.skills)
                job.preferred_skills = list(jd.preferred_skills)
                job.min_experience = jd.required_experience
                logger.info(f"JD requires {len(job.required_skills)} skills, "
                            f"min experience {job.min_experience}")
            else:
                logger.warning(f"JD extraction for {job.title or job_key} returned no skills; keeping existing")

        logger.info("=== EXTRACTION STEP 2: Resumes ===")
        pending = [
            view.resume for view in self.store.views_for(job_key)
            if view.resume.needs_extraction and view.resume.text
        ]
        extracted, failed = self._extract_resumes(pending, job_key, epoch, stop_event)

        if stop_event.is_set():
            return self._abandon(job, previous, start, error=INTERRUPTED_ERROR)
        if not self._is_current(job_key, epoch):
            return self._abandon(job, previous, start)

        self._transition(job, JobStatus.EXTRACTED)
        execution_time = time.time() - start
        logger.info(f"Extraction completed in {execution_time:.2f}s: "
                    f"{extracted} extracted, {failed} failed, {len(pending)} pending")

        return RankingRunResult(
            success=True,
            job_key=job_key,
            resumes_count=len(pending),
            extracted_count=extracted,
            failed_count=failed,
            execution_time=execution_time
        )

    def _extract_resumes(
        self,
        resumes: Sequence[ResumeRecord],
        job_key: str,
        epoch: int,
        stop_event: threading.Event
    ) -> Tuple[int, int]:
        """Bounded fan-out; one resume's failure never affects its siblings."""
        if not resumes:
            return 0, 0

        batch_size = self.config.max_concurrent_enrichments
        extracted = 0
        failed = 0

        with ThreadPoolExecutor(max_workers=batch_size) as executor:
            for offset in range(0, len(resumes), batch_size):
                batch = resumes[offset:offset + batch_size]
                futures = {
                    executor.submit(self.extractor.extract, resume.text, "RESUME"): resume
                    for resume in batch
                }
                for future in as_completed(futures):
                    resume = futures[future]
                    try:
                        result = future.result()
                    except Exception as e:
                        failed += 1
                        logger.warning(f"Extraction failed for resume {resume.name}: {e}")
                        continue

                    if not self._is_current(job_key, epoch):
                        logger.debug(f"Dropping stale extraction for {resume.resume_id}")
                        continue
                    if self.store.apply_extraction(resume.resume_id, result):
                        extracted += 1

                if stop_event.is_set() or not self._is_current(job_key, epoch):
                    break
                if self.config.inter_batch_pause_seconds and offset + batch_size < len(resumes):
                    time.sleep(self.config.inter_batch_pause_seconds)

        return extracted, failed

    # ------------------------------------------------------------------
    # Matching and ranking
    # ------------------------------------------------------------------
    def run_match_and_rank(
        self,
        job_key: str,
        stop_event: Optional[threading.Event] = None
    ) -> RankingRunResult:
        """
        Score and rank every resume in the job, then persist the matches.

        Previous scores stay visible until the new ones are ready; a failed
        run leaves them untouched. Review decisions survive re-runs.
        """
        if stop_event is None:
            stop_event = threading.Event()

        start = time.time()
        job = self.get_job(job_key)

        if not self.config.enabled:
            logger.info("=== RANKING: Skipped (disabled in config) ===")
            return RankingRunResult(success=True, job_key=job_key, error="Ranking disabled in config")

        try:
            previous = self._transition(job, JobStatus.MATCHING)
        except InvalidTransitionError as e:
            logger.warning(str(e))
            return RankingRunResult(success=False, job_key=job_key, error=str(e))
        epoch = self._begin(job)

        try:
            if not job.job_id:
                raise JobNotSavedError(f"Job {job.title or job_key} has no saved id")
            if not job.required_skills:
                raise NoRequiredSkillsError(f"Job {job.title or job_key} has no required skills")
        except RankingError as e:
            return self._fail(job, str(e), start)

        views = self.store.views_for(job_key)
        logger.info(f"=== RANKING STEP 1: Matching {len(views)} resumes "
                    f"against {len(job.required_skills)} required skills ===")

        self._transition(job, JobStatus.RANKING)
        logger.info("=== RANKING STEP 2: Semantic similarity ===")
        semantic_scores = self._semantic_scores(job, views)

        if stop_event.is_set():
            return self._abandon(job, previous, start, error=INTERRUPTED_ERROR)
        if not self._is_current(job_key, epoch):
            return self._abandon(job, previous, start)

        logger.info("=== RANKING STEP 3: Combining scores ===")
        try:
            scored = self.ranking_service.rank(job, views, semantic_scores)
        except Exception as e:
            logger.exception(f"Ranking failed for job {job.title or job_key}")
            return self._fail(job, f"Ranking failed: {e}", start)

        if not self._is_current(job_key, epoch):
            return self._abandon(job, previous, start)

        self.store.reset_views(job_key, keep_review_status=True)
        self.store.apply_scores(job_key, scored)

        if scored:
            logger.info("Top 5 Matches:")
            for i, result in enumerate(scored[:5], 1):
                logger.info(f"  {i}. {result.resume_id}: final={result.final_score}/100 "
                            f"(skills={result.skill_match_score:.1f}, exp={result.experience_score:.1f}, "
                            f"projects={result.project_score:.1f}, semantic={result.semantic_score:.1f}, "
                            f"gap=-{result.gap_penalty:.0f})")

        logger.info("=== RANKING STEP 4: Saving matches ===")
        saved_count, save_error = self._persist(job, epoch)

        self._transition(job, JobStatus.RANKED)
        execution_time = time.time() - start
        logger.info(f"Ranking completed in {execution_time:.2f}s: {len(scored)} ranked, {saved_count} saved")

        return RankingRunResult(
            success=True,
            job_key=job_key,
            resumes_count=len(views),
            saved_count=saved_count,
            results=scored,
            error=save_error,
            execution_time=execution_time
        )

    def _semantic_scores(self, job: JobDescription, views: Sequence[JobResumeView]) -> Dict[str, float]:
        """Similarity scores by resume id; any service failure degrades to all zeros."""
        resume_texts = {view.resume_id: view.text for view in views if view.text}
        if not resume_texts:
            return {}
        try:
            return to_semantic_scores(self.similarity.rank(job.text, resume_texts))
        except Exception as e:
            logger.warning(f"Similarity scoring failed for job {job.title or job.key}; "
                           f"semantic scores default to 0: {e}")
            return {}

    def _persist(self, job: JobDescription, epoch: int) -> Tuple[int, Optional[str]]:
        """
        Save the job's scored views, then reload them so the views reflect
        the stored state. A persistence failure keeps the in-memory results.
        """
        if self.match_store is None:
            return 0, None

        records = [view_to_match_record(job.job_id, view) for view in self.store.views_for(job.key)]
        try:
            saved = self.match_store.save(job.job_id, records)
            loaded = self.match_store.load(job.job_id)
        except Exception as e:
            logger.exception(f"Failed to save matches for job {job.job_id}; keeping local results")
            return 0, f"Failed to save matches: {e}"

        if self._is_current(job.key, epoch):
            self.store.apply_loaded_matches(job.key, loaded)
        return saved, None

    # ------------------------------------------------------------------
    # Review, imports and deletion
    # ------------------------------------------------------------------
    def set_review_status(self, job_key: str, resume_id: str, status) -> JobResumeView:
        """Record a review decision in one job and forward it to the match store."""
        job = self.get_job(job_key)
        view = self.store.set_review_status(job_key, resume_id, status)
        if job.job_id and self.match_store is not None:
            self.match_store.update_status(job.job_id, resume_id, view.review_status.value)
        return view

    def import_resumes(self, job_key: str, candidates: Iterable[ResumeRecord]) -> List[ResumeRecord]:
        self.get_job(job_key)
        return self.store.import_resumes(job_key, candidates)

    def delete_resume(self, resume_id: str) -> bool:
        """Irreversibly delete a resume everywhere; saved matches follow."""
        return self.store.remove_global_resume(resume_id)

    def _on_resume_removed(self, resume_id: str) -> None:
        if self.match_store is None:
            return
        deleted = self.match_store.delete_resume(resume_id)
        logger.info(f"Deleted {deleted} saved matches for resume {resume_id}")

    def delete_job(self, job_key: str) -> None:
        """Delete a job, its views and its saved matches. Global resumes stay."""
        with self._lock:
            job = self._jobs.pop(job_key, None)
            if job is None:
                raise JobNotFoundError(f"Job {job_key} is not registered")
            if self._active_key == job_key:
                self._active_key = None
                self._epoch += 1

        self.store.remove_job(job_key)
        if job.job_id and self.match_store is not None:
            self.match_store.delete_job(job.job_id)
        logger.info(f"Deleted job {job.title or job_key}")
