#!/usr/bin/env python3
"""
Unit tests for ResumeJobStore: pool sync, isolation, imports, deletion
and loaded-match merging.
"""

import unittest
from unittest.mock import Mock

from core.association import MatchRecord, ResumeJobStore, ResumeRecord, ReviewStatus
from core.enrichment.schemas import ExtractionResult
from core.exceptions import ResumeNotFoundError
from core.scorer.models import RelevantProject, ScoredResume


def make_record(file_id, name=None, **kwargs):
    return ResumeRecord(name=name or f"{file_id}.pdf", file_id=file_id, text=f"text of {file_id}", **kwargs)


class TestPoolAndViews(unittest.TestCase):

    def setUp(self):
        self.store = ResumeJobStore()

    def test_add_global_resume_is_idempotent(self):
        self.assertTrue(self.store.add_global_resume(make_record("f1")))
        self.assertFalse(self.store.add_global_resume(make_record("f1", name="other.pdf")))

        self.assertEqual(len(self.store.global_resumes()), 1)
        self.assertEqual(self.store.get_resume("f1").name, "f1.pdf")

    def test_resume_without_identity_is_skipped(self):
        self.assertFalse(self.store.add_global_resume(ResumeRecord(name="")))
        self.assertEqual(self.store.global_resumes(), [])

    def test_views_sync_lazily_exactly_once(self):
        self.store.add_global_resume(make_record("f1"))
        self.assertEqual(len(self.store.views_for("job-a")), 1)

        self.store.add_global_resume(make_record("f2"))
        views = self.store.views_for("job-a")
        self.assertEqual([v.resume_id for v in views], ["f1", "f2"])
        self.assertEqual(len(self.store.views_for("job-a")), 2)

    def test_sync_preserves_existing_view_state(self):
        self.store.add_global_resume(make_record("f1"))
        view = self.store.get_view("job-a", "f1")
        view.match_score = 77

        self.store.add_global_resume(make_record("f2"))
        self.store.views_for("job-a")

        self.assertEqual(self.store.get_view("job-a", "f1").match_score, 77)

    def test_view_isolation_between_jobs(self):
        record = make_record("f1", skills=["Python"], candidate_experience=5.0)
        self.store.add_global_resume(record)

        self.store.set_review_status("job-a", "f1", "accepted")
        self.store.get_view("job-a", "f1").match_score = 90

        other = self.store.get_view("job-b", "f1")
        self.assertEqual(other.review_status, ReviewStatus.NONE)
        self.assertEqual(other.match_score, 0)
        self.assertEqual(record.skills, ["Python"])
        self.assertEqual(record.candidate_experience, 5.0)

    def test_get_view_unknown_resume(self):
        with self.assertRaises(ResumeNotFoundError):
            self.store.get_view("job-a", "missing")

    def test_set_review_status_rejects_unknown_value(self):
        self.store.add_global_resume(make_record("f1"))
        with self.assertRaises(ValueError):
            self.store.set_review_status("job-a", "f1", "maybe")

    def test_reset_views(self):
        self.store.add_global_resume(make_record("f1"))
        view = self.store.get_view("job-a", "f1")
        view.match_score = 50
        view.review_status = ReviewStatus.REJECTED

        self.store.reset_views("job-a", keep_review_status=True)
        self.assertEqual(view.match_score, 0)
        self.assertEqual(view.review_status, ReviewStatus.REJECTED)

        self.store.reset_views("job-a")
        self.assertEqual(view.review_status, ReviewStatus.NONE)

    def test_apply_scores(self):
        self.store.add_global_resume(make_record("f1"))
        scored = ScoredResume(
            resume_id="f1", final_score=64, skill_match_score=66.7,
            matched_skills=["Python"], missing_skills=["AWS"],
            relevant_projects=[RelevantProject(name="ETL", matching_technologies=["Python"])]
        )

        updated = self.store.apply_scores("job-a", [scored, ScoredResume(resume_id="ghost")])

        self.assertEqual(updated, 1)
        view = self.store.get_view("job-a", "f1")
        self.assertEqual(view.match_score, 64)
        self.assertEqual(view.missing_skills, ["AWS"])
        self.assertEqual(view.relevant_projects[0].name, "ETL")


class TestExtractionSyncBack(unittest.TestCase):

    def setUp(self):
        self.store = ResumeJobStore()
        self.record = make_record("f1")
        self.store.add_global_resume(self.record)

    def test_extraction_visible_in_every_job(self):
        view_a = self.store.get_view("job-a", "f1")
        view_b = self.store.get_view("job-b", "f1")

        result = ExtractionResult.model_validate({
            "skills": ["Python", "SQL"],
            "candidateName": "Ann Lee",
            "candidateExperience": 6,
            "parsedDetails": {
                "employment_gaps": {"total_gap_months": 14},
                "projects": [{"project_name": "ETL", "technologies_used": ["Python"]}]
            }
        })
        self.assertTrue(self.store.apply_extraction("f1", result))

        for view in (view_a, view_b):
            self.assertEqual(view.skills, ["Python", "SQL"])
            self.assertEqual(view.candidate_name, "Ann Lee")
            self.assertEqual(view.candidate_experience, 6.0)
            self.assertEqual(view.total_gap_months, 14)
            self.assertEqual(view.projects[0].name, "ETL")

    def test_missing_fields_keep_existing_values(self):
        self.record.candidate_name = "Ann"
        self.record.total_gap_months = 3

        self.store.apply_extraction("f1", ExtractionResult(skills=["Go"]))

        self.assertEqual(self.record.skills, ["Go"])
        self.assertEqual(self.record.candidate_name, "Ann")
        self.assertEqual(self.record.total_gap_months, 3)

    def test_unknown_resume_is_discarded(self):
        self.assertFalse(self.store.apply_extraction("nope", ExtractionResult(skills=["Go"])))


class TestImports(unittest.TestCase):

    def setUp(self):
        self.store = ResumeJobStore()

    def test_deduplicate_against_existing_and_batch(self):
        incoming = [make_record("f1"), make_record("f2"), make_record("f2"), ResumeRecord(name="")]

        fresh = ResumeJobStore.deduplicate_import_candidates(["f1"], incoming)

        self.assertEqual([r.resume_id for r in fresh], ["f2"])

    def test_repeated_import_adds_nothing(self):
        batch = [make_record("f1"), make_record("f2")]

        first = self.store.import_resumes("job-a", batch)
        second = self.store.import_resumes("job-a", [make_record("f1"), make_record("f2")])

        self.assertEqual(len(first), 2)
        self.assertEqual(second, [])
        self.assertEqual(len(self.store.views_for("job-a")), 2)

    def test_name_fallback_identity(self):
        self.store.import_resumes("job-a", [ResumeRecord(name="cv.pdf")])
        again = self.store.import_resumes("job-a", [ResumeRecord(name="cv.pdf")])

        self.assertEqual(again, [])


class TestDeletion(unittest.TestCase):

    def setUp(self):
        self.store = ResumeJobStore()
        self.store.add_global_resume(make_record("f1"))
        self.store.add_global_resume(make_record("f2"))
        self.store.views_for("job-a")
        self.store.views_for("job-b")

    def test_remove_global_resume_cascades(self):
        listener = Mock()
        self.store.on_resume_removed(listener)

        self.assertTrue(self.store.remove_global_resume("f1"))

        self.assertIsNone(self.store.get_resume("f1"))
        self.assertEqual(self.store.known_resume_ids("job-a"), ["f2"])
        self.assertEqual(self.store.known_resume_ids("job-b"), ["f2"])
        listener.assert_called_once_with("f1")

    def test_remove_unknown_resume(self):
        listener = Mock()
        self.store.on_resume_removed(listener)

        self.assertFalse(self.store.remove_global_resume("nope"))
        listener.assert_not_called()

    def test_remove_job_leaves_pool(self):
        self.store.get_view("job-a", "f1").match_score = 40

        self.assertTrue(self.store.remove_job("job-a"))

        self.assertEqual(len(self.store.global_resumes()), 2)
        self.assertEqual(self.store.get_view("job-a", "f1").match_score, 0)
        self.assertFalse(self.store.remove_job("never"))


class TestApplyLoadedMatches(unittest.TestCase):

    def setUp(self):
        self.store = ResumeJobStore()
        self.store.add_global_resume(make_record("f1", skills=["Python"]))
        self.store.add_global_resume(make_record("f2"))

    def test_merges_by_identity_and_resets_others(self):
        stale = self.store.get_view("job-a", "f2")
        stale.match_score = 99
        stale.review_status = ReviewStatus.ACCEPTED

        applied = self.store.apply_loaded_matches("job-a", [
            MatchRecord(job_id="j1", resume_id="f1", match_score=72, skill_match_score=80,
                        matched_skills=["Python"], missing_skills=["AWS"],
                        relevant_projects=[{"name": "ETL", "allTech": ["Python"], "matchingTechs": ["Python"]}],
                        status="review")
        ])

        self.assertEqual(applied, 1)
        view = self.store.get_view("job-a", "f1")
        self.assertEqual(view.match_score, 72)
        self.assertEqual(view.review_status, ReviewStatus.REVIEW)
        self.assertEqual(view.relevant_projects[0].matching_technologies, ["Python"])
        self.assertEqual(stale.match_score, 0)
        self.assertEqual(stale.review_status, ReviewStatus.NONE)

    def test_scores_above_100_are_clamped_with_warning(self):
        with self.assertLogs('core.utils', level='WARNING') as logs:
            self.store.apply_loaded_matches("job-a", [
                MatchRecord(job_id="j1", resume_id="f1", match_score=140, skill_match_score=250)
            ])

        view = self.store.get_view("job-a", "f1")
        self.assertEqual(view.match_score, 100)
        self.assertEqual(view.skill_match_score, 100.0)
        self.assertTrue(any("match_score" in line for line in logs.output))

    def test_match_by_resume_name(self):
        self.store.add_global_resume(ResumeRecord(name="named.pdf"))

        self.store.apply_loaded_matches("job-a", [
            MatchRecord(job_id="j1", resume_id="legacy-id", resume_name="named.pdf", match_score=33)
        ])

        self.assertEqual(self.store.get_view("job-a", "named.pdf").match_score, 33)

    def test_untracked_resume_gets_synthesized_view(self):
        self.store.apply_loaded_matches("job-a", [
            MatchRecord(job_id="j1", resume_id="f9", resume_name="remote.pdf",
                        candidate_name="Remote Person", candidate_experience=7, match_score=55)
        ])

        view = self.store.get_view("job-a", "f9")
        self.assertEqual(view.name, "remote.pdf")
        self.assertEqual(view.candidate_name, "Remote Person")
        self.assertEqual(view.match_score, 55)
        # Not added to the pool, nor to other jobs
        self.assertIsNone(self.store.get_resume("f9"))
        self.assertNotIn("f9", self.store.known_resume_ids("job-b"))

    def test_placeholder_rebinds_to_pooled_record(self):
        self.store.apply_loaded_matches("job-a", [MatchRecord(job_id="j1", resume_id="f9", match_score=55)])

        pooled = make_record("f9", skills=["Rust"])
        self.store.add_global_resume(pooled)
        view = self.store.get_view("job-a", "f9")

        self.assertIs(view.resume, pooled)
        self.assertEqual(view.skills, ["Rust"])
        self.assertEqual(view.match_score, 55)


if __name__ == '__main__':
    unittest.main()
