#!/usr/bin/env python3
"""
Tests for match_uow transaction handling.
"""

import pytest

from database.models import MatchResult
from database.uow import match_uow


pytestmark = pytest.mark.db


def test_commits_on_success(session_factory):
    with match_uow(session_factory) as repo:
        repo.upsert_matches('job-1', [{'resume_id': 'r1', 'match_score': 70}])

    session = session_factory()
    try:
        assert session.query(MatchResult).count() == 1
    finally:
        session.close()


def test_rolls_back_on_error(session_factory):
    with pytest.raises(RuntimeError):
        with match_uow(session_factory) as repo:
            repo.upsert_matches('job-1', [{'resume_id': 'r1', 'match_score': 70}])
            raise RuntimeError("save interrupted")

    session = session_factory()
    try:
        assert session.query(MatchResult).count() == 0
    finally:
        session.close()
