#!/usr/bin/env python3
"""
Test suite for the resume ranker.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Skip database-backed tests
    python -m pytest tests/ -v -m "not db"

Database tests use an in-memory SQLite database, so no external
service is needed.
"""
