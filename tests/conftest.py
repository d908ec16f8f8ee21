"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Settings with TF-IDF scoring on/off
- Candidate pools built from tests/fixtures/conversations.py
"""

from typing import List

import pytest
import structlog

from ticket_matcher.config import Settings
from ticket_matcher.models.conversation import CandidateRecord
from tests.fixtures.conversations import ACCESS_POOL, NON_CX_POOL, REFUND_POOL


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings with defaults used throughout the tests.

    Returns:
        Settings instance with console logging and TF-IDF enabled
    """
    return Settings(
        log_level="INFO",
        log_json=False,
        enable_tfidf_scoring=True,
        sort_by_confidence=False,
    )


@pytest.fixture
def no_tfidf_settings() -> Settings:
    """Settings with text similarity disabled (tag rank only)."""
    return Settings(log_json=False, enable_tfidf_scoring=False)


@pytest.fixture
def refund_pool() -> List[CandidateRecord]:
    """Three conversations tagged 'CX: Billing: Refund'."""
    return [CandidateRecord.model_validate(r) for r in REFUND_POOL]


@pytest.fixture
def access_pool() -> List[CandidateRecord]:
    """Conversations in the 'CX: Access:' category only."""
    return [CandidateRecord.model_validate(r) for r in ACCESS_POOL]


@pytest.fixture
def mixed_pool() -> List[CandidateRecord]:
    """Refund, access and non-CX conversations together."""
    return [CandidateRecord.model_validate(r) for r in REFUND_POOL + ACCESS_POOL + NON_CX_POOL]


def make_record(record_id: str, tags: List[str], text: str = "", **kwargs) -> CandidateRecord:
    """Build a CandidateRecord with only the fields a test cares about."""
    return CandidateRecord(id=record_id, tags=tags, text=text, **kwargs)


@pytest.fixture
def record_factory():
    """Factory fixture wrapping make_record."""
    return make_record


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop logging configuration made by a test (CLI tests bind captured streams)."""
    yield
    structlog.reset_defaults()
