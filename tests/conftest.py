"""Shared test fixtures for expertscore.

Provides a fixed reference time, expert builders, and entity sets across
all test modules.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from expertscore.config.schema import ExpertScoreConfig
from expertscore.engine.models import (
    CandidateExpert,
    CompanyRelationship,
    Connection,
    EmploymentRecord,
    EntitySet,
    ExpertiseArea,
    ExpertUser,
    ObservablePattern,
    Question,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


# ---------------------------------------------------------------------------
# Core infrastructure
# ---------------------------------------------------------------------------

@pytest.fixture
def now() -> datetime:
    """Fixed reference time for every decay / recency calculation."""
    return NOW


@pytest.fixture
def default_config() -> ExpertScoreConfig:
    return ExpertScoreConfig()


# ---------------------------------------------------------------------------
# Experts
# ---------------------------------------------------------------------------

@pytest.fixture
def make_expert() -> Callable[..., CandidateExpert]:
    """Factory for experts with no signals unless overridden."""
    def _make(expert_id: str = "exp-1", **overrides: Any) -> CandidateExpert:
        return CandidateExpert(id=expert_id, **overrides)
    return _make


@pytest.fixture
def blank_expert(make_expert) -> CandidateExpert:
    """Expert with no relations, no track record, never active."""
    return make_expert()


@pytest.fixture
def acme_insider(make_expert) -> CandidateExpert:
    """Current Acme employee with a fresh FINANCIAL observation and a track record.

    employment 100, observable 28.8, geography 40 (with a location),
    performance 16 + 5 + 10 + 6 + 5 = 42.
    """
    return make_expert(
        "acme-insider",
        accuracy_score=80,
        response_rate=0.5,
        verification_level=2,
        average_response_time=12,
        employment_history=(
            EmploymentRecord(company="Acme Corp", is_current=True, start_date="2020-01-01"),
        ),
        observable_patterns=(
            ObservablePattern(
                company="ACME corporation",
                pattern_type="FINANCIAL",
                category="revenue",
                confidence=80,
                last_observed=days_ago(10),
            ),
        ),
        answer_history=({"id": "a1"}, {"id": "a2"}, {"id": "a3"}),
    )


@pytest.fixture
def vendor_expert(make_expert) -> CandidateExpert:
    """Expert connected to Acme through vendors and contacts only."""
    return make_expert(
        "acme-vendor",
        company_relationships=(
            CompanyRelationship(company="Acme", relationship_type="logistics_provider"),
        ),
        connections=(
            Connection(company="Acme Inc", relationship="competitor", trust_level=50,
                       connected_user_id="u-1"),
            Connection(company="Acme", relationship="friend", trust_level=100),
        ),
        user=ExpertUser(is_verified=True),
        last_active_date=days_ago(3),
    )


@pytest.fixture
def topical_expert(make_expert) -> CandidateExpert:
    """Expert who matches on topics and industry but not on any company."""
    return make_expert(
        "topical",
        primary_industry="Retail",
        expertise_areas=(
            ExpertiseArea(type="FUNCTION", value="Supply Chain Logistics", proficiency_level=80),
        ),
        accuracy_score=50,
        response_rate=1.0,
    )


# ---------------------------------------------------------------------------
# Questions & entities
# ---------------------------------------------------------------------------

@pytest.fixture
def question() -> Question:
    return Question()


@pytest.fixture
def top3_question() -> Question:
    return Question(is_top3=True)


@pytest.fixture
def acme_entities() -> EntitySet:
    return EntitySet(
        companies=("Acme Corp.",),
        locations=({"name": "Chicago"},),
        topics=("supply chain",),
        industries=("retail",),
    )


@pytest.fixture
def empty_entities() -> EntitySet:
    return EntitySet()
