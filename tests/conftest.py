# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration and data for services and APIs

Tests run against the in-memory document store with the Redis cache disabled;
the environment is set before any judging module reads its settings.

ORGANIZATION REFERENCE:
- org-alpha: primary tenant used by most tests
- org-beta:  second tenant used by isolation tests
"""

import os

os.environ["STORE_BACKEND"] = "memory"
os.environ["CACHE_ENABLED"] = "false"
os.environ["APP_ENV"] = "development"
os.environ["LOG_FORMAT"] = "console"

import pytest
from datetime import date
from fastapi.testclient import TestClient

from judging.core.dependencies import get_store
from judging.core.tenant import Actor, TenantContext
from judging.main import app
from judging.models.candidate import CandidateCreate
from judging.models.enumerations import EventStatus, JudgeRole
from judging.models.event import EventCreate
from judging.models.score import ScoreSubmission
from judging.services.candidate_service import CandidateService
from judging.services.event_service import EventService
from judging.services.score_service import ScoreService
from judging.store.memory import InMemoryDocumentStore


# =============================================================================
# STORE AND TENANT FIXTURES
# =============================================================================

@pytest.fixture
def store():
    """Fresh in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def tenant():
    return TenantContext(organization_id="org-alpha")


@pytest.fixture
def other_tenant():
    return TenantContext(organization_id="org-beta")


# =============================================================================
# ACTOR FIXTURES
# =============================================================================

@pytest.fixture
def admin():
    return Actor(id="admin-1", name="Avery Admin", role=JudgeRole.ADMIN)


@pytest.fixture
def judges():
    """Five judges, enough to exercise the trimmed mean."""
    return [Actor(id=f"judge-{i}", name=f"Judge {i}") for i in range(1, 6)]


# =============================================================================
# EVENT AND CANDIDATE FIXTURES
# =============================================================================

@pytest.fixture
def event_service(store, tenant):
    return EventService(store, tenant)


@pytest.fixture
def candidate_service(store, tenant):
    return CandidateService(store, tenant)


@pytest.fixture
def score_service(store, tenant):
    return ScoreService(store, tenant)


@pytest.fixture
def active_event(event_service, admin):
    """An active audition event in org-alpha."""
    event = event_service.create(EventCreate(name="Fall Auditions", date=date(2026, 9, 12)), admin)
    return event_service.change_status(event.id, EventStatus.ACTIVE, admin)


@pytest.fixture
def candidates(candidate_service, active_event):
    """Four candidates registered out of audition-number order."""
    specs = [("Casey", 103), ("Alex", 101), ("Drew", 104), ("Blair", 102)]
    return {
        name: candidate_service.register(
            active_event.id,
            CandidateCreate(name=name, audition_number=number, email=f"{name.lower()}@example.com"),
        )
        for name, number in specs
    }


def full_scores(value: float) -> dict:
    """Same value in every category (execution/technique doubled)."""
    return {
        "kick": value,
        "jump": value,
        "turn": value,
        "performance": value,
        "execution": value * 2,
        "technique": value * 2,
    }


def submit(service: ScoreService, candidate_id: str, actor: Actor, scores: dict, comments: str = ""):
    return service.submit(
        ScoreSubmission(candidate_id=candidate_id, scores=scores, comments=comments),
        actor,
    )


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def api_store():
    """Store shared by the app for one test."""
    return InMemoryDocumentStore()


@pytest.fixture
def client(api_store):
    """TestClient for the FastAPI application over a fresh store."""
    app.dependency_overrides[get_store] = lambda: api_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def alpha_headers():
    return {
        "X-Organization-Id": "org-alpha",
        "X-User-Id": "admin-1",
        "X-User-Name": "Avery Admin",
        "X-User-Role": "admin",
    }


@pytest.fixture
def beta_headers():
    return {
        "X-Organization-Id": "org-beta",
        "X-User-Id": "admin-9",
        "X-User-Name": "Blake Admin",
        "X-User-Role": "admin",
    }


def judge_headers(judge_id: str, organization_id: str = "org-alpha") -> dict:
    return {
        "X-Organization-Id": organization_id,
        "X-User-Id": judge_id,
        "X-User-Name": judge_id.replace("-", " ").title(),
        "X-User-Role": "judge",
    }
