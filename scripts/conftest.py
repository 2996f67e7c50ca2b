"""
Shared fixtures: an in-memory portal per test and an HTTP client bound to it.
"""
import os

# Must be set before alumni_portal.main builds the app
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("SEED_DEMO_DATA", "false")

import pytest
from fastapi.testclient import TestClient

from alumni_portal.core.config import Settings, get_settings
from alumni_portal.db.store import MemoryRecordStore
from alumni_portal.schemas.schemas import (
    ApprovalStatus,
    OpportunityCreate,
    OpportunityType,
    RegisterRequest,
    UserRole,
    UserStatus,
)
from alumni_portal.services.portal import PortalService, get_portal
from alumni_portal.services.seed import seed_demo_data

get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(store_backend="memory", seed_demo_data=False, _env_file=None)


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def portal(store, settings):
    return PortalService(store, settings)


@pytest.fixture
def seeded_portal(portal):
    seed_demo_data(portal)
    return portal


@pytest.fixture
def admin(portal):
    """An approved admin (registered, then approved directly in the store)."""
    user = portal.register(RegisterRequest(name="Root", email="root@college.edu", role=UserRole.ADMIN))
    return approve(portal, user.id)


@pytest.fixture
def john(portal):
    user = portal.register(RegisterRequest(
        name="John", email="john@tech.com", role=UserRole.ALUMNI,
        company="Google", designation="Senior Engineer", batch="2018",
    ))
    return approve(portal, user.id)


@pytest.fixture
def alice(portal):
    return portal.register(RegisterRequest(
        name="Alice", email="alice@student.college.edu", role=UserRole.STUDENT,
        department="Computer Science", batch="2024",
    ))


@pytest.fixture
def frontend_job(portal, john, admin):
    """John's "Frontend Engineer" posting, already approved."""
    opportunity = portal.create_opportunity(john.id, OpportunityCreate(
        type=OpportunityType.JOB, title="Frontend Engineer", company="Google",
        location="Bangalore", required_skills=["React", "TypeScript"],
    ))
    return portal.set_opportunity_status(opportunity.id, ApprovalStatus.APPROVED)


def approve(portal, user_id):
    if portal.get_user(user_id).status == UserStatus.APPROVED:
        return portal.get_user(user_id)
    return portal.set_user_status(user_id, UserStatus.APPROVED)


@pytest.fixture
def client(portal):
    from alumni_portal.main import app

    app.dependency_overrides[get_portal] = lambda: portal
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(client, email):
    response = client.post("/api/auth/login", json={"email": email})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
