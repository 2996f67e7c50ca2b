#!/usr/bin/env python3
"""
MongoDB Record Store Tests

MongoRecordStore against an in-process mongomock database: _id handling,
insertion order, unique indexes, and the portal workflows on top of it.
Run: pytest scripts/test_mongo_store.py
"""
import mongomock
import pytest

from alumni_portal.core.errors import DuplicateApplication, DuplicateEmail
from alumni_portal.db.mongodb import MongoRecordStore
from alumni_portal.db.store import COLLECTIONS, DuplicateRecord
from alumni_portal.schemas.schemas import (
    ApplicationStatus,
    ApprovalStatus,
    NotificationType,
    OpportunityCreate,
    RegisterRequest,
    UserRole,
    UserStatus,
)
from alumni_portal.services.portal import PortalService

USERS = COLLECTIONS["users"]


@pytest.fixture
def mongo_store():
    return MongoRecordStore(mongomock.MongoClient()["alumni_portal_test"])


@pytest.fixture
def mongo_portal(mongo_store, settings):
    return PortalService(mongo_store, settings)


def test_records_come_back_without_mongo_id(mongo_store):
    record = {"id": "u1", "email": "a@x.edu", "name": "A"}
    mongo_store.insert(USERS, record)

    assert "_id" not in record
    assert mongo_store.get(USERS, "u1") == {"id": "u1", "email": "a@x.edu", "name": "A"}
    assert all("_id" not in r for r in mongo_store.all(USERS))
    assert mongo_store.get(USERS, "missing") is None


def test_insertion_order_survives_replace(mongo_store):
    for user_id in ("u1", "u2", "u3"):
        mongo_store.insert(USERS, {"id": user_id, "email": f"{user_id}@x.edu", "role": "STUDENT"})

    assert mongo_store.replace(USERS, "u1", {"id": "u1", "email": "u1@x.edu", "role": "ALUMNI"})
    assert not mongo_store.replace(USERS, "ghost", {"id": "ghost", "email": "g@x.edu"})

    assert [r["id"] for r in mongo_store.all(USERS)] == ["u1", "u2", "u3"]
    assert [r["id"] for r in mongo_store.find(USERS, role="STUDENT")] == ["u2", "u3"]


def test_delete(mongo_store):
    mongo_store.insert(USERS, {"id": "u1", "email": "a@x.edu"})

    assert mongo_store.delete(USERS, "u1")
    assert not mongo_store.delete(USERS, "u1")
    assert mongo_store.all(USERS) == []


def test_unique_indexes(mongo_store):
    mongo_store.insert(USERS, {"id": "u1", "email": "a@x.edu"})

    with pytest.raises(DuplicateRecord):
        mongo_store.insert(USERS, {"id": "u1", "email": "other@x.edu"})
    with pytest.raises(DuplicateRecord):
        mongo_store.insert(USERS, {"id": "u2", "email": "a@x.edu"})

    applications = COLLECTIONS["applications"]
    mongo_store.insert(applications, {"id": "a1", "student_id": "s", "opportunity_id": "o"})
    with pytest.raises(DuplicateRecord):
        mongo_store.insert(applications, {"id": "a2", "student_id": "s", "opportunity_id": "o"})


def test_workflow_on_mongo(mongo_portal):
    john = mongo_portal.register(RegisterRequest(name="John", email="john@tech.com", role=UserRole.ALUMNI))
    mongo_portal.set_user_status(john.id, UserStatus.APPROVED)
    alice = mongo_portal.register(RegisterRequest(
        name="Alice", email="alice@x.edu", role=UserRole.STUDENT, department="Computer Science",
    ))
    job = mongo_portal.create_opportunity(john.id, OpportunityCreate(title="Frontend Engineer"))
    mongo_portal.set_opportunity_status(job.id, ApprovalStatus.APPROVED)

    application = mongo_portal.apply(job.id, alice.id)
    mongo_portal.finalize(application.id, ApplicationStatus.FINAL_SELECTED)

    latest = mongo_portal.list_notifications(alice.id)[0]
    assert latest.type == NotificationType.SUCCESS
    assert "Frontend Engineer" in latest.message
    assert mongo_portal.get_analytics().selections_by_dept[0].name == "Computer Science"


def test_concurrent_registration_surfaces_duplicate_email(mongo_portal, monkeypatch):
    mongo_portal.register(RegisterRequest(name="Alice", email="alice@x.edu", role=UserRole.STUDENT))

    # Another process wins the race between the email check and the insert
    monkeypatch.setattr(mongo_portal.users, "_find_by_email", lambda email: None)

    with pytest.raises(DuplicateEmail):
        mongo_portal.register(RegisterRequest(name="Alice 2", email="alice@x.edu", role=UserRole.STUDENT))
    assert len(mongo_portal.store.all(USERS)) == 1


def test_concurrent_apply_surfaces_duplicate_application(mongo_portal, mongo_store, monkeypatch):
    john = mongo_portal.register(RegisterRequest(name="John", email="john@tech.com", role=UserRole.ALUMNI))
    mongo_portal.set_user_status(john.id, UserStatus.APPROVED)
    alice = mongo_portal.register(RegisterRequest(name="Alice", email="alice@x.edu", role=UserRole.STUDENT))
    job = mongo_portal.create_opportunity(john.id, OpportunityCreate(title="SRE"))
    mongo_portal.set_opportunity_status(job.id, ApprovalStatus.APPROVED)
    mongo_portal.apply(job.id, alice.id)

    find = mongo_store.find

    def miss_existing_applications(collection, **filters):
        if collection == COLLECTIONS["applications"]:
            return []
        return find(collection, **filters)

    monkeypatch.setattr(mongo_store, "find", miss_existing_applications)

    with pytest.raises(DuplicateApplication):
        mongo_portal.apply(job.id, alice.id)
    assert len(mongo_store.all(COLLECTIONS["applications"])) == 1
