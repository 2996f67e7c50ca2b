#!/usr/bin/env python3
"""
Identity & Approval Tests

Registration policy, duplicate emails, profile replacement and the
account status machine.
Run: pytest scripts/test_users.py
"""
import pytest
from pydantic import ValidationError

from alumni_portal.core.config import Settings
from alumni_portal.core.errors import DuplicateEmail, InvalidTransition, NotFound
from alumni_portal.db.store import COLLECTIONS, JsonFileRecordStore, MemoryRecordStore
from alumni_portal.schemas.schemas import (
    NotificationType,
    Project,
    RegisterRequest,
    UserRole,
    UserStatus,
)
from alumni_portal.services.portal import PortalService


def test_student_auto_approved_alumni_pending(portal):
    student = portal.register(RegisterRequest(name="Alice", email="a@x.edu", role=UserRole.STUDENT))
    alumni = portal.register(RegisterRequest(name="Sarah", email="s@x.com", role=UserRole.ALUMNI))
    admin = portal.register(RegisterRequest(name="Boss", email="b@x.edu", role=UserRole.ADMIN))

    assert student.status == UserStatus.APPROVED
    assert alumni.status == UserStatus.PENDING
    assert admin.status == UserStatus.PENDING
    assert student.skills == [] and student.projects == [] and student.education == []


def test_registration_policy_is_configurable():
    settings = Settings(
        store_backend="memory",
        auto_approve_roles=["STUDENT", "ALUMNI"],
        _env_file=None,
    )
    portal = PortalService(MemoryRecordStore(), settings)

    alumni = portal.register(RegisterRequest(name="Sarah", email="s@x.com", role=UserRole.ALUMNI))

    assert alumni.status == UserStatus.APPROVED


def test_register_sends_welcome(portal):
    user = portal.register(RegisterRequest(name="Alice", email="a@x.edu", role=UserRole.STUDENT))

    notifications = portal.list_notifications(user.id)
    assert len(notifications) == 1
    assert notifications[0].type == NotificationType.SUCCESS
    assert notifications[0].message.startswith("Welcome to Alumni Advantage!")


def test_duplicate_email_leaves_collection_unchanged(portal, store):
    portal.register(RegisterRequest(name="Alice", email="alice@x.edu", role=UserRole.STUDENT))
    users_before = store.all(COLLECTIONS["users"])
    notifications_before = store.all(COLLECTIONS["notifications"])

    with pytest.raises(DuplicateEmail):
        portal.register(RegisterRequest(name="Other", email=" Alice@X.edu ", role=UserRole.ALUMNI))

    assert store.all(COLLECTIONS["users"]) == users_before
    assert store.all(COLLECTIONS["notifications"]) == notifications_before


def test_register_requires_name_and_email():
    with pytest.raises(ValidationError):
        RegisterRequest(name="   ", email="a@x.edu", role=UserRole.STUDENT)
    with pytest.raises(ValidationError):
        RegisterRequest(name="Alice", email="", role=UserRole.STUDENT)
    # Syntax is not checked
    assert RegisterRequest(name="Alice", email="not-an-email", role=UserRole.STUDENT).email == "not-an-email"


def test_authenticate_by_email_only(portal, alice):
    assert portal.authenticate("ALICE@student.college.edu").id == alice.id
    with pytest.raises(NotFound):
        portal.authenticate("nobody@x.edu")


def test_update_profile_replaces_record(portal, alice):
    updated = alice.model_copy(update={
        "skills": ["Python", "SQL"],
        "projects": [Project(title="Placement bot")],
        "resume_link": "https://example.com/cv.pdf",
    })

    portal.update_profile(updated)

    stored = portal.get_user(alice.id)
    assert stored.skills == ["Python", "SQL"]
    assert stored.projects[0].title == "Placement bot"
    assert stored.resume_link == "https://example.com/cv.pdf"


def test_update_profile_unknown_id(portal, alice):
    with pytest.raises(NotFound):
        portal.update_profile(alice.model_copy(update={"id": "ghost"}))


def test_update_profile_cannot_take_another_email(portal, alice, john):
    with pytest.raises(DuplicateEmail):
        portal.update_profile(alice.model_copy(update={"email": john.email}))


def test_approve_pending_alumni_notifies(portal):
    sarah = portal.register(RegisterRequest(name="Sarah", email="s@x.com", role=UserRole.ALUMNI))

    portal.set_user_status(sarah.id, UserStatus.APPROVED)

    assert portal.get_user(sarah.id).status == UserStatus.APPROVED
    latest = portal.list_notifications(sarah.id)[0]
    assert latest.message == "Your account status has been updated to: APPROVED"
    assert latest.type == NotificationType.SUCCESS


def test_reject_and_deactivate_warn(portal, alice):
    sarah = portal.register(RegisterRequest(name="Sarah", email="s@x.com", role=UserRole.ALUMNI))

    portal.set_user_status(sarah.id, UserStatus.REJECTED)
    portal.set_user_status(alice.id, UserStatus.INACTIVE)

    assert portal.list_notifications(sarah.id)[0].type == NotificationType.WARNING
    assert portal.list_notifications(alice.id)[0].type == NotificationType.WARNING
    assert portal.get_user(alice.id).status == UserStatus.INACTIVE


@pytest.mark.parametrize("target", [UserStatus.PENDING, UserStatus.REJECTED, UserStatus.APPROVED])
def test_approved_account_only_moves_to_inactive(portal, alice, target):
    with pytest.raises(InvalidTransition):
        portal.set_user_status(alice.id, target)
    assert portal.get_user(alice.id).status == UserStatus.APPROVED


def test_set_status_unknown_user(portal):
    with pytest.raises(NotFound):
        portal.set_user_status("ghost", UserStatus.APPROVED)


def test_pending_queue_lists_alumni_then_admins(portal, alice):
    admin = portal.register(RegisterRequest(name="Boss", email="b@x.edu", role=UserRole.ADMIN))
    sarah = portal.register(RegisterRequest(name="Sarah", email="s@x.com", role=UserRole.ALUMNI))

    assert [u.id for u in portal.list_pending_users()] == [sarah.id, admin.id]
    assert [u.id for u in portal.list_users(UserRole.STUDENT, UserStatus.APPROVED)] == [alice.id]


def test_failed_write_to_disk_leaves_no_user(tmp_path, settings, monkeypatch):
    store = JsonFileRecordStore(str(tmp_path / "portal.json"))
    portal = PortalService(store, settings)

    def disk_full():
        raise OSError("No space left on device")

    monkeypatch.setattr(store, "flush", disk_full)
    with pytest.raises(OSError):
        portal.register(RegisterRequest(name="Alice", email="a@x.edu", role=UserRole.STUDENT))

    assert store.all(COLLECTIONS["users"]) == []
    assert store.all(COLLECTIONS["notifications"]) == []
