#!/usr/bin/env python3
"""
Event Workflow Tests
Run: pytest scripts/test_events.py
"""
import datetime as dt

import pytest

from alumni_portal.core.errors import AlreadyRegistered, InvalidTransition, NotFound
from alumni_portal.schemas.schemas import (
    ApprovalStatus,
    EventCreate,
    NotificationType,
    UserRole,
)


@pytest.fixture
def tech_talk(portal, admin, john):
    event = portal.create_event(john.id, EventCreate(title="Tech Talk", date=dt.date(2025, 3, 1)))
    return portal.set_event_status(event.id, ApprovalStatus.APPROVED)


def test_proposed_event_is_pending(portal, admin, john):
    event = portal.create_event(john.id, EventCreate(title="Alumni Meetup", date=dt.date(2025, 5, 10)))

    assert event.approval_status == ApprovalStatus.PENDING
    assert event.registrations == []
    assert event.location == "Online"
    assert event.creator_name == "John"
    assert portal.list_notifications(admin.id)[0].message == "New event proposed: Alumni Meetup"
    assert [e.id for e in portal.list_pending_events()] == [event.id]


def test_approval_notifies_creator(portal, tech_talk, john):
    latest = portal.list_notifications(john.id)[0]
    assert latest.message == 'Your event "Tech Talk" was APPROVED'
    assert latest.type == NotificationType.SUCCESS


def test_decided_event_cannot_change(portal, tech_talk):
    with pytest.raises(InvalidTransition):
        portal.set_event_status(tech_talk.id, ApprovalStatus.REJECTED)


def test_register_once(portal, tech_talk, alice):
    event = portal.register_for_event(tech_talk.id, alice.id)

    assert event.registrations == [alice.id]
    latest = portal.list_notifications(alice.id)[0]
    assert latest.message == "Registered successfully for event: Tech Talk"
    assert latest.type == NotificationType.SUCCESS


def test_register_twice_is_refused(portal, tech_talk, alice):
    portal.register_for_event(tech_talk.id, alice.id)
    notifications_before = portal.list_notifications(alice.id)

    with pytest.raises(AlreadyRegistered):
        portal.register_for_event(tech_talk.id, alice.id)

    assert portal.get_event(tech_talk.id).registrations == [alice.id]
    assert portal.list_notifications(alice.id) == notifications_before


def test_cannot_register_for_pending_event(portal, admin, john, alice):
    event = portal.create_event(john.id, EventCreate(title="Hackathon", date=dt.date(2025, 6, 1)))

    with pytest.raises(InvalidTransition):
        portal.register_for_event(event.id, alice.id)


def test_unknown_event(portal, alice):
    with pytest.raises(NotFound):
        portal.register_for_event("ghost", alice.id)


def test_visibility_per_role(portal, admin, john, alice, tech_talk):
    pending = portal.create_event(john.id, EventCreate(title="Hackathon", date=dt.date(2025, 6, 1)))

    assert {e.id for e in portal.list_events(UserRole.STUDENT, alice.id)} == {tech_talk.id}
    assert {e.id for e in portal.list_events(UserRole.ALUMNI, john.id)} == {tech_talk.id, pending.id}
    assert {e.id for e in portal.list_events(UserRole.ADMIN, admin.id)} == {tech_talk.id, pending.id}
