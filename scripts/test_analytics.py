#!/usr/bin/env python3
"""
Analytics Tests
Run: pytest scripts/test_analytics.py
"""
from alumni_portal.schemas.schemas import (
    ApplicationStatus,
    ApprovalStatus,
    OpportunityCreate,
    RegisterRequest,
    UserRole,
)


def as_dict(breakdown):
    return {item.name: item.value for item in breakdown}


def test_empty_store(portal):
    analytics = portal.get_analytics()

    assert analytics.total_jobs == 0
    assert analytics.total_applications == 0
    assert analytics.selections_by_dept == []
    assert analytics.pending_approvals == 0


def test_selection_counted_by_department(portal, frontend_job, alice):
    application = portal.apply(frontend_job.id, alice.id)
    portal.finalize(application.id, ApplicationStatus.FINAL_SELECTED)

    analytics = portal.get_analytics()

    assert as_dict(analytics.selections_by_dept)["Computer Science"] >= 1
    assert as_dict(analytics.applications_by_status) == {"FINAL_SELECTED": 1}


def test_totals_and_breakdowns(portal, admin, john, alice, frontend_job):
    portal.create_opportunity(john.id, OpportunityCreate(title="Data Engineer", company="Stripe"))
    bob = portal.register(RegisterRequest(name="Bob", email="bob@x.edu", role=UserRole.STUDENT, department="EEE"))
    portal.register(RegisterRequest(name="Sarah", email="s@x.com", role=UserRole.ALUMNI))

    first = portal.apply(frontend_job.id, alice.id)
    portal.apply(frontend_job.id, bob.id)
    portal.finalize(first.id, ApplicationStatus.SHORTLISTED)

    analytics = portal.get_analytics()

    assert analytics.total_jobs == 2
    assert analytics.active_jobs == 1
    assert analytics.total_applications == 2
    assert as_dict(analytics.applications_by_status) == {"SHORTLISTED": 1, "APPLIED": 1}
    assert as_dict(analytics.jobs_by_company) == {"Google": 1, "Stripe": 1}
    assert analytics.active_users == 5
    # Sarah plus the unmoderated Stripe posting
    assert analytics.pending_approvals == 2


def test_invalidated_applications_are_excluded(portal, frontend_job, alice):
    application = portal.apply(frontend_job.id, alice.id)
    portal.finalize(application.id, ApplicationStatus.FINAL_SELECTED)

    portal.delete_opportunity(frontend_job.id)
    analytics = portal.get_analytics()

    assert analytics.total_applications == 0
    assert analytics.selections_by_dept == []


def test_seeded_population(seeded_portal):
    analytics = seeded_portal.get_analytics()

    assert analytics.total_jobs == 2
    assert analytics.active_jobs == 1
    assert analytics.total_events == 1
    assert analytics.active_users == 4
    # alumni-pending-1 and opp-2
    assert analytics.pending_approvals == 2
    assert seeded_portal.get_opportunity("opp-2").approval_status == ApprovalStatus.PENDING
