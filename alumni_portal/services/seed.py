"""
Demo population loaded on first start.

One approved admin, one approved alumnus (John Doe, Google), one alumnus
waiting for approval, one approved student (Alice Smith), an approved and
a pending opportunity, and an approved event. Written straight to the
store so the seed does not generate welcome notifications.
"""

import datetime as dt
import logging

from alumni_portal.db.store import COLLECTIONS
from alumni_portal.schemas.schemas import (
    ApprovalStatus,
    Education,
    Event,
    Opportunity,
    OpportunityType,
    Project,
    User,
    UserRole,
    UserStatus,
)

logger = logging.getLogger(__name__)


def demo_users():
    return [
        User(
            id="admin-1", name="Super Admin", email="admin@college.edu",
            role=UserRole.ADMIN, status=UserStatus.APPROVED,
            department="Placement Cell", designation="Director",
        ),
        User(
            id="alumni-1", name="John Doe", email="john@tech.com",
            role=UserRole.ALUMNI, status=UserStatus.APPROVED,
            company="Google", designation="Senior Engineer", batch="2018",
            skills=["System Design", "Cloud Architecture", "Mentorship"],
            education=[Education(id="edu-1", institution="College of Engineering",
                                 degree="B.Tech", major="Computer Science", year="2018")],
        ),
        User(
            id="alumni-pending-1", name="Sarah Connor", email="sarah@cyberdyne.com",
            role=UserRole.ALUMNI, status=UserStatus.PENDING,
            company="Cyberdyne Systems", designation="Security Lead", batch="2019",
            skills=["Security", "AI"],
        ),
        User(
            id="student-1", name="Alice Smith", email="alice@student.college.edu",
            role=UserRole.STUDENT, status=UserStatus.APPROVED,
            department="Computer Science", batch="2024",
            resume_link="https://example.com/resume.pdf",
            skills=["React", "TypeScript", "Node.js", "Figma"],
            projects=[Project(id="proj-1", title="E-Commerce App",
                              description="Built a full-stack shopping app using MERN stack.",
                              link="https://github.com/alice/shop")],
            education=[Education(id="edu-1", institution="College of Engineering",
                                 degree="B.Tech", major="Computer Science", year="2024")],
        ),
    ]


def demo_opportunities():
    return [
        Opportunity(
            id="opp-1", created_by="alumni-1", creator_name="John Doe",
            type=OpportunityType.JOB, title="Frontend Engineer",
            description="We are looking for a skilled Frontend Engineer to join our team. "
                        "You will be working on our core product using React and TypeScript.",
            company="Google", location="Bangalore (Hybrid)",
            required_skills=["React", "TypeScript", "Redux"],
            deadline=dt.date(2024, 12, 31), approval_status=ApprovalStatus.APPROVED,
        ),
        Opportunity(
            id="opp-2", created_by="alumni-1", creator_name="John Doe",
            type=OpportunityType.MENTORSHIP, title="Career Guidance Session",
            description="One-on-one mentorship for final year students interested in FAANG companies.",
            company="Google", location="Online",
            required_skills=["DSA", "System Design"],
            deadline=dt.date(2025, 1, 15), approval_status=ApprovalStatus.PENDING,
        ),
    ]


def demo_events():
    return [
        Event(
            id="evt-1", title="Tech Talk: Future of AI", date=dt.date(2024, 11, 20),
            description="Join us for an insightful session on how AI is transforming the software industry.",
            location="Auditorium A", created_by="alumni-1", creator_name="John Doe",
            approval_status=ApprovalStatus.APPROVED,
        ),
    ]


def seed_demo_data(portal) -> bool:
    """Load the demo population if the store has no users yet. Returns True if seeded."""
    store = portal.store
    with store.transaction():
        if store.all(COLLECTIONS["users"]):
            return False
        for collection, records in (
            ("users", demo_users()),
            ("opportunities", demo_opportunities()),
            ("events", demo_events()),
        ):
            for record in records:
                store.insert(COLLECTIONS[collection], record.model_dump(mode="json"))
    logger.info("Seeded demo data")
    return True
