"""
Analytics Service

Read-only aggregates for the admin dashboard. Breakdowns are returned as
lists of {name, value} in first-seen order, ready for charting.
Invalidated applications are left out of every application figure.
"""

from collections import Counter
from typing import Iterable, List

from alumni_portal.db.store import COLLECTIONS, RecordStore
from alumni_portal.schemas.schemas import (
    AnalyticsResponse,
    ApplicationStatus,
    ApprovalStatus,
    NameValue,
    UserStatus,
)


def _breakdown(names: Iterable[str]) -> List[NameValue]:
    return [NameValue(name=name, value=count) for name, count in Counter(names).items()]


class AnalyticsService:
    def __init__(self, store: RecordStore):
        self.store = store

    def get_analytics(self) -> AnalyticsResponse:
        opportunities = self.store.all(COLLECTIONS["opportunities"])
        applications = [
            a for a in self.store.all(COLLECTIONS["applications"]) if not a.get("is_invalidated")
        ]
        users = self.store.all(COLLECTIONS["users"])
        events = self.store.all(COLLECTIONS["events"])

        selections = [
            a for a in applications
            if a["admin_final_status"] == ApplicationStatus.FINAL_SELECTED.value
        ]
        pending = (
            sum(1 for u in users if u["status"] == UserStatus.PENDING.value)
            + sum(1 for o in opportunities if o["approval_status"] == ApprovalStatus.PENDING.value)
            + sum(1 for e in events if e["approval_status"] == ApprovalStatus.PENDING.value)
        )

        return AnalyticsResponse(
            total_jobs=len(opportunities),
            active_jobs=sum(
                1 for o in opportunities if o["approval_status"] == ApprovalStatus.APPROVED.value
            ),
            total_applications=len(applications),
            selections_by_dept=_breakdown(s.get("student_department") or "Unknown" for s in selections),
            applications_by_status=_breakdown(a["admin_final_status"] for a in applications),
            jobs_by_company=_breakdown(o.get("company") or "Unknown" for o in opportunities),
            total_events=len(events),
            active_users=len(users),
            pending_approvals=pending,
        )
