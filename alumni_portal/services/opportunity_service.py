"""
Opportunity Service

Job and mentorship postings created by alumni and moderated by admins.

Visibility is enforced here, not by callers:
- ADMIN   sees every posting
- ALUMNI  sees only the postings they created
- STUDENT sees only APPROVED postings
"""

import logging
from typing import List, Optional

from alumni_portal.core.errors import NotFound
from alumni_portal.db.store import COLLECTIONS, RecordStore
from alumni_portal.schemas.schemas import (
    Application,
    ApprovalStatus,
    NotificationType,
    Opportunity,
    OpportunityCreate,
    OpportunityType,
    UserRole,
)
from alumni_portal.services.notification_service import NotificationService
from alumni_portal.services.user_service import UserService
from alumni_portal.services.workflow import ensure_approval_transition

logger = logging.getLogger(__name__)


class OpportunityService:
    def __init__(self, store: RecordStore, users: UserService, notifications: NotificationService):
        self.store = store
        self.users = users
        self.notifications = notifications

    def create(self, created_by: str, draft: OpportunityCreate) -> Opportunity:
        """New posting, always PENDING. Every admin is told about it."""
        creator = self.users.get_by_id(created_by)
        opportunity = Opportunity(
            **draft.model_dump(),
            created_by=creator.id,
            creator_name=creator.name,
            approval_status=ApprovalStatus.PENDING,
        )
        self.store.insert(COLLECTIONS["opportunities"], opportunity.model_dump(mode="json"))
        self.notifications.notify_admins(
            f"New {opportunity.type.value} posted: {opportunity.title}",
            NotificationType.INFO,
        )
        logger.info("Opportunity %s '%s' created by %s", opportunity.id, opportunity.title, creator.id)
        return opportunity

    def get(self, opportunity_id: str) -> Opportunity:
        record = self.store.get(COLLECTIONS["opportunities"], opportunity_id)
        if record is None:
            raise NotFound(f"Opportunity {opportunity_id} not found")
        return Opportunity.model_validate(record)

    def set_approval_status(self, opportunity_id: str, status: ApprovalStatus) -> Opportunity:
        """Admin-only moderation; tells the creator the outcome."""
        opportunity = self.get(opportunity_id)
        ensure_approval_transition("Opportunity", opportunity.approval_status, status)

        opportunity.approval_status = status
        self.store.replace(COLLECTIONS["opportunities"], opportunity.id, opportunity.model_dump(mode="json"))
        self.notifications.notify(
            opportunity.created_by,
            f'Your job posting "{opportunity.title}" was {status.value}',
            NotificationType.SUCCESS if status == ApprovalStatus.APPROVED else NotificationType.ERROR,
        )
        logger.info("Opportunity %s is now %s", opportunity.id, status.value)
        return opportunity

    def list(
        self,
        role: UserRole,
        viewer_id: Optional[str] = None,
        search: Optional[str] = None,
        type: Optional[OpportunityType] = None,
    ) -> List[Opportunity]:
        opportunities = [
            Opportunity.model_validate(r) for r in self.store.all(COLLECTIONS["opportunities"])
        ]

        if role == UserRole.ADMIN:
            visible = opportunities
        elif role == UserRole.ALUMNI:
            visible = [o for o in opportunities if o.created_by == viewer_id]
        else:
            visible = [o for o in opportunities if o.approval_status == ApprovalStatus.APPROVED]

        if search:
            term = search.lower()
            visible = [o for o in visible if term in o.title.lower() or term in o.company.lower()]
        if type:
            visible = [o for o in visible if o.type == type]
        return visible

    def list_pending(self) -> List[Opportunity]:
        records = self.store.find(COLLECTIONS["opportunities"], approval_status=ApprovalStatus.PENDING.value)
        return [Opportunity.model_validate(r) for r in records]

    def delete(self, opportunity_id: str) -> None:
        """
        Administrative hard delete.

        Applications pointing at the posting are kept but marked
        is_invalidated, and each applicant gets a warning.
        """
        opportunity = self.get(opportunity_id)
        self.store.delete(COLLECTIONS["opportunities"], opportunity.id)

        records = self.store.find(COLLECTIONS["applications"], opportunity_id=opportunity.id)
        for record in records:
            application = Application.model_validate(record)
            if application.is_invalidated:
                continue
            application.is_invalidated = True
            self.store.replace(COLLECTIONS["applications"], application.id, application.model_dump(mode="json"))
            self.notifications.notify(
                application.student_id,
                f'The opportunity "{opportunity.title}" you applied to has been withdrawn',
                NotificationType.WARNING,
            )
        logger.info("Opportunity %s deleted, %d application(s) invalidated", opportunity.id, len(records))
