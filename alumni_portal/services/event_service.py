"""
Event Service

Events proposed by alumni (or admins), moderated with the same
PENDING -> APPROVED | REJECTED machine as opportunities, and open to
student registration once approved. Registrations only grow: there is
no capacity limit and no unregister.
"""

import logging
from typing import List, Optional

from alumni_portal.core.errors import AlreadyRegistered, InvalidTransition, NotFound
from alumni_portal.db.store import COLLECTIONS, RecordStore
from alumni_portal.schemas.schemas import (
    ApprovalStatus,
    Event,
    EventCreate,
    NotificationType,
    UserRole,
)
from alumni_portal.services.notification_service import NotificationService
from alumni_portal.services.user_service import UserService
from alumni_portal.services.workflow import ensure_approval_transition

logger = logging.getLogger(__name__)


class EventService:
    def __init__(self, store: RecordStore, users: UserService, notifications: NotificationService):
        self.store = store
        self.users = users
        self.notifications = notifications

    def create(self, created_by: str, draft: EventCreate) -> Event:
        creator = self.users.get_by_id(created_by)
        event = Event(
            **draft.model_dump(),
            created_by=creator.id,
            creator_name=creator.name,
            approval_status=ApprovalStatus.PENDING,
            registrations=[],
        )
        self.store.insert(COLLECTIONS["events"], event.model_dump(mode="json"))
        self.notifications.notify_admins(f"New event proposed: {event.title}", NotificationType.INFO)
        logger.info("Event %s '%s' proposed by %s", event.id, event.title, creator.id)
        return event

    def get(self, event_id: str) -> Event:
        record = self.store.get(COLLECTIONS["events"], event_id)
        if record is None:
            raise NotFound(f"Event {event_id} not found")
        return Event.model_validate(record)

    def set_approval_status(self, event_id: str, status: ApprovalStatus) -> Event:
        event = self.get(event_id)
        ensure_approval_transition("Event", event.approval_status, status)

        event.approval_status = status
        self.store.replace(COLLECTIONS["events"], event.id, event.model_dump(mode="json"))
        self.notifications.notify(
            event.created_by,
            f'Your event "{event.title}" was {status.value}',
            NotificationType.SUCCESS if status == ApprovalStatus.APPROVED else NotificationType.WARNING,
        )
        logger.info("Event %s is now %s", event.id, status.value)
        return event

    def register(self, event_id: str, student_id: str) -> Event:
        """
        Add a student to the registration list.

        Raises:
            NotFound: unknown event or student
            InvalidTransition: event is not approved
            AlreadyRegistered: student is already on the list
        """
        event = self.get(event_id)
        student = self.users.get_by_id(student_id)

        if event.approval_status != ApprovalStatus.APPROVED:
            raise InvalidTransition(f'Event "{event.title}" is not open for registration')
        if student.id in event.registrations:
            logger.warning("Student %s already registered for event %s", student.id, event.id)
            raise AlreadyRegistered("You are already registered for this event.")

        event.registrations.append(student.id)
        self.store.replace(COLLECTIONS["events"], event.id, event.model_dump(mode="json"))
        self.notifications.notify(
            student.id,
            f"Registered successfully for event: {event.title}",
            NotificationType.SUCCESS,
        )
        logger.info("Student %s registered for event %s", student.id, event.id)
        return event

    def list(self, role: UserRole, viewer_id: Optional[str] = None) -> List[Event]:
        """ADMIN: all. ALUMNI: own + approved. Everyone else: approved only."""
        events = [Event.model_validate(r) for r in self.store.all(COLLECTIONS["events"])]
        if role == UserRole.ADMIN:
            return events
        if role == UserRole.ALUMNI:
            return [
                e for e in events
                if e.created_by == viewer_id or e.approval_status == ApprovalStatus.APPROVED
            ]
        return [e for e in events if e.approval_status == ApprovalStatus.APPROVED]

    def list_pending(self) -> List[Event]:
        records = self.store.find(COLLECTIONS["events"], approval_status=ApprovalStatus.PENDING.value)
        return [Event.model_validate(r) for r in records]
