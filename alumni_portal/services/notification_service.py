"""
Notification Service

Append-only user notifications plus mark-read.

Every state transition in the other services ends with one or more
notify() calls. Delivery is poll-based: clients re-read list_for() every
settings.notification_poll_seconds. Listeners registered with
add_listener() are called with each new notification for callers that
want push delivery (websocket fan-out, email, ...). Delivery waits for
the surrounding store transaction to commit, so an operation that rolls
back never pushes anything.
"""

import logging
from typing import Callable, Iterable, List, Optional

from alumni_portal.db.store import COLLECTIONS, RecordStore
from alumni_portal.schemas.schemas import (
    Notification,
    NotificationType,
    UserRole,
    UserStatus,
)

logger = logging.getLogger(__name__)

NotificationListener = Callable[[Notification], None]


class NotificationService:
    """
    Handles the notifications collection.
    Notifications are never deleted; only the read flag changes (False -> True).
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self._listeners: List[NotificationListener] = []

    def add_listener(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def notify(
        self,
        user_id: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
    ) -> Notification:
        """Append an unread notification for one user."""
        notification = Notification(user_id=user_id, message=message, type=type)
        self.store.insert(COLLECTIONS["notifications"], notification.model_dump(mode="json"))
        logger.debug("Notified %s [%s]: %s", user_id, type.value, message)

        if self._listeners:
            self.store.after_commit(lambda: self._deliver(notification))
        return notification

    def _deliver(self, notification: Notification) -> None:
        for listener in self._listeners:
            try:
                listener(notification)
            except Exception:
                logger.exception("Notification listener %r failed", listener)

    def notify_many(
        self,
        user_ids: Iterable[str],
        message: str,
        type: NotificationType = NotificationType.INFO,
    ) -> List[Notification]:
        return [self.notify(user_id, message, type) for user_id in dict.fromkeys(user_ids)]

    def notify_admins(
        self,
        message: str,
        type: NotificationType = NotificationType.INFO,
    ) -> List[Notification]:
        """Fan out to every admin account that is approved or still pending."""
        admins = [
            user for user in self.store.find(COLLECTIONS["users"], role=UserRole.ADMIN.value)
            if user["status"] in (UserStatus.APPROVED.value, UserStatus.PENDING.value)
        ]
        return self.notify_many([admin["id"] for admin in admins], message, type)

    def mark_read(self, notification_id: str) -> None:
        """Flip read to True. Unknown ids and already-read notifications are a no-op."""
        record = self.store.get(COLLECTIONS["notifications"], notification_id)
        if record is None or record["read"]:
            return
        record["read"] = True
        self.store.replace(COLLECTIONS["notifications"], notification_id, record)

    def mark_all_read(self, user_id: str) -> int:
        flipped = 0
        for record in self.store.find(COLLECTIONS["notifications"], user_id=user_id, read=False):
            record["read"] = True
            self.store.replace(COLLECTIONS["notifications"], record["id"], record)
            flipped += 1
        return flipped

    def list_for(self, user_id: str, unread_only: bool = False) -> List[Notification]:
        """All of a user's notifications, newest first."""
        records = self.store.find(COLLECTIONS["notifications"], user_id=user_id)
        notifications = [Notification.model_validate(r) for r in reversed(records)]
        if unread_only:
            notifications = [n for n in notifications if not n.read]
        return notifications

    def unread_count(self, user_id: str) -> int:
        return len(self.store.find(COLLECTIONS["notifications"], user_id=user_id, read=False))

    def get(self, notification_id: str) -> Optional[Notification]:
        record = self.store.get(COLLECTIONS["notifications"], notification_id)
        return Notification.model_validate(record) if record else None
