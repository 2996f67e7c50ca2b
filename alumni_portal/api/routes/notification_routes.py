"""
Notification Routes

GET /notifications - Own notifications, newest first, with unread count
PUT /notifications/read-all - Mark all own notifications read
PUT /notifications/{notification_id}/read - Mark one read (idempotent)

Clients poll GET /notifications every poll_interval_seconds.
"""

from fastapi import APIRouter, Depends

from alumni_portal.core.auth import get_current_user
from alumni_portal.schemas.schemas import MessageResponse, NotificationListResponse, User
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    notifications = portal.list_notifications(user.id)
    return NotificationListResponse(
        notifications=notifications,
        unread_count=portal.unread_count(user.id),
        poll_interval_seconds=portal.settings.notification_poll_seconds,
    )


@router.put("/read-all", response_model=MessageResponse)
async def mark_all_read(
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    flipped = portal.mark_all_notifications_read(user.id)
    return MessageResponse(message=f"{flipped} notification(s) marked as read")


@router.put("/{notification_id}/read", response_model=MessageResponse)
async def mark_read(
    notification_id: str,
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    """Unknown, foreign or already-read ids succeed without changing anything."""
    notification = portal.get_notification(notification_id)
    if notification and notification.user_id == user.id:
        portal.mark_notification_read(notification_id)
    return MessageResponse(message="Notification marked as read")
