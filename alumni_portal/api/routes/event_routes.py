"""
Event Routes

POST /events - Propose an event (alumni or admin, starts PENDING)
GET /events - List events visible to the caller
GET /events/pending - Moderation queue (admin only)
PUT /events/{event_id}/status - Approve / reject (admin only)
POST /events/{event_id}/register - Register for an approved event (student only)
"""

from typing import List

from fastapi import APIRouter, Depends

from alumni_portal.core.auth import (
    get_current_admin,
    get_current_student,
    get_current_user,
    require_role,
)
from alumni_portal.schemas.schemas import ApprovalUpdate, Event, EventCreate, User, UserRole
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/events", tags=["Events"])


@router.post("", response_model=Event, status_code=201)
async def create_event(
    draft: EventCreate,
    creator: User = Depends(require_role(UserRole.ALUMNI, UserRole.ADMIN)),
    portal: PortalService = Depends(get_portal),
):
    return portal.create_event(creator.id, draft)


@router.get("", response_model=List[Event])
async def list_events(
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    return portal.list_events(user.role, user.id)


@router.get("/pending", response_model=List[Event])
async def list_pending_events(
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    return portal.list_pending_events()


@router.put("/{event_id}/status", response_model=Event)
async def set_event_status(
    event_id: str,
    update: ApprovalUpdate,
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    return portal.set_event_status(event_id, update.status)


@router.post("/{event_id}/register", response_model=Event)
async def register_for_event(
    event_id: str,
    student: User = Depends(get_current_student),
    portal: PortalService = Depends(get_portal),
):
    return portal.register_for_event(event_id, student.id)
