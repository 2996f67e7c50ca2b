"""
Application Routes

GET /applications - List applications (admin: any filter, alumni: own posting, student: own)
PUT /applications/{application_id}/recommendation - Alumni recommendation (posting creator only)
PUT /applications/{application_id}/final-status - Final decision (admin only)

Applying lives under POST /opportunities/{id}/apply.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from alumni_portal.core.auth import get_current_admin, get_current_alumni, get_current_user
from alumni_portal.core.errors import PermissionDenied
from alumni_portal.schemas.schemas import (
    Application,
    FinalStatusUpdate,
    RecommendationUpdate,
    User,
    UserRole,
)
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=List[Application])
async def list_applications(
    opportunity_id: Optional[str] = Query(None),
    student_id: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    """Pass one filter. No filter at all is the admin-only "every application" view."""
    if user.role == UserRole.STUDENT:
        return portal.list_applications(student_id=user.id)

    if user.role == UserRole.ALUMNI:
        if not opportunity_id:
            raise HTTPException(status_code=400, detail="opportunity_id is required")
        opportunity = portal.get_opportunity(opportunity_id)
        if opportunity.created_by != user.id:
            raise PermissionDenied("You can only review applicants for your own postings")
        return portal.list_applications(opportunity_id=opportunity_id)

    return portal.list_applications(opportunity_id=opportunity_id, student_id=student_id)


@router.put("/{application_id}/recommendation", response_model=Application)
async def recommend_application(
    application_id: str,
    update: RecommendationUpdate,
    alumni: User = Depends(get_current_alumni),
    portal: PortalService = Depends(get_portal),
):
    """Advisory only; can be changed any number of times."""
    application = portal.get_application(application_id)
    opportunity = portal.get_opportunity(application.opportunity_id)
    if opportunity.created_by != alumni.id:
        raise PermissionDenied("Only the posting's creator can recommend applicants")
    return portal.recommend(application_id, update.recommendation, update.comment)


@router.put("/{application_id}/final-status", response_model=Application)
async def finalize_application(
    application_id: str,
    update: FinalStatusUpdate,
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    return portal.finalize(application_id, update.status)
