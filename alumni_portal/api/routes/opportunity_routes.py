"""
Opportunity Routes

POST /opportunities - Post a job/mentorship (alumni only, starts PENDING)
GET /opportunities - List postings visible to the caller, with search/type filters
GET /opportunities/pending - Moderation queue (admin only)
GET /opportunities/{opportunity_id} - Get one posting
PUT /opportunities/{opportunity_id}/status - Approve / reject (admin only)
DELETE /opportunities/{opportunity_id} - Remove posting (admin only)
POST /opportunities/{opportunity_id}/apply - Apply (student only)
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from alumni_portal.core.auth import (
    get_current_admin,
    get_current_alumni,
    get_current_student,
    get_current_user,
)
from alumni_portal.schemas.schemas import (
    Application,
    ApprovalStatus,
    ApprovalUpdate,
    MessageResponse,
    Opportunity,
    OpportunityCreate,
    OpportunityType,
    User,
    UserRole,
)
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/opportunities", tags=["Opportunities"])


@router.post("", response_model=Opportunity, status_code=201)
async def create_opportunity(
    draft: OpportunityCreate,
    alumni: User = Depends(get_current_alumni),
    portal: PortalService = Depends(get_portal),
):
    """Create a posting. It stays hidden from students until an admin approves it."""
    return portal.create_opportunity(alumni.id, draft)


@router.get("", response_model=List[Opportunity])
async def list_opportunities(
    search: Optional[str] = Query(None, description="Search in title and company"),
    type: Optional[OpportunityType] = Query(None),
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    """Admins see everything, alumni their own postings, students approved postings."""
    return portal.list_opportunities(user.role, user.id, search=search, type=type)


@router.get("/pending", response_model=List[Opportunity])
async def list_pending_opportunities(
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    return portal.list_pending_opportunities()


@router.get("/{opportunity_id}", response_model=Opportunity)
async def get_opportunity(
    opportunity_id: str,
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    opportunity = portal.get_opportunity(opportunity_id)
    # Same visibility rule as the listing
    visible = (
        user.role == UserRole.ADMIN
        or opportunity.created_by == user.id
        or (user.role == UserRole.STUDENT and opportunity.approval_status == ApprovalStatus.APPROVED)
    )
    if not visible:
        raise HTTPException(status_code=404, detail=f"Opportunity {opportunity_id} not found")
    return opportunity


@router.put("/{opportunity_id}/status", response_model=Opportunity)
async def set_opportunity_status(
    opportunity_id: str,
    update: ApprovalUpdate,
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    return portal.set_opportunity_status(opportunity_id, update.status)


@router.delete("/{opportunity_id}", response_model=MessageResponse)
async def delete_opportunity(
    opportunity_id: str,
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    """Hard delete. Existing applications are invalidated, not removed."""
    portal.delete_opportunity(opportunity_id)
    return MessageResponse(message="Opportunity deleted successfully")


@router.post("/{opportunity_id}/apply", response_model=Application, status_code=201)
async def apply_to_opportunity(
    opportunity_id: str,
    student: User = Depends(get_current_student),
    portal: PortalService = Depends(get_portal),
):
    """Apply to a posting. Students only. Cannot apply twice to the same posting."""
    return portal.apply(opportunity_id, student.id, student.name, student.department)
