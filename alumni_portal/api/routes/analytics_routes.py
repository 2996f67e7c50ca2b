"""
Analytics Routes

GET /analytics - Dashboard aggregates (admin only)
"""

from fastapi import APIRouter, Depends

from alumni_portal.core.auth import get_current_admin
from alumni_portal.schemas.schemas import AnalyticsResponse, User
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=AnalyticsResponse)
async def get_analytics(
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    """Totals plus selections by department, applications by status and postings by company."""
    return portal.get_analytics()
