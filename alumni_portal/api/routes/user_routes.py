"""
User Routes

GET /users - List users by role and status (admin only)
GET /users/pending - Alumni/admin signups awaiting approval (admin only)
PUT /users/me - Replace own profile
GET /users/{user_id} - Get a user's profile
PUT /users/{user_id}/status - Approve / reject / deactivate (admin only)
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from alumni_portal.core.auth import get_current_admin, get_current_user
from alumni_portal.schemas.schemas import User, UserRole, UserStatus, UserStatusUpdate
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=List[User])
async def list_users(
    role: UserRole = Query(...),
    status: UserStatus = Query(...),
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    return portal.list_users(role, status)


@router.get("/pending", response_model=List[User])
async def list_pending_users(
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    """Approval queue: pending alumni followed by pending admins."""
    return portal.list_pending_users()


@router.put("/me", response_model=User)
async def update_my_profile(
    profile: User,
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    """
    Replace the caller's own profile.

    id, role, status and created_at always come from the stored record;
    everything else is taken from the body as-is.
    """
    protected = {
        "id": user.id,
        "role": user.role,
        "status": user.status,
        "created_at": user.created_at,
    }
    return portal.update_profile(profile.model_copy(update=protected))


@router.get("/{user_id}", response_model=User)
async def get_user(
    user_id: str,
    user: User = Depends(get_current_user),
    portal: PortalService = Depends(get_portal),
):
    return portal.get_user(user_id)


@router.put("/{user_id}/status", response_model=User)
async def set_user_status(
    user_id: str,
    update: UserStatusUpdate,
    admin: User = Depends(get_current_admin),
    portal: PortalService = Depends(get_portal),
):
    """PENDING -> APPROVED/REJECTED, or any status -> INACTIVE."""
    return portal.set_user_status(user_id, update.status)
