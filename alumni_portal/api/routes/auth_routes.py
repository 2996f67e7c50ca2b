"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login by email and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, Depends

from alumni_portal.core.auth import create_access_token, ensure_account_usable, get_current_user
from alumni_portal.schemas.schemas import LoginRequest, RegisterRequest, TokenResponse, User
from alumni_portal.services.portal import PortalService, get_portal

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=User, status_code=201)
async def register(request: RegisterRequest, portal: PortalService = Depends(get_portal)):
    """
    Register a new user account.

    Students are approved straight away; alumni and admin accounts
    wait for an admin to approve them (see AUTO_APPROVE_ROLES).
    """
    return portal.register(request)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, portal: PortalService = Depends(get_portal)):
    """
    Login and receive JWT access token. The password, if sent, is ignored.

    Include token in requests: Authorization: Bearer <token>
    """
    user = portal.authenticate(request.email)
    ensure_account_usable(user)

    token = create_access_token(data={"sub": user.id, "role": user.role.value})
    return TokenResponse(access_token=token, user=user)


@router.get("/me", response_model=User)
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated user's record."""
    return user
