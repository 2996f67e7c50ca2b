"""
Authentication Utility - JWT bearer tokens and role gates.

Provides:
- JWT token creation/verification (identifies the caller, nothing more)
- FastAPI dependencies for protected routes, one per role

Passwords are not checked: login by email issues a token. Role checks
live here, at the boundary, so the services stay caller-agnostic.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from alumni_portal.core.config import get_settings
from alumni_portal.core.errors import NotFound
from alumni_portal.schemas.schemas import User, UserRole, UserStatus
from alumni_portal.services.portal import PortalService, get_portal

# Bearer token extractor
bearer_scheme = HTTPBearer()

BLOCKED_STATUSES = (UserStatus.REJECTED, UserStatus.INACTIVE)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def ensure_account_usable(user: User) -> None:
    """Rejected and deactivated accounts are locked out; pending ones may sign in."""
    if user.status in BLOCKED_STATUSES:
        raise HTTPException(status_code=403, detail=f"Account {user.status.value.lower()}")


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    portal: PortalService = Depends(get_portal),
) -> User:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: User = Depends(get_current_user)):
            return user
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception

    # Verify user still exists; role/status are read fresh, not from the token
    try:
        user = portal.get_user(user_id)
    except NotFound:
        raise credentials_exception

    ensure_account_usable(user)
    return user


def require_role(*roles: UserRole):
    """
    Dependency factory - caller must hold one of the given roles
    and the account must already be approved.
    """
    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            allowed = ", ".join(role.value.lower() for role in roles)
            raise HTTPException(status_code=403, detail=f"Only {allowed} accounts can do this")
        if user.status != UserStatus.APPROVED:
            raise HTTPException(status_code=403, detail="Account pending approval")
        return user
    return dependency


get_current_admin = require_role(UserRole.ADMIN)
get_current_alumni = require_role(UserRole.ALUMNI)
get_current_student = require_role(UserRole.STUDENT)
