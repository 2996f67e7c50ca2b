"""
Identity & Approval Service

Registration, lookup by email (no password check), profile replacement
and the admin-driven account status machine:

    PENDING  -> APPROVED | REJECTED
    any      -> INACTIVE

Initial status on registration is a policy: roles listed in
settings.auto_approve_roles start APPROVED, the rest wait in PENDING
for an admin.
"""

import logging
from typing import Iterable, List

from alumni_portal.core.errors import DuplicateEmail, InvalidTransition, NotFound
from alumni_portal.db.store import COLLECTIONS, DuplicateRecord, RecordStore
from alumni_portal.schemas.schemas import (
    NotificationType,
    RegisterRequest,
    User,
    UserRole,
    UserStatus,
)
from alumni_portal.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Welcome to Alumni Advantage! Complete your profile to get started."

USER_TRANSITIONS = {
    UserStatus.PENDING: {UserStatus.APPROVED, UserStatus.REJECTED, UserStatus.INACTIVE},
    UserStatus.APPROVED: {UserStatus.INACTIVE},
    UserStatus.REJECTED: {UserStatus.INACTIVE},
    UserStatus.INACTIVE: {UserStatus.INACTIVE},
}


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    def __init__(
        self,
        store: RecordStore,
        notifications: NotificationService,
        auto_approve_roles: Iterable[str] = ("STUDENT",),
    ):
        self.store = store
        self.notifications = notifications
        self.auto_approve_roles = {UserRole(role) for role in auto_approve_roles}

    def initial_status(self, role: UserRole) -> UserStatus:
        return UserStatus.APPROVED if role in self.auto_approve_roles else UserStatus.PENDING

    def _find_by_email(self, email: str):
        email = normalize_email(email)
        for record in self.store.all(COLLECTIONS["users"]):
            if normalize_email(record["email"]) == email:
                return record
        return None

    def register(self, profile: RegisterRequest) -> User:
        """
        Create a user account.

        Raises:
            DuplicateEmail: another account already uses this email
        """
        if self._find_by_email(profile.email):
            logger.warning("Registration refused, email in use: %s", profile.email)
            raise DuplicateEmail("User already exists")

        user = User(
            name=profile.name.strip(),
            email=normalize_email(profile.email),
            role=profile.role,
            status=self.initial_status(profile.role),
            department=profile.department,
            batch=profile.batch,
            designation=profile.designation,
            company=profile.company,
        )
        try:
            self.store.insert(COLLECTIONS["users"], user.model_dump(mode="json"))
        except DuplicateRecord as e:
            # Another process registered the same email after the check above
            raise DuplicateEmail("User already exists") from e
        self.notifications.notify(user.id, WELCOME_MESSAGE, NotificationType.SUCCESS)

        logger.info("Registered %s %s (%s) as %s", user.role.value, user.email, user.id, user.status.value)
        return user

    def authenticate(self, email: str) -> User:
        record = self._find_by_email(email)
        if record is None:
            raise NotFound(f"No account found for {email}")
        return User.model_validate(record)

    def get_by_id(self, user_id: str) -> User:
        record = self.store.get(COLLECTIONS["users"], user_id)
        if record is None:
            raise NotFound(f"User {user_id} not found")
        return User.model_validate(record)

    def update_profile(self, user: User) -> User:
        """Full-record replacement keyed by user.id."""
        if self.store.get(COLLECTIONS["users"], user.id) is None:
            raise NotFound("User not found")

        user = user.model_copy(update={"email": normalize_email(user.email)})
        other = self._find_by_email(user.email)
        if other and other["id"] != user.id:
            raise DuplicateEmail(f"{user.email} is already used by another account")

        try:
            self.store.replace(COLLECTIONS["users"], user.id, user.model_dump(mode="json"))
        except DuplicateRecord as e:
            raise DuplicateEmail(f"{user.email} is already used by another account") from e
        logger.info("Profile updated for %s", user.id)
        return user

    def set_status(self, user_id: str, status: UserStatus) -> User:
        """Admin-only. Moves the account along USER_TRANSITIONS and tells the user."""
        user = self.get_by_id(user_id)
        if status not in USER_TRANSITIONS[user.status]:
            logger.warning("Refused user %s transition %s -> %s", user_id, user.status.value, status.value)
            raise InvalidTransition(
                f"Cannot change account status from {user.status.value} to {status.value}"
            )

        user.status = status
        self.store.replace(COLLECTIONS["users"], user.id, user.model_dump(mode="json"))
        self.notifications.notify(
            user.id,
            f"Your account status has been updated to: {status.value}",
            NotificationType.SUCCESS if status == UserStatus.APPROVED else NotificationType.WARNING,
        )
        logger.info("User %s is now %s", user.id, status.value)
        return user

    def list_by_role_and_status(self, role: UserRole, status: UserStatus) -> List[User]:
        records = self.store.find(COLLECTIONS["users"], role=role.value, status=status.value)
        return [User.model_validate(r) for r in records]

    def list_pending_approvals(self) -> List[User]:
        """Alumni and admin signups waiting on an admin decision."""
        return (
            self.list_by_role_and_status(UserRole.ALUMNI, UserStatus.PENDING)
            + self.list_by_role_and_status(UserRole.ADMIN, UserStatus.PENDING)
        )
