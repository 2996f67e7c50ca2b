"""
Portal Service - the single entry point the API (or any other caller) uses.

Built once per process (or once per test) around an injected RecordStore.
Every operation runs inside store.transaction(): the mutation and the
notifications it emits are applied together or not at all, and two
requests never interleave their read-modify-write cycles.

Usage:
    portal = PortalService(MemoryRecordStore())
    alice = portal.register(RegisterRequest(name="Alice", email="a@x.edu", role=UserRole.STUDENT))
"""

from functools import lru_cache
from typing import List, Optional

from alumni_portal.core.config import Settings, get_settings
from alumni_portal.db.store import RecordStore, get_record_store
from alumni_portal.schemas.schemas import (
    AlumniRecommendation,
    AnalyticsResponse,
    Application,
    ApplicationStatus,
    ApprovalStatus,
    Event,
    EventCreate,
    Notification,
    Opportunity,
    OpportunityCreate,
    OpportunityType,
    RegisterRequest,
    User,
    UserRole,
    UserStatus,
)
from alumni_portal.services.analytics_service import AnalyticsService
from alumni_portal.services.application_service import ApplicationService
from alumni_portal.services.event_service import EventService
from alumni_portal.services.notification_service import NotificationService
from alumni_portal.services.opportunity_service import OpportunityService
from alumni_portal.services.user_service import UserService


class PortalService:
    def __init__(self, store: RecordStore, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.store = store
        self.settings = settings

        self.notifications = NotificationService(store)
        self.users = UserService(store, self.notifications, settings.auto_approve_roles)
        self.opportunities = OpportunityService(store, self.users, self.notifications)
        self.events = EventService(store, self.users, self.notifications)
        self.applications = ApplicationService(
            store,
            self.users,
            self.opportunities,
            self.notifications,
            enforce_forward_only=settings.enforce_forward_only_applications,
        )
        self.analytics = AnalyticsService(store)

    # ============================================================
    # IDENTITY & APPROVAL
    # ============================================================

    def register(self, profile: RegisterRequest) -> User:
        with self.store.transaction():
            return self.users.register(profile)

    def authenticate(self, email: str) -> User:
        with self.store.transaction():
            return self.users.authenticate(email)

    def update_profile(self, user: User) -> User:
        with self.store.transaction():
            return self.users.update_profile(user)

    def get_user(self, user_id: str) -> User:
        with self.store.transaction():
            return self.users.get_by_id(user_id)

    def set_user_status(self, user_id: str, status: UserStatus) -> User:
        with self.store.transaction():
            return self.users.set_status(user_id, status)

    def list_users(self, role: UserRole, status: UserStatus) -> List[User]:
        with self.store.transaction():
            return self.users.list_by_role_and_status(role, status)

    def list_pending_users(self) -> List[User]:
        with self.store.transaction():
            return self.users.list_pending_approvals()

    # ============================================================
    # OPPORTUNITIES
    # ============================================================

    def create_opportunity(self, created_by: str, draft: OpportunityCreate) -> Opportunity:
        with self.store.transaction():
            return self.opportunities.create(created_by, draft)

    def set_opportunity_status(self, opportunity_id: str, status: ApprovalStatus) -> Opportunity:
        with self.store.transaction():
            return self.opportunities.set_approval_status(opportunity_id, status)

    def list_opportunities(
        self,
        role: UserRole,
        viewer_id: Optional[str] = None,
        search: Optional[str] = None,
        type: Optional[OpportunityType] = None,
    ) -> List[Opportunity]:
        with self.store.transaction():
            return self.opportunities.list(role, viewer_id, search=search, type=type)

    def list_pending_opportunities(self) -> List[Opportunity]:
        with self.store.transaction():
            return self.opportunities.list_pending()

    def get_opportunity(self, opportunity_id: str) -> Opportunity:
        with self.store.transaction():
            return self.opportunities.get(opportunity_id)

    def delete_opportunity(self, opportunity_id: str) -> None:
        with self.store.transaction():
            self.opportunities.delete(opportunity_id)

    # ============================================================
    # EVENTS
    # ============================================================

    def create_event(self, created_by: str, draft: EventCreate) -> Event:
        with self.store.transaction():
            return self.events.create(created_by, draft)

    def set_event_status(self, event_id: str, status: ApprovalStatus) -> Event:
        with self.store.transaction():
            return self.events.set_approval_status(event_id, status)

    def register_for_event(self, event_id: str, student_id: str) -> Event:
        with self.store.transaction():
            return self.events.register(event_id, student_id)

    def list_events(self, role: UserRole, viewer_id: Optional[str] = None) -> List[Event]:
        with self.store.transaction():
            return self.events.list(role, viewer_id)

    def list_pending_events(self) -> List[Event]:
        with self.store.transaction():
            return self.events.list_pending()

    def get_event(self, event_id: str) -> Event:
        with self.store.transaction():
            return self.events.get(event_id)

    # ============================================================
    # APPLICATIONS
    # ============================================================

    def apply(
        self,
        opportunity_id: str,
        student_id: str,
        student_name: Optional[str] = None,
        student_department: Optional[str] = None,
    ) -> Application:
        with self.store.transaction():
            return self.applications.apply(opportunity_id, student_id, student_name, student_department)

    def get_application(self, application_id: str) -> Application:
        with self.store.transaction():
            return self.applications.get(application_id)

    def recommend(
        self,
        application_id: str,
        recommendation: AlumniRecommendation,
        comment: str = "",
    ) -> Application:
        with self.store.transaction():
            return self.applications.recommend(application_id, recommendation, comment)

    def finalize(self, application_id: str, status: ApplicationStatus) -> Application:
        with self.store.transaction():
            return self.applications.finalize(application_id, status)

    def list_applications(
        self,
        opportunity_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> List[Application]:
        with self.store.transaction():
            return self.applications.list_for(opportunity_id, student_id)

    # ============================================================
    # NOTIFICATIONS
    # ============================================================

    def list_notifications(self, user_id: str) -> List[Notification]:
        with self.store.transaction():
            return self.notifications.list_for(user_id)

    def get_notification(self, notification_id: str) -> Optional[Notification]:
        with self.store.transaction():
            return self.notifications.get(notification_id)

    def mark_notification_read(self, notification_id: str) -> None:
        with self.store.transaction():
            self.notifications.mark_read(notification_id)

    def mark_all_notifications_read(self, user_id: str) -> int:
        with self.store.transaction():
            return self.notifications.mark_all_read(user_id)

    def unread_count(self, user_id: str) -> int:
        with self.store.transaction():
            return self.notifications.unread_count(user_id)

    # ============================================================
    # ANALYTICS
    # ============================================================

    def get_analytics(self) -> AnalyticsResponse:
        with self.store.transaction():
            return self.analytics.get_analytics()


@lru_cache()
def get_portal() -> PortalService:
    """Process-wide portal built from settings (FastAPI dependency)."""
    settings = get_settings()
    return PortalService(get_record_store(settings), settings)
