"""
Schemas module - stored records plus request/response schemas.

Records (User, Opportunity, Event, Application, Notification) are what the
record store persists; the *Request / *Update / *Response classes are the
API contract.
"""
from alumni_portal.schemas.schemas import (
    AlumniRecommendation,
    Application,
    ApplicationStatus,
    ApprovalStatus,
    Event,
    Notification,
    NotificationType,
    Opportunity,
    OpportunityType,
    User,
    UserRole,
    UserStatus,
)

__all__ = [
    "AlumniRecommendation",
    "Application",
    "ApplicationStatus",
    "ApprovalStatus",
    "Event",
    "Notification",
    "NotificationType",
    "Opportunity",
    "OpportunityType",
    "User",
    "UserRole",
    "UserStatus",
]
