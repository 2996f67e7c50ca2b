"""
Pydantic Schemas - Records, Requests and Responses

All stored records and API request/response schemas in one file for simplicity.
Records are persisted with model_dump(mode="json") and rebuilt with model_validate().
"""

import datetime as dt
import random
import string
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def new_id() -> str:
    """9-char random id, same shape the portal has always used."""
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choices(alphabet, k=9))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    ADMIN = "ADMIN"
    ALUMNI = "ALUMNI"
    STUDENT = "STUDENT"


class UserStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    INACTIVE = "INACTIVE"


class OpportunityType(str, Enum):
    JOB = "JOB"
    MENTORSHIP = "MENTORSHIP"


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class AlumniRecommendation(str, Enum):
    NONE = "NONE"
    RECOMMENDED = "RECOMMENDED"
    NOT_RECOMMENDED = "NOT_RECOMMENDED"


class ApplicationStatus(str, Enum):
    APPLIED = "APPLIED"
    SHORTLISTED = "SHORTLISTED"
    FINAL_SELECTED = "FINAL_SELECTED"
    FINAL_REJECTED = "FINAL_REJECTED"


class NotificationType(str, Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"


# ============================================================
# USER RECORDS
# ============================================================

class Project(BaseModel):
    id: str = Field(default_factory=new_id)
    title: str
    description: str = ""
    link: Optional[str] = None


class Education(BaseModel):
    id: str = Field(default_factory=new_id)
    institution: str
    degree: str = ""
    major: str = ""
    year: str = ""


class User(BaseModel):
    id: str = Field(default_factory=new_id)
    name: str
    email: str
    role: UserRole
    status: UserStatus = UserStatus.PENDING
    # Student: department/batch. Alumni: company/designation/batch.
    department: Optional[str] = None
    batch: Optional[str] = None
    designation: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    linkedin: Optional[str] = None
    resume_link: Optional[str] = None
    skills: List[str] = []
    projects: List[Project] = []
    education: List[Education] = []
    created_at: datetime = Field(default_factory=utc_now)


class RegisterRequest(BaseModel):
    name: str
    # Plain string, emails are not syntax-checked
    email: str
    role: UserRole
    password: Optional[str] = None  # accepted, never stored or verified
    department: Optional[str] = None
    batch: Optional[str] = None
    designation: Optional[str] = None
    company: Optional[str] = None

    @field_validator("name", "email")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value


class LoginRequest(BaseModel):
    email: str
    password: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


class UserStatusUpdate(BaseModel):
    status: UserStatus


# ============================================================
# OPPORTUNITY RECORDS
# ============================================================

class OpportunityCreate(BaseModel):
    type: OpportunityType = OpportunityType.JOB
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    company: str = ""
    location: str = ""
    required_skills: List[str] = []
    deadline: Optional[dt.date] = None


class Opportunity(OpportunityCreate):
    id: str = Field(default_factory=new_id)
    created_by: str
    creator_name: str
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    created_at: datetime = Field(default_factory=utc_now)


class ApprovalUpdate(BaseModel):
    status: ApprovalStatus


# ============================================================
# EVENT RECORDS
# ============================================================

class EventCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    date: dt.date
    description: str = ""
    location: str = "Online"


class Event(EventCreate):
    id: str = Field(default_factory=new_id)
    created_by: str
    creator_name: str
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    registrations: List[str] = []
    created_at: datetime = Field(default_factory=utc_now)


# ============================================================
# APPLICATION RECORDS
# ============================================================

class Application(BaseModel):
    id: str = Field(default_factory=new_id)
    opportunity_id: str
    student_id: str
    student_name: str
    student_department: str
    alumni_recommendation: AlumniRecommendation = AlumniRecommendation.NONE
    alumni_comment: Optional[str] = None
    admin_final_status: ApplicationStatus = ApplicationStatus.APPLIED
    # Set when the opportunity is deleted out from under the application
    is_invalidated: bool = False
    applied_at: datetime = Field(default_factory=utc_now)


class RecommendationUpdate(BaseModel):
    recommendation: AlumniRecommendation
    comment: str = ""


class FinalStatusUpdate(BaseModel):
    status: ApplicationStatus


# ============================================================
# NOTIFICATION RECORDS
# ============================================================

class Notification(BaseModel):
    id: str = Field(default_factory=new_id)
    user_id: str
    message: str
    read: bool = False
    type: NotificationType = NotificationType.INFO
    created_at: datetime = Field(default_factory=utc_now)


class NotificationListResponse(BaseModel):
    notifications: List[Notification]
    unread_count: int
    poll_interval_seconds: int


# ============================================================
# ANALYTICS SCHEMAS
# ============================================================

class NameValue(BaseModel):
    name: str
    value: int


class AnalyticsResponse(BaseModel):
    total_jobs: int
    active_jobs: int
    total_applications: int
    selections_by_dept: List[NameValue]
    applications_by_status: List[NameValue]
    jobs_by_company: List[NameValue]
    total_events: int
    active_users: int
    pending_approvals: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

