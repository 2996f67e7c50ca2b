"""
Transition tables shared by the posting and application services.

Opportunities and events use the same moderation machine:

    PENDING -> APPROVED
    PENDING -> REJECTED

both terminal. Applications move forward only:

    APPLIED -> SHORTLISTED -> FINAL_SELECTED | FINAL_REJECTED
    APPLIED -> FINAL_SELECTED | FINAL_REJECTED
"""

from alumni_portal.core.errors import InvalidTransition
from alumni_portal.schemas.schemas import ApplicationStatus, ApprovalStatus

APPROVAL_TRANSITIONS = {
    ApprovalStatus.PENDING: {ApprovalStatus.APPROVED, ApprovalStatus.REJECTED},
    ApprovalStatus.APPROVED: set(),
    ApprovalStatus.REJECTED: set(),
}

APPLICATION_TRANSITIONS = {
    ApplicationStatus.APPLIED: {
        ApplicationStatus.SHORTLISTED,
        ApplicationStatus.FINAL_SELECTED,
        ApplicationStatus.FINAL_REJECTED,
    },
    ApplicationStatus.SHORTLISTED: {
        ApplicationStatus.FINAL_SELECTED,
        ApplicationStatus.FINAL_REJECTED,
    },
    ApplicationStatus.FINAL_SELECTED: set(),
    ApplicationStatus.FINAL_REJECTED: set(),
}


def ensure_approval_transition(label: str, current: ApprovalStatus, target: ApprovalStatus) -> None:
    if target not in APPROVAL_TRANSITIONS[current]:
        raise InvalidTransition(f"{label} is already {current.value}; cannot move it to {target.value}")


def ensure_application_transition(current: ApplicationStatus, target: ApplicationStatus) -> None:
    if target not in APPLICATION_TRANSITIONS[current]:
        raise InvalidTransition(f"Application cannot move from {current.value} to {target.value}")
