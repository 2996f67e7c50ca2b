"""
Application Service

One record per (student, opportunity) carrying two independent tracks:

- alumni_recommendation: advisory input from the posting's alumnus,
  may be changed any number of times
- admin_final_status: the authoritative decision, set by an admin

Student name and department are copied onto the application when the
student applies and are not refreshed if the profile later changes.
"""

import logging
from typing import List, Optional

from alumni_portal.core.errors import DuplicateApplication, InvalidTransition, NotFound
from alumni_portal.db.store import COLLECTIONS, DuplicateRecord, RecordStore
from alumni_portal.schemas.schemas import (
    AlumniRecommendation,
    Application,
    ApplicationStatus,
    ApprovalStatus,
    NotificationType,
)
from alumni_portal.services.notification_service import NotificationService
from alumni_portal.services.opportunity_service import OpportunityService
from alumni_portal.services.user_service import UserService
from alumni_portal.services.workflow import ensure_application_transition

logger = logging.getLogger(__name__)


class ApplicationService:
    def __init__(
        self,
        store: RecordStore,
        users: UserService,
        opportunities: OpportunityService,
        notifications: NotificationService,
        enforce_forward_only: bool = True,
    ):
        self.store = store
        self.users = users
        self.opportunities = opportunities
        self.notifications = notifications
        self.enforce_forward_only = enforce_forward_only

    def apply(
        self,
        opportunity_id: str,
        student_id: str,
        student_name: Optional[str] = None,
        student_department: Optional[str] = None,
    ) -> Application:
        """
        Student applies to an approved opportunity.

        Raises:
            NotFound: unknown opportunity or student
            InvalidTransition: opportunity is not accepting applications
            DuplicateApplication: the student already applied
        """
        opportunity = self.opportunities.get(opportunity_id)
        student = self.users.get_by_id(student_id)

        if opportunity.approval_status != ApprovalStatus.APPROVED:
            raise InvalidTransition(f'"{opportunity.title}" is not accepting applications')

        existing = self.store.find(
            COLLECTIONS["applications"], opportunity_id=opportunity.id, student_id=student.id
        )
        if existing:
            logger.warning("Duplicate application: student %s -> opportunity %s", student.id, opportunity.id)
            raise DuplicateApplication("You have already applied to this opportunity.")

        application = Application(
            opportunity_id=opportunity.id,
            student_id=student.id,
            student_name=student_name or student.name,
            student_department=student_department or student.department or "N/A",
        )
        try:
            self.store.insert(COLLECTIONS["applications"], application.model_dump(mode="json"))
        except DuplicateRecord as e:
            # Unique (student_id, opportunity_id) index caught a concurrent apply
            raise DuplicateApplication("You have already applied to this opportunity.") from e
        self.notifications.notify(
            opportunity.created_by,
            f"New applicant for {opportunity.title}: {application.student_name}",
            NotificationType.INFO,
        )
        logger.info("Application %s: student %s -> opportunity %s", application.id, student.id, opportunity.id)
        return application

    def get(self, application_id: str) -> Application:
        record = self.store.get(COLLECTIONS["applications"], application_id)
        if record is None:
            raise NotFound(f"Application {application_id} not found")
        return Application.model_validate(record)

    def recommend(
        self,
        application_id: str,
        recommendation: AlumniRecommendation,
        comment: str = "",
    ) -> Application:
        """Overwrite the alumni recommendation. Never touches admin_final_status."""
        application = self.get(application_id)
        application.alumni_recommendation = recommendation
        application.alumni_comment = comment
        self.store.replace(COLLECTIONS["applications"], application.id, application.model_dump(mode="json"))
        logger.info("Application %s recommendation: %s", application.id, recommendation.value)
        return application

    def finalize(self, application_id: str, status: ApplicationStatus) -> Application:
        """Admin decision; the student is told the outcome."""
        application = self.get(application_id)
        if application.is_invalidated:
            raise InvalidTransition("Application was invalidated because its opportunity was removed")
        if self.enforce_forward_only:
            ensure_application_transition(application.admin_final_status, status)

        # Title is looked up before writing so a missing posting leaves nothing half-done
        opportunity = self.opportunities.get(application.opportunity_id)

        application.admin_final_status = status
        self.store.replace(COLLECTIONS["applications"], application.id, application.model_dump(mode="json"))

        if status == ApplicationStatus.FINAL_SELECTED:
            message = f"Congratulations! You have been selected for {opportunity.title}"
            severity = NotificationType.SUCCESS
        else:
            message = (
                f"Update on your application for {opportunity.title}: "
                f"{status.value.replace('FINAL_', '')}"
            )
            severity = NotificationType.INFO
        self.notifications.notify(application.student_id, message, severity)

        logger.info("Application %s finalized as %s", application.id, status.value)
        return application

    def list_for(
        self,
        opportunity_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> List[Application]:
        """By opportunity, else by student, else everything (admin view)."""
        if opportunity_id:
            records = self.store.find(COLLECTIONS["applications"], opportunity_id=opportunity_id)
        elif student_id:
            records = self.store.find(COLLECTIONS["applications"], student_id=student_id)
        else:
            records = self.store.all(COLLECTIONS["applications"])
        return [Application.model_validate(r) for r in records]
