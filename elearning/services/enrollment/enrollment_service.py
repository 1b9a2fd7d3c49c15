"""
Enrollment Service für DSP E-Learning Platform

Enrolls a user into a list of purchased courses inside a caller-owned
TransactionScope. For every course id the service, in this order:

1. skips ids that are not well-formed course references
2. skips courses that do not exist
3. skips courses whose roster already contains the user
4. adds the user to the course roster
5. creates the CourseProgress record for (course, user)
6. adds course and progress record to the user's profile
7. schedules the enrollment email for after commit

Step 3 is the guard that keeps step 5 from creating duplicate progress
records, which is why the course row is locked (``select_for_update``)
before the roster is read. Skipped courses never fail the call; a missing
user or a failed write raises and the owner of the scope aborts it.

Author: DSP Development Team
Version: 1.0.0
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Iterable, List, Optional

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction

from ...courses.models import Course, CourseProgress
from ...exceptions import DeliveryError, NotFoundError, PersistenceError
from ...users.models import Profile
from ..database import TransactionScope
from ..identifiers import parse_identifier
from ..notifications import NotificationService

logger = logging.getLogger(__name__)
User = get_user_model()


class CourseOutcomeStatus(str, enum.Enum):
    ENROLLED = "enrolled"
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"
    ALREADY_ENROLLED = "already_enrolled"


@dataclass
class CourseOutcome:
    course_id: Any
    status: CourseOutcomeStatus
    progress_id: Optional[int] = None

    @property
    def skipped(self) -> bool:
        return self.status is not CourseOutcomeStatus.ENROLLED

    def as_dict(self) -> dict:
        return {
            "courseId": self.course_id,
            "status": self.status.value,
            "progressId": self.progress_id,
        }


@dataclass
class EnrollmentResult:
    success: bool
    outcomes: List[CourseOutcome] = field(default_factory=list)

    @property
    def enrolled_course_ids(self) -> List[Any]:
        return [o.course_id for o in self.outcomes if not o.skipped]


class EnrollmentService:
    """
    Enrollment engine for paid courses.

    Args:
        notifier: Dispatcher used for enrollment emails
    """

    def __init__(self, notifier: Optional[NotificationService] = None):
        self.notifier = notifier or NotificationService()

    def enroll(self, course_ids: Iterable[Any], user_id: Any, scope: TransactionScope) -> EnrollmentResult:
        """
        Enroll ``user_id`` into every course of ``course_ids``.

        Args:
            course_ids: Course identifiers (a single identifier is accepted too)
            user_id: Identifier of the purchasing user
            scope: Open transaction scope owned by the caller

        Returns:
            EnrollmentResult with one outcome per course id

        Raises:
            NotFoundError: If the user does not exist
            PersistenceError: If a roster, progress or profile write fails
        """
        if isinstance(course_ids, (str, int)):
            course_ids = [course_ids]
        course_ids = list(course_ids)

        user = self._get_user(user_id, scope)
        profile, _ = Profile.objects.using(scope.using).get_or_create(user=user)

        logger.info("Enrolling user %s into courses %s", user.pk, course_ids)

        outcomes = [
            self._enroll_in_course(course_id, user, profile, scope)
            for course_id in course_ids
        ]

        enrolled = sum(1 for outcome in outcomes if not outcome.skipped)
        logger.info(
            "Enrollment for user %s finished: %s enrolled, %s skipped",
            user.pk,
            enrolled,
            len(outcomes) - enrolled,
        )
        return EnrollmentResult(success=True, outcomes=outcomes)

    def _get_user(self, user_id: Any, scope: TransactionScope):
        user_pk = parse_identifier(user_id)
        if user_pk is None:
            raise NotFoundError(f"User with ID {user_id} not found", resource="user")

        try:
            return User.objects.using(scope.using).get(pk=user_pk)
        except User.DoesNotExist:
            raise NotFoundError(f"User with ID {user_id} not found", resource="user")

    def _enroll_in_course(self, course_id: Any, user, profile: Profile, scope: TransactionScope) -> CourseOutcome:
        course_pk = parse_identifier(course_id)
        if course_pk is None:
            logger.error("Invalid course ID: %s", course_id)
            return CourseOutcome(course_id, CourseOutcomeStatus.INVALID_ID)

        try:
            course = Course.objects.using(scope.using).select_for_update().get(pk=course_pk)
        except Course.DoesNotExist:
            logger.error("Course not found: %s", course_id)
            return CourseOutcome(course_id, CourseOutcomeStatus.NOT_FOUND)

        if course.students_enrolled.filter(pk=user.pk).exists():
            logger.info("User %s is already enrolled in course %s", user.pk, course.pk)
            return CourseOutcome(course_id, CourseOutcomeStatus.ALREADY_ENROLLED)

        try:
            course.students_enrolled.add(user)
            progress = self._create_progress(course, user, scope)
            profile.courses.add(course)
            profile.course_progress.add(progress)
        except DatabaseError as exc:
            logger.error("Failed to enroll user %s in course %s: %s", user.pk, course.pk, exc)
            raise PersistenceError(f"Failed to enroll user {user.pk} in course {course.pk}") from exc

        logger.info("Enrolled user %s in course %s (progress %s)", user.pk, course.pk, progress.pk)
        self._schedule_enrollment_email(user, profile, course, scope)
        return CourseOutcome(course_id, CourseOutcomeStatus.ENROLLED, progress_id=progress.pk)

    def _create_progress(self, course: Course, user, scope: TransactionScope) -> CourseProgress:
        return CourseProgress.objects.using(scope.using).create(
            course=course, user=user, completed_lectures=[]
        )

    def _schedule_enrollment_email(self, user, profile: Profile, course: Course, scope: TransactionScope) -> None:
        transaction.on_commit(
            partial(
                self._send_enrollment_email,
                user.email,
                profile.display_name,
                course.course_name,
                course.pk,
            ),
            using=scope.using,
        )

    def _send_enrollment_email(self, email: str, student_name: str, course_name: str, course_pk: int) -> None:
        try:
            self.notifier.send_enrollment_confirmation(email, student_name, course_name)
        except DeliveryError as exc:
            logger.error("Failed to send enrollment email for course %s: %s", course_pk, exc)
        except Exception:
            logger.exception("Unexpected error sending enrollment email for course %s", course_pk)
