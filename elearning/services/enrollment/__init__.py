from .enrollment_service import (
    CourseOutcome,
    CourseOutcomeStatus,
    EnrollmentResult,
    EnrollmentService,
)

__all__ = ["CourseOutcome", "CourseOutcomeStatus", "EnrollmentResult", "EnrollmentService"]
