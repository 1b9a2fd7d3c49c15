"""
E-Learning Domain Exceptions

Error taxonomy shared by the enrollment, payment and rating services.
Every exception carries the HTTP status the API answers with, so views can
translate a service failure into a response without knowing which service
raised it.

Propagation policy:
- ValidationError, ConflictError, ForbiddenError: caller-visible failures, never retried
- AuthenticityError: rejected payment confirmation, logged for audit
- NotFoundError, PersistenceError: abort the enclosing transaction scope
- DeliveryError: notification transport failure, swallowed by enrollment

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional, Dict, Any


class ElearningError(Exception):
    """
    Base exception class for all e-learning service errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code the API responds with
        error_code (str): Stable machine-readable error identifier
        details (Dict[str, Any]): Additional error context
    """

    status_code: int = 500
    error_code: str = "ElearningError"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging and serialization.
        """
        return {
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }

    def to_response(self) -> Dict[str, Any]:
        """
        Response body in the API's ``{"success": ..., "message": ...}`` shape.
        """
        return {"success": False, "message": self.message}


class ValidationError(ElearningError):
    """Missing or malformed caller input."""

    status_code = 400
    error_code = "ValidationError"


class AuthenticityError(ElearningError):
    """
    Payment confirmation whose signature does not match.

    Answered with 200 because gateway callbacks must always look delivered.
    """

    status_code = 200
    error_code = "InvalidSignature"


class NotFoundError(ElearningError):
    """Referenced user or course does not exist."""

    status_code = 404
    error_code = "NotFound"

    def __init__(self, message: str, resource: Optional[str] = None) -> None:
        details = {"resource": resource} if resource else {}
        super().__init__(message, details=details)


class ForbiddenError(ElearningError):
    """Caller is not allowed to act on the resource (e.g. not enrolled)."""

    status_code = 403
    error_code = "Forbidden"


class ConflictError(ElearningError):
    """Duplicate review, already-enrolled student and similar conflicts."""

    status_code = 409
    error_code = "Conflict"


class PersistenceError(ElearningError):
    """Storage write failure inside a transaction scope."""

    status_code = 500
    error_code = "PersistenceError"


class DeliveryError(ElearningError):
    """Notification transport failure."""

    status_code = 502
    error_code = "DeliveryError"
