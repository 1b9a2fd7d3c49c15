"""
Payment Verification Service für DSP E-Learning Platform

Turns a payment confirmation from the checkout widget into enrollments.

State machine (terminal states marked *)::

    RECEIVED -> VALIDATED -> SIGNATURE_OK -> ENROLLED -> RESPONDED*
    RECEIVED -> REJECTED_MISSING_FIELDS*
    VALIDATED -> REJECTED_BAD_SIGNATURE*
    SIGNATURE_OK -> ENROLLMENT_FAILED*

Rejections answer HTTP 200 with ``success: false``: the confirmation is a
gateway callback and any other status makes the gateway deliver it again.
Only a failure after the signature was accepted is a real server error and
answers 500.

The enrollment and the read-back of the enrolled user share one
TransactionScope; nothing becomes visible to other requests before commit.

Author: DSP Development Team
Version: 1.0.0
"""

from __future__ import annotations

import enum
import logging
import traceback
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from django.conf import settings
from rest_framework import status

from core.payment_gateway import compute_payment_signature, verify_payment_signature

from ...exceptions import AuthenticityError, ElearningError, ValidationError
from ...users.serializers import UserEnrollmentSerializer, load_enrolled_user
from ..database import TransactionScope
from ..enrollment import EnrollmentService

logger = logging.getLogger(__name__)


class VerificationState(str, enum.Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    SIGNATURE_OK = "signature_ok"
    ENROLLED = "enrolled"
    RESPONDED = "responded"
    REJECTED_MISSING_FIELDS = "rejected_missing_fields"
    REJECTED_BAD_SIGNATURE = "rejected_bad_signature"
    ENROLLMENT_FAILED = "enrollment_failed"


@dataclass
class VerificationOutcome:
    state: VerificationState
    http_status: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.body.get("success"))


def _is_missing(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, (list, tuple)) and not value)


def _expected_signature(order_id: Any, payment_id: Any, secret: Optional[str]) -> str:
    try:
        return compute_payment_signature(str(order_id), str(payment_id), secret or "")
    except UnicodeEncodeError:
        return "<unencodable>"


class PaymentVerificationService:
    """
    Orchestrates signature check, enrollment and response for one payment.

    Args:
        enrollment_service: Engine performing the enrollment
        secret: Gateway secret; defaults to ``settings.RAZORPAY_SECRET``
        using: Database alias the transaction scope is opened on
    """

    def __init__(
        self,
        enrollment_service: Optional[EnrollmentService] = None,
        secret: Optional[str] = None,
        using: Optional[str] = None,
    ):
        self.enrollment_service = enrollment_service or EnrollmentService()
        self.secret = secret
        self.using = using

    def verify_and_enroll(
        self,
        *,
        order_id: Optional[str],
        payment_id: Optional[str],
        signature: Optional[str],
        course_ids: Optional[Sequence[Any]],
        user_id: Any,
    ) -> VerificationOutcome:
        """
        Verify a payment confirmation and enroll the user into the paid courses.

        Returns:
            VerificationOutcome with terminal state, HTTP status and body
        """
        logger.info(
            "Payment verification request received: order=%s payment=%s signature=%s courses=%s user=%s",
            order_id,
            payment_id,
            "present" if signature else "missing",
            course_ids,
            user_id,
        )

        fields = {
            "order_id": order_id,
            "payment_id": payment_id,
            "signature": signature,
            "course_ids": course_ids,
            "user_id": user_id,
        }
        missing = [name for name, value in fields.items() if _is_missing(value)]
        if missing:
            logger.error("Payment verification failed: missing required fields %s", missing)
            return self._reject(
                VerificationState.REJECTED_MISSING_FIELDS,
                ValidationError(
                    "Payment Failed: Missing required fields",
                    status_code=status.HTTP_200_OK,
                    details={"missing": missing},
                ),
            )

        secret = self.secret if self.secret is not None else settings.RAZORPAY_SECRET
        if not verify_payment_signature(order_id, payment_id, signature, secret):
            expected = _expected_signature(order_id, payment_id, secret)
            logger.warning(
                "Payment verification failed: invalid signature for order %s (expected=%s, received=%s)",
                order_id,
                expected,
                signature,
            )
            return self._reject(
                VerificationState.REJECTED_BAD_SIGNATURE,
                AuthenticityError("Payment Failed: Invalid signature"),
            )

        logger.info("Signature verified for order %s, enrolling user %s", order_id, user_id)

        try:
            with TransactionScope(using=self.using) as scope:
                result = self.enrollment_service.enroll(course_ids, user_id, scope)
                user = load_enrolled_user(user_id, scope.using)
                user_data = UserEnrollmentSerializer(user).data
                scope.commit()
        except Exception as exc:
            logger.exception("Enrollment failed after verified payment for order %s", order_id)
            body = {
                "success": False,
                "message": "Payment verification succeeded but enrollment failed",
                "error": str(exc),
            }
            if settings.DEBUG:
                body["stack"] = traceback.format_exc()
            return VerificationOutcome(
                VerificationState.ENROLLMENT_FAILED,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                body,
            )

        logger.info("Payment %s verified and enrollment committed for user %s", payment_id, user_id)
        return VerificationOutcome(
            VerificationState.RESPONDED,
            status.HTTP_200_OK,
            {
                "success": True,
                "message": "Payment verified and course enrollment successful",
                "user": user_data,
                "courses": user_data["courses"],
                "courseProgress": user_data["course_progress"],
                "enrollments": [outcome.as_dict() for outcome in result.outcomes],
            },
        )

    @staticmethod
    def _reject(state: VerificationState, error: ElearningError) -> VerificationOutcome:
        return VerificationOutcome(state, error.status_code, error.to_response())
