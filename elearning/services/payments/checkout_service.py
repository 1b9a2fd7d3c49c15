"""
Checkout Service für DSP E-Learning Platform

Prices a basket of courses and opens the matching order on the payment
gateway. The frontend uses the returned order to open the checkout widget;
the payment is confirmed later through PaymentVerificationService.

Author: DSP Development Team
Version: 1.0.0
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from django.conf import settings
from rest_framework import status

from core.payment_gateway import PaymentGatewayClient, PaymentGatewayException

from ...courses.models import Course
from ..identifiers import parse_identifier

logger = logging.getLogger(__name__)


@dataclass
class CheckoutOutcome:
    http_status: int
    body: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def failed(cls, message: str, http_status: int = status.HTTP_200_OK) -> "CheckoutOutcome":
        return cls(http_status, {"success": False, "message": message})


class CheckoutService:
    """
    Creates gateway orders for course purchases.

    Args:
        gateway: Orders API client
        currency: Order currency; defaults to ``settings.PAYMENT_CURRENCY``
    """

    def __init__(self, gateway: Optional[PaymentGatewayClient] = None, currency: Optional[str] = None):
        self.gateway = gateway
        self.currency = currency or settings.PAYMENT_CURRENCY

    def capture_payment(self, course_ids: Sequence[Any], user) -> CheckoutOutcome:
        """
        Open a gateway order for the given courses.

        Unknown courses and courses the user already owns reject the whole
        basket with a 200 ``success: false`` answer.
        """
        if not isinstance(course_ids, (list, tuple)) or not course_ids:
            return CheckoutOutcome.failed("Please Provide Course ID")

        basket = {}
        for course_id in course_ids:
            course_pk = parse_identifier(course_id)
            course = Course.objects.filter(pk=course_pk).first() if course_pk else None
            if course is None:
                logger.info("Checkout rejected: course %s not found", course_id)
                return CheckoutOutcome.failed("Could not find the Course")

            if course.is_enrolled(user):
                logger.info("Checkout rejected: user %s already enrolled in course %s", user.pk, course.pk)
                return CheckoutOutcome.failed("Student is already Enrolled")

            # "3" and 3 name the same course
            basket.setdefault(course.pk, course)

        amount = sum(course.price_in_minor_units for course in basket.values())

        gateway = self.gateway or PaymentGatewayClient()
        try:
            order = gateway.create_order(
                amount=amount,
                currency=self.currency,
                receipt=f"rcpt_{secrets.token_hex(8)}",
            )
        except PaymentGatewayException as exc:
            logger.error("Could not initiate order for user %s: %s", user.pk, exc.to_dict())
            return CheckoutOutcome.failed("Could not initiate order.", status.HTTP_500_INTERNAL_SERVER_ERROR)

        return CheckoutOutcome(status.HTTP_200_OK, {"success": True, "data": order.as_dict()})
