"""
Notification Service für DSP E-Learning Platform

Sends the transactional emails of the course marketplace:
- Enrollment confirmation (one per newly enrolled course)
- Payment receipt after a successful checkout

Mails go through Django's email framework, so the transport is whatever
``EMAIL_BACKEND`` configures (console in development, SMTP in production,
locmem in tests).

Author: DSP Development Team
Version: 1.0.0
"""

import logging
import smtplib
from decimal import Decimal

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils.html import strip_tags

from ...exceptions import DeliveryError

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Email notification dispatcher.

    ``send`` is the transport contract: it either delivers or raises
    DeliveryError. Callers decide whether a failure matters.
    """

    def __init__(self, from_email: str = None):
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL

    def send(self, to_email: str, subject: str, body: str) -> None:
        """
        Send one HTML email with a plain-text alternative.

        Raises:
            DeliveryError: If the mail transport fails
        """
        if not to_email:
            raise DeliveryError(f"No recipient address for '{subject}'")

        try:
            send_mail(
                subject,
                strip_tags(body),
                self.from_email,
                [to_email],
                html_message=body,
                fail_silently=False,
            )
        except (smtplib.SMTPException, OSError) as exc:
            raise DeliveryError(f"Could not deliver '{subject}' to {to_email}: {exc}") from exc

        logger.info("Sent '%s' to %s", subject, to_email)

    def send_enrollment_confirmation(self, to_email: str, student_name: str, course_name: str) -> None:
        body = render_to_string(
            "elearning/mail/course_enrollment.html",
            {"student_name": student_name, "course_name": course_name},
        )
        self.send(to_email, f"Successfully Enrolled into {course_name}", body)

    def send_payment_success(
        self, to_email: str, student_name: str, amount: int, order_id: str, payment_id: str
    ) -> None:
        """
        Send the payment receipt.

        Args:
            amount: Paid amount in the smallest currency unit
        """
        body = render_to_string(
            "elearning/mail/payment_success.html",
            {
                "student_name": student_name,
                "amount": Decimal(amount) / 100,
                "currency": settings.PAYMENT_CURRENCY,
                "order_id": order_id,
                "payment_id": payment_id,
            },
        )
        self.send(to_email, "Payment Received", body)
