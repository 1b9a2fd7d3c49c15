"""
Payments Views for Course Purchases
===================================

This module provides the API endpoints of the course checkout flow.

Endpoints:
----------

1. CapturePaymentView
   - URL: /api/elearning/payments/capture/
   - Method: POST
   - Auth: Required
   - Expected Body:
       {
           "courses": [3, 7]
       }
   - Purpose:
       Prices the basket and creates a gateway order. The frontend opens the
       checkout widget with the returned order id and amount.

2. VerifyPaymentView
   - URL: /api/elearning/payments/verify/
   - Method: POST
   - Auth: Required
   - Expected Body:
       {
           "razorpay_order_id": "order_...",
           "razorpay_payment_id": "pay_...",
           "razorpay_signature": "<hex>",
           "courses": [3, 7]
       }
   - Purpose:
       Verifies the signed payment confirmation and enrolls the user into
       the paid courses. Rejections answer 200 with ``success: false`` so
       the confirmation is never redelivered; 500 only if enrollment fails
       after the signature was accepted.

3. PaymentSuccessEmailView
   - URL: /api/elearning/payments/success-email/
   - Method: POST
   - Auth: Required
   - Expected Body:
       {
           "orderId": "order_...",
           "paymentId": "pay_...",
           "amount": 49900
       }
   - Purpose:
       Sends the payment receipt email (amount in the smallest currency unit).

Security:
---------
- The gateway secret never leaves the server; signatures are recomputed here.
- The paying user is always the authenticated user, never a body field.

Author: DSP Development Team
Date: [2025-08-21]
"""

import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ..exceptions import DeliveryError
from ..services.notifications import NotificationService
from ..services.payments import CheckoutService, PaymentVerificationService

logger = logging.getLogger(__name__)


class CapturePaymentView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        outcome = CheckoutService().capture_payment(request.data.get("courses"), request.user)
        return Response(outcome.body, status=outcome.http_status)


class VerifyPaymentView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        outcome = PaymentVerificationService().verify_and_enroll(
            order_id=request.data.get("razorpay_order_id"),
            payment_id=request.data.get("razorpay_payment_id"),
            signature=request.data.get("razorpay_signature"),
            course_ids=request.data.get("courses"),
            user_id=request.user.id,
        )
        logger.info("Payment verification finished in state %s", outcome.state.value)
        return Response(outcome.body, status=outcome.http_status)


class PaymentSuccessEmailView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        order_id = request.data.get("orderId")
        payment_id = request.data.get("paymentId")
        amount = request.data.get("amount")

        if not order_id or not payment_id or not amount:
            return Response(
                {"success": False, "message": "Please provide all the details"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        try:
            amount = int(amount)
        except (TypeError, ValueError):
            return Response(
                {"success": False, "message": "Amount must be an integer in the smallest currency unit"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        user = request.user
        try:
            NotificationService().send_payment_success(
                user.email,
                user.get_full_name() or user.username,
                amount,
                order_id,
                payment_id,
            )
        except DeliveryError as exc:
            logger.error("Error in sending payment success email: %s", exc)
            return Response(
                {
                    "success": False,
                    "message": "Failed to send payment success email",
                    "error": exc.message,
                },
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {"success": True, "message": "Payment success email sent successfully"},
            status=status.HTTP_200_OK,
        )
