from .checkout_service import CheckoutOutcome, CheckoutService
from .payment_verification_service import (
    PaymentVerificationService,
    VerificationOutcome,
    VerificationState,
)

__all__ = [
    "CheckoutOutcome",
    "CheckoutService",
    "PaymentVerificationService",
    "VerificationOutcome",
    "VerificationState",
]
