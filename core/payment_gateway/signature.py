"""
Payment Signature Verification

The gateway signs every successful checkout with
``HMAC-SHA256(secret, "<order_id>|<payment_id>")`` and hands the hex digest
to the client, which forwards it to us together with the two ids. The
secret never leaves the server, so recomputing the digest here is what
separates a genuine payment confirmation from a forged callback.

Author: DSP Development Team
Version: 1.0.0
"""

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    """
    Compute the hex signature the gateway issues for an order/payment pair.

    Args:
        order_id: Gateway order identifier
        payment_id: Gateway payment identifier
        secret: Shared secret configured for the gateway account

    Returns:
        Lower-case hex digest
    """
    body = f"{order_id}|{payment_id}"
    return hmac.new(
        secret.encode("utf-8"), body.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def verify_payment_signature(
    order_id: str, payment_id: str, signature: str, secret: str
) -> bool:
    """
    Check that ``signature`` was issued by the gateway for this payment.

    Never raises. Missing or non-string arguments, and an unconfigured
    secret, count as a failed verification.

    Returns:
        True if the signature is authentic, False otherwise
    """
    if not all(isinstance(value, str) for value in (order_id, payment_id, signature)):
        return False

    if not secret:
        logger.error("Payment signature cannot be verified: gateway secret is not configured.")
        return False

    try:
        expected = compute_payment_signature(order_id, payment_id, secret)
        return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))
    except UnicodeEncodeError:
        logger.warning("Payment signature rejected: arguments are not valid UTF-8 text.")
        return False
