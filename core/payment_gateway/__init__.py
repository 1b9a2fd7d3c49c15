"""
Payment Gateway Package - DSP
=============================

This package centralizes the payment-gateway integration for the DSP
backend. It is placed in `core` so that billing is not tied to the
e-learning app.

Current Scope
-------------
- Signature verification of payment confirmations (see signature.py).
- Order creation on the gateway's Orders API (see client.py).

The package holds no models and no views; the e-learning services call it
and own the resulting state changes.

Structure
---------
- __init__.py   (this file)
- signature.py  → HMAC-SHA256 signature computation and verification
- client.py     → PaymentOrder value + PaymentGatewayClient (requests)
- exceptions.py → PaymentGatewayException hierarchy

Author: DSP Development Team
Date: 2025-09-03
"""

from .client import PaymentGatewayClient, PaymentOrder
from .exceptions import (
    GatewayConfigurationException,
    GatewayRequestException,
    PaymentGatewayException,
)
from .signature import compute_payment_signature, verify_payment_signature

__all__ = [
    "PaymentGatewayClient",
    "PaymentOrder",
    "PaymentGatewayException",
    "GatewayConfigurationException",
    "GatewayRequestException",
    "compute_payment_signature",
    "verify_payment_signature",
]
