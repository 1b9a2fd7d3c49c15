"""
Payment Gateway Orders Client

Thin HTTP client for the gateway's Orders API. An order has to exist on the
gateway side before the frontend can open the checkout widget; the order id
it returns is later part of the signed payment confirmation.

Only order creation is implemented. Everything else (refunds, captures of
authorised payments, settlements) is handled in the gateway dashboard.

Author: DSP Development Team
Version: 1.0.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from .exceptions import GatewayConfigurationException, GatewayRequestException

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentOrder:
    """
    Gateway-side order awaiting payment.

    ``amount`` is expressed in the smallest currency unit (paise, cents).
    """

    order_id: str
    amount: int
    currency: str
    receipt: Optional[str] = None
    status: str = "created"

    @classmethod
    def from_gateway(cls, payload: Dict[str, Any]) -> "PaymentOrder":
        return cls(
            order_id=payload["id"],
            amount=int(payload["amount"]),
            currency=payload["currency"],
            receipt=payload.get("receipt"),
            status=payload.get("status", "created"),
        )

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # the checkout widget expects the gateway's own field name
        data["id"] = data.pop("order_id")
        return data


class PaymentGatewayClient:
    """
    Client for creating orders on the payment gateway.

    Credentials default to ``RAZORPAY_KEY_ID`` / ``RAZORPAY_SECRET`` from the
    Django settings and are sent as HTTP basic auth.
    """

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.key_id = key_id if key_id is not None else settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret if key_secret is not None else settings.RAZORPAY_SECRET
        self.base_url = (base_url or settings.RAZORPAY_API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.RAZORPAY_TIMEOUT_SECONDS

    def create_order(self, *, amount: int, currency: str, receipt: str) -> PaymentOrder:
        """
        Create an order on the gateway.

        Args:
            amount: Order total in the smallest currency unit
            currency: ISO currency code, e.g. "INR"
            receipt: Merchant-side receipt reference

        Returns:
            The created PaymentOrder

        Raises:
            GatewayConfigurationException: If credentials are missing
            GatewayRequestException: If the request fails or the response is unusable
        """
        if not self.key_id or not self.key_secret:
            raise GatewayConfigurationException()

        url = f"{self.base_url}/orders"
        payload = {"amount": amount, "currency": currency, "receipt": receipt}

        try:
            response = requests.post(
                url,
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Gateway order request failed: %s", exc)
            raise GatewayRequestException(f"Could not reach payment gateway: {exc}") from exc

        if not response.ok:
            logger.error(
                "Gateway rejected order creation (status=%s): %s",
                response.status_code,
                response.text[:200],
            )
            raise GatewayRequestException(
                "Payment gateway rejected the order",
                status_code=response.status_code,
                response_body=response.text,
            )

        try:
            order = PaymentOrder.from_gateway(response.json())
        except (ValueError, KeyError, TypeError) as exc:
            raise GatewayRequestException(
                "Payment gateway returned an unexpected order payload",
                status_code=response.status_code,
                response_body=response.text,
            ) from exc

        logger.info("Created gateway order %s (%s %s)", order.order_id, order.amount, order.currency)
        return order
