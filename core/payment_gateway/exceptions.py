"""
Payment Gateway Custom Exceptions

This module provides the exception classes raised by the payment gateway
integration. They follow a small hierarchy so that callers can either
handle every gateway failure at once or react to a specific one.

Author: DSP Development Team
Version: 1.0.0
"""

from typing import Optional, Dict, Any


class PaymentGatewayException(Exception):
    """
    Base exception class for all payment gateway related errors.

    Attributes:
        message (str): Human-readable error message
        status_code (Optional[int]): HTTP status code returned by the gateway
        error_code (Optional[str]): Gateway-specific error code
        details (Optional[Dict[str, Any]]): Additional error details

    Example:
        >>> try:
        ...     client.create_order(amount=49900, currency="INR", receipt="r_1")
        ... except PaymentGatewayException as e:
        ...     logger.error("Gateway error: %s", e.message)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "message": self.message,
            "status_code": self.status_code,
            "error_code": self.error_code,
            "details": self.details,
            "exception_type": self.__class__.__name__,
        }


class GatewayConfigurationException(PaymentGatewayException):
    """
    Raised when the gateway credentials are missing from the settings.
    """

    def __init__(self, message: str = "Payment gateway credentials are not configured") -> None:
        super().__init__(message=message, error_code="NotConfigured")


class GatewayRequestException(PaymentGatewayException):
    """
    Raised when a call to the gateway API fails.

    Covers transport failures (timeouts, refused connections), non-2xx
    responses and response bodies that cannot be parsed.
    """

    def __init__(
        self,
        message: str = "Payment gateway request failed",
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        response_body: Optional[str] = None,
    ) -> None:
        details = {}
        if response_body:
            details["response_body"] = response_body[:500]

        super().__init__(
            message=message,
            status_code=status_code,
            error_code=error_code or "GatewayRequestFailed",
            details=details,
        )
