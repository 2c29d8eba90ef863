"""
Base exception classes for application-wide error handling.

This module provides the root of the exception hierarchy used by the
domain apps. Every application error carries:
- A human-readable message
- A machine-readable error code
- Optional details for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    └── payments.exceptions.PaymentError (payment domain)

Usage:
    from core.exceptions import BaseApplicationError

    try:
        ...
    except BaseApplicationError as e:
        logger.warning("Operation failed", extra=e.to_dict())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (parameter names, ids, etc.)

    Example:
        try:
            StripeAdapter.attach_payment_method(pm_id, customer_id)
        except BaseApplicationError as e:
            logger.warning(f"Attach failed: {e.error_code}")
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a plain dictionary.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "No such customer: 'cus_invalid'",
                "error_code": "INVALID_STRIPE_REQUEST",
                "details": {"stripe_code": "resource_missing"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )
