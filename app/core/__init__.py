"""
Core - Infrastructure & Base Classes

Generic, reusable base classes with no domain-specific logic. Domain
apps (payments) extend these.

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and details

Usage:
    from core.exceptions import BaseApplicationError

    class PaymentError(BaseApplicationError):
        default_error_code = "PAYMENT_ERROR"
"""

from .exceptions import BaseApplicationError

__all__ = [
    "BaseApplicationError",
]
