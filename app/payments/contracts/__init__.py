"""
Contract suite for payment method clients.

Usage:
    from payments.contracts import PaymentMethodContract

Importing this package imports pytest; it is meant for test modules only.
"""

from payments.contracts.suite import PaymentMethodContract

__all__ = ["PaymentMethodContract"]
