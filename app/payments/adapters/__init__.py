"""
Payment adapters for external services.

This module provides adapters for payment processors. All payment method
and customer calls should go through these adapters to ensure
consistent error handling, timeouts, and observability.

Adapters:
    StripeAdapter: Live Stripe API (class methods, no state)
    InMemoryPaymentAdapter: Offline store with the same contract

Usage:
    from payments.adapters import StripeAdapter, CreatePaymentMethodParams, CardDetails

    result = StripeAdapter.create_payment_method(
        CreatePaymentMethodParams(type="card", card=CardDetails(token="tok_visa"))
    )
"""

from payments.adapters.memory_adapter import InMemoryPaymentAdapter
from payments.adapters.stripe_adapter import StripeAdapter
from payments.adapters.types import (
    Address,
    BillingDetails,
    CardDetails,
    CardResult,
    CreatePaymentMethodParams,
    CustomerResult,
    PaymentMethodResult,
)

__all__ = [
    "Address",
    "BillingDetails",
    "CardDetails",
    "CardResult",
    "CreatePaymentMethodParams",
    "CustomerResult",
    "InMemoryPaymentAdapter",
    "PaymentMethodResult",
    "StripeAdapter",
]
