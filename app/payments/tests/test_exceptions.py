"""
Tests for the payment exception hierarchy.
"""

import pytest

from core.exceptions import BaseApplicationError
from payments.exceptions import (
    PaymentError,
    PaymentProcessingError,
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeTimeoutError,
)


class TestStripeErrorHierarchy:
    """All Stripe errors are payment and application errors."""

    @pytest.mark.parametrize(
        "error_class",
        [
            StripeCardDeclinedError,
            StripeInvalidRequestError,
            StripeRateLimitError,
            StripeAPIUnavailableError,
            StripeTimeoutError,
        ],
    )
    def test_inherits_from_base_classes(self, error_class):
        error = error_class("failed")

        assert isinstance(error, StripeError)
        assert isinstance(error, PaymentProcessingError)
        assert isinstance(error, PaymentError)
        assert isinstance(error, BaseApplicationError)

    @pytest.mark.parametrize(
        "error_class,retryable",
        [
            (StripeCardDeclinedError, False),
            (StripeInvalidRequestError, False),
            (StripeRateLimitError, True),
            (StripeAPIUnavailableError, True),
            (StripeTimeoutError, True),
        ],
    )
    def test_retryable_classification(self, error_class, retryable):
        assert error_class("failed").is_retryable is retryable


class TestStripeInvalidRequestError:
    """Tests for the invalid request error kind."""

    def test_details_carry_stripe_fields(self):
        error = StripeInvalidRequestError(
            "No such customer: 'cus_invalid'",
            stripe_code="resource_missing",
            param="customer",
        )

        assert error.to_dict() == {
            "error": "No such customer: 'cus_invalid'",
            "error_code": "INVALID_STRIPE_REQUEST",
            "details": {"stripe_code": "resource_missing", "param": "customer"},
        }

    def test_str_includes_error_code(self):
        error = StripeInvalidRequestError("Invalid type")

        assert str(error) == "[INVALID_STRIPE_REQUEST] Invalid type"

    def test_custom_error_code(self):
        error = StripeInvalidRequestError("Invalid type", error_code="UNSUPPORTED_TYPE")

        assert error.error_code == "UNSUPPORTED_TYPE"
        assert error.details == {}
