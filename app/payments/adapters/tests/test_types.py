"""
Tests for payment method data types.

Tests cover:
- Parameter validation in __post_init__
- Request parameter building
- Response parsing
"""

import pytest

from payments.adapters.types import (
    Address,
    BillingDetails,
    CardDetails,
    CreatePaymentMethodParams,
    PaymentMethodResult,
)


class TestCardDetails:
    """Tests for CardDetails validation."""

    def test_number_or_token_required(self):
        """Should raise ValueError without a number or token."""
        with pytest.raises(ValueError, match="number or token is required"):
            CardDetails(exp_month=9, exp_year=2031)

    @pytest.mark.parametrize("exp_month", [0, 13])
    def test_exp_month_range(self, exp_month):
        """Should raise ValueError for months outside 1-12."""
        with pytest.raises(ValueError, match="exp_month must be between 1 and 12"):
            CardDetails(number="4242424242424242", exp_month=exp_month)

    def test_number_and_cvc_coerced_to_strings(self):
        """Should accept integer card numbers and cvcs."""
        card = CardDetails(number=4242_4242_4242_4242, exp_month=9, exp_year=2031, cvc=999)

        assert card.number == "4242424242424242"
        assert card.cvc == "999"

    def test_token_params(self):
        """Should send only the token when one is set."""
        card = CardDetails(token="tok_visa", exp_month=9)

        assert card.to_params() == {"token": "tok_visa"}


class TestCreatePaymentMethodParams:
    """Tests for CreatePaymentMethodParams."""

    def test_defaults(self):
        """Should default to an empty card payment method."""
        params = CreatePaymentMethodParams()

        assert params.type == "card"
        assert params.card is None
        assert params.metadata == {}
        assert params.to_params() == {"type": "card"}

    def test_type_required(self):
        """Should raise ValueError for an empty type."""
        with pytest.raises(ValueError, match="type is required"):
            CreatePaymentMethodParams(type="")

    def test_empty_address_omitted(self):
        """Should omit an address with no fields set."""
        params = CreatePaymentMethodParams(
            billing_details=BillingDetails(name="John Doe"),
        )

        assert params.to_params()["billing_details"] == {"name": "John Doe"}


class TestPaymentMethodResult:
    """Tests for response parsing."""

    def test_from_stripe_minimal(self):
        """Should tolerate missing optional sections."""
        result = PaymentMethodResult.from_stripe({"id": "pm_1", "type": "sepa_debit"})

        assert result.customer is None
        assert result.card is None
        assert result.billing_details == BillingDetails(address=Address())
        assert result.is_attached is False

    def test_from_stripe_full(self):
        """Should parse nested billing details, card and metadata."""
        result = PaymentMethodResult.from_stripe(
            {
                "id": "pm_1",
                "type": "card",
                "customer": "cus_1",
                "billing_details": {
                    "address": {"city": "North New Portland", "state": "ME"},
                    "name": "John Doe",
                },
                "card": {"brand": "visa", "last4": "4242", "exp_month": 9, "exp_year": 2031},
                "metadata": {"order_id": "123456789"},
                "created": 1760000000,
            }
        )

        assert result.billing_details.address == Address(
            city="North New Portland", state="ME"
        )
        assert result.billing_details.name == "John Doe"
        assert result.card.exp_month == 9
        assert result.metadata == {"order_id": "123456789"}
        assert result.created == 1760000000
        assert result.is_attached is True
