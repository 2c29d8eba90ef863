"""
Payment method contract, run against the Stripe test-mode API.

These tests are marked live and are skipped unless PAYMENT_CONTRACT_LIVE
is enabled and STRIPE_SECRET_KEY is a test key (see the root conftest).
"""

import pytest

from payments.adapters import StripeAdapter
from payments.contracts import PaymentMethodContract


@pytest.mark.live
class TestStripePaymentMethodContract(PaymentMethodContract):
    """Live run of the payment method contract."""

    live = True

    @pytest.fixture
    def client(self):
        return StripeAdapter()
