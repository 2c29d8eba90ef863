"""
Factory Boy factories for payment method contract inputs.

Factories build the plain dataclasses the adapters accept, so every test
gets fresh input objects and no fixture state is shared between tests.

Usage:
    from payments.contracts.factories import (
        BillingDetailsFactory,
        CardDetailsFactory,
        CreatePaymentMethodParamsFactory,
    )

    # Full create params: card, billing details and metadata
    params = CreatePaymentMethodParamsFactory()

    # Card-only params
    params = CreatePaymentMethodParamsFactory(billing_details=None, metadata={})

    # Card token instead of raw card data (live Stripe runs)
    card = CardDetailsFactory(tokenized=True)
"""

import factory
from django.conf import settings
from django.utils import timezone

from payments.adapters.types import (
    Address,
    BillingDetails,
    CardDetails,
    CreatePaymentMethodParams,
)


class AddressFactory(factory.Factory):
    """Factory for a complete billing address."""

    class Meta:
        model = Address

    city = "North New Portland"
    country = "US"
    line1 = "2631 Bloomfield Way"
    line2 = "Apartment 5B"
    postal_code = "05555"
    state = "ME"


class BillingDetailsFactory(factory.Factory):
    """Factory for billing details with every field set."""

    class Meta:
        model = BillingDetails

    address = factory.SubFactory(AddressFactory)
    email = "john@example.com"
    name = "John Doe"
    phone = "555-555-5555"


class CardDetailsFactory(factory.Factory):
    """
    Factory for card input.

    Defaults to a raw Visa test card expiring in September five years
    from now. The `tokenized` trait switches to the configured test token.
    """

    class Meta:
        model = CardDetails

    class Params:
        tokenized = factory.Trait(
            number=None,
            exp_month=None,
            exp_year=None,
            cvc=None,
            token=factory.LazyFunction(lambda: settings.PAYMENT_CONTRACT_CARD_TOKEN),
        )

    number = "4242424242424242"
    exp_month = 9
    exp_year = factory.LazyFunction(lambda: timezone.now().year + 5)
    cvc = "999"
    token = None


class CreatePaymentMethodParamsFactory(factory.Factory):
    """Factory for card payment method creation params."""

    class Meta:
        model = CreatePaymentMethodParams

    type = "card"
    card = factory.SubFactory(CardDetailsFactory)
    billing_details = factory.SubFactory(BillingDetailsFactory)
    metadata = factory.LazyFunction(lambda: {"order_id": "123456789"})
    idempotency_key = None
