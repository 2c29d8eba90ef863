"""
Behavioral contract suite for payment method clients.

PaymentMethodContract holds every assertion a payment method client must
satisfy: create, retrieve, list, attach, detach and update, including the
error cases. It is not collected on its own (its name has no Test prefix);
subclass it in a test module and provide a `client` fixture returning an
object that implements both toolkit.protocols.PaymentMethodClient and
toolkit.protocols.CustomerClient.

Usage:
    import pytest

    from payments.adapters import InMemoryPaymentAdapter
    from payments.contracts import PaymentMethodContract

    class TestInMemoryPaymentMethods(PaymentMethodContract):
        @pytest.fixture
        def client(self):
            return InMemoryPaymentAdapter()

Live clients set `live = True`. Live runs create cards from a test token
and skip the assertions that only hold offline (generated id format,
re-attaching a detached payment method).
"""

from __future__ import annotations

import re

import pytest

from payments.adapters.types import (
    BillingDetails,
    CardDetails,
    CreatePaymentMethodParams,
    CustomerResult,
    PaymentMethodResult,
)
from payments.contracts.factories import (
    BillingDetailsFactory,
    CardDetailsFactory,
    CreatePaymentMethodParamsFactory,
)
from payments.exceptions import StripeInvalidRequestError

OFFLINE_ID_PATTERN = re.compile(r"^test_pm")
ATTACHED_COUNT = 3


class PaymentMethodContract:
    """
    Shared tests for the payment method contract.

    Fixtures build fresh inputs and resources per test; nothing is
    shared between tests except the client a subclass provides.
    """

    live: bool = False

    # =========================================================================
    # Fixtures
    # =========================================================================

    @pytest.fixture
    def client(self):
        raise NotImplementedError(
            f"{type(self).__name__} must define a `client` fixture"
        )

    @pytest.fixture
    def card_details(self) -> CardDetails:
        if self.live:
            return CardDetailsFactory(tokenized=True)
        return CardDetailsFactory()

    @pytest.fixture
    def billing_details(self) -> BillingDetails:
        return BillingDetailsFactory()

    @pytest.fixture
    def customer(self, client) -> CustomerResult:
        return client.create_customer()

    @pytest.fixture
    def other_customer(self, client) -> CustomerResult:
        return client.create_customer()

    @pytest.fixture
    def payment_method(self, client, card_details) -> PaymentMethodResult:
        """An unattached card payment method without billing details."""
        return client.create_payment_method(
            CreatePaymentMethodParams(type="card", card=card_details)
        )

    @pytest.fixture
    def attached_payment_method(
        self, client, payment_method, customer
    ) -> PaymentMethodResult:
        return client.attach_payment_method(payment_method.id, customer_id=customer.id)

    @pytest.fixture
    def attached_payment_methods(
        self, client, card_details, customer
    ) -> list[PaymentMethodResult]:
        attached = []
        for _ in range(ATTACHED_COUNT):
            created = client.create_payment_method(
                CreatePaymentMethodParams(type="card", card=card_details)
            )
            attached.append(
                client.attach_payment_method(created.id, customer_id=customer.id)
            )
        return attached

    def create_full_payment_method(
        self, client, card_details, billing_details, **overrides
    ) -> PaymentMethodResult:
        params = CreatePaymentMethodParamsFactory(
            card=card_details,
            billing_details=billing_details,
            **overrides,
        )
        return client.create_payment_method(params)

    # =========================================================================
    # Create
    # =========================================================================

    def test_create_assigns_test_id(self, client, card_details, billing_details):
        if self.live:
            pytest.skip("live payment method ids use the pm_ prefix")

        payment_method = self.create_full_payment_method(
            client, card_details, billing_details
        )

        assert OFFLINE_ID_PATTERN.match(payment_method.id)

    def test_create_echoes_billing_details(
        self, client, card_details, billing_details
    ):
        payment_method = self.create_full_payment_method(
            client, card_details, billing_details
        )

        address = payment_method.billing_details.address
        assert address.city == "North New Portland"
        assert address.country == "US"
        assert address.line1 == "2631 Bloomfield Way"
        assert address.line2 == "Apartment 5B"
        assert address.postal_code == "05555"
        assert address.state == "ME"
        assert payment_method.billing_details.email == "john@example.com"
        assert payment_method.billing_details.name == "John Doe"
        assert payment_method.billing_details.phone == "555-555-5555"
        assert payment_method.billing_details == billing_details

    def test_create_echoes_metadata(self, client, card_details, billing_details):
        payment_method = self.create_full_payment_method(
            client, card_details, billing_details
        )

        assert payment_method.metadata["order_id"] == "123456789"

    def test_create_returns_unattached_card(self, client, card_details, billing_details):
        payment_method = self.create_full_payment_method(
            client, card_details, billing_details
        )

        assert payment_method.type == "card"
        assert payment_method.customer is None
        assert payment_method.card is not None
        assert payment_method.card.last4

    def test_create_with_invalid_type_raises_invalid_request(
        self, client, card_details, billing_details
    ):
        with pytest.raises(StripeInvalidRequestError):
            self.create_full_payment_method(
                client, card_details, billing_details, type="bank_account"
            )

    # =========================================================================
    # Retrieve
    # =========================================================================

    def test_retrieve_returns_attached_payment_method(
        self, client, payment_method, customer
    ):
        client.attach_payment_method(payment_method.id, customer_id=customer.id)

        retrieved = client.retrieve_payment_method(payment_method.id)

        assert retrieved.id == payment_method.id
        assert retrieved.type == payment_method.type
        assert retrieved.customer == customer.id

    def test_retrieve_unknown_id_raises_invalid_request(self, client):
        with pytest.raises(StripeInvalidRequestError):
            client.retrieve_payment_method("pm_does_not_exist")

    # =========================================================================
    # List
    # =========================================================================

    def test_list_returns_customer_payment_methods(
        self, client, customer, attached_payment_methods
    ):
        listed = client.list_payment_methods(customer.id, type="card")

        assert len(listed) == ATTACHED_COUNT
        assert {pm.id for pm in listed} == {pm.id for pm in attached_payment_methods}
        assert all(pm.customer == customer.id for pm in listed)

    def test_list_with_limit_truncates(self, client, customer, attached_payment_methods):
        listed = client.list_payment_methods(customer.id, type="card", limit=2)

        assert len(listed) == 2

    def test_list_other_customer_is_empty(
        self, client, other_customer, attached_payment_methods
    ):
        listed = client.list_payment_methods(other_customer.id, type="card")

        assert listed == []

    # =========================================================================
    # Attach
    # =========================================================================

    def test_attach_sets_customer(self, client, payment_method, customer):
        before = client.retrieve_payment_method(payment_method.id).customer

        client.attach_payment_method(payment_method.id, customer_id=customer.id)

        after = client.retrieve_payment_method(payment_method.id).customer
        assert before is None
        assert after == customer.id

    def test_attach_unknown_customer_raises_invalid_request(
        self, client, payment_method
    ):
        with pytest.raises(StripeInvalidRequestError):
            client.attach_payment_method(payment_method.id, customer_id="cus_invalid")

        retrieved = client.retrieve_payment_method(payment_method.id)
        assert retrieved.customer is None

    # =========================================================================
    # Detach
    # =========================================================================

    def test_detach_clears_customer(self, client, attached_payment_method, customer):
        before = client.retrieve_payment_method(attached_payment_method.id).customer

        client.detach_payment_method(attached_payment_method.id)

        after = client.retrieve_payment_method(attached_payment_method.id).customer
        assert before == customer.id
        assert after is None

    def test_attach_after_detach_restores_customer(
        self, client, attached_payment_method, customer
    ):
        if self.live:
            pytest.skip("Stripe does not reuse a detached payment method")

        client.detach_payment_method(attached_payment_method.id)
        client.attach_payment_method(attached_payment_method.id, customer_id=customer.id)

        retrieved = client.retrieve_payment_method(attached_payment_method.id)
        assert retrieved.customer == customer.id

    # =========================================================================
    # Update
    # =========================================================================

    def test_update_changes_card_exp_month(
        self, client, attached_payment_method, customer
    ):
        original = client.retrieve_payment_method(attached_payment_method.id)
        new_exp_month = 12 if original.card.exp_month != 12 else 11

        client.update_payment_method(
            attached_payment_method.id, card={"exp_month": new_exp_month}
        )

        updated = client.retrieve_payment_method(attached_payment_method.id)
        assert updated.card.exp_month == new_exp_month
        assert updated.card.exp_year == original.card.exp_year
        assert updated.card.last4 == original.card.last4
        assert updated.card.brand == original.card.brand
        assert updated.billing_details == original.billing_details
        assert updated.metadata == original.metadata
        assert updated.customer == customer.id

    def test_update_metadata_keeps_other_fields(
        self, client, attached_payment_method
    ):
        original = client.retrieve_payment_method(attached_payment_method.id)

        client.update_payment_method(
            attached_payment_method.id, metadata={"nickname": "work card"}
        )

        updated = client.retrieve_payment_method(attached_payment_method.id)
        assert updated.metadata["nickname"] == "work card"
        assert updated.card == original.card
        assert updated.customer == original.customer

    def test_update_without_customer_raises_invalid_request(
        self, client, payment_method
    ):
        with pytest.raises(StripeInvalidRequestError):
            client.update_payment_method(payment_method.id, card={"exp_month": 12})
