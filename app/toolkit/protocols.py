"""
Protocol definitions (interfaces) for payment clients.

Protocols define the contracts payment adapters must fulfill, enabling:
- Duck typing with static type checking
- Dependency inversion (depend on abstractions, not concretions)
- One behavioral test suite for every implementation

Available Protocols:
    CustomerClient: Customer creation
    PaymentMethodClient: Payment method lifecycle (create, retrieve,
        list, attach, detach, update)

Usage:
    from toolkit.protocols import PaymentMethodClient

    def save_card(client: PaymentMethodClient, params, customer_id: str):
        payment_method = client.create_payment_method(params)
        return client.attach_payment_method(payment_method.id, customer_id)

    # StripeAdapter and InMemoryPaymentAdapter are both valid
    # PaymentMethodClients without explicit inheritance
    client: PaymentMethodClient = InMemoryPaymentAdapter()

Note:
    - @runtime_checkable allows isinstance() checks, which only verify
      that the methods exist, not their signatures
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from payments.adapters.types import (
        BillingDetails,
        CreatePaymentMethodParams,
        CustomerResult,
        PaymentMethodResult,
    )


@runtime_checkable
class CustomerClient(Protocol):
    """
    Protocol for creating customers that payment methods attach to.
    """

    def create_customer(
        self,
        email: str | None = None,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
        trace_id: str | None = None,
    ) -> CustomerResult:
        """
        Create a customer.

        Returns:
            CustomerResult with the processor's customer ID
        """
        ...


@runtime_checkable
class PaymentMethodClient(Protocol):
    """
    Protocol for payment method operations.

    Every failure the processor reports for a bad request surfaces as
    payments.exceptions.StripeInvalidRequestError.

    Example:
        def replace_card(client: PaymentMethodClient, old_id, new_id, customer_id):
            client.attach_payment_method(new_id, customer_id)
            client.detach_payment_method(old_id)
    """

    def create_payment_method(
        self,
        params: CreatePaymentMethodParams,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Create an unattached payment method.

        Args:
            params: Type, card, billing details and metadata

        Returns:
            The new payment method
        """
        ...

    def retrieve_payment_method(
        self,
        payment_method_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """Return the payment method with its current customer association."""
        ...

    def list_payment_methods(
        self,
        customer_id: str,
        type: str = "card",
        limit: int | None = None,
        trace_id: str | None = None,
    ) -> list[PaymentMethodResult]:
        """
        List a customer's payment methods of one type.

        Args:
            customer_id: Customer whose payment methods are listed
            type: Payment method type
            limit: Maximum number of entries

        Returns:
            Payment methods, newest first
        """
        ...

    def attach_payment_method(
        self,
        payment_method_id: str,
        customer_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """Associate the payment method with a customer."""
        ...

    def detach_payment_method(
        self,
        payment_method_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """Clear the payment method's customer association."""
        ...

    def update_payment_method(
        self,
        payment_method_id: str,
        card: dict[str, int] | None = None,
        billing_details: BillingDetails | None = None,
        metadata: dict[str, str] | None = None,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Apply a partial update; the customer association is never changed.

        Args:
            card: Card fields to change (exp_month, exp_year)
            billing_details: Billing fields to change
            metadata: Metadata keys to set
        """
        ...
