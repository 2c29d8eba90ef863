"""
Data types for payment method operations.

This module defines the dataclasses passed to and returned from the
payment adapters. Both the Stripe adapter and the in-memory adapter
accept the same parameter types and return the same result types, so
callers (and the contract suite) never touch raw SDK objects.

Types:
    Address: Postal address inside billing details
    BillingDetails: Billing contact attached to a payment method
    CardDetails: Raw card input (or a test token) for creation
    CreatePaymentMethodParams: Parameters for creating a payment method
    CardResult: Card summary returned by the processor
    PaymentMethodResult: A payment method as returned by the processor
    CustomerResult: A customer as returned by the processor

Usage:
    from payments.adapters.types import (
        Address,
        BillingDetails,
        CardDetails,
        CreatePaymentMethodParams,
    )

    params = CreatePaymentMethodParams(
        type="card",
        card=CardDetails(number="4242424242424242", exp_month=9, exp_year=2030, cvc="999"),
        billing_details=BillingDetails(name="John Doe", address=Address(country="US")),
        metadata={"order_id": "123456789"},
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


ADDRESS_FIELDS = ("city", "country", "line1", "line2", "postal_code", "state")
BILLING_CONTACT_FIELDS = ("email", "name", "phone")


def _drop_none(values: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


@dataclass
class Address:
    """
    Postal address of a billing contact.

    All fields are optional; unset fields are omitted from request
    parameters and returned as None by the processor.
    """

    city: str | None = None
    country: str | None = None
    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = None
    state: str | None = None

    def to_params(self) -> dict[str, str]:
        """Return the set fields as request parameters."""
        return _drop_none({name: getattr(self, name) for name in ADDRESS_FIELDS})

    @classmethod
    def from_stripe(cls, data: Mapping[str, Any] | None) -> Address:
        data = data or {}
        return cls(**{name: data.get(name) for name in ADDRESS_FIELDS})


@dataclass
class BillingDetails:
    """
    Billing contact attached to a payment method.

    Attributes:
        address: Postal address
        email: Contact email
        name: Full name
        phone: Phone number
    """

    address: Address = field(default_factory=Address)
    email: str | None = None
    name: str | None = None
    phone: str | None = None

    def to_params(self) -> dict[str, Any]:
        """
        Return the set fields as request parameters.

        The address is omitted entirely when none of its fields are set,
        so a partial update never blanks out a stored address.
        """
        params: dict[str, Any] = _drop_none(
            {name: getattr(self, name) for name in BILLING_CONTACT_FIELDS}
        )
        address = self.address.to_params()
        if address:
            params["address"] = address
        return params

    @classmethod
    def from_stripe(cls, data: Mapping[str, Any] | None) -> BillingDetails:
        data = data or {}
        return cls(
            address=Address.from_stripe(data.get("address")),
            email=data.get("email"),
            name=data.get("name"),
            phone=data.get("phone"),
        )


@dataclass
class CardDetails:
    """
    Card input for creating a card payment method.

    Either raw card data (number, expiry, cvc) or a test token
    (e.g. "tok_visa") must be supplied. The live Stripe API refuses raw
    card numbers for most accounts, so live runs use tokens.

    Attributes:
        number: Card number (digits only)
        exp_month: Expiry month, 1-12
        exp_year: Four-digit expiry year
        cvc: Card security code
        token: Card token used instead of raw card data
    """

    number: str | None = None
    exp_month: int | None = None
    exp_year: int | None = None
    cvc: str | None = None
    token: str | None = None

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if self.number is not None:
            self.number = str(self.number)
        if self.cvc is not None:
            self.cvc = str(self.cvc)
        if not self.token and not self.number:
            raise ValueError("number or token is required")
        if self.exp_month is not None and not 1 <= self.exp_month <= 12:
            raise ValueError("exp_month must be between 1 and 12")

    def to_params(self) -> dict[str, Any]:
        """Return card request parameters (token form when a token is set)."""
        if self.token:
            return {"token": self.token}
        return _drop_none(
            {
                "number": self.number,
                "exp_month": self.exp_month,
                "exp_year": self.exp_year,
                "cvc": self.cvc,
            }
        )


@dataclass
class CreatePaymentMethodParams:
    """
    Parameters for creating a payment method.

    Attributes:
        type: Payment method type (default: 'card')
        card: Card input, required by the processor for type 'card'
        billing_details: Optional billing contact
        metadata: Key-value pairs to attach to the payment method
        idempotency_key: Optional key for idempotent creation
    """

    type: str = "card"
    card: CardDetails | None = None
    billing_details: BillingDetails | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    idempotency_key: str | None = None

    def __post_init__(self) -> None:
        """Validate parameters after initialization."""
        if not self.type:
            raise ValueError("type is required")

    def to_params(self) -> dict[str, Any]:
        """Return request parameters for the processor's create call."""
        params: dict[str, Any] = {"type": self.type}
        if self.card is not None:
            params["card"] = self.card.to_params()
        if self.billing_details is not None:
            params["billing_details"] = self.billing_details.to_params()
        if self.metadata:
            params["metadata"] = dict(self.metadata)
        return params


@dataclass
class CardResult:
    """
    Card summary returned by the processor.

    The processor never returns the card number or cvc.
    """

    brand: str | None = None
    last4: str | None = None
    exp_month: int | None = None
    exp_year: int | None = None

    @classmethod
    def from_stripe(cls, data: Mapping[str, Any]) -> CardResult:
        return cls(
            brand=data.get("brand"),
            last4=data.get("last4"),
            exp_month=data.get("exp_month"),
            exp_year=data.get("exp_year"),
        )


@dataclass
class PaymentMethodResult:
    """
    Result from payment method operations.

    Attributes:
        id: PaymentMethod ID (pm_xxx, or test_pm_xxx in memory)
        type: Payment method type
        customer: Attached customer ID, None when unattached
        billing_details: Billing contact
        card: Card summary (None for non-card types)
        metadata: Attached metadata
        created: Creation time as a unix timestamp
        raw_response: Full processor response dict (for debugging)
    """

    id: str
    type: str
    customer: str | None = None
    billing_details: BillingDetails = field(default_factory=BillingDetails)
    card: CardResult | None = None
    metadata: dict[str, str] = field(default_factory=dict)
    created: int | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)

    @property
    def is_attached(self) -> bool:
        return self.customer is not None

    @classmethod
    def from_stripe(cls, data: Mapping[str, Any]) -> PaymentMethodResult:
        """
        Build a result from a processor response dict.

        The customer field may come back expanded (a dict) or as an id.
        """
        customer = data.get("customer")
        if isinstance(customer, dict):
            customer = customer.get("id")
        card = data.get("card")
        return cls(
            id=data["id"],
            type=data["type"],
            customer=customer,
            billing_details=BillingDetails.from_stripe(data.get("billing_details")),
            card=CardResult.from_stripe(card) if card else None,
            metadata=dict(data.get("metadata") or {}),
            created=data.get("created"),
            raw_response=dict(data),
        )


@dataclass
class CustomerResult:
    """
    Result from customer operations.

    Attributes:
        id: Customer ID (cus_xxx, or test_cus_xxx in memory)
        email: Customer email
        raw_response: Full processor response dict
    """

    id: str
    email: str | None = None
    raw_response: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, data: Mapping[str, Any]) -> CustomerResult:
        return cls(
            id=data["id"],
            email=data.get("email"),
            raw_response=dict(data),
        )
