"""
In-memory payment adapter.

InMemoryPaymentAdapter keeps customers and payment methods in plain
dicts and answers the same calls as StripeAdapter, with the same result
types and the same domain exceptions. It is the offline backend for the
payment method contract suite and for any test that needs a payment
processor without network access.

Stored records use Stripe's response shape, and results are built from
them through the same from_stripe() constructors the live adapter uses.

Ids are prefixed with "test_" (test_pm_xxx, test_cus_xxx) so they can
never be mistaken for live objects.

Usage:
    adapter = InMemoryPaymentAdapter()
    customer = adapter.create_customer()
    payment_method = adapter.create_payment_method(params)
    adapter.attach_payment_method(payment_method.id, customer_id=customer.id)
"""

from __future__ import annotations

import copy
import itertools
import logging
import time
import uuid
from typing import TYPE_CHECKING, Any

from payments.adapters.types import (
    ADDRESS_FIELDS,
    BILLING_CONTACT_FIELDS,
    CardDetails,
    CustomerResult,
    PaymentMethodResult,
)
from payments.exceptions import StripeInvalidRequestError

if TYPE_CHECKING:
    from payments.adapters.types import BillingDetails, CreatePaymentMethodParams

logger = logging.getLogger(__name__)

SUPPORTED_PAYMENT_METHOD_TYPES = ("card", "ideal", "sepa_debit", "us_bank_account")
UPDATABLE_CARD_FIELDS = ("exp_month", "exp_year")

# Stripe test tokens: brand and last4 of the card each one stands for
TEST_CARD_TOKENS = {
    "tok_visa": ("visa", "4242"),
    "tok_visa_debit": ("visa", "5556"),
    "tok_mastercard": ("mastercard", "4444"),
    "tok_amex": ("amex", "8431"),
    "tok_discover": ("discover", "1117"),
}


def card_brand(number: str) -> str:
    """Return the card brand for a card number, by its leading digits."""
    if number.startswith("4"):
        return "visa"
    if number[:2] in ("34", "37"):
        return "amex"
    if number[:2] in {"51", "52", "53", "54", "55"} or number[:1] == "2":
        return "mastercard"
    if number.startswith("6011") or number.startswith("65"):
        return "discover"
    return "unknown"


def _invalid(
    message: str,
    stripe_code: str,
    param: str | None = None,
) -> StripeInvalidRequestError:
    logger.warning(
        "Rejected in-memory payment request",
        extra={"stripe_code": stripe_code, "param": param},
    )
    return StripeInvalidRequestError(message, stripe_code=stripe_code, param=param)


class InMemoryPaymentAdapter:
    """
    Payment adapter backed by in-process dicts.

    Each instance is an isolated store. Enforced rules:
    - Only SUPPORTED_PAYMENT_METHOD_TYPES can be created
    - 'card' payment methods need card details
    - Attach requires an existing customer
    - Detach of an unattached payment method is a no-op
    - Update requires an attached payment method and never touches
      the customer association
    """

    id_prefix = "test_"

    def __init__(self) -> None:
        self._customers: dict[str, dict[str, Any]] = {}
        self._payment_methods: dict[str, dict[str, Any]] = {}
        self._sequence = itertools.count()
        self._order: dict[str, int] = {}

    def reset(self) -> None:
        """Drop every stored customer and payment method."""
        self._customers.clear()
        self._payment_methods.clear()
        self._order.clear()

    def _new_id(self, kind: str) -> str:
        return f"{self.id_prefix}{kind}_{uuid.uuid4().hex[:24]}"

    def _get_payment_method(self, payment_method_id: str) -> dict[str, Any]:
        record = self._payment_methods.get(payment_method_id)
        if record is None:
            raise _invalid(
                f"No such PaymentMethod: '{payment_method_id}'",
                stripe_code="resource_missing",
                param="payment_method",
            )
        return record

    @staticmethod
    def _result(record: dict[str, Any]) -> PaymentMethodResult:
        return PaymentMethodResult.from_stripe(copy.deepcopy(record))

    # =========================================================================
    # Customers
    # =========================================================================

    def create_customer(
        self,
        email: str | None = None,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
        trace_id: str | None = None,
    ) -> CustomerResult:
        customer_id = self._new_id("cus")
        record = {
            "id": customer_id,
            "object": "customer",
            "email": email,
            "name": name,
            "metadata": {str(k): str(v) for k, v in (metadata or {}).items()},
            "created": int(time.time()),
            "livemode": False,
        }
        self._customers[customer_id] = record
        logger.debug(
            "Created in-memory customer",
            extra={"customer_id": customer_id, "trace_id": trace_id},
        )
        return CustomerResult.from_stripe(copy.deepcopy(record))

    # =========================================================================
    # Payment Methods
    # =========================================================================

    def create_payment_method(
        self,
        params: CreatePaymentMethodParams,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Create an unattached payment method.

        Raises:
            StripeInvalidRequestError: Unsupported type, missing card details,
                or card details on a non-card type
        """
        if params.type not in SUPPORTED_PAYMENT_METHOD_TYPES:
            raise _invalid(
                f"Invalid type: must be one of {', '.join(SUPPORTED_PAYMENT_METHOD_TYPES)}",
                stripe_code="parameter_invalid_enum",
                param="type",
            )
        if params.type == "card" and params.card is None:
            raise _invalid(
                "Missing required param: card.",
                stripe_code="parameter_missing",
                param="card",
            )
        if params.type != "card" and params.card is not None:
            raise _invalid(
                "Received unknown parameter: card",
                stripe_code="parameter_unknown",
                param="card",
            )

        billing = params.billing_details.to_params() if params.billing_details else {}
        address = billing.get("address", {})
        payment_method_id = self._new_id("pm")
        record: dict[str, Any] = {
            "id": payment_method_id,
            "object": "payment_method",
            "type": params.type,
            "billing_details": {
                "address": {name: address.get(name) for name in ADDRESS_FIELDS},
                **{name: billing.get(name) for name in BILLING_CONTACT_FIELDS},
            },
            "customer": None,
            "metadata": {str(k): str(v) for k, v in params.metadata.items()},
            "created": int(time.time()),
            "livemode": False,
        }
        if params.card is not None:
            record["card"] = self._card_record(params.card)
        else:
            record[params.type] = {}

        self._payment_methods[payment_method_id] = record
        self._order[payment_method_id] = next(self._sequence)
        logger.debug(
            "Created in-memory payment method",
            extra={
                "payment_method_id": payment_method_id,
                "type": params.type,
                "trace_id": trace_id,
            },
        )
        return self._result(record)

    @staticmethod
    def _card_record(card: CardDetails) -> dict[str, Any]:
        if card.token:
            if card.token not in TEST_CARD_TOKENS:
                raise _invalid(
                    f"No such token: '{card.token}'",
                    stripe_code="resource_missing",
                    param="card[token]",
                )
            brand, last4 = TEST_CARD_TOKENS[card.token]
            exp_month = card.exp_month or 8
            exp_year = card.exp_year or time.gmtime().tm_year + 3
        else:
            brand, last4 = card_brand(card.number), card.number[-4:]
            exp_month, exp_year = card.exp_month, card.exp_year
        return {
            "brand": brand,
            "last4": last4,
            "exp_month": exp_month,
            "exp_year": exp_year,
            "funding": "credit",
        }

    def retrieve_payment_method(
        self,
        payment_method_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        return self._result(self._get_payment_method(payment_method_id))

    def list_payment_methods(
        self,
        customer_id: str,
        type: str = "card",
        limit: int | None = None,
        trace_id: str | None = None,
    ) -> list[PaymentMethodResult]:
        """
        List a customer's payment methods of one type, newest first.

        Raises:
            StripeInvalidRequestError: Unknown customer
        """
        if customer_id not in self._customers:
            raise _invalid(
                f"No such customer: '{customer_id}'",
                stripe_code="resource_missing",
                param="customer",
            )

        matches = [
            record
            for record in self._payment_methods.values()
            if record["customer"] == customer_id and record["type"] == type
        ]
        matches.sort(key=lambda record: self._order[record["id"]], reverse=True)
        if limit is not None:
            matches = matches[: max(limit, 0)]
        return [self._result(record) for record in matches]

    def attach_payment_method(
        self,
        payment_method_id: str,
        customer_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Attach a payment method to a customer.

        Re-attaching to the same customer is a no-op.

        Raises:
            StripeInvalidRequestError: Unknown payment method or customer,
                or attached elsewhere
        """
        record = self._get_payment_method(payment_method_id)
        if customer_id not in self._customers:
            raise _invalid(
                f"No such customer: '{customer_id}'",
                stripe_code="resource_missing",
                param="customer",
            )
        if record["customer"] == customer_id:
            return self._result(record)
        if record["customer"] is not None:
            raise _invalid(
                "The payment method you provided has already been attached to a customer.",
                stripe_code="payment_method_unexpected_state",
                param="payment_method",
            )

        record["customer"] = customer_id
        logger.debug(
            "Attached in-memory payment method",
            extra={
                "payment_method_id": payment_method_id,
                "customer_id": customer_id,
                "trace_id": trace_id,
            },
        )
        return self._result(record)

    def detach_payment_method(
        self,
        payment_method_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        record = self._get_payment_method(payment_method_id)
        record["customer"] = None
        logger.debug(
            "Detached in-memory payment method",
            extra={"payment_method_id": payment_method_id, "trace_id": trace_id},
        )
        return self._result(record)

    def update_payment_method(
        self,
        payment_method_id: str,
        card: dict[str, int] | None = None,
        billing_details: BillingDetails | None = None,
        metadata: dict[str, str] | None = None,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Apply a partial update to an attached payment method.

        All checks run before anything is written, so a rejected update
        leaves the record untouched.

        Raises:
            StripeInvalidRequestError: Unknown or unattached payment method,
                or card fields that cannot be updated
        """
        record = self._get_payment_method(payment_method_id)
        if record["customer"] is None:
            raise _invalid(
                "You must save this PaymentMethod to a customer before you can update it.",
                stripe_code="payment_method_unexpected_state",
                param="payment_method",
            )

        card = dict(card or {})
        if card:
            if record["type"] != "card":
                raise _invalid(
                    "Received unknown parameter: card",
                    stripe_code="parameter_unknown",
                    param="card",
                )
            for name in card:
                if name not in UPDATABLE_CARD_FIELDS:
                    raise _invalid(
                        f"Received unknown parameter: card[{name}]",
                        stripe_code="parameter_unknown",
                        param=f"card[{name}]",
                    )
                try:
                    card[name] = int(card[name])
                except (TypeError, ValueError):
                    raise _invalid(
                        f"Invalid integer: {card[name]}",
                        stripe_code=f"invalid_{name.replace('exp_', 'expiry_')}",
                        param=f"card[{name}]",
                    ) from None
            if "exp_month" in card and not 1 <= card["exp_month"] <= 12:
                raise _invalid(
                    "Your card's expiration month is invalid.",
                    stripe_code="invalid_expiry_month",
                    param="card[exp_month]",
                )

        if card:
            record["card"].update(card)
        if billing_details is not None:
            changes = billing_details.to_params()
            record["billing_details"]["address"].update(changes.pop("address", {}))
            record["billing_details"].update(changes)
        for key, value in (metadata or {}).items():
            if value == "":
                record["metadata"].pop(str(key), None)
            else:
                record["metadata"][str(key)] = str(value)

        logger.debug(
            "Updated in-memory payment method",
            extra={"payment_method_id": payment_method_id, "trace_id": trace_id},
        )
        return self._result(record)
