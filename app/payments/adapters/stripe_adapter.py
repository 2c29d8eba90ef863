"""
Stripe API adapter for payment method operations.

This module provides the StripeAdapter class which encapsulates all
Stripe API interactions for payment methods and customers. All Stripe
calls go through this adapter to ensure consistent error handling,
timeouts and logging.

Features:
- Configurable timeouts on all API calls
- Automatic error translation to domain exceptions
- Structured logging with timing metrics
- Optional idempotency keys on creation

Configuration (via settings):
- STRIPE_SECRET_KEY: Stripe API secret key
- STRIPE_API_TIMEOUT_SECONDS: API call timeout (default: 10)

Usage:
    from payments.adapters import StripeAdapter, CreatePaymentMethodParams, CardDetails

    customer = StripeAdapter.create_customer(email="john@example.com")
    payment_method = StripeAdapter.create_payment_method(
        CreatePaymentMethodParams(type="card", card=CardDetails(token="tok_visa"))
    )
    StripeAdapter.attach_payment_method(payment_method.id, customer_id=customer.id)
"""

from __future__ import annotations

import logging
import time
from itertools import islice
from typing import Any

import stripe
from django.conf import settings

from payments.adapters.types import (
    BillingDetails,
    CreatePaymentMethodParams,
    CustomerResult,
    PaymentMethodResult,
)
from payments.exceptions import (
    StripeAPIUnavailableError,
    StripeCardDeclinedError,
    StripeInvalidRequestError,
    StripeRateLimitError,
    StripeTimeoutError,
)

# Stripe's page size ceiling for list endpoints
MAX_PAGE_SIZE = 100


class StripeAdapter:
    """
    Adapter for Stripe payment method operations.

    All methods are class methods - no instance state is maintained,
    so the class itself (or any instance of it) satisfies the
    PaymentMethodClient and CustomerClient protocols.

    Usage:
        result = StripeAdapter.create_payment_method(params)
        result = StripeAdapter.attach_payment_method(result.id, customer_id)
    """

    # =========================================================================
    # Configuration
    # =========================================================================

    @staticmethod
    def _configure_stripe() -> None:
        """Configure Stripe client with API key and timeout."""
        stripe.api_key = settings.STRIPE_SECRET_KEY
        timeout = getattr(settings, "STRIPE_API_TIMEOUT_SECONDS", 10)
        stripe.default_http_client = stripe.RequestsClient(timeout=timeout)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    # =========================================================================
    # Customers
    # =========================================================================

    @classmethod
    def create_customer(
        cls,
        email: str | None = None,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
        trace_id: str | None = None,
    ) -> CustomerResult:
        """
        Create a Stripe Customer.

        Args:
            email: Optional customer email
            name: Optional customer name
            metadata: Optional metadata dict
            trace_id: Optional trace ID for distributed tracing

        Returns:
            CustomerResult with the new customer ID
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "create_customer",
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            customer_params: dict[str, Any] = {"metadata": metadata or {}}
            if email:
                customer_params["email"] = email
            if name:
                customer_params["name"] = name

            customer = stripe.Customer.create(**customer_params)

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "customer_id": customer.id,
                    "duration_ms": duration_ms,
                },
            )

            return CustomerResult.from_stripe(customer.to_dict())

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Payment Methods
    # =========================================================================

    @classmethod
    def create_payment_method(
        cls,
        params: CreatePaymentMethodParams,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Create a Stripe PaymentMethod.

        The new payment method is not attached to any customer.

        Args:
            params: Parameters for creating the PaymentMethod
            trace_id: Optional trace ID for distributed tracing

        Returns:
            PaymentMethodResult echoing the billing details and metadata

        Raises:
            StripeInvalidRequestError: Unsupported type or invalid parameters
            StripeCardDeclinedError: Card data rejected
            StripeAPIUnavailableError: Stripe service unavailable
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "create_payment_method",
            "type": params.type,
            "idempotency_key": params.idempotency_key,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            request_options: dict[str, Any] = {}
            if params.idempotency_key:
                request_options["idempotency_key"] = params.idempotency_key

            payment_method = stripe.PaymentMethod.create(
                **params.to_params(),
                **request_options,
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "payment_method_id": payment_method.id,
                    "duration_ms": duration_ms,
                },
            )

            return PaymentMethodResult.from_stripe(payment_method.to_dict())

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    @classmethod
    def retrieve_payment_method(
        cls,
        payment_method_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Retrieve a PaymentMethod by ID.

        Args:
            payment_method_id: Stripe PaymentMethod ID (pm_xxx)
            trace_id: Optional trace ID for distributed tracing

        Returns:
            PaymentMethodResult including the current customer association

        Raises:
            StripeInvalidRequestError: PaymentMethod not found
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "retrieve_payment_method",
            "payment_method_id": payment_method_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.debug("Starting Stripe operation", extra=log_context)

        try:
            payment_method = stripe.PaymentMethod.retrieve(payment_method_id)

            duration_ms = (time.time() - start_time) * 1000
            logger.debug(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "customer_id": payment_method.customer,
                    "duration_ms": duration_ms,
                },
            )

            return PaymentMethodResult.from_stripe(payment_method.to_dict())

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    @classmethod
    def list_payment_methods(
        cls,
        customer_id: str,
        type: str = "card",
        limit: int | None = None,
        trace_id: str | None = None,
    ) -> list[PaymentMethodResult]:
        """
        List a customer's PaymentMethods of one type, newest first.

        At most `limit` entries are returned; a limit of zero or less
        returns nothing without calling Stripe. Limits up to one page
        are served from a single page, anything larger (or no limit)
        follows every page.

        Args:
            customer_id: Stripe Customer ID (cus_xxx)
            type: Payment method type to filter by (default: 'card')
            limit: Maximum number to return
            trace_id: Optional trace ID for distributed tracing

        Returns:
            List of PaymentMethodResult objects

        Raises:
            StripeInvalidRequestError: Unknown customer
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "list_payment_methods",
            "customer_id": customer_id,
            "type": type,
            "limit": limit,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            if limit is not None and limit <= 0:
                payment_methods = []
            elif limit is not None and limit <= MAX_PAGE_SIZE:
                page = stripe.PaymentMethod.list(
                    customer=customer_id,
                    type=type,
                    limit=limit,
                )
                payment_methods = list(islice(page.data, limit))
            else:
                page = stripe.PaymentMethod.list(
                    customer=customer_id,
                    type=type,
                    limit=MAX_PAGE_SIZE,
                )
                payment_methods = list(islice(page.auto_paging_iter(), limit))

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "count": len(payment_methods),
                    "duration_ms": duration_ms,
                },
            )

            return [
                PaymentMethodResult.from_stripe(payment_method.to_dict())
                for payment_method in payment_methods
            ]

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    @classmethod
    def attach_payment_method(
        cls,
        payment_method_id: str,
        customer_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Attach a PaymentMethod to a Customer.

        Args:
            payment_method_id: Stripe PaymentMethod ID (pm_xxx)
            customer_id: Stripe Customer ID (cus_xxx)
            trace_id: Optional trace ID for distributed tracing

        Returns:
            PaymentMethodResult with customer set

        Raises:
            StripeInvalidRequestError: Unknown customer or payment method
            StripeCardDeclinedError: Card failed verification on attach
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "attach_payment_method",
            "payment_method_id": payment_method_id,
            "customer_id": customer_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            payment_method = stripe.PaymentMethod.attach(
                payment_method_id,
                customer=customer_id,
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={**log_context, "duration_ms": duration_ms},
            )

            return PaymentMethodResult.from_stripe(payment_method.to_dict())

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    @classmethod
    def detach_payment_method(
        cls,
        payment_method_id: str,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Detach a PaymentMethod from its Customer.

        Args:
            payment_method_id: Stripe PaymentMethod ID (pm_xxx)
            trace_id: Optional trace ID for distributed tracing

        Returns:
            PaymentMethodResult with customer cleared

        Raises:
            StripeInvalidRequestError: Unknown or unattached payment method
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "detach_payment_method",
            "payment_method_id": payment_method_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            payment_method = stripe.PaymentMethod.detach(payment_method_id)

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={**log_context, "duration_ms": duration_ms},
            )

            return PaymentMethodResult.from_stripe(payment_method.to_dict())

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    @classmethod
    def update_payment_method(
        cls,
        payment_method_id: str,
        card: dict[str, int] | None = None,
        billing_details: BillingDetails | None = None,
        metadata: dict[str, str] | None = None,
        trace_id: str | None = None,
    ) -> PaymentMethodResult:
        """
        Update fields on a PaymentMethod.

        Only the supplied fields are sent. Stripe only allows updates on
        payment methods that are attached to a customer.

        Args:
            payment_method_id: Stripe PaymentMethod ID (pm_xxx)
            card: Card fields to change (exp_month, exp_year)
            billing_details: Billing fields to change; unset fields are kept
            metadata: Metadata keys to set; an empty string removes a key
            trace_id: Optional trace ID for distributed tracing

        Returns:
            PaymentMethodResult after the update

        Raises:
            StripeInvalidRequestError: Unattached or unknown payment method
        """
        cls._configure_stripe()
        logger = cls.get_logger()

        log_context = {
            "operation": "update_payment_method",
            "payment_method_id": payment_method_id,
            "trace_id": trace_id,
        }

        start_time = time.time()
        logger.info("Starting Stripe operation", extra=log_context)

        try:
            update_params: dict[str, Any] = {}
            if card:
                update_params["card"] = dict(card)
            if billing_details is not None:
                update_params["billing_details"] = billing_details.to_params()
            if metadata:
                update_params["metadata"] = dict(metadata)

            payment_method = stripe.PaymentMethod.modify(
                payment_method_id,
                **update_params,
            )

            duration_ms = (time.time() - start_time) * 1000
            logger.info(
                "Stripe operation completed",
                extra={
                    **log_context,
                    "fields": sorted(update_params),
                    "duration_ms": duration_ms,
                },
            )

            return PaymentMethodResult.from_stripe(payment_method.to_dict())

        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            cls._handle_stripe_error(e, log_context, duration_ms)
            raise

    # =========================================================================
    # Error Handling
    # =========================================================================

    @classmethod
    def _handle_stripe_error(
        cls,
        error: Exception,
        log_context: dict[str, Any],
        duration_ms: float,
    ) -> None:
        """
        Translate Stripe exceptions to domain exceptions.

        Args:
            error: The Stripe exception
            log_context: Logging context dict
            duration_ms: Operation duration for logging

        Raises:
            StripeCardDeclinedError: Card was declined
            StripeInvalidRequestError: Invalid request or authentication failure
            StripeRateLimitError: Rate limited
            StripeTimeoutError: Request timed out
            StripeAPIUnavailableError: API unavailable or unexpected error
        """
        logger = cls.get_logger()

        log_context = {**log_context, "duration_ms": duration_ms}

        if isinstance(error, stripe.CardError):
            decline_code = getattr(error, "decline_code", None)
            logger.warning(
                "Card error from Stripe",
                extra={**log_context, "decline_code": decline_code},
            )
            raise StripeCardDeclinedError(
                str(error.user_message or error),
                stripe_code=error.code,
                decline_code=decline_code,
                param=getattr(error, "param", None),
            )

        elif isinstance(error, stripe.InvalidRequestError):
            logger.error(
                "Invalid request to Stripe",
                extra={**log_context, "stripe_code": error.code},
            )
            raise StripeInvalidRequestError(
                str(error.user_message or error),
                stripe_code=error.code,
                param=getattr(error, "param", None),
            )

        elif isinstance(error, stripe.RateLimitError):
            logger.warning(
                "Rate limited by Stripe",
                extra=log_context,
            )
            raise StripeRateLimitError(
                "Stripe rate limit exceeded.",
                stripe_code="rate_limit",
            )

        elif isinstance(error, stripe.APIConnectionError):
            logger.error(
                "Connection error to Stripe",
                extra=log_context,
                exc_info=True,
            )
            if "timed out" in str(error).lower():
                raise StripeTimeoutError(
                    "Stripe request timed out.",
                    stripe_code="timeout",
                )
            raise StripeAPIUnavailableError(
                "Could not connect to Stripe.",
                stripe_code="api_connection_error",
            )

        elif isinstance(error, stripe.APIError):
            logger.error(
                "Stripe API error",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                "Stripe service error.",
                stripe_code="api_error",
            )

        elif isinstance(error, stripe.AuthenticationError):
            # Invalid API key - permanent, operational issue
            logger.critical(
                "Stripe authentication failed - check API key",
                extra=log_context,
            )
            raise StripeInvalidRequestError(
                "Stripe authentication failed",
                stripe_code="authentication_error",
            )

        else:
            logger.error(
                f"Unexpected error from Stripe: {type(error).__name__}",
                extra=log_context,
                exc_info=True,
            )
            raise StripeAPIUnavailableError(
                f"Unexpected Stripe error: {error}",
                stripe_code="unknown_error",
            )
