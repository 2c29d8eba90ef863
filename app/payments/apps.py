"""
Payments app configuration.

This app provides payment method infrastructure:
- Stripe and in-memory payment adapters
- Payment exception hierarchy
- The reusable payment method contract suite
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """Configuration for the payments application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments"
