"""
Root pytest configuration for the Django project.

This module configures pytest-django, registers the contract suite for
assertion rewriting, and gates tests marked `live` behind configuration.
App-specific fixtures are defined in each app's tests/conftest.py.
"""

import os

import django
import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

# The shared contract suite lives outside test modules
pytest.register_assert_rewrite("payments.contracts")


def pytest_configure(config):
    """Configure Django settings and markers before tests run."""
    django.setup()

    config.addinivalue_line(
        "markers",
        "live: hits the Stripe test-mode API (needs PAYMENT_CONTRACT_LIVE and sk_test_ key)",
    )
    config.addinivalue_line("markers", "contract: runs the payment method contract suite")
    config.addinivalue_line("markers", "unit: fast tests without external services")


def live_runs_enabled() -> bool:
    """Live tests run only when enabled and pointed at a Stripe test key."""
    from django.conf import settings

    return bool(settings.PAYMENT_CONTRACT_LIVE) and settings.STRIPE_SECRET_KEY.startswith(
        "sk_test_"
    )


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests and skip live tests unless enabled.

    Mapping:
    - test_*_contract.py → contract
    - everything else → unit

    Explicit markers on test functions/classes take precedence.
    """
    skip_live = pytest.mark.skip(
        reason="live Stripe runs need PAYMENT_CONTRACT_LIVE=true and an sk_test_ key"
    )
    live_enabled = live_runs_enabled()

    for item in items:
        if "live" in item.keywords and not live_enabled:
            item.add_marker(skip_live)

        if any(item.get_closest_marker(name) for name in ("contract", "unit")):
            continue
        if item.path.name.endswith("_contract.py"):
            item.add_marker(pytest.mark.contract)
        else:
            item.add_marker(pytest.mark.unit)
