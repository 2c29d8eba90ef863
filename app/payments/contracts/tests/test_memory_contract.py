"""
Payment method contract, run against the in-memory adapter.
"""

import pytest

from payments.adapters import InMemoryPaymentAdapter
from payments.contracts import PaymentMethodContract


class TestInMemoryPaymentMethodContract(PaymentMethodContract):
    """Offline run of the payment method contract."""

    @pytest.fixture
    def client(self):
        return InMemoryPaymentAdapter()
