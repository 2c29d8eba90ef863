"""
Payments app for payment method management.

This app handles:
- Payment method lifecycle (create, retrieve, list, attach, detach, update)
- Customer creation for attaching payment methods
- Translating processor errors to domain exceptions
- A contract suite verifying any payment method client

Usage:
    from payments.adapters import StripeAdapter, InMemoryPaymentAdapter
    from payments.contracts import PaymentMethodContract

    class TestMyClient(PaymentMethodContract):
        @pytest.fixture
        def client(self):
            return MyClient()
"""
