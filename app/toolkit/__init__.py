"""
Toolkit - Domain-Specific Interfaces.

This app provides the protocols shared between payment adapters and
the code (and tests) that consume them.

Key components:
    - protocols.py: PaymentMethodClient and CustomerClient interfaces

Usage:
    from toolkit.protocols import PaymentMethodClient, CustomerClient

Note:
    - This app has no models.
    - Concrete adapters live in payments.adapters.
"""
