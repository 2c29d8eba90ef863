"""
Tests for payments app.

This package contains test modules for:
- test_exceptions.py: Payment exception hierarchy tests

Adapter and contract tests live beside their packages:
    pytest payments/adapters/tests/
    pytest payments/contracts/tests/
"""
