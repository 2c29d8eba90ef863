# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains the Django settings for the payment method contract
# suite. There are no URLs or ASGI/WSGI applications: the project is consumed
# by the test runner and by code importing the payment adapters.
# =============================================================================
