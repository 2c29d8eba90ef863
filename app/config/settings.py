"""
Django settings for the payment method contract suite.

This is the single settings file for all environments. Configuration is
driven by environment variables using django-environ, following the
12-factor app methodology.

Environment files:
    - .env.development: Local settings (read when present, or ENV_FILE)

Contract modes:
    - Offline (default): the suite runs against InMemoryPaymentAdapter
    - Live: set PAYMENT_CONTRACT_LIVE=true and a test-mode STRIPE_SECRET_KEY
      (sk_test_...) to also run the suite against the Stripe API

For the full list of settings and their values, see:
https://docs.djangoproject.com/en/5.2/ref/settings/
"""

import os
from pathlib import Path

import environ

# =============================================================================
# Path Configuration
# =============================================================================
BASE_DIR = Path(__file__).resolve().parent.parent

# =============================================================================
# Environment Configuration
# =============================================================================
env = environ.Env(
    DEBUG=(bool, False),
    LOG_LEVEL=(str, "INFO"),
    PAYMENT_CONTRACT_LIVE=(bool, False),
)

env_file = os.environ.get("ENV_FILE", BASE_DIR.parent / ".env.development")
if Path(env_file).exists():
    environ.Env.read_env(env_file)

# =============================================================================
# Core Settings
# =============================================================================
# Only used for Django internals; nothing here signs user data
SECRET_KEY = env("SECRET_KEY", default="django-insecure-payment-contracts")

DEBUG = env("DEBUG")

ALLOWED_HOSTS: list[str] = []

# =============================================================================
# Application Definition
# =============================================================================
INSTALLED_APPS = [
    # Local apps
    "toolkit",
    "payments",
]

USE_TZ = True
TIME_ZONE = "UTC"

# =============================================================================
# Stripe Configuration
# =============================================================================
# Get your API keys from: https://dashboard.stripe.com/apikeys
# The live contract suite refuses to run with anything but a test key (sk_test_...)
STRIPE_SECRET_KEY = env("STRIPE_SECRET_KEY", default="")

# API timeout in seconds (default: 10)
STRIPE_API_TIMEOUT_SECONDS = env.int("STRIPE_API_TIMEOUT_SECONDS", default=10)

# =============================================================================
# Contract Suite Configuration
# =============================================================================
# Run tests marked "live" against the Stripe API
PAYMENT_CONTRACT_LIVE = env("PAYMENT_CONTRACT_LIVE")

# Card token used for live runs; Stripe refuses raw card numbers by default
PAYMENT_CONTRACT_CARD_TOKEN = env("PAYMENT_CONTRACT_CARD_TOKEN", default="tok_visa")

# =============================================================================
# Logging Configuration
# =============================================================================
LOG_LEVEL = env("LOG_LEVEL")

LOG_FILE_NAME = env("LOG_FILE_NAME", default="payments.log")
LOG_DIR = BASE_DIR / "logs"

# Ensure log directory exists
LOG_DIR.mkdir(parents=True, exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "file": {
            "format": "[{asctime}] {levelname} {name} {module}:{lineno} - {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "file": {
            # Max 10MB per file, keeps 5 backups
            "level": "DEBUG",
            "class": "logging.handlers.RotatingFileHandler",
            "filename": LOG_DIR / LOG_FILE_NAME,
            "maxBytes": 10 * 1024 * 1024,
            "backupCount": 5,
            "formatter": "file",
            "encoding": "utf-8",
        },
    },
    "root": {
        "handlers": ["console", "file"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "payments": {
            "handlers": ["console", "file"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        # The SDK logs every request at INFO when its own logging is enabled
        "stripe": {
            "handlers": ["file"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}
