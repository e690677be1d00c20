"""
Settings used by the pytest suite.

Environment variables are given safe defaults before the base settings are
imported, so the suite runs without a .env file, Redis or Stripe credentials.
"""

import os

os.environ.setdefault("ENV_FILE", "/dev/null")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DEBUG", "False")
os.environ.setdefault("ALLOWED_HOSTS", "testserver,localhost")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")
os.environ.setdefault("REFUND_SECRET", "test-refund-secret")
os.environ.setdefault("MARKETPLACE_FEE_PERCENT", "10")

from config.settings import *  # noqa: E402,F401,F403
from config.settings import LOGGING, REST_FRAMEWORK  # noqa: E402

# =============================================================================
# Cache
# =============================================================================
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "payments-tests",
    }
}

# =============================================================================
# Database
# =============================================================================
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# =============================================================================
# Security
# =============================================================================
SECURE_SSL_REDIRECT = False

# =============================================================================
# REST Framework
# =============================================================================
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
}

# =============================================================================
# Logging (console only, no log files written by the suite)
# =============================================================================
LOGGING = {
    **LOGGING,
    "handlers": {"console": LOGGING["handlers"]["console"]},
    "root": {"handlers": ["console"], "level": "WARNING"},
    "loggers": {
        name: {**config, "handlers": ["console"]}
        for name, config in LOGGING["loggers"].items()
    },
}
