"""
Test settings for PaymentLicenseService.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

ALLOWED_HOSTS = ["*"]

# Use in-memory cache for tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

PAYOS_CLIENT_ID = "test-client"
PAYOS_API_KEY = "test-api-key"
PAYOS_CHECKSUM_KEY = "test-checksum-key"
PAYOS_API_URL = "https://payos.test"
PUBLIC_BASE_URL = "http://testserver"

LICENSE_KEY_PREFIX = "PACK"
LICENSE_VALIDITY_YEARS = 1
DEVICE_BINDING_POLICY = "strict"
ADMIN_API_TOKEN = None

# Tests enable limits explicitly
RATE_LIMITS = {}
TRUSTED_PROXY_COUNT = 0

CORS_ALLOWED_ORIGINS = []
CORS_ALLOW_ALL_ORIGINS = True

# Disable logging during tests
LOGGING_CONFIG = None
