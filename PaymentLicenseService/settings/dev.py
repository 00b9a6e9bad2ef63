"""
Development settings for PaymentLicenseService.
"""

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Limits are per hour; keep them out of the way of manual testing
RATE_LIMITS = {}
