"""
Base Django settings for PaymentLicenseService.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
SERVICE_VERSION = os.environ.get("SERVICE_VERSION", "1.0.0")

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get(
    "SECRET_KEY", "django-insecure-7q$k2n!v0x@p4w#r8m^z1c&e5b(t6y)u9h_j3g+l-a=s*d"
)

ALLOWED_HOSTS = [host for host in os.environ.get("ALLOWED_HOSTS", "*").split(",") if host]

# Application definition
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    # Third party
    "rest_framework",
    "drf_spectacular",
    "corsheaders",
    # Local apps
    "PaymentLicenseService.apps.PaymentLicenseServiceConfig",
    "core",
    "payments",
    "licenses",
    "confirmations",
    "api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    # Custom middleware
    "core.middleware.observability.ObservabilityMiddleware",
    "core.middleware.metrics.MetricsMiddleware",
    "core.middleware.rate_limit.RateLimitMiddleware",
]

ROOT_URLCONF = "PaymentLicenseService.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "PaymentLicenseService.wsgi.application"
ASGI_APPLICATION = "PaymentLicenseService.asgi.application"

# Domain state is held in memory; Django itself needs no database
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# REST Framework
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": [],
    "UNAUTHENTICATED_USER": None,
    "EXCEPTION_HANDLER": "api.exceptions.custom_exception_handler",
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Payment License Service API",
    "DESCRIPTION": (
        "Sells time-limited software licenses through PayOS. "
        "Provides endpoints for checkout, payment confirmation, "
        "license activation, device binding and license recovery."
    ),
    "VERSION": SERVICE_VERSION,
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SCHEMA_PATH_PREFIX": "/api",
    "TAGS": [
        {"name": "Payment API", "description": "Checkout and payment confirmation"},
        {"name": "License API", "description": "License activation and validation"},
        {"name": "Admin", "description": "Token-protected introspection"},
    ],
}

# Cache (rate-limit counters); Redis when REDIS_URL is set
REDIS_URL = os.environ.get("REDIS_URL")
if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": REDIS_URL,
            "OPTIONS": {
                "socket_connect_timeout": 5,
                "socket_timeout": 5,
            },
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }

# PayOS
PAYOS_CLIENT_ID = os.environ.get("PAYOS_CLIENT_ID", "")
PAYOS_API_KEY = os.environ.get("PAYOS_API_KEY", "")
PAYOS_CHECKSUM_KEY = os.environ.get("PAYOS_CHECKSUM_KEY", "")
PAYOS_API_URL = os.environ.get("PAYOS_API_URL", "https://api-merchant.payos.vn")
PAYOS_TIMEOUT_SECONDS = float(os.environ.get("PAYOS_TIMEOUT_SECONDS", "20"))

# Base URL the provider redirects back to
PUBLIC_BASE_URL = os.environ.get("PUBLIC_BASE_URL", "http://localhost:8000")

# Licenses
LICENSE_KEY_PREFIX = os.environ.get("LICENSE_KEY_PREFIX", "PACK")
LICENSE_VALIDITY_YEARS = int(os.environ.get("LICENSE_VALIDITY_YEARS", "1"))
DEVICE_BINDING_POLICY = os.environ.get("DEVICE_BINDING_POLICY", "strict")

# Admin introspection is disabled unless a token is configured
ADMIN_API_TOKEN = os.environ.get("ADMIN_API_TOKEN") or None

# Rate limits: path -> (requests, window seconds), per client IP
RATE_LIMITS = {
    "/api/activate-license": (int(os.environ.get("ACTIVATION_RATE_LIMIT", "10")), 3600),
    "/api/check-license": (int(os.environ.get("CHECK_RATE_LIMIT", "100")), 3600),
    "/api/check-device-license": (int(os.environ.get("CHECK_RATE_LIMIT", "100")), 3600),
}

# Number of reverse proxies in front of the service. X-Forwarded-For is
# ignored unless set; the client is the hop that many entries from the right.
TRUSTED_PROXY_COUNT = int(os.environ.get("TRUSTED_PROXY_COUNT", "0"))

# CORS: the browser extension client calls the API cross-origin
CORS_ALLOWED_ORIGINS = [
    origin for origin in os.environ.get("CORS_ALLOWED_ORIGINS", "").split(",") if origin
]
CORS_ALLOW_ALL_ORIGINS = os.environ.get(
    "CORS_ALLOW_ALL_ORIGINS", "false" if CORS_ALLOWED_ORIGINS else "true"
).lower() in ("1", "true", "yes")
CORS_EXPOSE_HEADERS = ["X-Correlation-ID", "X-Trace-ID", "Retry-After"]

# Observability
LOGGING = get_logging_config(ENVIRONMENT)
