"""
App configuration for Payment License Service.
"""

import logging
import os

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class PaymentLicenseServiceConfig(AppConfig):
    """App configuration for PaymentLicenseService."""

    name = "PaymentLicenseService"
    verbose_name = "Payment License Service"

    def ready(self):
        """Called when Django starts."""
        # Django's autoreloader runs ready() in the watcher process too
        if os.environ.get("RUN_MAIN") == "false":
            return

        self.setup_observability()
        self.register_event_handlers()

    def setup_observability(self):
        """Setup tracing after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        try:
            setup_opentelemetry()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to setup OpenTelemetry: %s", e)

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()
