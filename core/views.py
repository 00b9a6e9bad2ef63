"""
Core views for health checks, metrics and service status.
"""

from django.conf import settings
from django.core.cache import cache
from django.http import HttpResponse, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from core.domain.clock import utcnow

SERVICE_NAME = "payment-license-service"

ENDPOINTS = {
    "createPayment": "POST /api/create-payment",
    "paymentSuccess": "GET /api/payment-success",
    "webhook": "POST /api/payos-webhook",
    "getLicense": "GET /api/get-license/<orderId>",
    "activateLicense": "POST /api/activate-license",
    "bindDevice": "POST /api/bind-device",
    "checkLicense": "POST /api/check-license",
    "checkDeviceLicense": "POST /api/check-device-license",
}


class IndexView(View):
    """Service index."""

    def get(self, _request):
        """Return service status and endpoint list."""
        return JsonResponse(
            {
                "status": "running",
                "service": SERVICE_NAME,
                "version": settings.SERVICE_VERSION,
                "endpoints": ENDPOINTS,
            }
        )


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Health check endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse(
            {"status": "healthy", "service": SERVICE_NAME, "timestamp": utcnow().isoformat()}
        )


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness check endpoint."""

    def get(self, _request):
        """Check if service is ready to accept traffic."""
        checks = {
            "cache": self._check_cache(),
        }

        all_healthy = all(checks.values())
        status_code = 200 if all_healthy else 503

        return JsonResponse(
            {
                "status": "ready" if all_healthy else "not_ready",
                "checks": checks,
            },
            status=status_code,
        )

    def _check_cache(self) -> bool:
        """Check cache connectivity."""
        try:
            cache.set("ready_check", "ok", 10)
            return cache.get("ready_check") == "ok"
        except Exception:  # pylint: disable=broad-exception-caught
            return False


class MetricsView(View):
    """Prometheus exposition endpoint."""

    def get(self, _request):
        """Return metrics in the Prometheus text format."""
        return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
