"""
Admin API views.

Read-only dump of in-memory state, available only when an admin
token is configured and presented in the X-Admin-Token header.
"""

import hmac
import logging
from typing import Any, Dict

from asgiref.sync import async_to_sync
from django.conf import settings
from django.http import Http404
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from core.domain.clock import utcnow
from core.domain.exceptions import AdminAccessDeniedError
from core.domain.value_objects import DEVICE_HASH_PREFIX_LENGTH
from core.infrastructure.container import get_container
from licenses.domain.license import License
from payments.domain.order import Order

logger = logging.getLogger(__name__)

ADMIN_TOKEN_HEADER = "HTTP_X_ADMIN_TOKEN"


def _isoformat(value):
    return value.isoformat() if value else None


def serialize_order(order: Order) -> Dict[str, Any]:
    return {
        "orderId": order.order_id,
        "status": order.status.value,
        "amount": order.amount,
        "description": order.description,
        "licenseKey": order.license_key,
        "createdAt": _isoformat(order.created_at),
        "completedAt": _isoformat(order.completed_at),
        "placeholder": order.is_placeholder,
    }


def serialize_license(license: License) -> Dict[str, Any]:
    device_hash = license.device_hash
    return {
        "key": license.key,
        "orderId": license.order_id,
        "status": license.status.value,
        "expiryDate": _isoformat(license.expiry_date),
        "deviceHashPrefix": device_hash[:DEVICE_HASH_PREFIX_LENGTH] if device_hash else None,
        "createdAt": _isoformat(license.created_at),
        "activatedAt": _isoformat(license.activated_at),
    }


def check_admin_token(request: Request) -> None:
    """
    Authorise an admin request.

    Raises:
        Http404: If no admin token is configured
        AdminAccessDeniedError: If the presented token does not match
    """
    expected = getattr(settings, "ADMIN_API_TOKEN", None)
    if not expected:
        raise Http404("Admin API is disabled")
    presented = request.META.get(ADMIN_TOKEN_HEADER, "")
    if not hmac.compare_digest(presented.encode(), expected.encode()):
        logger.warning("Admin token rejected", extra={"remote_addr": request.META.get("REMOTE_ADDR")})
        raise AdminAccessDeniedError("Invalid admin token")


class AdminDebugView(APIView):
    """View dumping orders and licenses."""

    @extend_schema(
        operation_id="admin_debug",
        summary="Admin Debug Dump",
        description="Dump orders and licenses. Device hashes are truncated.",
        tags=["Admin"],
        parameters=[
            OpenApiParameter(
                name="X-Admin-Token",
                type=str,
                location=OpenApiParameter.HEADER,
                required=True,
                description="Value of the ADMIN_API_TOKEN setting",
            ),
        ],
        responses={
            200: {"description": "Orders and licenses"},
            403: {"description": "Invalid admin token"},
            404: {"description": "Admin API disabled"},
        },
    )
    def get(self, request: Request) -> Response:
        """Dump service state."""
        check_admin_token(request)
        container = get_container()
        orders = async_to_sync(container.ledger.list_orders)()
        licenses = async_to_sync(container.registry.list_licenses)()
        return Response(
            {
                "success": True,
                "orders": [serialize_order(order) for order in orders],
                "licenses": [serialize_license(license) for license in licenses],
                "bindingPolicy": str(container.policy),
                "timestamp": utcnow().isoformat(),
            },
            status=status.HTTP_200_OK,
        )
