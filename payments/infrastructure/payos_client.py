"""
PayOS payment gateway adapter.

Creates hosted checkouts through the PayOS merchant API.
"""
import hashlib
import hmac
import logging
from typing import Any, Dict, Mapping

import requests

from core.domain.exceptions import UpstreamError
from core.metrics import upstream_errors_total
from payments.ports.payment_gateway import PaymentGateway, PaymentLink, PaymentRequest

logger = logging.getLogger(__name__)

PAYMENT_REQUESTS_PATH = "/v2/payment-requests"
SUCCESS_CODE = "00"


def generate_signature(data: Mapping[str, Any], checksum_key: str) -> str:
    """
    Generate the request integrity code expected by PayOS.

    Fields are sorted by name, joined as ``key=value`` pairs with ``&``
    and signed with HMAC-SHA256.

    Args:
        data: Fields covered by the signature
        checksum_key: Shared secret

    Returns:
        Hex-encoded HMAC-SHA256 digest
    """
    payload = "&".join(f"{key}={data[key]}" for key in sorted(data))
    return hmac.new(checksum_key.encode(), payload.encode(), hashlib.sha256).hexdigest()


class PayOSClient(PaymentGateway):
    """PaymentGateway implementation backed by the PayOS HTTP API."""

    def __init__(
        self,
        client_id: str,
        api_key: str,
        checksum_key: str,
        base_url: str = "https://api-merchant.payos.vn",
        timeout_seconds: float = 20,
    ):
        self.client_id = client_id
        self.api_key = api_key
        self.checksum_key = checksum_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> Dict[str, str]:
        return {
            "x-client-id": self.client_id,
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def build_payload(self, request: PaymentRequest) -> Dict[str, Any]:
        """Build the signed request body."""
        signed_fields = {
            "amount": request.amount,
            "cancelUrl": request.cancel_url,
            "description": request.description,
            "orderCode": request.order_code,
            "returnUrl": request.return_url,
        }
        return {
            **signed_fields,
            "signature": generate_signature(signed_fields, self.checksum_key),
        }

    def create_payment_link(self, request: PaymentRequest) -> PaymentLink:
        payload = self.build_payload(request)
        url = f"{self.base_url}{PAYMENT_REQUESTS_PATH}"
        logger.info(
            "Requesting checkout link",
            extra={"order_id": request.order_code, "amount": request.amount},
        )

        try:
            response = requests.post(
                url, json=payload, headers=self._headers(), timeout=self.timeout_seconds
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            upstream_errors_total.inc()
            logger.error("PayOS request failed: %s", e, extra={"order_id": request.order_code})
            raise UpstreamError(f"Payment provider request failed: {e}") from e
        except ValueError as e:
            upstream_errors_total.inc()
            logger.error("PayOS returned a non-JSON body", extra={"order_id": request.order_code})
            raise UpstreamError("Payment provider returned an invalid response") from e

        if not isinstance(body, dict):
            body = {}
        data = body.get("data")
        checkout_url = data.get("checkoutUrl") if isinstance(data, dict) else None
        if body.get("code") != SUCCESS_CODE or not checkout_url:
            upstream_errors_total.inc()
            message = body.get("desc")
            logger.error(
                "PayOS rejected payment request: %s",
                message,
                extra={"order_id": request.order_code, "provider_code": body.get("code")},
            )
            raise UpstreamError(message or "Payment provider did not return a checkout link")

        return PaymentLink(order_code=request.order_code, checkout_url=checkout_url)
