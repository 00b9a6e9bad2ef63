"""
Unit tests for the PayOS gateway adapter.
"""
import hashlib
import hmac
from unittest.mock import Mock

import pytest
import requests

from core.domain.exceptions import UpstreamError
from payments.infrastructure.payos_client import PayOSClient, generate_signature
from payments.ports.payment_gateway import PaymentRequest

CHECKSUM_KEY = "checksum-secret"


@pytest.fixture
def client():
    return PayOSClient(
        client_id="client-id",
        api_key="api-key",
        checksum_key=CHECKSUM_KEY,
        base_url="https://payos.test/",
        timeout_seconds=5,
    )


@pytest.fixture
def payment_request():
    return PaymentRequest(
        order_code=1700000000000,
        amount=2000,
        description="Pro plan",
        return_url="http://testserver/api/payment-success",
        cancel_url="http://testserver/api/payment-success",
    )


def fake_response(body=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class TestSignature:
    """Tests for request signing."""

    def test_signature_over_sorted_fields(self, client, payment_request):
        """Test the signature covers the five fields in alphabetical order."""
        expected_payload = (
            "amount=2000"
            "&cancelUrl=http://testserver/api/payment-success"
            "&description=Pro plan"
            "&orderCode=1700000000000"
            "&returnUrl=http://testserver/api/payment-success"
        )
        expected = hmac.new(
            CHECKSUM_KEY.encode(), expected_payload.encode(), hashlib.sha256
        ).hexdigest()

        payload = client.build_payload(payment_request)
        assert payload["signature"] == expected
        assert payload["orderCode"] == 1700000000000
        assert payload["amount"] == 2000

    def test_signature_ignores_insertion_order(self):
        """Test field order does not change the signature."""
        assert generate_signature({"b": 1, "a": 2}, "k") == generate_signature({"a": 2, "b": 1}, "k")


class TestCreatePaymentLink:
    """Tests for checkout creation."""

    def test_success(self, client, payment_request, monkeypatch):
        """Test the checkout URL is taken from the response."""
        post = Mock(
            return_value=fake_response(
                {"code": "00", "desc": "success", "data": {"checkoutUrl": "https://pay.payos.vn/web/abc"}}
            )
        )
        monkeypatch.setattr(requests, "post", post)

        link = client.create_payment_link(payment_request)

        assert link.checkout_url == "https://pay.payos.vn/web/abc"
        assert link.order_code == 1700000000000
        args, kwargs = post.call_args
        assert args[0] == "https://payos.test/v2/payment-requests"
        assert kwargs["headers"]["x-client-id"] == "client-id"
        assert kwargs["headers"]["x-api-key"] == "api-key"
        assert kwargs["timeout"] == 5
        assert "signature" in kwargs["json"]

    def test_provider_rejection(self, client, payment_request, monkeypatch):
        """Test a non-success code is an upstream error with the provider message."""
        monkeypatch.setattr(
            requests, "post", Mock(return_value=fake_response({"code": "20", "desc": "Invalid signature"}))
        )
        with pytest.raises(UpstreamError, match="Invalid signature"):
            client.create_payment_link(payment_request)

    def test_missing_checkout_url(self, client, payment_request, monkeypatch):
        """Test a success code without a link is still a failure."""
        monkeypatch.setattr(requests, "post", Mock(return_value=fake_response({"code": "00", "data": None})))
        with pytest.raises(UpstreamError):
            client.create_payment_link(payment_request)

    def test_non_object_body(self, client, payment_request, monkeypatch):
        """Test a JSON body that is not an object is rejected."""
        monkeypatch.setattr(requests, "post", Mock(return_value=fake_response(["unexpected"])))
        with pytest.raises(UpstreamError):
            client.create_payment_link(payment_request)

    def test_non_json_body(self, client, payment_request, monkeypatch):
        """Test an unparseable body is rejected."""
        monkeypatch.setattr(
            requests, "post", Mock(return_value=fake_response(json_error=ValueError("no json")))
        )
        with pytest.raises(UpstreamError, match="invalid response"):
            client.create_payment_link(payment_request)

    def test_http_error(self, client, payment_request, monkeypatch):
        """Test HTTP errors are upstream errors."""
        monkeypatch.setattr(requests, "post", Mock(return_value=fake_response({}, status_code=502)))
        with pytest.raises(UpstreamError):
            client.create_payment_link(payment_request)

    def test_transport_error(self, client, payment_request, monkeypatch):
        """Test timeouts are upstream errors."""
        monkeypatch.setattr(
            requests, "post", Mock(side_effect=requests.exceptions.Timeout("timed out"))
        )
        with pytest.raises(UpstreamError, match="timed out"):
            client.create_payment_link(payment_request)
