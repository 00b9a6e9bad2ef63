"""
Integration tests for admin, health and metrics endpoints.
"""

import pytest


@pytest.mark.integration
class TestAdminAPI:
    """Integration tests for the admin dump."""

    def test_disabled_without_token(self, api_client, settings):
        """Test the admin API does not exist unless configured."""
        settings.ADMIN_API_TOKEN = None
        response = api_client.get("/api/admin/debug")
        assert response.status_code == 404

    def test_wrong_token(self, api_client, settings):
        """Test a wrong token is refused."""
        settings.ADMIN_API_TOKEN = "s3cret"
        response = api_client.get("/api/admin/debug", HTTP_X_ADMIN_TOKEN="guess")
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ADMIN_ACCESS_DENIED"

    def test_dump(self, api_client, settings):
        """Test the dump lists state with truncated device hashes."""
        settings.ADMIN_API_TOKEN = "s3cret"
        order_id = api_client.post(
            "/api/create-payment", {"productName": "Pro plan", "price": 2000}, format="json"
        ).json()["orderId"]
        api_client.post(
            "/api/payos-webhook",
            {"code": "00", "success": True, "data": {"orderCode": order_id}},
            format="json",
        )
        key = api_client.get(f"/api/get-license/{order_id}").json()["licenseKey"]
        api_client.post("/api/activate-license", {"licenseKey": key, "deviceId": "d"}, format="json")

        response = api_client.get("/api/admin/debug", HTTP_X_ADMIN_TOKEN="s3cret")

        assert response.status_code == 200
        data = response.json()
        assert data["bindingPolicy"] == "strict"
        assert [o["orderId"] for o in data["orders"]] == [str(order_id)]
        assert data["orders"][0]["placeholder"] is False
        assert data["licenses"][0]["key"] == key
        assert len(data["licenses"][0]["deviceHashPrefix"]) == 12


@pytest.mark.integration
class TestServiceEndpoints:
    """Integration tests for service endpoints."""

    def test_index(self, api_client):
        """Test the index lists endpoints."""
        data = api_client.get("/").json()
        assert data["status"] == "running"
        assert "activateLicense" in data["endpoints"]

    def test_health(self, api_client):
        """Test the health endpoint."""
        response = api_client.get("/health/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, api_client):
        """Test the readiness endpoint checks the cache."""
        response = api_client.get("/ready/")
        assert response.status_code == 200
        assert response.json()["checks"] == {"cache": True}

    def test_metrics(self, api_client):
        """Test metrics are exposed in Prometheus format."""
        api_client.get("/health/")
        response = api_client.get("/metrics")
        assert response.status_code == 200
        assert b"http_requests_total" in response.content

    def test_correlation_id_echoed(self, api_client):
        """Test the correlation id header is reused."""
        response = api_client.get("/health/", HTTP_X_CORRELATION_ID="abc-123")
        assert response["X-Correlation-ID"] == "abc-123"

    def test_unknown_route(self, api_client):
        """Test unknown routes are 404."""
        assert api_client.get("/api/nothing-here").status_code == 404


@pytest.mark.integration
class TestCORS:
    """Integration tests for cross-origin access from the extension."""

    def test_preflight_allows_any_origin_by_default(self, api_client):
        """Test a preflight for activation is answered with an allow-origin header."""
        response = api_client.options(
            "/api/activate-license",
            HTTP_ORIGIN="chrome-extension://abcdefghijklmnop",
            HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
            HTTP_ACCESS_CONTROL_REQUEST_HEADERS="content-type",
        )

        assert response.status_code == 200
        assert response["Access-Control-Allow-Origin"] == "*"
        assert "POST" in response["Access-Control-Allow-Methods"]

    def test_simple_request_carries_allow_origin(self, api_client):
        """Test actual responses carry the allow-origin header."""
        response = api_client.get("/api/get-license/1", HTTP_ORIGIN="https://ext.example")

        assert response.status_code == 200
        assert response["Access-Control-Allow-Origin"] == "*"

    def test_configured_origins_only(self, api_client, settings):
        """Test an origin list restricts cross-origin access."""
        settings.CORS_ALLOW_ALL_ORIGINS = False
        settings.CORS_ALLOWED_ORIGINS = ["https://ext.example"]

        allowed = api_client.options(
            "/api/create-payment",
            HTTP_ORIGIN="https://ext.example",
            HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
        )
        refused = api_client.options(
            "/api/create-payment",
            HTTP_ORIGIN="https://other.example",
            HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
        )

        assert allowed["Access-Control-Allow-Origin"] == "https://ext.example"
        assert "Access-Control-Allow-Origin" not in refused
