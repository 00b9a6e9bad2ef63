"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from typing import List

import pytest
from django.core.cache import cache

from confirmations.domain.services import ConfirmationReconciler
from core.domain.exceptions import UpstreamError
from core.domain.value_objects import DeviceBindingPolicy
from core.infrastructure.container import reset_container
from core.infrastructure.event_handlers import register_event_handlers
from core.infrastructure.events import event_bus
from licenses.domain.services import LicenseRegistry
from licenses.infrastructure.repositories.in_memory_license_repository import (
    InMemoryDeviceIndexRepository,
    InMemoryLicenseRepository,
)
from payments.domain.services import PaymentLedger
from payments.infrastructure.repositories.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from payments.ports.payment_gateway import PaymentGateway, PaymentLink, PaymentRequest


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakePaymentGateway(PaymentGateway):
    """Gateway that records requests instead of calling PayOS."""

    def __init__(self):
        self.requests: List[PaymentRequest] = []
        self.fail_with = None

    def create_payment_link(self, request: PaymentRequest) -> PaymentLink:
        self.requests.append(request)
        if self.fail_with:
            raise self.fail_with
        return PaymentLink(
            order_code=request.order_code,
            checkout_url=f"https://pay.payos.vn/web/{request.order_code}",
        )


@pytest.fixture
def fake_gateway():
    """Fixture for a recording payment gateway."""
    return FakePaymentGateway()


@pytest.fixture
def failing_gateway(fake_gateway):
    """Fixture for a gateway whose provider call fails."""
    fake_gateway.fail_with = UpstreamError("Payment provider request failed: timeout")
    return fake_gateway


@pytest.fixture(autouse=True)
def container(fake_gateway):
    """Fresh service container, event subscriptions and cache per test."""
    cache.clear()
    event_bus.clear()
    register_event_handlers(force=True)
    yield reset_container(gateway=fake_gateway)
    event_bus.clear()
    register_event_handlers(force=True)


@pytest.fixture
def clock():
    """Fixture for a frozen clock at a fixed instant."""
    return FrozenClock(datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def order_repository():
    """Fixture for OrderRepository."""
    return InMemoryOrderRepository()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def device_index():
    """Fixture for DeviceIndexRepository."""
    return InMemoryDeviceIndexRepository()


@pytest.fixture
def ledger(order_repository, clock):
    """Fixture for PaymentLedger."""
    return PaymentLedger(order_repository, clock=clock)


@pytest.fixture
def registry(license_repository, device_index, clock):
    """Fixture for a strict-policy LicenseRegistry."""
    return LicenseRegistry(license_repository, device_index, clock=clock)


@pytest.fixture
def lenient_registry(license_repository, device_index, clock):
    """Fixture for a lenient-policy LicenseRegistry."""
    return LicenseRegistry(
        license_repository, device_index, policy=DeviceBindingPolicy.LENIENT, clock=clock
    )


@pytest.fixture
def reconciler(ledger, registry):
    """Fixture for ConfirmationReconciler."""
    return ConfirmationReconciler(ledger, registry)


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
