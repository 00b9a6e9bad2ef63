"""
Service container.

Assembles repositories, domain services and handlers from Django
settings. One container lives per process; tests reset it to start
from empty stores.
"""

import logging
import threading
from typing import Optional

from django.conf import settings

from confirmations.application.handlers.confirm_payment_handler import ConfirmPaymentHandler
from confirmations.domain.services import ConfirmationReconciler
from core.domain.value_objects import DeviceBindingPolicy
from core.infrastructure.events import event_bus
from licenses.application.handlers.activate_license_handler import (
    ActivateLicenseHandler,
    BindDeviceHandler,
)
from licenses.application.handlers.check_license_handler import (
    CheckDeviceLicenseHandler,
    CheckLicenseHandler,
)
from licenses.domain.services import LicenseRegistry
from licenses.infrastructure.repositories.in_memory_license_repository import (
    InMemoryDeviceIndexRepository,
    InMemoryLicenseRepository,
)
from payments.application.handlers.create_payment_handler import CreatePaymentHandler
from payments.application.handlers.get_license_by_order_handler import GetLicenseByOrderHandler
from payments.domain.services import OrderCodeGenerator, PaymentLedger
from payments.infrastructure.payos_client import PayOSClient
from payments.infrastructure.repositories.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from payments.ports.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)

RETURN_PATH = "/api/payment-success"


class Container:
    """Wires the application from settings."""

    def __init__(self, gateway: Optional[PaymentGateway] = None):
        """
        Build every component.

        Args:
            gateway: Payment gateway override (tests use a fake)
        """
        self.order_repository = InMemoryOrderRepository()
        self.license_repository = InMemoryLicenseRepository()
        self.device_index = InMemoryDeviceIndexRepository()

        self.policy = DeviceBindingPolicy.from_setting(settings.DEVICE_BINDING_POLICY)
        self.ledger = PaymentLedger(self.order_repository)
        self.registry = LicenseRegistry(
            self.license_repository,
            self.device_index,
            policy=self.policy,
            key_prefix=settings.LICENSE_KEY_PREFIX,
            validity_years=settings.LICENSE_VALIDITY_YEARS,
            event_bus=event_bus,
        )
        self.reconciler = ConfirmationReconciler(self.ledger, self.registry)
        self.order_codes = OrderCodeGenerator()
        self.gateway = gateway or PayOSClient(
            client_id=settings.PAYOS_CLIENT_ID,
            api_key=settings.PAYOS_API_KEY,
            checksum_key=settings.PAYOS_CHECKSUM_KEY,
            base_url=settings.PAYOS_API_URL,
            timeout_seconds=settings.PAYOS_TIMEOUT_SECONDS,
        )

        return_url = f"{settings.PUBLIC_BASE_URL.rstrip('/')}{RETURN_PATH}"
        self.create_payment_handler = CreatePaymentHandler(
            self.ledger,
            self.gateway,
            self.order_codes,
            default_return_url=return_url,
            default_cancel_url=return_url,
        )
        self.get_license_by_order_handler = GetLicenseByOrderHandler(self.ledger, self.registry)
        self.confirm_payment_handler = ConfirmPaymentHandler(self.reconciler)
        self.activate_license_handler = ActivateLicenseHandler(self.registry)
        self.bind_device_handler = BindDeviceHandler(self.registry)
        self.check_license_handler = CheckLicenseHandler(self.registry)
        self.check_device_license_handler = CheckDeviceLicenseHandler(self.registry)

        logger.info(
            "Container built",
            extra={"binding_policy": str(self.policy), "key_prefix": settings.LICENSE_KEY_PREFIX},
        )


_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, building it on first use."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
    return _container


def reset_container(gateway: Optional[PaymentGateway] = None) -> Container:
    """
    Replace the container with a fresh one.

    Args:
        gateway: Payment gateway override

    Returns:
        The new container
    """
    global _container
    with _container_lock:
        _container = Container(gateway=gateway)
    return _container
