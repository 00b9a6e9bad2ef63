"""
ActivateLicenseHandler.

Handles license activation and explicit device binding.
"""

from core.domain.exceptions import DomainException
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import license_activations_total
from licenses.application.commands.activate_license import ActivateLicenseCommand
from licenses.application.commands.bind_device import BindDeviceCommand
from licenses.application.dto.license_dto import ActivationResultDTO
from licenses.domain.license import License
from licenses.domain.services import LicenseRegistry

tracer = get_tracer(__name__)


def _to_dto(license: License) -> ActivationResultDTO:
    return ActivationResultDTO(
        license_key=license.key,
        status=license.status.value,
        expiry_date=license.expiry_date,
        device_bound=license.is_bound,
    )


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(self, registry: LicenseRegistry):
        """Initialize handler with the license registry."""
        self.registry = registry

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO

        Raises:
            LicenseNotFoundError: If the key is unknown
            LicenseExpiredError: If the license has expired
            LicenseAlreadyUsedError: If the license was already redeemed
            DeviceMismatchError: If the license is bound to another device
        """
        with tracer.start_as_current_span("activate_license") as span:
            span.set_attribute("device.present", command.device_id is not None)
            try:
                license = await self.registry.activate(command.license_key, command.device_id)
            except DomainException as e:
                license_activations_total.labels(outcome=e.code.lower()).inc()
                span.set_status(Status(StatusCode.ERROR, e.message))
                raise
            license_activations_total.labels(outcome="success").inc()
            span.set_status(Status(StatusCode.OK))
            return _to_dto(license)


class BindDeviceHandler:
    """Handler for BindDeviceCommand."""

    def __init__(self, registry: LicenseRegistry):
        """Initialize handler with the license registry."""
        self.registry = registry

    async def handle(self, command: BindDeviceCommand) -> ActivationResultDTO:
        """
        Handle bind device command.

        Raises:
            Same errors as activation
        """
        with tracer.start_as_current_span("bind_device"):
            license = await self.registry.bind_device(command.license_key, command.device_id)
            return _to_dto(license)
