"""
Check license handlers.

Read-only validity checks by key and by device.
"""

from core.domain.clock import Clock, utcnow
from core.domain.exceptions import DeviceNotBoundError, LicenseNotFoundError
from licenses.application.dto.license_dto import LicenseCheckDTO
from licenses.application.queries.check_device_license import CheckDeviceLicenseQuery
from licenses.application.queries.check_license import CheckLicenseQuery
from licenses.domain.license import License
from licenses.domain.services import LicenseRegistry


def _to_dto(license: License, registry: LicenseRegistry, clock: Clock) -> LicenseCheckDTO:
    now = clock()
    return LicenseCheckDTO(
        license_key=license.key,
        valid=registry.is_valid(license, now),
        status=license.status.value,
        expiry_date=license.expiry_date,
        remaining_days=license.remaining_days(now),
        device_bound=license.is_bound,
    )


class CheckLicenseHandler:
    """Handler for CheckLicenseQuery."""

    def __init__(self, registry: LicenseRegistry, clock: Clock = utcnow):
        self.registry = registry
        self._clock = clock

    async def handle(self, query: CheckLicenseQuery) -> LicenseCheckDTO:
        """
        Handle check license query.

        An expired license is reported with valid=False, not raised.

        Raises:
            LicenseNotFoundError: If the key is unknown
        """
        license = await self.registry.lookup(query.license_key)
        if not license:
            raise LicenseNotFoundError("License key not found")
        return _to_dto(license, self.registry, self._clock)


class CheckDeviceLicenseHandler:
    """Handler for CheckDeviceLicenseQuery."""

    def __init__(self, registry: LicenseRegistry, clock: Clock = utcnow):
        self.registry = registry
        self._clock = clock

    async def handle(self, query: CheckDeviceLicenseQuery) -> LicenseCheckDTO:
        """
        Handle check device license query.

        Raises:
            DeviceNotBoundError: If no license is bound to the device
        """
        license = await self.registry.find_by_device(query.device_id)
        if not license:
            raise DeviceNotBoundError("No license is bound to this device")
        return _to_dto(license, self.registry, self._clock)
