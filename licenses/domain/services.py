"""
License domain services.

The license registry owns license identity, expiry and device
binding. Activation and binding for one key are serialised by a
per-key lock; lookups take no lock.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from core.domain.clock import Clock, add_years, utcnow
from core.domain.events import DomainEvent, EventBus
from core.domain.exceptions import (
    DeviceMismatchError,
    LicenseAlreadyUsedError,
    LicenseExpiredError,
    LicenseKeyCollisionError,
    LicenseNotFoundError,
    ValidationError,
)
from core.domain.value_objects import DeviceBindingPolicy, DeviceFingerprint
from core.infrastructure.locks import KeyedLock
from licenses.domain.events import DeviceBound, LicenseActivated
from licenses.domain.license import License
from licenses.domain.license_key import (
    DEFAULT_PREFIX,
    generate_license_key,
    key_prefix_for_logs,
    normalize_key_prefix,
    normalize_license_key,
)
from licenses.ports.device_index_repository import DeviceIndexRepository
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

MAX_MINT_ATTEMPTS = 5


def fingerprint_device(device_id: Optional[str]) -> Optional[DeviceFingerprint]:
    """
    Hash a client device id, treating None as "no device".

    Raises:
        ValidationError: If the id is present but blank or not a string
    """
    if device_id is None:
        return None
    try:
        return DeviceFingerprint.from_device_id(device_id)
    except ValueError as e:
        raise ValidationError("Device ID must be a non-empty string") from e


class LicenseRegistry:
    """Domain service for the license lifecycle."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        device_index: DeviceIndexRepository,
        policy: DeviceBindingPolicy = DeviceBindingPolicy.STRICT,
        clock: Clock = utcnow,
        key_prefix: str = DEFAULT_PREFIX,
        validity_years: int = 1,
        key_factory: Callable[[str], str] = generate_license_key,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize the registry.

        Args:
            license_repository: License store
            device_index: Device hash -> license key store
            policy: What happens when a redeemed license meets another device
            clock: Time source
            key_prefix: Prefix of minted keys, upper-cased; must be alphanumeric
            validity_years: Calendar years a minted license stays valid
            key_factory: Key generator, replaceable in tests
            event_bus: Where activation and binding events are published
        """
        self.license_repository = license_repository
        self.device_index = device_index
        self.policy = policy
        self._clock = clock
        self.key_prefix = normalize_key_prefix(key_prefix)
        self.validity_years = validity_years
        self._key_factory = key_factory
        self._event_bus = event_bus
        self._locks = KeyedLock("license-registry")

    @property
    def locks(self) -> KeyedLock:
        return self._locks

    async def mint(self, order_id: str) -> License:
        """
        Mint a fresh unredeemed license for an order.

        Args:
            order_id: Order the license is issued for

        Returns:
            Newly stored License

        Raises:
            LicenseKeyCollisionError: If every generated key was taken
        """
        now = self._clock()
        expiry_date = add_years(now, self.validity_years)
        for attempt in range(1, MAX_MINT_ATTEMPTS + 1):
            license = License.create(
                key=self._key_factory(self.key_prefix),
                order_id=order_id,
                expiry_date=expiry_date,
                now=now,
            )
            try:
                saved = await self.license_repository.add(license)
            except LicenseKeyCollisionError:
                logger.warning(
                    "License key collision, regenerating",
                    extra={"order_id": order_id, "attempt": attempt},
                )
                continue
            logger.info(
                "License minted",
                extra={
                    "order_id": order_id,
                    "license_key_prefix": key_prefix_for_logs(saved.key),
                    "expiry_date": saved.expiry_date.isoformat(),
                },
            )
            return saved
        raise LicenseKeyCollisionError(
            f"Could not generate a unique license key after {MAX_MINT_ATTEMPTS} attempts"
        )

    async def lookup(self, key) -> Optional[License]:
        """Find a license by user-supplied key; malformed keys find nothing."""
        normalized = normalize_license_key(key)
        if not normalized:
            return None
        return await self.license_repository.find_by_key(normalized)

    def is_valid(self, license: License, now: Optional[datetime] = None) -> bool:
        """Return True while ``now`` is before the license expiry."""
        return license.is_valid(now or self._clock())

    async def activate(self, key, device_id: Optional[str] = None) -> License:
        """
        Redeem a license, optionally binding it to a device.

        Args:
            key: License key as entered by the user
            device_id: Raw device identifier, or None

        Returns:
            License after activation

        Raises:
            LicenseNotFoundError, LicenseExpiredError,
            LicenseAlreadyUsedError, DeviceMismatchError, ValidationError
        """
        fingerprint = fingerprint_device(device_id)
        return await self._transition(key, fingerprint, activation=True)

    async def bind_device(self, key, device_id: str) -> License:
        """
        Bind a license to a device. Binding an unredeemed license redeems it.

        Raises:
            Same as activate; ValidationError if device_id is missing
        """
        fingerprint = fingerprint_device(device_id)
        if fingerprint is None:
            raise ValidationError("Device ID is required")
        return await self._transition(key, fingerprint, activation=False)

    async def find_by_device(self, device_id: str) -> Optional[License]:
        """Return the license most recently bound to a device, or None."""
        fingerprint = fingerprint_device(device_id)
        if fingerprint is None:
            raise ValidationError("Device ID is required")
        key = await self.device_index.find_license_key(fingerprint.value)
        if not key:
            return None
        return await self.license_repository.find_by_key(key)

    async def list_licenses(self) -> List[License]:
        return await self.license_repository.find_all()

    async def _transition(
        self, key, fingerprint: Optional[DeviceFingerprint], activation: bool
    ) -> License:
        normalized = normalize_license_key(key)
        if not normalized:
            raise LicenseNotFoundError("License key not found")

        events: List[DomainEvent] = []
        async with self._locks.hold(normalized):
            license = await self.license_repository.find_by_key(normalized)
            if not license:
                raise LicenseNotFoundError("License key not found")

            now = self._clock()
            if not license.is_valid(now):
                raise LicenseExpiredError(
                    f"License expired on {license.expiry_date.date().isoformat()}"
                )

            updated = self._apply(license, fingerprint, now)

            if updated is not license:
                await self.license_repository.save(updated)
            if updated.device_hash != license.device_hash:
                await self.device_index.bind(updated.device_hash, updated.key)
                if license.device_hash:
                    await self.device_index.unbind_if(license.device_hash, updated.key)
                events.append(
                    DeviceBound(
                        license_key=updated.key,
                        device_hash=updated.device_hash,
                        previous_device_hash=license.device_hash,
                    )
                )
            if activation:
                events.append(
                    LicenseActivated(
                        license_key=updated.key,
                        device_hash=updated.device_hash,
                        first_activation=not license.is_redeemed,
                    )
                )

        logger.info(
            "License activated" if activation else "License bound",
            extra={
                "license_key_prefix": key_prefix_for_logs(updated.key),
                "device_bound": updated.is_bound,
                "policy": str(self.policy),
            },
        )
        await self._publish(events)
        return updated

    def _apply(
        self, license: License, fingerprint: Optional[DeviceFingerprint], now: datetime
    ) -> License:
        """Binding state machine. Returns ``license`` itself when nothing changes."""
        strict = self.policy == DeviceBindingPolicy.STRICT

        if not license.is_redeemed:
            return license.bind(fingerprint.value, now) if fingerprint else license.redeem(now)

        if fingerprint is None:
            if strict:
                raise LicenseAlreadyUsedError("License has already been activated")
            return license

        if not license.is_bound:
            # Redeemed without a device: the first device wins.
            return license.bind(fingerprint.value, now)

        if license.device_hash == fingerprint.value:
            return license

        if strict:
            logger.warning(
                "Activation rejected for another device",
                extra={"license_key_prefix": key_prefix_for_logs(license.key)},
            )
            raise DeviceMismatchError("License is already activated on another device")

        logger.info(
            "Rebinding license to a new device",
            extra={"license_key_prefix": key_prefix_for_logs(license.key)},
        )
        return license.bind(fingerprint.value, now)

    async def _publish(self, events: List[DomainEvent]) -> None:
        if not self._event_bus:
            return
        for event in events:
            await self._event_bus.publish(event)
