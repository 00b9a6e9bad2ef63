"""
License domain entity.

This is the core domain entity representing a license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from core.domain.clock import utcnow
from core.domain.value_objects import LicenseStatus


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    A license is minted once per completed order and redeemed by
    activation. Once a device is bound the license is always USED.
    Immutable; transitions return a new instance.
    """

    key: str
    order_id: str
    status: LicenseStatus
    expiry_date: datetime
    device_hash: Optional[str]
    created_at: datetime
    activated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.key:
            raise ValueError("License key is required")
        if not self.order_id:
            raise ValueError("Order ID is required")
        if self.device_hash and self.status != LicenseStatus.USED:
            raise ValueError("A bound license must be redeemed")

    @classmethod
    def create(
        cls, key: str, order_id: str, expiry_date: datetime, now: Optional[datetime] = None
    ) -> "License":
        """
        Create a new unredeemed License entity.

        Args:
            key: Normalised license key
            order_id: Order the license was issued for
            expiry_date: End of the validity window
            now: Mint time (defaults to utcnow)

        Returns:
            License entity instance
        """
        return cls(
            key=key,
            order_id=order_id,
            status=LicenseStatus.ACTIVE,
            expiry_date=expiry_date,
            device_hash=None,
            created_at=now or utcnow(),
        )

    @property
    def is_redeemed(self) -> bool:
        return self.status == LicenseStatus.USED

    @property
    def is_bound(self) -> bool:
        return self.device_hash is not None

    def is_valid(self, current_time: Optional[datetime] = None) -> bool:
        """
        Check if license is inside its validity window.

        Args:
            current_time: Current time (defaults to utcnow)

        Returns:
            True if the expiry date lies in the future
        """
        return (current_time or utcnow()) < self.expiry_date

    def remaining_days(self, current_time: Optional[datetime] = None) -> int:
        """Whole days left before expiry, never negative."""
        delta = self.expiry_date - (current_time or utcnow())
        return max(delta.days, 0)

    def redeem(self, now: Optional[datetime] = None) -> "License":
        """
        Mark the license used.

        activated_at is only set by the first redemption.
        """
        if self.is_redeemed:
            return self
        return replace(self, status=LicenseStatus.USED, activated_at=now or utcnow())

    def bind(self, device_hash: str, now: Optional[datetime] = None) -> "License":
        """
        Bind the license to a device, redeeming it if needed.

        Args:
            device_hash: SHA-256 hex digest of the device id
            now: Redemption time if this bind redeems the license

        Returns:
            New License instance bound to the device
        """
        if not device_hash:
            raise ValueError("Device hash is required")
        return replace(self.redeem(now), device_hash=device_hash)
