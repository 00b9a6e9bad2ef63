"""
License domain events.

Domain events represent something that happened in the license domain.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class LicenseIssued(DomainEvent):
    """Event raised when a license is minted for a completed order."""

    license_key: str
    order_id: str
    expiry_date: datetime
    channel: str = "unknown"

    @property
    def aggregate_id(self) -> str:
        return self.license_key


@dataclass(frozen=True)
class LicenseActivated(DomainEvent):
    """Event raised when an activation request succeeds."""

    license_key: str
    device_hash: Optional[str]
    first_activation: bool

    @property
    def aggregate_id(self) -> str:
        return self.license_key


@dataclass(frozen=True)
class DeviceBound(DomainEvent):
    """Event raised when a license gets bound to a new device."""

    license_key: str
    device_hash: str
    previous_device_hash: Optional[str] = None

    @property
    def aggregate_id(self) -> str:
        return self.license_key
