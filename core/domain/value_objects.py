"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
import hashlib
from dataclasses import dataclass
from enum import Enum

DEVICE_HASH_PREFIX_LENGTH = 12


class OrderStatus(Enum):
    """Payment ledger order status."""

    PENDING = "pending"
    COMPLETED = "completed"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "active"
    USED = "used"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class DeviceBindingPolicy(Enum):
    """
    How a redeemed license treats a second device.

    STRICT rejects any device other than the bound one.
    LENIENT moves the binding to the new device.
    """

    STRICT = "strict"
    LENIENT = "lenient"

    @classmethod
    def from_setting(cls, value: str) -> "DeviceBindingPolicy":
        """Parse a settings value, defaulting to STRICT."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.STRICT

    def __str__(self) -> str:
        """Return policy as string."""
        return self.value


@dataclass(frozen=True)
class DeviceFingerprint:
    """
    One-way hash of a client-supplied device identifier.

    The raw identifier is never kept.
    """

    value: str

    def __post_init__(self):
        """Validate hash format."""
        if len(self.value) != 64:
            raise ValueError("Device fingerprint must be a SHA-256 hex digest")

    @classmethod
    def from_device_id(cls, device_id: str) -> "DeviceFingerprint":
        """
        Hash a raw device identifier.

        Args:
            device_id: Identifier reported by the client

        Returns:
            DeviceFingerprint for the identifier
        """
        if not isinstance(device_id, str) or not device_id.strip():
            raise ValueError("Device identifier cannot be empty")
        return cls(hashlib.sha256(device_id.encode()).hexdigest())

    @property
    def prefix(self) -> str:
        """Truncated form safe to show in introspection output."""
        return self.value[:DEVICE_HASH_PREFIX_LENGTH]

    def __str__(self) -> str:
        """Return hash as string."""
        return self.value
