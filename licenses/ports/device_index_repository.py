"""
Device index port (interface).

Maps a device hash to the license most recently bound to it, so a
device can find its license again after a reinstall.
"""
from abc import ABC, abstractmethod
from typing import Optional


class DeviceIndexRepository(ABC):
    """Abstract repository for device hash -> license key entries."""

    @abstractmethod
    async def bind(self, device_hash: str, license_key: str) -> None:
        """Point ``device_hash`` at ``license_key``, replacing any entry."""
        pass

    @abstractmethod
    async def find_license_key(self, device_hash: str) -> Optional[str]:
        """Return the key bound to ``device_hash`` or None."""
        pass

    @abstractmethod
    async def unbind_if(self, device_hash: str, license_key: str) -> bool:
        """
        Remove the entry for ``device_hash`` only if it still points at
        ``license_key``.

        Returns:
            True if an entry was removed
        """
        pass
