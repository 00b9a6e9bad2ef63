"""
In-memory implementations of the license ports.

State lives for the process lifetime only.
"""
import threading
from typing import Dict, List, Optional

from core.domain.exceptions import LicenseKeyCollisionError
from licenses.domain.license import License
from licenses.ports.device_index_repository import DeviceIndexRepository
from licenses.ports.license_repository import LicenseRepository


class InMemoryLicenseRepository(LicenseRepository):
    """Dict-backed LicenseRepository guarded by a thread lock."""

    def __init__(self):
        self._licenses: Dict[str, License] = {}
        self._lock = threading.Lock()

    async def add(self, license: License) -> License:
        with self._lock:
            if license.key in self._licenses:
                raise LicenseKeyCollisionError(f"License key {license.key} already exists")
            self._licenses[license.key] = license
        return license

    async def save(self, license: License) -> License:
        with self._lock:
            self._licenses[license.key] = license
        return license

    async def find_by_key(self, key: str) -> Optional[License]:
        with self._lock:
            return self._licenses.get(key)

    async def find_all(self) -> List[License]:
        with self._lock:
            licenses = list(self._licenses.values())
        return sorted(licenses, key=lambda license: license.created_at)


class InMemoryDeviceIndexRepository(DeviceIndexRepository):
    """Dict-backed device index."""

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    async def bind(self, device_hash: str, license_key: str) -> None:
        with self._lock:
            self._entries[device_hash] = license_key

    async def find_license_key(self, device_hash: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(device_hash)

    async def unbind_if(self, device_hash: str, license_key: str) -> bool:
        with self._lock:
            if self._entries.get(device_hash) != license_key:
                return False
            del self._entries[device_hash]
            return True
