"""
ActivateLicenseCommand.

Command to redeem a license key, optionally on a device.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ActivateLicenseCommand:
    """Command to activate a license."""

    license_key: str
    device_id: Optional[str] = None
