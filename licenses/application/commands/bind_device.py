"""
BindDeviceCommand.

Command to bind a license key to a device.
"""
from dataclasses import dataclass


@dataclass
class BindDeviceCommand:
    """Command to bind a license to a device."""

    license_key: str
    device_id: str
