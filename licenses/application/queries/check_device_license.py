"""
CheckDeviceLicenseQuery.

Query used by a reinstalled client to find its license again.
"""
from dataclasses import dataclass


@dataclass
class CheckDeviceLicenseQuery:
    """Query to find the license bound to a device."""

    device_id: str
