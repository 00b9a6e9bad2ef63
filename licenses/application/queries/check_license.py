"""
CheckLicenseQuery.

Query to check the validity of a license key.
"""
from dataclasses import dataclass


@dataclass
class CheckLicenseQuery:
    """Query to check a license by key."""

    license_key: str
