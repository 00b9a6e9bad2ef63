"""
License DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class ActivationResultDTO:
    """DTO for activate and bind responses."""

    license_key: str
    status: str
    expiry_date: datetime
    device_bound: bool


@dataclass
class LicenseCheckDTO:
    """DTO for license validity checks."""

    license_key: str
    valid: bool
    status: str
    expiry_date: datetime
    remaining_days: int
    device_bound: bool
