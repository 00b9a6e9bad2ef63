"""
Payment DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class CreatePaymentResponseDTO:
    """DTO for create payment response."""

    order_id: int
    checkout_url: str


@dataclass
class OrderLicenseDTO:
    """
    DTO for license polling by order.

    status is one of not_found, pending, completed.
    """

    order_id: str
    status: str
    license_key: Optional[str] = None
    expiry_date: Optional[datetime] = None
