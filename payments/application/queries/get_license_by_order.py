"""
GetLicenseByOrderQuery.

Query polled by clients waiting for a payment to be confirmed.
"""
from dataclasses import dataclass


@dataclass
class GetLicenseByOrderQuery:
    """Query for the issuance result of an order."""

    order_id: str
