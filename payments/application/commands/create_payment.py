"""
CreatePaymentCommand.

Command to open a checkout with the payment provider.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreatePaymentCommand:
    """Command to create an order and obtain a checkout link."""

    product_name: str
    price: int
    return_url: Optional[str] = None
    cancel_url: Optional[str] = None
