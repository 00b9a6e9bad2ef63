"""
ConfirmPaymentCommand.

Command issued by both confirmation channels.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class ConfirmPaymentCommand:
    """Command to reconcile a confirmed payment."""

    order_id: str
    channel: str
    amount: Optional[int] = None
