"""
Payment domain events.
"""
from dataclasses import dataclass
from typing import Optional

from core.domain.events import DomainEvent


@dataclass(frozen=True)
class OrderCreated(DomainEvent):
    """Event raised when a checkout link was obtained and the order recorded."""

    order_id: str
    amount: Optional[int]

    @property
    def aggregate_id(self) -> str:
        return self.order_id


@dataclass(frozen=True)
class OrderCompleted(DomainEvent):
    """Event raised when a confirmation completes an order."""

    order_id: str
    license_key: str
    channel: str

    @property
    def aggregate_id(self) -> str:
        return self.order_id
