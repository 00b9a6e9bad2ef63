"""
Order domain entity.

An order is one purchase attempt tracked by the payment ledger from
creation until a payment confirmation completes it.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional

from core.domain.clock import utcnow
from core.domain.value_objects import OrderStatus

MAX_ORDER_ID_LENGTH = 64


def normalize_order_id(value: Any) -> Optional[str]:
    """
    Normalise an order id taken from untrusted input.

    Provider order codes arrive as integers in webhook bodies and as
    strings in query strings and URL paths; both map to the decimal
    string. Anything else yields None.

    Args:
        value: Raw order id

    Returns:
        Normalised order id, or None if unusable
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if not isinstance(value, str):
        return None
    order_id = value.strip()
    if not order_id or len(order_id) > MAX_ORDER_ID_LENGTH:
        return None
    if any(ch.isspace() or ch == "/" for ch in order_id):
        return None
    return order_id


@dataclass(frozen=True)
class Order:
    """
    Order domain entity.

    Immutable; transitions return a new instance.
    """

    order_id: str
    status: OrderStatus
    amount: Optional[int]
    description: str
    license_key: Optional[str]
    created_at: datetime
    completed_at: Optional[datetime]
    is_placeholder: bool = False

    def __post_init__(self):
        """Validate order entity."""
        if not self.order_id:
            raise ValueError("Order ID is required")
        if self.status == OrderStatus.COMPLETED and not self.license_key:
            raise ValueError("Completed order must reference a license")

    @classmethod
    def create(
        cls,
        order_id: str,
        amount: Optional[int],
        description: str,
        now: Optional[datetime] = None,
    ) -> "Order":
        """
        Create a new pending order.

        Args:
            order_id: Order identifier
            amount: Charged amount
            description: Description sent to the provider
            now: Creation time (defaults to utcnow)

        Returns:
            Pending Order entity
        """
        return cls(
            order_id=order_id,
            status=OrderStatus.PENDING,
            amount=amount,
            description=description,
            license_key=None,
            created_at=now or utcnow(),
            completed_at=None,
        )

    @classmethod
    def placeholder(
        cls, order_id: str, amount: Optional[int] = None, now: Optional[datetime] = None
    ) -> "Order":
        """
        Create a minimal pending order for a confirmation whose order
        this process never created.
        """
        order = cls.create(order_id, amount, "", now=now)
        return replace(order, is_placeholder=True)

    @property
    def is_completed(self) -> bool:
        """True once a license has been issued for the order."""
        return self.status == OrderStatus.COMPLETED

    def complete(self, license_key: str, now: Optional[datetime] = None) -> "Order":
        """
        Transition pending -> completed.

        Completing an already completed order returns it unchanged.

        Args:
            license_key: Key of the license issued for this order
            now: Completion time (defaults to utcnow)

        Returns:
            Completed Order entity
        """
        if self.is_completed:
            return self
        if not license_key:
            raise ValueError("License key is required to complete an order")
        return replace(
            self,
            status=OrderStatus.COMPLETED,
            license_key=license_key,
            completed_at=now or utcnow(),
        )
