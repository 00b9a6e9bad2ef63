"""
Payment domain services.

The payment ledger tracks orders from creation to completion. It owns
no locking of its own beyond the repository's atomic insert; callers
that need check-then-act across the ledger and the license registry
hold a per-order lock around the whole sequence.
"""
import logging
import threading
from typing import List, Optional

from core.domain.clock import Clock, utcnow
from core.domain.exceptions import DuplicateOrderError, OrderNotFoundError
from payments.domain.order import Order
from payments.ports.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class OrderCodeGenerator:
    """
    Generates order codes from the current time in milliseconds.

    Codes are strictly increasing within a process, so two checkouts
    in the same millisecond still get distinct codes.
    """

    def __init__(self, clock: Clock = utcnow):
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    def next_code(self) -> int:
        """Return the next order code."""
        now_ms = int(self._clock().timestamp() * 1000)
        with self._lock:
            self._last = max(now_ms, self._last + 1)
            return self._last


class PaymentLedger:
    """Domain service for the order ledger."""

    def __init__(self, repository: OrderRepository, clock: Clock = utcnow):
        """
        Initialize the ledger.

        Args:
            repository: Order repository
            clock: Time source
        """
        self.repository = repository
        self._clock = clock

    async def create(self, order_id: str, amount: Optional[int], description: str) -> Order:
        """
        Record a new pending order.

        Raises:
            DuplicateOrderError: If the order id already exists
        """
        order = Order.create(order_id, amount, description, now=self._clock())
        saved = await self.repository.add(order)
        logger.info("Order recorded", extra={"order_id": order_id, "amount": amount})
        return saved

    async def get(self, order_id: str) -> Optional[Order]:
        """Return the order or None."""
        return await self.repository.find_by_id(order_id)

    async def get_or_create_placeholder(
        self, order_id: str, amount: Optional[int] = None
    ) -> Order:
        """
        Return the order, creating a pending placeholder when this
        process has no record of it.

        Args:
            order_id: Order identifier from a confirmation
            amount: Amount reported by the confirmation, if any

        Returns:
            Existing or newly created Order
        """
        existing = await self.repository.find_by_id(order_id)
        if existing:
            return existing
        try:
            order = await self.repository.add(
                Order.placeholder(order_id, amount, now=self._clock())
            )
        except DuplicateOrderError:
            # Lost the insert race to order creation.
            order = await self.repository.find_by_id(order_id)
        else:
            logger.warning(
                "Confirmation for unknown order, created placeholder",
                extra={"order_id": order_id},
            )
        return order

    async def mark_completed(self, order_id: str, license_key: str) -> Order:
        """
        Complete an order with its license key.

        Already completed orders are returned unchanged.

        Raises:
            OrderNotFoundError: If the order does not exist
        """
        order = await self.repository.find_by_id(order_id)
        if not order:
            raise OrderNotFoundError(f"Order {order_id} not found")
        if order.is_completed:
            return order
        completed = order.complete(license_key, now=self._clock())
        return await self.repository.save(completed)

    async def list_orders(self) -> List[Order]:
        """Return all orders, oldest first."""
        return await self.repository.find_all()
