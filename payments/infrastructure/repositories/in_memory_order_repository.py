"""
In-memory implementation of OrderRepository port.

State lives for the process lifetime only.
"""
import threading
from typing import Dict, List, Optional

from core.domain.exceptions import DuplicateOrderError
from payments.domain.order import Order
from payments.ports.order_repository import OrderRepository


class InMemoryOrderRepository(OrderRepository):
    """Dict-backed OrderRepository guarded by a thread lock."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}
        self._lock = threading.Lock()

    async def add(self, order: Order) -> Order:
        with self._lock:
            if order.order_id in self._orders:
                raise DuplicateOrderError(f"Order {order.order_id} already exists")
            self._orders[order.order_id] = order
        return order

    async def save(self, order: Order) -> Order:
        with self._lock:
            self._orders[order.order_id] = order
        return order

    async def find_by_id(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    async def find_all(self) -> List[Order]:
        with self._lock:
            orders = list(self._orders.values())
        return sorted(orders, key=lambda order: order.created_at)
