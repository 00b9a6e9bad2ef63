"""
Order repository port (interface).

This defines the contract for order persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from payments.domain.order import Order


class OrderRepository(ABC):
    """
    Abstract repository for Order entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """
        Insert a new order atomically.

        Args:
            order: Order entity to insert

        Returns:
            Inserted order entity

        Raises:
            DuplicateOrderError: If an order with the same id exists
        """
        pass

    @abstractmethod
    async def save(self, order: Order) -> Order:
        """
        Insert or replace an order.

        Args:
            order: Order entity to save

        Returns:
            Saved order entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find an order by ID.

        Args:
            order_id: Order identifier

        Returns:
            Order entity or None if not found
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[Order]:
        """
        Return every stored order, oldest first.

        Returns:
            List of Order entities
        """
        pass
