"""
Confirmation reconciler.

The only writer allowed to complete an order or mint a license. Each
order is reconciled under its own lock, so duplicate and concurrent
confirmations from either channel issue at most one license.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.locks import KeyedLock
from licenses.domain.license import License
from licenses.domain.services import LicenseRegistry
from payments.domain.order import Order
from payments.domain.services import PaymentLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfirmationResult:
    """Outcome of a confirmation; issued is False for repeats."""

    order: Order
    license: License
    issued: bool


class ConfirmationReconciler:
    """Domain service that turns a confirmed payment into a license."""

    def __init__(self, ledger: PaymentLedger, registry: LicenseRegistry):
        """
        Initialize the reconciler.

        Args:
            ledger: Payment ledger
            registry: License registry
        """
        self.ledger = ledger
        self.registry = registry
        self._locks = KeyedLock("confirmation-reconciler")

    @property
    def locks(self) -> KeyedLock:
        return self._locks

    async def confirm_payment(self, order_id: str, amount: Optional[int] = None) -> ConfirmationResult:
        """
        Complete an order and issue its license, at most once.

        Args:
            order_id: Normalised order id from a confirmation
            amount: Amount reported by the confirmation, if any

        Returns:
            ConfirmationResult
        """
        async with self._locks.hold(order_id):
            order = await self.ledger.get_or_create_placeholder(order_id, amount)

            if order.is_completed:
                license = await self.registry.lookup(order.license_key)
                if not license:
                    raise LicenseNotFoundError(
                        f"Order {order_id} references a missing license"
                    )
                logger.info("Duplicate confirmation ignored", extra={"order_id": order_id})
                return ConfirmationResult(order=order, license=license, issued=False)

            license = await self.registry.mint(order_id)
            order = await self.ledger.mark_completed(order_id, license.key)
            return ConfirmationResult(order=order, license=license, issued=True)
