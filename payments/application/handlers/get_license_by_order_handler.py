"""
GetLicenseByOrderHandler.

Answers client polling for the license issued for an order.
"""

from licenses.domain.services import LicenseRegistry
from payments.application.dto.payment_dto import OrderLicenseDTO
from payments.application.queries.get_license_by_order import GetLicenseByOrderQuery
from payments.domain.order import normalize_order_id
from payments.domain.services import PaymentLedger


class GetLicenseByOrderHandler:
    """Handler for GetLicenseByOrderQuery."""

    def __init__(self, ledger: PaymentLedger, registry: LicenseRegistry):
        """Initialize handler with services."""
        self.ledger = ledger
        self.registry = registry

    async def handle(self, query: GetLicenseByOrderQuery) -> OrderLicenseDTO:
        """
        Handle get license by order query.

        An unknown order is reported as not_found rather than raised:
        the client keeps polling until a confirmation arrives.

        Args:
            query: GetLicenseByOrderQuery

        Returns:
            OrderLicenseDTO
        """
        order_id = normalize_order_id(query.order_id)
        order = await self.ledger.get(order_id) if order_id else None
        if not order:
            return OrderLicenseDTO(order_id=query.order_id, status="not_found")
        if not order.is_completed:
            return OrderLicenseDTO(order_id=order.order_id, status="pending")

        license = await self.registry.lookup(order.license_key)
        return OrderLicenseDTO(
            order_id=order.order_id,
            status="completed",
            license_key=order.license_key,
            expiry_date=license.expiry_date if license else None,
        )
