"""
CreatePaymentHandler.

Handles the create payment command.
"""

import logging

from asgiref.sync import sync_to_async

from core.domain.exceptions import DuplicateOrderError
from core.infrastructure.events import event_bus
from core.instrumentation import Status, StatusCode, get_tracer
from payments.application.commands.create_payment import CreatePaymentCommand
from payments.application.dto.payment_dto import CreatePaymentResponseDTO
from payments.domain.events import OrderCreated
from payments.domain.services import OrderCodeGenerator, PaymentLedger
from payments.ports.payment_gateway import PaymentGateway, PaymentRequest

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

# PayOS rejects longer descriptions.
MAX_DESCRIPTION_LENGTH = 25


class CreatePaymentHandler:
    """Handler for CreatePaymentCommand."""

    def __init__(
        self,
        ledger: PaymentLedger,
        gateway: PaymentGateway,
        order_codes: OrderCodeGenerator,
        default_return_url: str,
        default_cancel_url: str,
    ):
        """Initialize handler with collaborators."""
        self.ledger = ledger
        self.gateway = gateway
        self.order_codes = order_codes
        self.default_return_url = default_return_url
        self.default_cancel_url = default_cancel_url

    async def handle(self, command: CreatePaymentCommand) -> CreatePaymentResponseDTO:
        """
        Handle create payment command.

        The provider is called before anything is written, so a failed
        call leaves no order behind.

        Args:
            command: CreatePaymentCommand

        Returns:
            CreatePaymentResponseDTO with order id and checkout URL

        Raises:
            UpstreamError: If the provider call fails
        """
        with tracer.start_as_current_span("create_payment") as span:
            order_code = self.order_codes.next_code()
            description = command.product_name[:MAX_DESCRIPTION_LENGTH]
            span.set_attribute("order.id", order_code)
            span.set_attribute("order.amount", command.price)

            request = PaymentRequest(
                order_code=order_code,
                amount=command.price,
                description=description,
                return_url=command.return_url or self.default_return_url,
                cancel_url=command.cancel_url or self.default_cancel_url,
            )
            link = await sync_to_async(self.gateway.create_payment_link, thread_sensitive=False)(
                request
            )

            try:
                await self.ledger.create(str(order_code), command.price, description)
            except DuplicateOrderError:
                # A confirmation for this code already arrived and created the entry.
                logger.warning(
                    "Order already in ledger when checkout returned",
                    extra={"order_id": order_code},
                )
            else:
                await event_bus.publish(OrderCreated(order_id=str(order_code), amount=command.price))

            span.set_status(Status(StatusCode.OK))
            return CreatePaymentResponseDTO(order_id=order_code, checkout_url=link.checkout_url)
