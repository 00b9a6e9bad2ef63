"""
ConfirmPaymentHandler.

Handles confirmations from the webhook and redirect channels.
"""

import logging

from confirmations.application.commands.confirm_payment import ConfirmPaymentCommand
from confirmations.domain.services import ConfirmationReconciler, ConfirmationResult
from core.infrastructure.events import event_bus
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import payment_confirmations_total
from licenses.domain.events import LicenseIssued
from payments.domain.events import OrderCompleted

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)


class ConfirmPaymentHandler:
    """Handler for ConfirmPaymentCommand."""

    def __init__(self, reconciler: ConfirmationReconciler):
        """Initialize handler with the reconciler."""
        self.reconciler = reconciler

    async def handle(self, command: ConfirmPaymentCommand) -> ConfirmationResult:
        """
        Handle confirm payment command.

        Events are published after the reconciler has released the
        order lock.

        Args:
            command: ConfirmPaymentCommand

        Returns:
            ConfirmationResult
        """
        with tracer.start_as_current_span("confirm_payment") as span:
            span.set_attribute("order.id", command.order_id)
            span.set_attribute("confirmation.channel", command.channel)

            result = await self.reconciler.confirm_payment(command.order_id, command.amount)

            outcome = "issued" if result.issued else "duplicate"
            payment_confirmations_total.labels(channel=command.channel, outcome=outcome).inc()
            span.set_attribute("confirmation.outcome", outcome)

            if result.issued:
                await event_bus.publish(
                    LicenseIssued(
                        license_key=result.license.key,
                        order_id=result.order.order_id,
                        expiry_date=result.license.expiry_date,
                        channel=command.channel,
                    )
                )
                await event_bus.publish(
                    OrderCompleted(
                        order_id=result.order.order_id,
                        license_key=result.license.key,
                        channel=command.channel,
                    )
                )

            span.set_status(Status(StatusCode.OK))
            return result
