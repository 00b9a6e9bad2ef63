"""
Event handlers for domain events.

These handlers process domain events for side effects like audit
logging and business metrics.
"""

import logging

from core.domain.events import DomainEvent, EventHandler
from core.metrics import devices_bound_total, licenses_issued_total, orders_created_total
from licenses.domain.events import DeviceBound, LicenseActivated, LicenseIssued
from licenses.domain.license_key import key_prefix_for_logs
from payments.domain.events import OrderCompleted, OrderCreated

logger = logging.getLogger(__name__)

AUDITED_EVENTS = (OrderCreated, OrderCompleted, LicenseIssued, LicenseActivated, DeviceBound)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes one structured log record per domain event. License keys
    are reduced to their prefix.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        aggregate_id = event.aggregate_id
        if isinstance(event, (LicenseIssued, LicenseActivated, DeviceBound)):
            aggregate_id = key_prefix_for_logs(aggregate_id)
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            aggregate_id,
            extra={
                "event_id": str(event.event_id),
                "event_type": event.event_type,
                "aggregate_id": aggregate_id,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )


class MetricsEventHandler(EventHandler):
    """Event handler that maintains business counters."""

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for metrics.

        Args:
            event: Domain event
        """
        if isinstance(event, OrderCreated):
            orders_created_total.inc()
        elif isinstance(event, LicenseIssued):
            licenses_issued_total.inc()
        elif isinstance(event, DeviceBound):
            devices_bound_total.inc()


_registered = False


def register_event_handlers(force: bool = False):
    """
    Register all event handlers with the event bus.

    Args:
        force: Register again even if already done (after the bus was cleared)
    """
    global _registered
    from core.infrastructure.events import event_bus

    if _registered and not force:
        return

    audit_handler = AuditLogEventHandler()
    metrics_handler = MetricsEventHandler()

    for event_type in AUDITED_EVENTS:
        event_bus.subscribe(event_type, audit_handler)

    event_bus.subscribe(OrderCreated, metrics_handler)
    event_bus.subscribe(LicenseIssued, metrics_handler)
    event_bus.subscribe(DeviceBound, metrics_handler)

    _registered = True
    logger.info("Event handlers registered")
