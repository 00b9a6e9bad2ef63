"""
In-memory event bus implementation.

Handlers run in the publishing coroutine; a failing handler is logged
and never propagates to the publisher.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    This implementation stores handlers in memory and dispatches
    each event to all handlers subscribed to its exact type.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    def handlers_for(self, event_type: Type[DomainEvent]) -> List[EventHandler]:
        """Return the handlers subscribed to an event type."""
        return list(self._handlers.get(event_type, []))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        handlers = self.handlers_for(type(event))
        if not handlers:
            logger.debug("No handlers registered for %s", event.event_type)
            return

        logger.debug("Publishing %s to %d handler(s)", event.event_type, len(handlers))
        await asyncio.gather(
            *(self._handle_event(handler, event) for handler in handlers),
            return_exceptions=True,
        )

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.error(
                "Error handling %s with %s",
                event.event_type,
                handler.__class__.__name__,
                exc_info=True,
            )


# Global event bus instance
event_bus = InMemoryEventBus()
