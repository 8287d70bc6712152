"""Event dispatcher for infrastructure event system.

Provides an instance-scoped handler registry. Handlers are subscribed per
event type and called synchronously, in subscription order, when an event
is dispatched.
"""

from typing import Any, Callable, Dict, List

from infrastructure.logging import get_module_logger
from infrastructure.events.models import Event

logger = get_module_logger()

EventHandler = Callable[[Event], Any]


class EventDispatcher:
    """In-process event dispatcher owned by a single service.

    Each dispatcher keeps its own registry so that two services never see
    each other's subscribers.

    Usage:
        dispatcher = EventDispatcher()

        @dispatcher.register("locale_changed")
        def on_locale_changed(event: Event) -> None:
            ...

        dispatcher.dispatch(Event(event_type="locale_changed"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe a handler to an event type.

        Subscribing the same handler twice for one event type is a no-op.

        Args:
            event_type: The type of event to handle (e.g., 'locale_changed').
            handler: Callable receiving the dispatched Event.
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", "unknown"),
            event_type=event_type,
            total_handlers=len(handlers),
        )

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Remove a handler from an event type, if subscribed."""
        handlers = self._handlers.get(event_type, [])
        self._handlers[event_type] = [h for h in handlers if h is not handler]

    def register(self, event_type: str):
        """Decorator form of subscribe().

        Args:
            event_type: The type of event to handle.

        Returns:
            Decorator function that subscribes the handler.
        """

        def decorator(handler_func: EventHandler) -> EventHandler:
            self.subscribe(event_type, handler_func)
            return handler_func

        return decorator

    def get_handlers(self, event_type: str) -> List[EventHandler]:
        """Get the handlers subscribed to an event type."""
        return list(self._handlers.get(event_type, []))

    def dispatch(self, event: Event) -> List[Any]:
        """Dispatch event synchronously to all subscribed handlers.

        If a handler raises an exception, it is caught and logged, but
        processing continues with remaining handlers.

        Args:
            event: The event to dispatch.

        Returns:
            List of return values from the handlers that succeeded.
        """
        results = []
        handlers = self.get_handlers(event.event_type)

        logger.debug(
            "dispatching_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )

        return results
