"""Infrastructure event system - instance-scoped event dispatcher.

Usage:

    from infrastructure.events import Event, EventDispatcher

    dispatcher = EventDispatcher()

    @dispatcher.register("locale_changed")
    def handle_locale_changed(event: Event) -> None:
        # Re-render translated content
        pass

    dispatcher.dispatch(Event(event_type="locale_changed"))
"""

from infrastructure.events.dispatcher import EventDispatcher, EventHandler
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "EventDispatcher",
    "EventHandler",
]
