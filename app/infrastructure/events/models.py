"""Event models for infrastructure event system.

Provides the generic Event base class dispatched to subscribed handlers.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass
class Event:
    """Base class for all events in the system.

    Events are records of something that happened, delivered to the
    handlers subscribed to their ``event_type``.
    """

    event_type: str
    """The type of event (e.g., 'locale_changed')."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Custom metadata for this event type."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event to dictionary.

        Returns:
            Dictionary representation of the event with ISO format timestamp
            and UUID as string.
        """
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        data["correlation_id"] = str(self.correlation_id)
        return data

    def __hash__(self) -> int:
        """Hash based on correlation_id and timestamp."""
        return hash((self.correlation_id, self.timestamp))
