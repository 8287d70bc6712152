"""Models for the l10n system.

Defines the notification events emitted by the locale switch controller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from infrastructure.events import Event


class L10nEventType(str, Enum):
    """Notifications emitted on every committed locale switch."""

    LOCALE_CHANGED = "locale_changed"
    AVAILABLE_LOCALES_CHANGED = "available_locales_changed"


@dataclass
class L10nEvent(Event):
    """Event describing a committed locale switch.

    Attributes:
        locale: Locale active after the switch.
        previous_locale: Locale active before the switch.
    """

    locale: Optional[str] = None
    previous_locale: Optional[str] = None
