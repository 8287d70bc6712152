"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.l10n import L10nSettings

__all__ = [
    "L10nSettings",
]
