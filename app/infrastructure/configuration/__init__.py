"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the l10n
service using Pydantic BaseSettings with domain-based organization.

Exports:
    Settings: Main settings class (for testing/overrides)
    L10nSettings: Localization feature settings class

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    default_locale = settings.l10n.default_locale
    json_path = settings.l10n.json_path

    if settings.is_production:
        # Production-specific logic...
    ```
"""

from infrastructure.configuration.settings import Settings
from infrastructure.configuration.features.l10n import L10nSettings

__all__ = ["Settings", "L10nSettings"]
