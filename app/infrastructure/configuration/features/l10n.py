"""Localization (l10n) feature settings."""

import json
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
import structlog

from infrastructure.configuration.base import FeatureSettings

logger = structlog.stdlib.get_logger().bind(component="config.l10n")


def _parse_json_mapping(name: str, v: Optional[Any]) -> Optional[Dict[str, str]]:
    """Parse a JSON object given as a string (possibly quoted) or a mapping."""
    if v is None:
        return None
    if isinstance(v, dict):
        return v
    if isinstance(v, str):
        s = v.strip()
        if (s.startswith("'") and s.endswith("'")) or (
            s.startswith('"') and s.endswith('"')
        ):
            s = s[1:-1]
        if not s:
            return None
        try:
            parsed = json.loads(s)
        except (json.JSONDecodeError, ValueError) as e:
            raise ValueError(f"Invalid {name} JSON: {e} (value: {s[:80]}...)") from e
        if not isinstance(parsed, dict):
            raise ValueError(f"{name} must be a JSON object")
        return parsed
    raise ValueError(f"{name} must be a JSON string or a mapping")


class L10nSettings(FeatureSettings):
    """Configuration for locale resolution and translation catalogs.

    Environment Variables:
        L10N_DEFAULT_LOCALE: Fallback locale for unavailable locales (default: en)
        L10N_FORCE_LOCALE: Locale to use instead of automatic detection
        L10N_AUTO_INITIALIZE: Detect and switch locale on service construction
        L10N_JSON_PATH: Base path of the catalog documents (default: /assets/locales)
        L10N_FINGERPRINT_MAP: JSON dict of locale -> fingerprint path fragment
        L10N_AVAILABLE_LOCALES: JSON dict of locale -> display label msgid
        L10N_BASE_URL: Base URL the HTTP transport resolves catalog paths against
        L10N_REQUEST_TIMEOUT_SECONDS: Timeout for catalog requests

    Catalog URLs:
        Built as ``<json_path>[/<fingerprint>]/<locale>.json``. With
        ``L10N_FINGERPRINT_MAP='{"fr": "a1b2c3"}'`` the French catalog is
        requested from ``/assets/locales/a1b2c3/fr.json`` while locales
        without a fingerprint keep ``/assets/locales/<locale>.json``.

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        if settings.l10n.force_locale:
            # Detection is skipped...

        labels = settings.l10n.available_locales
        ```
    """

    default_locale: str = Field(
        default="en",
        alias="L10N_DEFAULT_LOCALE",
        description="Fallback locale when the detected locale is not available",
    )
    force_locale: Optional[str] = Field(
        default=None,
        alias="L10N_FORCE_LOCALE",
        description="Locale used verbatim instead of automatic detection",
    )
    auto_initialize: bool = Field(
        default=True,
        alias="L10N_AUTO_INITIALIZE",
        description="Run detection and locale switch when the service is constructed",
    )
    json_path: str = Field(
        default="/assets/locales",
        alias="L10N_JSON_PATH",
        description="Base path of the JSON catalog documents",
    )
    fingerprint_map: Optional[Dict[str, str]] = Field(
        default=None,
        alias="L10N_FINGERPRINT_MAP",
        description="Per-locale cache-busting path fragments",
    )
    available_locales: Dict[str, str] = Field(
        default_factory=lambda: {"en": "en"},
        alias="L10N_AVAILABLE_LOCALES",
        description="Locales with a shipped catalog, mapped to their display label msgid",
    )
    base_url: str = Field(
        default="",
        alias="L10N_BASE_URL",
        description="Base URL for the HTTP catalog transport",
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        alias="L10N_REQUEST_TIMEOUT_SECONDS",
        description="Timeout for a single catalog request (seconds)",
    )

    @field_validator("force_locale", mode="before")
    @classmethod
    def _blank_force_locale(cls, v: Optional[Any]) -> Any:
        """Treat an empty L10N_FORCE_LOCALE as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("fingerprint_map", mode="before")
    @classmethod
    def _parse_fingerprint_map(cls, v: Optional[Any]) -> Any:
        """Parse L10N_FINGERPRINT_MAP from JSON string or dict."""
        return _parse_json_mapping("L10N_FINGERPRINT_MAP", v)

    @field_validator("available_locales", mode="before")
    @classmethod
    def _parse_available_locales(cls, v: Optional[Any]) -> Any:
        """Parse L10N_AVAILABLE_LOCALES from JSON string or dict."""
        parsed = _parse_json_mapping("L10N_AVAILABLE_LOCALES", v)
        return parsed if parsed is not None else {}

    @field_validator("available_locales", mode="after")
    @classmethod
    def _validate_available_locales(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Warn when no locale has a catalog."""
        if not v:
            logger.warning("no_available_locales_configured")
        return v

    @field_validator("json_path", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        """Avoid doubled separators when catalog URLs are built."""
        return v.rstrip("/")
