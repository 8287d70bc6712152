"""l10n system - locale resolution and translation catalogs.

Detects the client's locale, loads and caches the matching JSON catalog,
and renders singular, plural and {{placeholder}} interpolated messages.

Main components:
- service: L10nService, the locale switch controller and translation facade
- detector: LocaleDetector for forced and client-reported locales
- loader: CatalogLoader building catalog URLs and feeding the phrase engine
- cache: CatalogCache holding one snapshot per loaded locale
- formatter: MessageFormatter for t()/n() and placeholder interpolation
- engine: PhraseEngine protocol and the gettext.js-compatible default engine
- transport: httpx and filesystem catalog transports
"""

from l10n.cache import CatalogCache
from l10n.detector import LocaleDetector
from l10n.engine import GettextJSONEngine, PhraseEngine
from l10n.environment import ClientEnvironment
from l10n.errors import (
    DetectionError,
    FormatCoercionFailure,
    L10nError,
    LoadFailed,
    LocaleUnavailable,
)
from l10n.factory import create_l10n_service
from l10n.formatter import MessageFormatter
from l10n.loader import CatalogLoader
from l10n.models import L10nEvent, L10nEventType
from l10n.service import L10nService
from l10n.transport import (
    CatalogTransport,
    FileSystemCatalogTransport,
    HttpxCatalogTransport,
)

__all__ = [
    "CatalogCache",
    "CatalogLoader",
    "CatalogTransport",
    "ClientEnvironment",
    "DetectionError",
    "FileSystemCatalogTransport",
    "FormatCoercionFailure",
    "GettextJSONEngine",
    "HttpxCatalogTransport",
    "L10nError",
    "L10nEvent",
    "L10nEventType",
    "L10nService",
    "LoadFailed",
    "LocaleDetector",
    "LocaleUnavailable",
    "MessageFormatter",
    "PhraseEngine",
    "create_l10n_service",
]
