"""Localization service.

Owns the active locale, the phrase engine and the catalog cache, and is
the single entry point for translations:

- t(msgid, substitutions)
- t_var(msgid, substitutions)
- n(msgid, msgid_plural, count, substitutions)

With ``auto_initialize`` (default: True) the user's locale is detected on
construction (or on the first ready() call when constructed outside an
event loop). A supported locale gets its catalog loaded, an unsupported
one resolves to ``default_locale`` (default: "en"). Use set_locale() to
switch locales afterwards.
"""

import asyncio
from typing import Any, Dict, Mapping, Optional

from infrastructure.configuration import L10nSettings
from infrastructure.events import EventDispatcher, EventHandler
from infrastructure.logging import get_module_logger
from l10n.cache import CatalogCache
from l10n.detector import LocaleDetector
from l10n.engine import GettextJSONEngine, PhraseEngine
from l10n.environment import ClientEnvironment
from l10n.errors import DetectionError, LoadFailed, LocaleUnavailable
from l10n.formatter import MessageFormatter, Msgid
from l10n.loader import CatalogLoader
from l10n.models import L10nEvent, L10nEventType
from l10n.transport import CatalogTransport

logger = get_module_logger()


class L10nService:
    """Locale switch controller and translation facade.

    State:
        The active locale is None until the first successful switch, in
        which case get_locale() returns the default locale. It only changes
        through set_locale(), which either commits the new locale or rolls
        back to the previous one.

    Concurrency:
        Switches are serialized: a set_locale() call waits for the switch in
        flight to commit or roll back before it starts, so the last call to
        be made is the one that stays active.

    Usage:
        service = L10nService(settings, transport=transport)
        await service.ready()

        service.t("Welcome, {{name}}", {"name": "Ann"})
        service.n("One file", "{{count}} files", 3)

        await service.set_locale("fr")
    """

    def __init__(
        self,
        settings: L10nSettings,
        transport: CatalogTransport,
        environment: Optional[ClientEnvironment] = None,
        engine: Optional[PhraseEngine] = None,
        cache: Optional[CatalogCache] = None,
    ):
        """Initialize the service.

        Args:
            settings: Localization settings (defaults, paths, locales).
            transport: Fetches catalog documents.
            environment: Client language preferences used for detection.
            engine: Phrase engine (default: GettextJSONEngine).
            cache: Catalog cache (default: a new empty cache).
        """
        self.settings = settings
        self.locale: Optional[str] = None
        self.engine = engine if engine is not None else GettextJSONEngine()
        self.loader = CatalogLoader(
            transport=transport,
            engine=self.engine,
            cache=cache,
            json_path=settings.json_path,
            fingerprint_map=settings.fingerprint_map,
        )
        self.formatter = MessageFormatter(self.engine)
        self.detector = LocaleDetector(
            environment=environment,
            has_locale=self.has_locale,
            default_locale=settings.default_locale,
            force_locale=settings.force_locale,
        )
        self.events = EventDispatcher()
        self._switch_lock = asyncio.Lock()
        self._initialization: Optional[asyncio.Task] = None

        if settings.auto_initialize:
            self._schedule_initialization()

    # -------------------------------------------------------------------------
    # Locale state

    @property
    def default_locale(self) -> str:
        return self.settings.default_locale

    @property
    def available_locales(self) -> Dict[str, str]:
        """Available locales mapped to their label in the current locale."""
        return {
            code: self.t(label)
            for code, label in self.settings.available_locales.items()
        }

    def get_locale(self) -> str:
        """Provide the active locale, or the default locale if none is set."""
        if self.locale is None:
            return self.default_locale
        return self.locale

    def has_locale(self, locale: str) -> bool:
        """Check if a catalog is registered for a locale.

        Args:
            locale: Locale code.

        Returns:
            True if the locale is available.
        """
        available = locale in self.settings.available_locales
        if not available:
            logger.warning("locale_not_available", locale=locale)
        return available

    def detect_locale(self) -> str:
        """Detect the client's locale (see LocaleDetector.detect_locale).

        Raises:
            DetectionError: If nothing is forced and no source has a value.
        """
        return self.detector.detect_locale()

    async def set_locale(self, locale: str) -> None:
        """Activate a locale and load its catalog.

        The switch is all-or-nothing: if the catalog cannot be loaded, the
        active locale and the engine locale are both restored to the locale
        that was active before the call.

        Args:
            locale: Locale to activate.

        Raises:
            LocaleUnavailable: If the locale has no registered catalog.
                Nothing is changed.
            LoadFailed: If the catalog could not be loaded. The previous
                locale is restored.
            asyncio.CancelledError: If the switch is cancelled while the
                catalog is loading. The previous locale is restored.
        """
        if not self.has_locale(locale):
            raise LocaleUnavailable(locale)

        async with self._switch_lock:
            previous = self.get_locale()

            self.locale = locale
            self.engine.set_locale(locale)

            # Cancellation must not leave the uncommitted locale active
            try:
                await self.loader.load(locale)
            except BaseException:
                self._rollback(previous, locale)
                raise

            logger.info("locale_changed", locale=locale, previous_locale=previous)
            self._notify(L10nEventType.LOCALE_CHANGED, locale, previous)
            self._notify(L10nEventType.AVAILABLE_LOCALES_CHANGED, locale, previous)

    async def load_catalog(self, locale: str) -> None:
        """Load a catalog without switching to it.

        Raises:
            LoadFailed: If the catalog could not be loaded.
        """
        await self.loader.load(locale)

    def _rollback(self, previous: str, failed: str) -> None:
        try:
            self.engine.set_locale(previous)
            self.locale = previous
        except Exception as e:
            logger.error(
                "locale_rollback_failed",
                locale=failed,
                previous_locale=previous,
                error=str(e),
            )
        else:
            logger.warning(
                "locale_switch_rolled_back", locale=failed, previous_locale=previous
            )

    # -------------------------------------------------------------------------
    # Initialization

    async def initialize(self) -> str:
        """Detect the client's locale and activate it.

        A failed detection resolves to the default locale.

        Returns:
            The active locale.

        Raises:
            LocaleUnavailable: If the default locale itself is not available.
            LoadFailed: If the catalog could not be loaded.
        """
        try:
            locale = self.detect_locale()
        except DetectionError as e:
            logger.warning(
                "locale_detection_failed",
                error=str(e),
                default_locale=self.default_locale,
            )
            locale = self.default_locale

        await self.set_locale(locale)
        return self.get_locale()

    def _schedule_initialization(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("auto_initialize_deferred", reason="no running event loop")
            return
        self._initialization = loop.create_task(self._auto_initialize())

    async def _auto_initialize(self) -> None:
        try:
            await self.initialize()
        except (LocaleUnavailable, LoadFailed) as e:
            logger.error("auto_initialize_failed", error=str(e))

    async def ready(self) -> str:
        """Wait for the automatic initialization.

        A service constructed outside an event loop could not schedule its
        initialization; with ``auto_initialize`` the first call starts it.
        Later calls wait for the same run.

        Returns:
            The active locale.
        """
        if self._initialization is None and self.settings.auto_initialize:
            self._schedule_initialization()
        if self._initialization is not None:
            await self._initialization
        return self.get_locale()

    # -------------------------------------------------------------------------
    # Notifications

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe to "locale_changed" or "available_locales_changed"."""
        self.events.subscribe(event_type, handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        self.events.unsubscribe(event_type, handler)

    def _notify(self, event_type: L10nEventType, locale: str, previous: str) -> None:
        self.events.dispatch(
            L10nEvent(
                event_type=event_type.value,
                locale=locale,
                previous_locale=previous,
            )
        )

    # -------------------------------------------------------------------------
    # Translation

    def t(self, msgid: Msgid, substitutions: Optional[Mapping[str, Any]] = None) -> Any:
        """Translate a singular message id."""
        return self.formatter.translate(msgid, substitutions)

    def t_var(
        self, msgid: Msgid, substitutions: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Translate a message id held in a variable.

        Same as t(). Message extraction tools index literal t() calls, so
        variable message ids go through this method instead.
        """
        return self.t(msgid, substitutions)

    def n(
        self,
        msgid: Msgid,
        msgid_plural: Msgid,
        count: int = 1,
        substitutions: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Translate a plural message id."""
        return self.formatter.translate_plural(
            msgid, msgid_plural, count, substitutions
        )
