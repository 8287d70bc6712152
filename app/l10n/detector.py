"""Locale detection from client language preferences.

Provides the strategy for picking the user's locale from a forced
override or the raw language preference sources of the client.
"""

import re
from typing import Callable, Optional

from infrastructure.logging import get_module_logger
from l10n.environment import ClientEnvironment
from l10n.errors import DetectionError

logger = get_module_logger()

# Android browsers report the system language in the user agent only
ANDROID_USER_AGENT = re.compile(r"android.*\W(\w\w)-(\w\w)\W", re.IGNORECASE)


class LocaleDetector:
    """Detects the locale to activate for a client.

    Detection chain:
    1. Forced locale (used verbatim)
    2. Android user agent ("... Android 4.4; en-us; ..." -> "en")
    3. language, browser_language, system_language, user_language
       (first non-empty wins, truncated to 2 characters)

    The result is validated with ``has_locale``; unavailable locales
    resolve to the default locale.
    """

    def __init__(
        self,
        environment: Optional[ClientEnvironment],
        has_locale: Callable[[str], bool],
        default_locale: str = "en",
        force_locale: Optional[str] = None,
    ):
        """Initialize locale detector.

        Args:
            environment: Raw language preference sources (None if unknown).
            has_locale: Availability check shared with the switch controller.
            default_locale: Fallback locale when detection is unavailable.
            force_locale: Locale that bypasses detection.
        """
        self.environment = environment
        self.has_locale = has_locale
        self.default_locale = default_locale
        self.force_locale = force_locale
        self.log = logger.bind(default_locale=default_locale)

    def read_raw_locale(self) -> str:
        """Read the raw language preference of the client.

        Returns:
            The first available raw value, untruncated.

        Raises:
            DetectionError: If no source provides a value.
        """
        env = self.environment
        if env is None:
            raise DetectionError("No client environment to detect a locale from")

        if env.user_agent:
            match = ANDROID_USER_AGENT.search(env.user_agent)
            if match:
                return match.group(1)

        for raw in (
            env.language,
            env.browser_language,
            env.system_language,
            env.user_language,
        ):
            if raw:
                return raw

        raise DetectionError("No language preference source provided a value")

    def detect_locale(self) -> str:
        """Get the client's locale, validated against the available locales.

        Returns:
            The forced or detected locale, or the default locale if it is
            not available.

        Raises:
            DetectionError: If nothing is forced and no source has a value.
        """
        forced = self.force_locale is not None
        if forced:
            locale = self.force_locale
        else:
            locale = self.read_raw_locale()[:2]

        if not self.has_locale(locale):
            self.log.info("falling_back_to_default_locale", locale=locale)
            return self.default_locale

        if forced:
            self.log.info("using_forced_locale", locale=locale)
        else:
            self.log.info("detected_user_locale", locale=locale)

        return locale
