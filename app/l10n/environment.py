"""Client environment: raw language preference sources.

The detector reads these values in a fixed priority order and never
interprets them beyond truncation, so they are kept as raw strings.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class ClientEnvironment:
    """Raw language preference values reported by a client.

    Attributes:
        user_agent: Client user agent, inspected for the android pattern.
        language: Preferred language (e.g., "fr-FR").
        browser_language: Legacy fallback source.
        system_language: Legacy fallback source.
        user_language: Legacy fallback source.
    """

    user_agent: Optional[str] = None
    language: Optional[str] = None
    browser_language: Optional[str] = None
    system_language: Optional[str] = None
    user_language: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "ClientEnvironment":
        """Build an environment from HTTP request headers.

        Header names are matched case-insensitively. Only the first range of
        Accept-Language is used (e.g., "fr-CA,fr;q=0.9" -> "fr-CA").

        Args:
            headers: Request headers.

        Returns:
            ClientEnvironment with user_agent and language set.
        """
        normalized = {str(k).lower(): v for k, v in headers.items()}
        accept_language = normalized.get("accept-language") or ""
        first_range = accept_language.split(",")[0].split(";")[0].strip()
        return cls(
            user_agent=normalized.get("user-agent") or None,
            language=first_range or None,
        )

    @classmethod
    def from_os_environ(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> "ClientEnvironment":
        """Build an environment from POSIX locale variables.

        LC_ALL and LC_MESSAGES override LANG, which overrides LANGUAGE; they
        map onto the language source and its fallbacks in that order.

        Args:
            environ: Variables to read (defaults to os.environ).

        Returns:
            ClientEnvironment without a user agent.
        """
        env = os.environ if environ is None else environ
        return cls(
            language=env.get("LC_ALL") or None,
            browser_language=env.get("LC_MESSAGES") or None,
            system_language=env.get("LANG") or None,
            user_language=(env.get("LANGUAGE") or "").split(":")[0] or None,
        )
