"""Custom exceptions for the l10n system.

Only locale switches and catalog loads fail visibly to callers.
Translation calls recover from FormatCoercionFailure themselves.
"""

from typing import Any, Optional


class L10nError(Exception):
    """Base exception for all l10n errors.

    Example:
        try:
            await service.set_locale("de")
        except L10nError as e:
            logger.error("locale_switch_failed", error=str(e))
    """

    pass


class LocaleUnavailable(L10nError):
    """Raised when a locale has no registered catalog.

    Example:
        >>> await service.set_locale("xx")
        Traceback (most recent call last):
        ...
        LocaleUnavailable: Locale "xx" is not available
    """

    def __init__(self, locale: str):
        self.locale = locale
        super().__init__(f'Locale "{locale}" is not available')


class LoadFailed(L10nError):
    """Raised when a catalog could not be fetched or fed to the phrase engine.

    Attributes:
        locale: Locale whose catalog failed to load.
        url: URL the catalog was requested from.
        reason: Description of the underlying failure.
    """

    def __init__(self, locale: str, url: Optional[str] = None, reason: Any = None):
        self.locale = locale
        self.url = url
        self.reason = reason
        message = f'Failed to load catalog for locale "{locale}"'
        if url:
            message += f' from "{url}"'
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class DetectionError(L10nError):
    """Raised when no language preference source yields a value."""

    pass


class FormatCoercionFailure(L10nError):
    """Raised when a message id cannot be converted to text."""

    def __init__(self, value: Any, parameter: str = "msgid"):
        self.value = value
        self.parameter = parameter
        super().__init__(
            f'"{parameter}" should be either a string or an object '
            "implementing __str__()"
        )
