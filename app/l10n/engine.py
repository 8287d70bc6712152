"""Phrase engine: message lookup and plural-rule selection.

The l10n service only relies on the PhraseEngine protocol. The default
GettextJSONEngine reads gettext.js style JSON catalogs:

    {
        "": {"language": "fr", "plural-forms": "nplurals=2; plural=n>1;"},
        "Welcome": "Bienvenue",
        "One file": ["Un fichier", "{{count}} fichiers"]
    }
"""

import gettext
import re
from typing import Any, Callable, Dict, Optional, Protocol

from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEFAULT_PLURAL_FORMS = "nplurals=2; plural=n != 1;"

_PLURAL_EXPRESSION = re.compile(r"plural\s*=\s*([^;]+)")


class PhraseEngine(Protocol):
    """Contract of the phrase lookup engine used by the l10n service."""

    def set_locale(self, locale: str) -> None: ...

    def gettext(self, msgid: str) -> str: ...

    def ngettext(self, msgid: str, msgid_plural: str, count: int) -> str: ...

    def load_json(self, document: Any) -> None: ...


def compile_plural_forms(plural_forms: str) -> Callable[[int], int]:
    """Compile a gettext Plural-Forms header into a plural index function.

    Args:
        plural_forms: Header value (e.g., "nplurals=2; plural=n>1;").

    Returns:
        Function mapping a count to a plural form index.

    Raises:
        ValueError: If the header has no valid plural expression.
    """
    match = _PLURAL_EXPRESSION.search(plural_forms)
    if not match:
        raise ValueError(f"Invalid plural-forms header: {plural_forms!r}")
    return gettext.c2py(match.group(1).strip())


class JSONTranslations(gettext.NullTranslations):
    """Translations for one locale built from a gettext.js JSON document.

    Untranslated messages go through NullTranslations, so a configured
    fallback is consulted before the message id itself is returned.
    """

    def __init__(self, document: Any):
        super().__init__()
        if not isinstance(document, dict):
            raise ValueError(
                f"Catalog must be a JSON object, got {type(document).__name__}"
            )
        header = document.get("", {})
        if not isinstance(header, dict):
            raise ValueError('Catalog header "" must be a JSON object')

        self._info = {str(k): str(v) for k, v in header.items()}
        self.language: Optional[str] = header.get("language") or None
        self.plural = compile_plural_forms(
            header.get("plural-forms") or DEFAULT_PLURAL_FORMS
        )
        self._catalog: Dict[str, Any] = {
            key: value for key, value in document.items() if key != ""
        }

    def __len__(self) -> int:
        """Number of messages in the catalog, header excluded."""
        return len(self._catalog)

    def _lookup(self, msgid: str, index: int) -> Optional[str]:
        entry = self._catalog.get(msgid)
        # A plain string only provides the singular form
        if isinstance(entry, str):
            return (entry or None) if index == 0 else None
        if isinstance(entry, list) and 0 <= index < len(entry):
            return entry[index] or None
        return None

    def gettext(self, message: str) -> str:
        translation = self._lookup(message, 0)
        if translation is None:
            return super().gettext(message)
        return translation

    def ngettext(self, msgid1: str, msgid2: str, n: int) -> str:
        translation = self._lookup(msgid1, int(self.plural(n)))
        if translation is None:
            return super().ngettext(msgid1, msgid2, n)
        return translation


class GettextJSONEngine:
    """Default phrase engine keeping one JSONTranslations per locale.

    Catalogs are registered under the language declared in their header,
    or under the current locale when the header has none. Lookups for a
    regional locale (e.g., "pt-BR") fall back to its language ("pt").
    """

    def __init__(self) -> None:
        self._locale: Optional[str] = None
        self._translations: Dict[str, JSONTranslations] = {}
        self._untranslated = gettext.NullTranslations()

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    def set_locale(self, locale: str) -> None:
        self._locale = locale

    def load_json(self, document: Any) -> None:
        """Register a catalog document.

        Raises:
            ValueError: If the document is malformed or names no locale.
        """
        translations = JSONTranslations(document)
        locale = translations.language or self._locale
        if not locale:
            raise ValueError("Catalog declares no language and no locale is set")
        self._translations[locale] = translations
        logger.debug(
            "catalog_registered",
            locale=locale,
            message_count=len(translations),
        )

    def has_catalog(self, locale: str) -> bool:
        return locale in self._translations

    def _active(self) -> gettext.NullTranslations:
        if self._locale is None:
            return self._untranslated
        translations = self._translations.get(self._locale)
        if translations is None:
            language = re.split(r"[-_]", self._locale, maxsplit=1)[0]
            translations = self._translations.get(language)
        if translations is None:
            return self._untranslated
        return translations

    def gettext(self, msgid: str) -> str:
        return self._active().gettext(msgid)

    def ngettext(self, msgid: str, msgid_plural: str, count: int) -> str:
        return self._active().ngettext(msgid, msgid_plural, count)
