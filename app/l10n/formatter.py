"""Message formatting for translated strings.

Coerces message ids to text, delegates lookup to the phrase engine and
replaces {{placeholder}} tokens with substitution values.
"""

import re
from typing import Any, Mapping, Optional, Protocol, Union

from infrastructure.logging import get_module_logger
from l10n.engine import PhraseEngine
from l10n.errors import FormatCoercionFailure

logger = get_module_logger()

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class SupportsText(Protocol):
    """Any object with a text representation usable as a message id."""

    def __str__(self) -> str: ...


Msgid = Union[str, SupportsText]


def coerce_text(value: Any, parameter: str = "msgid") -> str:
    """Convert a message id to text.

    Args:
        value: A string or an object implementing __str__().
        parameter: Parameter name reported on failure.

    Returns:
        The value as text.

    Raises:
        FormatCoercionFailure: If the value is None or __str__() fails.
    """
    if isinstance(value, str):
        return value
    if value is None:
        raise FormatCoercionFailure(value, parameter)
    try:
        return str(value)
    except Exception as e:
        raise FormatCoercionFailure(value, parameter) from e


class MessageFormatter:
    """Renders singular and plural messages through a phrase engine.

    Formatting never raises: a message id without a text representation is
    logged and returned unchanged, unknown placeholders stay in the output.
    """

    def __init__(self, engine: PhraseEngine):
        self.engine = engine

    def translate(
        self, msgid: Msgid, substitutions: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Translate a singular message id.

        Args:
            msgid: Message id (string or object implementing __str__()).
            substitutions: Values for {{placeholder}} tokens.

        Returns:
            Translated and interpolated string, or the original msgid if it
            cannot be converted to text.
        """
        try:
            text = coerce_text(msgid, "msgid")
        except FormatCoercionFailure as e:
            logger.warning("msgid_coercion_failed", method="t", error=str(e))
            return msgid

        return self.interpolate(self.engine.gettext(text), substitutions)

    def translate_plural(
        self,
        msgid: Msgid,
        msgid_plural: Msgid,
        count: int = 1,
        substitutions: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Translate a plural message id.

        Plural form selection is left to the phrase engine. ``count`` is
        made available as {{count}} unless the substitutions define it.

        Args:
            msgid: Singular message id.
            msgid_plural: Plural message id.
            count: Quantity used for plural form selection.
            substitutions: Values for {{placeholder}} tokens (never mutated).

        Returns:
            Translated and interpolated string, or the msgid if a message
            id cannot be converted to text.
        """
        try:
            msgid = coerce_text(msgid, "msgid")
        except FormatCoercionFailure as e:
            logger.warning("msgid_coercion_failed", method="n", error=str(e))
            return msgid

        try:
            msgid_plural = coerce_text(msgid_plural, "msgid_plural")
        except FormatCoercionFailure as e:
            logger.warning("msgid_coercion_failed", method="n", error=str(e))
            return msgid

        substitutions = substitutions if substitutions is not None else {}
        if substitutions.get("count") is None:
            substitutions = {**substitutions, "count": count}

        return self.interpolate(
            self.engine.ngettext(msgid, msgid_plural, count), substitutions
        )

    def interpolate(
        self, message: str, substitutions: Optional[Mapping[str, Any]]
    ) -> str:
        """Replace {{placeholder}} tokens in a looked-up message.

        Textual values are translated through the engine before they are
        inserted, other values are inserted as text. Tokens without a value,
        or whose value has no text representation, are left untouched. The
        result is not scanned again.

        Args:
            message: Message returned by the phrase engine.
            substitutions: Placeholder values.

        Returns:
            Interpolated message.
        """
        if substitutions is None:
            return message

        def replace(match: re.Match) -> str:
            value = substitutions.get(match.group(1))
            if value is None:
                return match.group(0)
            if isinstance(value, str):
                return self.engine.gettext(value)
            try:
                return coerce_text(value, match.group(1))
            except FormatCoercionFailure as e:
                logger.warning("substitution_coercion_failed", error=str(e))
                return match.group(0)

        return PLACEHOLDER_PATTERN.sub(replace, message)
