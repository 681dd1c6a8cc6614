"""Range separator validation.

A separator must not be confusable with the inside of a datetime or
duration token.  Any string made up only of token characters (digits,
``-``, ``:``, ``T``, ``Z``, unit letters, ``+`` and space) can occur inside
such a token and is rejected.  Separators with at least one foreign
character, such as ``/`` or ``" TO "``, are accepted.
"""

from __future__ import annotations

from logrange.domain.errors import InvalidSeparatorError
from logrange.domain.grammar import DISALLOWED_SEPARATOR_CHARS, TOKEN_ALPHABET


def validate_separator(separator: str) -> str:
    """Return *separator* unchanged if usable, else raise.

    Raises:
        InvalidSeparatorError: If *separator* is empty or consists only of
            characters that appear in datetime or duration tokens.
    """
    if not separator:
        raise InvalidSeparatorError(separator, "range separator is empty")

    if all(ch in TOKEN_ALPHABET for ch in separator):
        offending = sorted(set(separator), key=separator.index)
        shown = ", ".join(repr(ch) for ch in offending)
        raise InvalidSeparatorError(
            separator,
            f"separator clashes with datetime/duration notation: {shown}",
            expected="any string with a character outside: " + " ".join(DISALLOWED_SEPARATOR_CHARS),
        )
    return separator
