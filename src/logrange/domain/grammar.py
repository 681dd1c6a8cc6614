"""Grammars for absolute datetimes, durations, and range separators.

No logic lives here beyond the compiled patterns: parsers and the
detector validate against these rules.

Absolute datetime::

    YYYY[-]MM[-]DD[T| ][HH[:MM[:SS]]][Z]

Duration::

    [Ny][NM][Nd][Nh][Nm][Ns]     (bare N means minutes)
"""

from __future__ import annotations

import re

ABSOLUTE_GRAMMAR = "YYYY[-]MM[-]DD[T| ][HH[:MM[:SS]]][Z]"
DURATION_GRAMMAR = "[Ny][NM][Nd][Nh][Nm][Ns]"
RANGE_GRAMMAR = "datetime<sep>datetime | datetime<sep>{+|-}duration"

ABSOLUTE_PATTERN: re.Pattern[str] = re.compile(
    r"""
    ^(?P<year>\d{4})-?(?P<month>\d{2})-?(?P<day>\d{2})
    (?:[T\ ]?
        (?P<hour>\d{2})
        (?::?(?P<minute>\d{2})
            (?::?(?P<second>\d{2}))?
        )?
    )?
    (?P<utc>Z)?$
    """,
    re.VERBOSE,
)

# Canonical unit order: (letter, Duration field name).
DURATION_UNITS: tuple[tuple[str, str], ...] = (
    ("y", "years"),
    ("M", "months"),
    ("d", "days"),
    ("h", "hours"),
    ("m", "minutes"),
    ("s", "seconds"),
)
UNIT_FIELDS: dict[str, str] = dict(DURATION_UNITS)
UNIT_ORDER: dict[str, int] = {letter: i for i, (letter, _) in enumerate(DURATION_UNITS)}

# Strict form: each unit at most once, in canonical order.
DURATION_PATTERN: re.Pattern[str] = re.compile(
    r"^(?=.)(?:(?P<y>\d+)y)?(?:(?P<M>\d+)M)?(?:(?P<d>\d+)d)?"
    r"(?:(?P<h>\d+)h)?(?:(?P<m>\d+)m)?(?:(?P<s>\d+)s)?$"
)
BARE_MINUTES_PATTERN: re.Pattern[str] = re.compile(r"^\d+$")

# Loose form: any run of <count><unit> pairs.  Tokens of this shape are routed
# to the duration parser so ordering and duplicate errors get reported
# instead of falling through to human-language parsing.
DURATION_SHAPE_PATTERN: re.Pattern[str] = re.compile(r"^(?:\d+[yMdhms])+$|^\d+$")

# Characters that may occur inside a datetime or duration token.
DISALLOWED_SEPARATOR_CHARS: tuple[str, ...] = (
    *"0123456789",
    "-",
    ":",
    "T",
    "Z",
    "y",
    "M",
    "d",
    "h",
    "m",
    "s",
    "+",
)
# Space separates date from time in the absolute grammar.
TOKEN_ALPHABET: frozenset[str] = frozenset(DISALLOWED_SEPARATOR_CHARS) | {" "}

DEFAULT_SEPARATOR = "/"


def is_absolute(token: str) -> bool:
    """Check whether *token* is shaped like an absolute datetime."""
    return ABSOLUTE_PATTERN.match(token) is not None


def is_duration_shaped(token: str) -> bool:
    """Check whether *token* looks like a duration (strict or not)."""
    return DURATION_SHAPE_PATTERN.match(token) is not None
