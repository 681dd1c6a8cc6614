"""Domain layer — grammars, parsers, and the range resolver.

This layer depends only on stdlib, python-dateutil, and (lazily) dateparser.
It must never import from services, commands, config, or output.
"""

from logrange.domain.errors import ErrorKind, TimeParseError
from logrange.domain.resolver import RangeResolver, resolve_interval
from logrange.domain.types import Duration, ResolvedInterval, TimeSpec

__all__ = [
    "Duration",
    "ErrorKind",
    "RangeResolver",
    "ResolvedInterval",
    "TimeParseError",
    "TimeSpec",
    "resolve_interval",
]
