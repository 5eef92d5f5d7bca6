"""Parsing of migration file names."""

from __future__ import annotations

import re

from schemamigrate.source.migration import Direction, Migration

#: Matches ``123_name.up.ext`` and ``123_name.down.ext``.
REGEX = re.compile(
    r"([0-9]+)_(.*)\.(" + Direction.DOWN.value + "|" + Direction.UP.value + r")\.(.*)"
)

_MAX_VERSION = 2**64 - 1


class ParseError(ValueError):
    """Raised when a file name is not a migration file name."""

    def __init__(self, message: str = "no match") -> None:
        super().__init__(message)


def parse(raw: str) -> Migration:
    """Return the migration described by the file name ``raw``."""
    match = REGEX.fullmatch(raw)
    if match is None:
        raise ParseError()
    version = int(match.group(1))
    if version > _MAX_VERSION:
        raise ValueError(f"version {match.group(1)} out of range")
    return Migration(
        version=version,
        identifier=match.group(2),
        direction=Direction(match.group(3)),
        raw=raw,
    )