"""Parsing of test-case input strings such as ``"a=2, b=3"``."""

from __future__ import annotations

import re

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_INTEGER = re.compile(r"[+-]?[0-9]+")


class MalformedInputError(ValueError):
    """A test-case input string that cannot be turned into arguments."""


def parse_input(raw: str) -> dict[str, int]:
    """Parse comma-separated ``name=value`` pairs into an ordered mapping.

    Insertion order follows the order of appearance, since the values are
    later passed positionally. Blank segments (empty input, trailing comma)
    are skipped. Anything else that is not ``identifier=integer`` raises
    :class:`MalformedInputError`.
    """
    params: dict[str, int] = {}
    for segment in raw.split(","):
        if not segment.strip():
            continue
        if "=" not in segment:
            raise MalformedInputError(f"Expected 'name=value', got {segment.strip()!r}")
        name, value = (part.strip() for part in segment.split("=", 1))
        if not _IDENTIFIER.fullmatch(name):
            raise MalformedInputError(f"Invalid parameter name {name!r}")
        if not _INTEGER.fullmatch(value):
            raise MalformedInputError(f"Value of {name!r} is not an integer: {value!r}")
        if name in params:
            raise MalformedInputError(f"Duplicate parameter {name!r}")
        params[name] = int(value, 10)
    return params
