"""Field splitting and integer parsing shared by the file loaders."""
from __future__ import annotations

import re

_INTEGER = re.compile(r"[+-]?[0-9]+")

# undecodable bytes become U+FFFD so a bad line is skipped, not fatal
INPUT_ERRORS = "replace"


def split_fields(line: str, sep: str = ",") -> list[str]:
    """Split a delimited line, dropping trailing empty fields.

    `"25,tcp,"` yields two fields, not three, so a dangling separator does
    not turn a short row into one that looks complete.
    """
    parts = line.split(sep)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def parse_int(s: str) -> int:
    """Parse an optionally signed run of ASCII digits.

    Raises ValueError for anything else, including `4_536`, non-ASCII
    digits and embedded whitespace, all of which bare `int()` accepts.
    """
    if _INTEGER.fullmatch(s) is None:
        raise ValueError(f"invalid integer: {s!r}")
    return int(s)
