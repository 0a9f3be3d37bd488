"""Port/protocol -> tag lookup table.

Each line of the reference file is `port,protocol,tag`. An optional header
line is recognised by its first field not being a plain non-negative
integer. Tags accumulate per key in file order, duplicates included, so a
key listed twice with the same tag counts that tag twice per matching
record.
"""
from __future__ import annotations

import logging
import re
import typing as t

from .fields import INPUT_ERRORS, parse_int, split_fields
from .keys import PortProtocolKey

log = logging.getLogger("flowtag.lookup")

_DIGITS = re.compile(r"[0-9]+")


class LookupTable:
    """Read-only mapping of PortProtocolKey -> list of tags."""

    def __init__(self, entries: t.Optional[t.Mapping[PortProtocolKey, t.Iterable[str]]] = None):
        self._tags: dict[PortProtocolKey, tuple[str, ...]] = {}
        for key, tags in (entries or {}).items():
            self._tags[key] = tuple(tags)

    def tags_for(self, key: PortProtocolKey) -> t.Optional[list[str]]:
        tags = self._tags.get(key)
        if tags is None:
            return None
        return list(tags)

    def __contains__(self, key) -> bool:
        return key in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> t.Iterator[PortProtocolKey]:
        return iter(self._tags)


def _is_header(line: str) -> bool:
    first = line.split(",", 1)[0].strip()
    return _DIGITS.fullmatch(first) is None


def load_lookup_table(path: str) -> LookupTable:
    """Load the lookup table at `path`.

    Rows without exactly three fields are ignored quietly; a row whose port
    is not an integer is skipped with a warning. OSError from opening or
    reading the file propagates.
    """
    entries: dict[PortProtocolKey, list[str]] = {}
    skipped = 0
    with open(path, "r", encoding="utf-8", errors=INPUT_ERRORS) as fh:
        first = True
        for raw in fh:
            if first:
                first = False
                if _is_header(raw.strip()):
                    continue
            columns = split_fields(raw.strip())
            if len(columns) != 3:
                continue
            try:
                port = parse_int(columns[0].strip())
            except ValueError:
                log.warning("Invalid port number found: %s", columns[0])
                skipped += 1
                continue
            protocol = columns[1].strip().lower()
            tag = columns[2].strip()
            entries.setdefault(PortProtocolKey(port, protocol), []).append(tag)
    log.debug("loaded %d lookup keys from %s (%d rows skipped)", len(entries), path, skipped)
    return LookupTable(entries)
