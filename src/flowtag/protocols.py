"""Protocol number -> protocol name dictionary.

The reference file is comma separated (`number,name,...`) and always starts
with a header line, which is dropped without inspection.
"""
from __future__ import annotations

import logging
import typing as t

from .fields import INPUT_ERRORS, parse_int, split_fields

UNCOMMON = "uncommon"

log = logging.getLogger("flowtag.protocols")


class ProtocolDictionary:
    """Read-only mapping of protocol numbers to lowercase names."""

    def __init__(self, names: t.Optional[t.Mapping[int, str]] = None):
        self._names: dict[int, str] = {}
        for number, name in (names or {}).items():
            self._names[int(number)] = name.strip().lower()

    def name_for(self, number: int) -> str:
        return self._names.get(number, UNCOMMON)

    def __contains__(self, number) -> bool:
        return number in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> t.Iterator[int]:
        return iter(self._names)

    def items(self):
        return self._names.items()


def load_protocol_dictionary(path: str) -> ProtocolDictionary:
    """Load a protocol dictionary from `path`.

    Lines with fewer than two fields are ignored; a non-numeric protocol
    number skips the line with an informational message. Later lines win
    when a number repeats. OSError from opening/reading the file propagates.
    """
    names: dict[int, str] = {}
    with open(path, "r", encoding="utf-8", errors=INPUT_ERRORS) as fh:
        fh.readline()  # header
        for raw in fh:
            line = raw.strip()
            if not line:
                continue
            parts = split_fields(line)
            if len(parts) < 2:
                continue
            try:
                number = parse_int(parts[0].strip())
            except ValueError:
                log.info("Skipped corrupt protocol number: %s", parts[0])
                continue
            names[number] = parts[1].strip().lower()
    log.debug("loaded %d protocol names from %s", len(names), path)
    return ProtocolDictionary(names)
