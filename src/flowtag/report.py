"""Plain-text report of tag and port/protocol counts.

Rows follow the count mappings' iteration order (first seen first), so the
same inputs always render the same report.
"""
from __future__ import annotations

import os
import typing as t

from .aggregate import FlowCounts

TAG_SECTION = "Tag Frequencies:"
PORT_PROTOCOL_SECTION = "Port/Protocol Count:"


def iter_report_lines(counts: FlowCounts) -> t.Iterator[str]:
    yield TAG_SECTION
    yield "Tag,Count"
    for tag, n in counts.tag_frequency.items():
        yield f"{tag},{n}"
    yield ""
    yield PORT_PROTOCOL_SECTION
    yield "Port,Protocol,Count"
    for key, n in counts.port_protocol_count.items():
        yield f"{key.port},{key.protocol},{n}"


def render_report(counts: FlowCounts) -> str:
    return "".join(line + "\n" for line in iter_report_lines(counts))


def write_report(counts: FlowCounts, path: str) -> str:
    """Write the report to `path`, replacing any existing file.

    Missing parent directories are created. Returns `path`.
    """
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as fh:
        for line in iter_report_lines(counts):
            fh.write(line + "\n")
    return path
