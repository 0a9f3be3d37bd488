"""Flow-log classification.

A flow-log line is a run of whitespace separated fields (at least 14). Only
three positions are read: source port (5), destination port (6) and the IP
protocol number (7). The destination (port, protocol) pair selects the tags
from the lookup table; both endpoints feed the port/protocol counts.
"""
from __future__ import annotations

import dataclasses
import logging
import typing as t

from .aggregate import FlowCounts, ProcessingStats
from .fields import INPUT_ERRORS, parse_int
from .keys import PortProtocolKey
from .lookup import LookupTable
from .protocols import ProtocolDictionary

UNIDENTIFIED = "Unidentified"

MIN_FIELDS = 14
SRC_PORT_IDX = 5
DST_PORT_IDX = 6
PROTOCOL_IDX = 7

log = logging.getLogger("flowtag.classifier")


@dataclasses.dataclass(frozen=True)
class Classification:
    source_key: PortProtocolKey
    destination_key: PortProtocolKey
    tags: tuple[str, ...]


class FlowClassifier:
    """Resolve flow-log lines against a lookup table and protocol dictionary.

    Both tables are only read; one classifier can be shared by any number of
    FlowCounts instances.
    """

    def __init__(self, lookup: LookupTable, protocols: ProtocolDictionary):
        self.lookup = lookup
        self.protocols = protocols

    def classify(self, line: str) -> t.Optional[Classification]:
        """Return the Classification for `line`, or None if it is skipped."""
        columns = line.split()
        if not columns:
            return None
        if len(columns) < MIN_FIELDS:
            log.debug("skipping short line (%d fields)", len(columns))
            return None

        try:
            src_port = parse_int(columns[SRC_PORT_IDX])
            dst_port = parse_int(columns[DST_PORT_IDX])
            proto_num = parse_int(columns[PROTOCOL_IDX])
        except ValueError:
            log.warning("Invalid port or protocol number in log entry: %s", columns)
            return None

        protocol = self.protocols.name_for(proto_num).lower()
        dst_key = PortProtocolKey(dst_port, protocol)
        src_key = PortProtocolKey(src_port, protocol)
        tags = self.lookup.tags_for(dst_key)
        if tags is None:
            tags = [UNIDENTIFIED]
        return Classification(source_key=src_key, destination_key=dst_key, tags=tuple(tags))

    @staticmethod
    def apply(result: Classification, counts: FlowCounts):
        for tag in result.tags:
            counts.add_tag(tag)
        # source and destination are counted separately, even when equal
        counts.add_port_protocol(result.source_key)
        counts.add_port_protocol(result.destination_key)

    def process_line(self, line: str, counts: FlowCounts) -> bool:
        result = self.classify(line)
        if result is None:
            return False
        self.apply(result, counts)
        return True


def process_flow_logs(path: str, classifier: FlowClassifier, counts: FlowCounts) -> ProcessingStats:
    """Stream the flow log at `path` into `counts`.

    Blank lines are ignored; every other line that does not classify is
    counted as skipped. OSError from opening or reading the file propagates.
    """
    stats = ProcessingStats()
    with open(path, "r", encoding="utf-8", errors=INPUT_ERRORS) as fh:
        for line in fh:
            if not line.strip():
                continue
            stats.lines_read += 1
            if classifier.process_line(line, counts):
                stats.records_classified += 1
            else:
                stats.lines_skipped += 1
    log.debug("processed %s: %s", path, stats)
    return stats
