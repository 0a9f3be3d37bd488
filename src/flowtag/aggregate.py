"""Running tag and port/protocol counts for a processing run."""
from __future__ import annotations

import dataclasses

from .keys import PortProtocolKey


@dataclasses.dataclass
class FlowCounts:
    tag_frequency: dict[str, int] = dataclasses.field(default_factory=dict)
    port_protocol_count: dict[PortProtocolKey, int] = dataclasses.field(default_factory=dict)

    def add_tag(self, tag: str, n: int = 1):
        self.tag_frequency[tag] = self.tag_frequency.get(tag, 0) + n

    def add_port_protocol(self, key: PortProtocolKey, n: int = 1):
        self.port_protocol_count[key] = self.port_protocol_count.get(key, 0) + n

    def merge(self, other: "FlowCounts") -> "FlowCounts":
        """Add `other`'s counts into this instance and return it.

        Counts are plain sums, so partial results built from disjoint slices
        of a log merge to the same totals as a single pass.
        """
        for tag, n in other.tag_frequency.items():
            self.add_tag(tag, n)
        for key, n in other.port_protocol_count.items():
            self.add_port_protocol(key, n)
        return self

    def is_empty(self) -> bool:
        return not self.tag_frequency and not self.port_protocol_count


@dataclasses.dataclass
class ProcessingStats:
    lines_read: int = 0
    records_classified: int = 0
    lines_skipped: int = 0
