from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class PortProtocolKey:
    """A (port, protocol) pair used as a dictionary key.

    `protocol` is expected to be lowercase already; callers normalize before
    building keys so lookups and counts line up.
    """
    port: int
    protocol: str

    def __str__(self) -> str:
        return f"({self.port} , {self.protocol})"
