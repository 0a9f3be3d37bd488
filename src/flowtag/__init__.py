"""flowtag: tag and count network flow-log records by port/protocol."""

__version__ = "0.1.0"
