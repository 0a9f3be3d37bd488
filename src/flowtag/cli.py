"""Command line entry point for flowtag."""
from __future__ import annotations

import argparse
import logging
import sys

from .logging_config import setup_logging
from .pipeline import run
from . import __version__

DEFAULT_LOOKUP = "resources/lookup_table.csv"
DEFAULT_LOGS = "resources/logs.txt"
DEFAULT_PROTOCOL = "resources/protocol_map.csv"
DEFAULT_OUTPUT = "resources/output_results.txt"

# exit codes: 0 success, 1 unreadable input or unwritable output, 2 usage error (argparse)
EXIT_IO_ERROR = 1


def build_parser():
    # `--log` is a prefix of `--logs`; abbreviations stay off
    p = argparse.ArgumentParser(prog="flowtag", description="Tag flow-log records and count tags and port/protocol pairs", allow_abbrev=False)
    p.add_argument("--lookup", default=DEFAULT_LOOKUP, metavar="FILE", help=f"Lookup table CSV: port,protocol,tag (default: {DEFAULT_LOOKUP})")
    p.add_argument("--logs", default=DEFAULT_LOGS, metavar="FILE", help=f"Flow log file (default: {DEFAULT_LOGS})")
    p.add_argument("--protocol", default=DEFAULT_PROTOCOL, metavar="FILE", help=f"Protocol number CSV with header (default: {DEFAULT_PROTOCOL})")
    p.add_argument("--output", default=DEFAULT_OUTPUT, metavar="FILE", help=f"Report destination, overwritten if present (default: {DEFAULT_OUTPUT})")
    p.add_argument("--log", default="INFO", help="Log level")
    p.add_argument("--quiet", action="store_true", help="Suppress human-readable stdout summary")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log)
    log = logging.getLogger("flowtag.cli")

    try:
        counts, stats = run(args.lookup, args.logs, args.protocol, args.output)
    except OSError as e:
        log.error("Run aborted: %s", e)
        sys.exit(EXIT_IO_ERROR)

    if not args.quiet:
        print(f"flowtag v{__version__} - Processed {stats.lines_read} log lines ({stats.records_classified} classified); "
              f"tags={len(counts.tag_frequency)}; port/protocol pairs={len(counts.port_protocol_count)}; report={args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
