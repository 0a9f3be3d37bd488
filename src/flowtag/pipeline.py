"""Run sequencing: load lookup, load protocols, process logs, write report."""
from __future__ import annotations

import logging

from .aggregate import FlowCounts, ProcessingStats
from .classifier import FlowClassifier, process_flow_logs
from .lookup import load_lookup_table
from .protocols import load_protocol_dictionary
from .report import write_report

log = logging.getLogger("flowtag.pipeline")


def run(lookup_path: str, logs_path: str, protocol_path: str, output_path: str) -> tuple[FlowCounts, ProcessingStats]:
    """Execute one full run and return the final counts and log stats.

    Both reference tables are fully loaded before the first log line is
    read. An OSError in any phase propagates and the report is not written.
    """
    lookup = load_lookup_table(lookup_path)
    log.info("Loaded %d lookup keys from %s", len(lookup), lookup_path)
    protocols = load_protocol_dictionary(protocol_path)
    log.info("Loaded %d protocol names from %s", len(protocols), protocol_path)

    counts = FlowCounts()
    stats = process_flow_logs(logs_path, FlowClassifier(lookup, protocols), counts)
    log.info("Processed %d log lines from %s (%d classified, %d skipped)",
             stats.lines_read, logs_path, stats.records_classified, stats.lines_skipped)

    write_report(counts, output_path)
    log.info("Wrote report to %s", output_path)
    return counts, stats
