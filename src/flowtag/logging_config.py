"""Root logger setup shared by the CLI and scripts."""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO", stream=None):
    # diagnostics go to stderr so stdout stays free for the run summary
    levelno = getattr(logging, str(level).upper(), None)
    if not isinstance(levelno, int):
        levelno = logging.INFO
    logging.basicConfig(level=levelno, format=LOG_FORMAT, stream=stream or sys.stderr, force=True)
    return levelno
