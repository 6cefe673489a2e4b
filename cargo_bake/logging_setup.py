"""Logging configuration for cargo-bake.

Log lines go to stderr: stdout belongs to cargo and rustc, and cargo parses
rustc's stdout for ``--print`` queries.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def setup_logging(log_level: str = "WARNING", log_file: str | None = None) -> None:
    """Configure the ``cargo_bake`` logger.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR).
            Unknown names fall back to WARNING.
        log_file: Optional path to also append log lines to.
    """
    level = getattr(logging, log_level.upper(), None)
    if not isinstance(level, int):
        level = logging.WARNING

    logger = logging.getLogger("cargo_bake")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot open log file %s: %s", log_file, e)
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
