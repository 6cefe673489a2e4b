"""
Host probes — optional facts about the machine that shape the flag set.

Every probe here is total: a failed lookup yields a conservative default
rather than an exception.
"""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_GOLD_PATH = "/usr/bin/ld.gold"


def detect_cpu_count() -> int:
    """Logical CPU count, or 1 when the platform cannot tell."""
    count = os.cpu_count()
    if not count or count < 1:
        logger.debug("CPU count unavailable, assuming 1")
        return 1
    return count


def codegen_units(cpu_count: int | None, cap: int = 4) -> int:
    """``min(cpu_count, cap)``, never below 1."""
    if not cpu_count or cpu_count < 1:
        return 1
    return min(cpu_count, cap)


def have_gold_linker(path: str = DEFAULT_GOLD_PATH) -> bool:
    """True if the gold linker binary exists as a regular file."""
    try:
        present = Path(path).is_file()
    except OSError:
        present = False
    logger.debug("gold linker at %s: %s", path, present)
    return present
