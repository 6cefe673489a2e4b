"""
Modes — bake and debug mode enums with strict parsing.

The lowercase enum values are the wire format used to carry the selected
modes across the process boundary in environment variables.
"""
from enum import Enum, unique

from cargo_bake.errors import ModeRecordError


@unique
class BakeMode(str, Enum):
    """Optimization profile applied to every rustc invocation."""
    FAST = "fast"
    NORMAL = "normal"
    SLOW = "slow"
    GLACIAL = "glacial"

    @classmethod
    def parse(cls, text: str | None, variable: str = "CARGO_BAKE_MODE") -> "BakeMode":
        """Strict inverse of ``.value``; raises ModeRecordError on anything else."""
        for mode in cls:
            if mode.value == text:
                return mode
        raise ModeRecordError(variable, text)


@unique
class DebugMode(str, Enum):
    """Debug-info verbosity, independent of the bake mode."""
    OFF = "off"
    ON = "on"

    @classmethod
    def parse(cls, text: str | None, variable: str = "CARGO_BAKE_DEBUG_MODE") -> "DebugMode":
        for mode in cls:
            if mode.value == text:
                return mode
        raise ModeRecordError(variable, text)


DEFAULT_BAKE_MODE = BakeMode.NORMAL
DEFAULT_DEBUG_MODE = DebugMode.OFF
