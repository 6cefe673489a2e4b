"""
Profile — flag tables and tunable parameters for rustc rewriting.

The profile holds every flag spelling and numeric knob so that the flag
resolution in core/ contains no opinions.  Retuning a mode (different
opt-level for ``normal``, another linker spelling) is a profile change,
not a code change.  The structure is fixed: basic per-mode flags, then
codegen units, then the optional linker flag, then the common flags.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from cargo_bake.policy.modes import BakeMode, DebugMode


@dataclass(frozen=True)
class FlagProfile:
    """Describes how each mode maps onto rustc and cargo flags."""

    # Identity
    profile_id: str

    # Per-mode tables
    bake_flags: Dict[BakeMode, Tuple[str, ...]] = field(default_factory=dict)
    debug_flags: Dict[DebugMode, Tuple[str, ...]] = field(default_factory=dict)

    # Overlay appended to every bake mode
    codegen_units_cap: int = 4
    codegen_units_flag: str = "-Ccodegen-units={}"
    gold_linker_flag: str = "-Clink-args=-fuse-ld=gold"
    common_flags: Tuple[str, ...] = ()

    # cargo-level
    release_flag: str = "--release"
    modes_without_release: frozenset = frozenset()

    @classmethod
    def v0(cls) -> "FlagProfile":
        """The default profile: opt-level 1 for normal, gold if present."""
        return cls(
            profile_id="rustc-bake-v0",
            bake_flags={
                BakeMode.FAST: (
                    "-Copt-level=0",
                ),
                BakeMode.NORMAL: (
                    "-Copt-level=1",
                    "-Cinline-threshold=25",
                    "-Cno-vectorize-loops",
                ),
                BakeMode.SLOW: (
                    "-Copt-level=3",
                    "-Cinline-threshold=275",
                ),
                BakeMode.GLACIAL: (
                    "-Copt-level=3",
                    "-Cinline-threshold=275",
                    "-Clto",
                ),
            },
            debug_flags={
                DebugMode.OFF: ("-Cdebuginfo=0",),
                DebugMode.ON: ("-Cdebuginfo=2",),
            },
            codegen_units_cap=4,
            common_flags=("-Zno-verify",),
            # slow already asks rustc for opt-level 3; skip cargo's release profile
            modes_without_release=frozenset({BakeMode.SLOW}),
        )
