"""
Flags — resolve bake/debug modes into ordered rustc and cargo flag lists.

Order is part of the contract: rustc lets later ``-C`` options override
earlier ones, so the table order from the profile is emitted unchanged,
followed by the codegen-units, linker and common overlays.
"""
from typing import List

from cargo_bake.core.host import codegen_units
from cargo_bake.policy.modes import BakeMode, DebugMode
from cargo_bake.policy.profile import FlagProfile


def resolve_bake_flags(
    mode: BakeMode,
    cpu_count: int | None,
    gold_linker_present: bool,
    profile: FlagProfile | None = None,
) -> List[str]:
    """
    Build the rustc flag set for *mode*.

    Parameters
    ----------
    mode : BakeMode
        Selected bake mode.
    cpu_count : int or None
        Detected logical CPUs; ``None`` or anything below 1 counts as 1.
    gold_linker_present : bool
        Whether to select the gold linker.
    profile : FlagProfile, optional
        Flag tables.  Defaults to FlagProfile.v0().

    Returns
    -------
    list of str
    """
    if profile is None:
        profile = FlagProfile.v0()

    flags = list(profile.bake_flags[mode])
    units = codegen_units(cpu_count, profile.codegen_units_cap)
    flags.append(profile.codegen_units_flag.format(units))
    if gold_linker_present:
        flags.append(profile.gold_linker_flag)
    flags.extend(profile.common_flags)
    return flags


def resolve_debug_flags(mode: DebugMode, profile: FlagProfile | None = None) -> List[str]:
    """rustc debug-info flags for *mode*."""
    if profile is None:
        profile = FlagProfile.v0()
    return list(profile.debug_flags[mode])


def orchestrator_flags_for(mode: BakeMode, profile: FlagProfile | None = None) -> List[str]:
    """cargo-level flags: the release flag for every mode the profile doesn't exempt."""
    if profile is None:
        profile = FlagProfile.v0()
    if mode in profile.modes_without_release:
        return []
    return [profile.release_flag]
