"""
Runners — the two roles cargo-bake plays.

``run_orchestrator`` stands in for ``cargo build``: it records the selected
modes in the environment channel, points ``RUSTC`` back at this executable
and launches cargo.  ``run_compiler`` stands in for ``rustc``: it reads the
record back, rewrites the argument vector and launches the real rustc.

Each runner spawns exactly one child, waits for it, and returns its exit
code.  Spawn failures (``OSError``) propagate to the caller.
"""
from __future__ import annotations

import logging
import subprocess
from typing import List, Mapping, Sequence

from cargo_bake.config import Settings
from cargo_bake.core.command import resolve_command
from cargo_bake.core.env_channel import EnvChannel
from cargo_bake.core.flags import (
    orchestrator_flags_for,
    resolve_bake_flags,
    resolve_debug_flags,
)
from cargo_bake.core.host import detect_cpu_count, have_gold_linker
from cargo_bake.core.sanitize import (
    strip_conflicting_compiler_flags,
    strip_mode_pseudo_flags,
)
from cargo_bake.policy.modes import (
    DEFAULT_BAKE_MODE,
    DEFAULT_DEBUG_MODE,
    BakeMode,
    DebugMode,
)
from cargo_bake.policy.profile import FlagProfile

logger = logging.getLogger(__name__)

# cargo passes the external subcommand name through as the first argument
SUBCOMMAND_NAME = "bake"
BUILD_SUBCOMMAND = "build"

# first listed wins
_BAKE_MODE_FLAGS = (
    ("--fast", BakeMode.FAST),
    ("--slow", BakeMode.SLOW),
    ("--glacial", BakeMode.GLACIAL),
)


# ── Mode selection ───────────────────────────────────────────────────────────

def parse_bake_mode(args: Sequence[str]) -> BakeMode:
    """Bake mode from pseudo-flags anywhere in *args*: --fast > --slow > --glacial > normal."""
    for flag, mode in _BAKE_MODE_FLAGS:
        if flag in args:
            return mode
    return DEFAULT_BAKE_MODE


def parse_debug_mode(args: Sequence[str]) -> DebugMode:
    if "--debug" in args:
        return DebugMode.ON
    return DEFAULT_DEBUG_MODE


# ── Argument assembly ────────────────────────────────────────────────────────

def build_orchestrator_args(
    args: Sequence[str],
    bake: BakeMode,
    profile: FlagProfile | None = None,
) -> List[str]:
    """
    cargo arguments for a bake build: ``build``, the cargo-level flags for
    *bake*, then the user's arguments minus pseudo-flags and any leading
    ``bake``/``build`` subcommand tokens.
    """
    rest = strip_mode_pseudo_flags(args)
    if rest and rest[0] == SUBCOMMAND_NAME:
        rest = rest[1:]
    if rest and rest[0] == BUILD_SUBCOMMAND:
        rest = rest[1:]
    return [BUILD_SUBCOMMAND] + orchestrator_flags_for(bake, profile) + rest


def build_compiler_args(
    args: Sequence[str],
    bake: BakeMode,
    debug: DebugMode,
    cpu_count: int | None,
    gold_linker_present: bool,
    profile: FlagProfile | None = None,
) -> List[str]:
    """rustc arguments: sanitized *args*, then bake flags, then debug flags."""
    sanitized = strip_conflicting_compiler_flags(args)
    bake_flags = resolve_bake_flags(bake, cpu_count, gold_linker_present, profile)
    debug_flags = resolve_debug_flags(debug, profile)
    return sanitized + bake_flags + debug_flags


# ── Process spawning ─────────────────────────────────────────────────────────

def exit_code_of(returncode: int | None) -> int:
    """Child exit code, or 1 if it was killed by a signal or left no code."""
    if returncode is None or returncode < 0:
        return 1
    return returncode


def spawn(cmd: List[str], env: Mapping[str, str]) -> int:
    """Run *cmd* with inherited stdio and *env*; block until it exits."""
    logger.debug("spawning: %s", cmd)
    completed = subprocess.run(cmd, env=dict(env))
    return exit_code_of(completed.returncode)


# ── Roles ────────────────────────────────────────────────────────────────────

def run_orchestrator(
    args: Sequence[str],
    channel: EnvChannel,
    self_exe: str,
    settings: Settings | None = None,
    profile: FlagProfile | None = None,
) -> int:
    """
    Act as the cargo wrapper.

    Parameters
    ----------
    args : sequence of str
        Command-line arguments, program name excluded.
    channel : EnvChannel
        Environment snapshot that cargo (and through it every rustc) inherits.
    self_exe : str
        Path cargo should run as ``RUSTC`` to reach the compiler role.
    settings : Settings, optional
    profile : FlagProfile, optional

    Returns
    -------
    int
        cargo's exit code.
    """
    if settings is None:
        settings = Settings()

    # ── Step 1: select and persist modes ─────────────────────────────
    bake = parse_bake_mode(args)
    debug = parse_debug_mode(args)
    channel.persist_modes(bake, debug)
    logger.info("bake mode: %s, debug mode: %s", bake.value, debug.value)

    # ── Step 2: loop rustc back into this executable ─────────────────
    channel.mark_compiler_role()
    channel.capture_and_redirect_compiler_path(self_exe)

    # ── Step 3: launch cargo ─────────────────────────────────────────
    cargo_args = build_orchestrator_args(args, bake, profile)
    cmd = resolve_command(
        channel.orchestrator_name(), channel.environ, settings.CARGO_BAKE_MSYS_BIN
    ) + cargo_args
    logger.info("cargo args: %s", cargo_args)
    return spawn(cmd, channel.environ)


def run_compiler(
    args: Sequence[str],
    channel: EnvChannel,
    settings: Settings | None = None,
    profile: FlagProfile | None = None,
) -> int:
    """
    Act as rustc: rewrite *args* for the persisted modes and run the real rustc.

    Raises ModeRecordError, before anything is spawned, when the mode record
    is missing or garbled.
    """
    if settings is None:
        settings = Settings()

    bake, debug = channel.read_modes()
    rustc_args = build_compiler_args(
        args,
        bake,
        debug,
        cpu_count=detect_cpu_count(),
        gold_linker_present=have_gold_linker(settings.CARGO_BAKE_GOLD_PATH),
        profile=profile,
    )
    cmd = resolve_command(
        channel.real_compiler_name(), channel.environ, settings.CARGO_BAKE_MSYS_BIN
    ) + rustc_args
    logger.info("rustc args: %s", rustc_args)
    return spawn(cmd, channel.environ)
