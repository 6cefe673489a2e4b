"""
Environment channel — cross-process state carried in environment variables.

The orchestrator-wrapper process writes the selected modes and redirects
``RUSTC`` at itself; cargo copies that environment into every rustc child
it spawns, so each compiler-wrapper process reads the same record back.

The channel never touches ``os.environ``.  It owns an explicit snapshot
(a plain dict) and that dict is what gets handed to ``subprocess.run(env=...)``,
so mutations are visible only to children spawned from this channel.
"""
import logging
import os
from enum import Enum, unique
from typing import Dict, Mapping, Tuple

from cargo_bake.policy.modes import BakeMode, DebugMode

logger = logging.getLogger(__name__)

# ── Variable names ───────────────────────────────────────────────────────────

PROXY_MARKER_VAR = "CARGO_BAKE_PROXY"
BAKE_MODE_VAR = "CARGO_BAKE_MODE"
DEBUG_MODE_VAR = "CARGO_BAKE_DEBUG_MODE"
REAL_RUSTC_VAR = "CARGO_BAKE_RUSTC"
RUSTC_VAR = "RUSTC"
CARGO_VAR = "CARGO"

DEFAULT_RUSTC = "rustc"
DEFAULT_CARGO = "cargo"


@unique
class ProxyState(str, Enum):
    NOT_PROXYING = "NOT_PROXYING"
    ORCHESTRATOR_WRAPPER = "ORCHESTRATOR_WRAPPER"
    COMPILER_WRAPPER = "COMPILER_WRAPPER"


class EnvChannel:
    """Key/value view over an environment snapshot destined for child processes."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        if environ is None:
            environ = os.environ
        self.environ: Dict[str, str] = dict(environ)
        self._started_as_compiler = PROXY_MARKER_VAR in self.environ

    # ── Role ─────────────────────────────────────────────────────────

    def is_compiler_role(self) -> bool:
        """True when the proxy marker was inherited from a parent process."""
        return self._started_as_compiler

    def proxy_state(self) -> ProxyState:
        if self._started_as_compiler:
            return ProxyState.COMPILER_WRAPPER
        if PROXY_MARKER_VAR in self.environ:
            return ProxyState.ORCHESTRATOR_WRAPPER
        return ProxyState.NOT_PROXYING

    def mark_compiler_role(self) -> None:
        """Set the proxy marker so children start in the compiler role."""
        self.environ[PROXY_MARKER_VAR] = "1"

    # ── Tool paths ───────────────────────────────────────────────────

    def capture_and_redirect_compiler_path(self, self_exe: str) -> str:
        """
        Save the rustc cargo would have used and point ``RUSTC`` at *self_exe*.

        Returns the captured compiler path or name.
        """
        original = self.environ.get(RUSTC_VAR) or DEFAULT_RUSTC
        self.environ[REAL_RUSTC_VAR] = original
        self.environ[RUSTC_VAR] = self_exe
        logger.debug("RUSTC redirected: %s -> %s", original, self_exe)
        return original

    def real_compiler_name(self) -> str:
        return self.environ.get(REAL_RUSTC_VAR) or DEFAULT_RUSTC

    def orchestrator_name(self) -> str:
        return self.environ.get(CARGO_VAR) or DEFAULT_CARGO

    # ── Mode record ──────────────────────────────────────────────────

    def persist_modes(self, bake: BakeMode, debug: DebugMode) -> None:
        self.environ[BAKE_MODE_VAR] = bake.value
        self.environ[DEBUG_MODE_VAR] = debug.value

    def read_modes(self) -> Tuple[BakeMode, DebugMode]:
        """
        Read the record written by the orchestrator-wrapper ancestor.

        Raises ModeRecordError if either variable is absent or garbled.
        """
        bake = BakeMode.parse(self.environ.get(BAKE_MODE_VAR), BAKE_MODE_VAR)
        debug = DebugMode.parse(self.environ.get(DEBUG_MODE_VAR), DEBUG_MODE_VAR)
        return bake, debug
