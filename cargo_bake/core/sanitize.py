"""
Sanitize — filter argument vectors before they are forwarded.

Two directions:
  1. toward cargo  — drop cargo-bake's own mode pseudo-flags.
  2. toward rustc  — drop debug/opt-level requests that would clash with
     the flags appended from the active bake mode.

All functions are pure and preserve the order of retained tokens.
"""
from typing import List, Sequence

MODE_PSEUDO_FLAGS = frozenset({"--fast", "--slow", "--glacial", "--debug"})

# rustc shorthand for -Cdebuginfo=2
DEBUG_FLAG = "-g"
# rustc accepts codegen options as two tokens: "-C" "opt-level=3"
CODEGEN_OPTION_MARKER = "-C"
OPT_LEVEL_KEY = "opt-level"


def strip_mode_pseudo_flags(args: Sequence[str]) -> List[str]:
    """Remove ``--fast``, ``--slow``, ``--glacial`` and ``--debug`` (exact matches)."""
    return [a for a in args if a not in MODE_PSEUDO_FLAGS]


def strip_conflicting_compiler_flags(args: Sequence[str]) -> List[str]:
    """
    Remove the lone ``-g`` token and every ``-C <...opt-level...>`` pair.

    A ``-C`` as the final token has no value to inspect and is kept.
    """
    filtered = [a for a in args if a != DEBUG_FLAG]
    if not filtered:
        return []

    kept: List[str] = []
    i = 0
    n = len(filtered)
    while i < n:
        token = filtered[i]
        if (
            token == CODEGEN_OPTION_MARKER
            and i + 1 < n
            and OPT_LEVEL_KEY in filtered[i + 1]
        ):
            i += 2
            continue
        kept.append(token)
        i += 1
    return kept
