"""
cargo_bake — run cargo with every rustc invocation re-flagged per bake mode.

One executable, two roles: the orchestrator wrapper (invoked by the user in
place of ``cargo build``) and the compiler wrapper (invoked by cargo in place
of ``rustc``).  The role is decided from the process environment on entry.
"""

__version__ = "0.1.0"
PACKAGE_NAME = "cargo_bake"
REPORT_SCHEMA_VERSION = "0.1"
