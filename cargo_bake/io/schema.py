"""
Schema — Pydantic models for the ``--compare`` report.

One JSON document per comparison run, written only when CARGO_BAKE_REPORT
names a path.  Runtime contract fields: package_name, schema_version.
"""
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field

from cargo_bake import PACKAGE_NAME, REPORT_SCHEMA_VERSION


def now_iso() -> str:
    """Current UTC time as ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


# ── Toolchain ────────────────────────────────────────────────────────────────

class ToolchainIdentity(BaseModel):
    """First line of ``--version`` for each tool; "unknown" if it didn't run."""
    cargo_version: str = "unknown"
    rustc_version: str = "unknown"


# ── Steps ────────────────────────────────────────────────────────────────────

class StepResult(BaseModel):
    """One cargo invocation of the comparison sequence."""
    name: str                # fetch | clean | release_build | bake_build
    command: List[str]
    exit_code: int
    duration_ms: int = 0


# ── Report ───────────────────────────────────────────────────────────────────

class ComparisonReport(BaseModel):
    package_name: str = PACKAGE_NAME
    schema_version: str = REPORT_SCHEMA_VERSION
    created_at: str = Field(default_factory=now_iso)

    toolchain: ToolchainIdentity = Field(default_factory=ToolchainIdentity)
    steps: List[StepResult] = Field(default_factory=list)

    # Set only when the corresponding build ran to completion
    release_build_ms: Optional[int] = None
    bake_build_ms: Optional[int] = None

    exit_code: int = 0
