"""
Compare — time ``cargo build --release`` against a bake build.

Sequence: fetch, clean, timed release build, clean, timed bake build
(normal mode).  Any step exiting non-zero ends the run with that code.
The bake build runs in-process through ``run_orchestrator`` with its own
copy of the environment snapshot; the plain steps never see the proxy
variables.
"""
import logging
import subprocess
import time
from pathlib import Path
from typing import List

from cargo_bake.config import Settings
from cargo_bake.core.command import resolve_command
from cargo_bake.core.env_channel import DEFAULT_RUSTC, RUSTC_VAR, EnvChannel
from cargo_bake.io.schema import ComparisonReport, StepResult, ToolchainIdentity
from cargo_bake.io.writer import write_report
from cargo_bake.runner import run_orchestrator, spawn

logger = logging.getLogger(__name__)


def _run_quiet(cmd: List[str], env: dict, timeout: int = 30) -> str:
    """Run a command and return stdout, or "" if it could not run."""
    try:
        r = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, env=env)
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("%s failed: %s", cmd, e)
        return ""
    return r.stdout.strip()


def capture_toolchain(channel: EnvChannel, settings: Settings) -> ToolchainIdentity:
    """First ``--version`` line of cargo and rustc as the plain build sees them."""
    msys_bin = settings.CARGO_BAKE_MSYS_BIN
    rustc = channel.environ.get(RUSTC_VAR) or DEFAULT_RUSTC

    cargo_raw = _run_quiet(
        resolve_command(channel.orchestrator_name(), channel.environ, msys_bin) + ["--version"],
        channel.environ,
    )
    rustc_raw = _run_quiet(
        resolve_command(rustc, channel.environ, msys_bin) + ["--version"],
        channel.environ,
    )
    return ToolchainIdentity(
        cargo_version=cargo_raw.splitlines()[0] if cargo_raw else "unknown",
        rustc_version=rustc_raw.splitlines()[0] if rustc_raw else "unknown",
    )


def run_comparison(
    channel: EnvChannel,
    self_exe: str,
    settings: Settings | None = None,
) -> int:
    """
    Run the comparison sequence and print both build times in milliseconds.

    Returns the exit code of the last step run.
    """
    if settings is None:
        settings = Settings()

    report = ComparisonReport()
    if settings.CARGO_BAKE_REPORT:
        report.toolchain = capture_toolchain(channel, settings)

    cargo = resolve_command(
        channel.orchestrator_name(), channel.environ, settings.CARGO_BAKE_MSYS_BIN
    )

    def cargo_step(name: str, banner: str, args: List[str]) -> StepResult:
        print(banner)
        cmd = cargo + args
        t0 = time.monotonic()
        code = spawn(cmd, channel.environ)
        step = StepResult(
            name=name,
            command=cmd,
            exit_code=code,
            duration_ms=int((time.monotonic() - t0) * 1000),
        )
        report.steps.append(step)
        return step

    plain_steps = [
        ("fetch", "fetching", ["fetch"]),
        ("clean", "cleaning", ["clean"]),
        ("release_build", "testing 'cargo build --release'", ["build", "--release"]),
        ("clean", "cleaning", ["clean"]),
    ]
    for name, banner, args in plain_steps:
        step = cargo_step(name, banner, args)
        if step.exit_code != 0:
            logger.warning("%s exited with %d, stopping comparison", name, step.exit_code)
            return _finish(report, step.exit_code, settings)
        if name == "release_build":
            report.release_build_ms = step.duration_ms

    print("testing 'cargo bake'")
    bake_channel = EnvChannel(channel.environ)
    t0 = time.monotonic()
    code = run_orchestrator([], bake_channel, self_exe, settings)
    elapsed = int((time.monotonic() - t0) * 1000)
    report.steps.append(StepResult(
        name="bake_build",
        command=[self_exe],
        exit_code=code,
        duration_ms=elapsed,
    ))
    report.bake_build_ms = elapsed

    print(f"cargo build --release: {report.release_build_ms}")
    print(f"cargo bake: {report.bake_build_ms}")

    return _finish(report, code, settings)


def _finish(report: ComparisonReport, exit_code: int, settings: Settings) -> int:
    report.exit_code = exit_code
    if settings.CARGO_BAKE_REPORT:
        path = write_report(report, Path(settings.CARGO_BAKE_REPORT))
        logger.info("comparison report written to %s", path)
    return exit_code
