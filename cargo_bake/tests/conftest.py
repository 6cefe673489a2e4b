"""
Shared pytest fixtures for cargo_bake tests.

Provides fake ``cargo``/``rustc`` executables: small Python scripts that
append their argv and the proxy environment variables to a JSON-lines log,
then exit with a fixed code.  The runners are exercised through real
subprocess spawns against these fakes.

Requirements:
  - a POSIX platform (the fakes rely on shebang execution)

Tests using the fakes are skipped on Windows.
"""
import json
import os
import platform
import stat
import sys
import textwrap
from pathlib import Path
from typing import Dict, List

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]

RECORDED_VARS = [
    "CARGO_BAKE_PROXY",
    "CARGO_BAKE_MODE",
    "CARGO_BAKE_DEBUG_MODE",
    "CARGO_BAKE_RUSTC",
    "RUSTC",
]

FAKE_TOOL = textwrap.dedent("""\
    #!{python}
    import json
    import os
    import sys

    record = {{
        "argv": sys.argv[1:],
        "env": {{k: os.environ.get(k) for k in {recorded!r}}},
    }}
    with open({log!r}, "a") as f:
        f.write(json.dumps(record) + "\\n")
    if "--version" in sys.argv:
        print("{name} 1.0.0-fake")
    {body}
    sys.exit({exit_code})
""")

# Fake cargo that compiles one crate by calling $RUSTC, like the real one.
CALL_RUSTC = (
    "import subprocess; "
    "rc = subprocess.run([os.environ.get('RUSTC', 'rustc'), "
    "'--crate-name', 'demo', '-C', 'opt-level=3', '-g', 'src/main.rs']).returncode\n"
    "if rc != 0: sys.exit(rc)"
)

# Console-script stand-in for an installed cargo-bake.
SELF_EXE = textwrap.dedent("""\
    #!{python}
    import sys
    sys.path.insert(0, {root!r})
    from cargo_bake.cli import main
    main()
""")


def _make_executable(path: Path, text: str) -> Path:
    path.write_text(text)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def read_calls(log_path: Path) -> List[Dict]:
    """Every recorded invocation of a fake tool, oldest first."""
    if not log_path.exists():
        return []
    return [json.loads(line) for line in log_path.read_text().splitlines() if line]


@pytest.fixture(scope="session")
def posix_only():
    """Skip tests that need shebang-executable scripts."""
    if platform.system() == "Windows":
        pytest.skip("fake tools need a POSIX platform; run under WSL or Docker")


@pytest.fixture
def fake_tool(tmp_path, posix_only):
    """
    Factory: ``fake_tool(name, exit_code=0, calls_rustc=False)`` → (exe, log).
    """
    def make(name: str, exit_code: int = 0, calls_rustc: bool = False):
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        log = tmp_path / f"{name}.calls.jsonl"
        script = FAKE_TOOL.format(
            python=sys.executable,
            recorded=RECORDED_VARS,
            log=str(log),
            name=name,
            body=CALL_RUSTC if calls_rustc else "",
            exit_code=exit_code,
        )
        exe = _make_executable(bin_dir / name, script)
        return str(exe), log

    return make


@pytest.fixture
def self_exe(tmp_path, posix_only) -> str:
    """An executable that runs cargo_bake.cli.main from this checkout."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir(exist_ok=True)
    exe = _make_executable(
        bin_dir / "cargo-bake",
        SELF_EXE.format(python=sys.executable, root=str(REPO_ROOT)),
    )
    return str(exe)


@pytest.fixture
def base_env(tmp_path) -> Dict[str, str]:
    """Minimal environment with no proxy variables and no gold linker."""
    env = {
        "PATH": os.environ.get("PATH", ""),
        "CARGO_BAKE_GOLD_PATH": str(tmp_path / "no-such-ld.gold"),
    }
    for key in ("SYSTEMROOT", "HOME", "TMPDIR"):
        if key in os.environ:
            env[key] = os.environ[key]
    return env
