"""
CLI — entry point and role dispatch.

Every process runs the dispatch exactly once: inspect the environment,
act as either the cargo wrapper or the rustc wrapper, exit with the
child's code.  ``--compare`` as the first argument (after cargo's
``bake`` subcommand name, if present) runs the timing comparison instead.

Arguments are not parsed with argparse: everything except the four mode
pseudo-flags belongs to cargo or rustc and is forwarded verbatim.
"""
import logging
import os
import shutil
import sys
from typing import Mapping, Sequence

from cargo_bake.compare import run_comparison
from cargo_bake.config import Settings
from cargo_bake.core.env_channel import EnvChannel
from cargo_bake.errors import CargoBakeError
from cargo_bake.logging_setup import setup_logging
from cargo_bake.runner import SUBCOMMAND_NAME, run_compiler, run_orchestrator

logger = logging.getLogger(__name__)

COMPARE_FLAG = "--compare"
# 128 + SIGINT, as shells report it
INTERRUPTED_EXIT_CODE = 130
CONSOLE_SCRIPT = "cargo-bake"


def resolve_self_exe(argv0: str) -> str:
    """Absolute path cargo can execute to reach this program again."""
    if os.path.basename(argv0) == "__main__.py":
        # python -m cargo_bake: the module file is not executable itself
        argv0 = CONSOLE_SCRIPT
    if os.sep in argv0 or (os.altsep and os.altsep in argv0):
        return os.path.abspath(argv0)
    found = shutil.which(argv0)
    if not found:
        raise CargoBakeError(
            f"cannot find {argv0!r} on PATH; cargo needs it to run as RUSTC"
        )
    return os.path.abspath(found)


def dispatch(
    argv: Sequence[str],
    environ: Mapping[str, str] | None = None,
    settings: Settings | None = None,
) -> int:
    """
    Run one invocation and return the process exit code.

    *argv* includes the program name.  *environ* defaults to a snapshot
    of ``os.environ``.
    """
    if settings is None:
        settings = Settings()

    channel = EnvChannel(environ)
    args = list(argv[1:])
    logger.debug("proxy state: %s", channel.proxy_state().value)

    # cargo bake ... passes the subcommand name through
    leading = args[1:] if args[:1] == [SUBCOMMAND_NAME] else args

    try:
        if leading[:1] == [COMPARE_FLAG]:
            return run_comparison(channel, resolve_self_exe(argv[0]), settings)
        if not channel.is_compiler_role():
            return run_orchestrator(args, channel, resolve_self_exe(argv[0]), settings)
        return run_compiler(args, channel, settings)
    except (CargoBakeError, OSError) as e:
        logger.debug("fatal error", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("error: interrupted", file=sys.stderr)
        return INTERRUPTED_EXIT_CODE


def main():
    """Console-script entry point for cargo-bake."""
    settings = Settings()
    setup_logging(settings.CARGO_BAKE_LOG, settings.CARGO_BAKE_LOG_FILE)
    sys.exit(dispatch(sys.argv, settings=settings))


if __name__ == "__main__":
    main()
