"""
Command — turn a tool name into the argv prefix that actually runs it.

Everywhere but one legacy setup this is just ``[name]``.  Under MSYS with a
multirust install, bare ``cargo``/``rustc`` names are shell scripts that
Windows cannot execute directly, so they are run through bash.
"""
import logging
from pathlib import Path
from typing import List, Mapping

logger = logging.getLogger(__name__)

DEFAULT_MSYS_BIN = "c:/msys64/usr/local/bin"


def _is_bare_name(name: str) -> bool:
    return "/" not in name and "\\" not in name


def resolve_command(
    name: str,
    environ: Mapping[str, str],
    msys_bin: str = DEFAULT_MSYS_BIN,
) -> List[str]:
    """Return the argv prefix for invoking *name*."""
    msys = "MSYSTEM" in environ
    multirust = Path(msys_bin, "multirust").is_file() if msys else False
    bare = _is_bare_name(name)
    use_shim = msys and multirust and bare
    logger.debug(
        "msys: %s, multirust: %s, bare name: %s, shim: %s",
        msys, multirust, bare, use_shim,
    )

    if not use_shim:
        return [name]
    return ["bash", f"{msys_bin.rstrip('/')}/{name}"]
