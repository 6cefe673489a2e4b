"""
Application configuration
"""
from pydantic_settings import BaseSettings

from cargo_bake.core.command import DEFAULT_MSYS_BIN
from cargo_bake.core.host import DEFAULT_GOLD_PATH


class Settings(BaseSettings):
    """Tunables read from the environment (not the proxy protocol variables)."""

    # Logging
    CARGO_BAKE_LOG: str = "WARNING"
    CARGO_BAKE_LOG_FILE: str | None = None

    # --compare
    CARGO_BAKE_REPORT: str | None = None

    # Host probes
    CARGO_BAKE_GOLD_PATH: str = DEFAULT_GOLD_PATH
    CARGO_BAKE_MSYS_BIN: str = DEFAULT_MSYS_BIN

    class Config:
        case_sensitive = True
