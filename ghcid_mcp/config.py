"""Server configuration loaded from environment variables.

Uses ``pydantic-settings`` for automatic env-var loading, type coercion,
and ``.env`` file support.  Every field can be overridden with a
``GHCID_MCP_``-prefixed variable, e.g. ``GHCID_MCP_GHCID_BIN=/opt/bin/ghcid``.
"""

VERSION = "0.1.0"

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_log_dir() -> Path:
    return Path.home() / ".ghcid-mcp" / "logs"


class Settings(BaseSettings):
    """Server settings — sourced from environment / ``.env`` file."""

    model_config = SettingsConfigDict(
        env_prefix="GHCID_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- compiler-feedback process --
    GHCID_BIN: str = "ghcid"
    REPL_COMMAND: str = "cabal repl"
    DEFAULT_TIMEOUT_SECONDS: int = Field(default=300, ge=1)

    # -- manifest discovery --
    MANIFEST_SUFFIX: str = ".cabal"

    # When False (default) every locator failure inside check-compilation
    # is reported as "no manifest".  True re-raises the locator's own error.
    PROPAGATE_LOCATOR_ERRORS: bool = False

    # -- logging --
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Path = Field(default_factory=_default_log_dir)
    LOG_TO_FILE: bool = True


settings = Settings()


def ghcid_command() -> list[str]:
    """Return the argv used to launch the compiler-feedback process."""
    return [settings.GHCID_BIN, "-c", settings.REPL_COMMAND]
