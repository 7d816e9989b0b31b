"""Configuration settings using Pydantic Settings.

Provides typed copy configuration with environment variable support.

Usage:
    from graphclone.config import CopySettings

    # Load from environment variables (GRAPHCLONE_*)
    settings = CopySettings()

    # Or override with explicit values
    settings = CopySettings(log_advisories=True)
"""

from __future__ import annotations

from pydantic import Field

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for config module. "
        "Install with: pip install graphclone"
    ) from e

DEFAULT_MAX_DEPTH = 100


class CopySettings(BaseSettings):  # type: ignore[misc]
    """Configuration for deep copy calls.

    Attributes:
        max_depth: Recursion ceiling; a node at this depth aborts the copy.
        log_advisories: Send advisories to the log when no sink is given.

    Environment Variables:
        GRAPHCLONE_MAX_DEPTH
        GRAPHCLONE_LOG_ADVISORIES
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHCLONE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    log_advisories: bool = False

