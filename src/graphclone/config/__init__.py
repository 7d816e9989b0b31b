"""Configuration module using Pydantic Settings.

Usage:
    from graphclone.config import CopySettings

    settings = CopySettings(max_depth=50)
"""

from graphclone.config.settings import DEFAULT_MAX_DEPTH, CopySettings

__all__ = [
    "CopySettings",
    "DEFAULT_MAX_DEPTH",
]
