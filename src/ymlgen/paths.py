"""Configuration path resolution.

Uses environment variables when available, falls back to conventional
defaults.

Environment variables:
    YMLGEN_CONFIG_DIR - config directory (default: ./.ymlgen)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_CONFIG_SUBDIR = ".ymlgen"
_GENERATORS_SUBDIR = "generators"


def config_dir() -> Path:
    """Return the ymlgen config directory."""
    env = os.environ.get("YMLGEN_CONFIG_DIR")
    if env:
        return Path(env)
    return Path.cwd() / _DEFAULT_CONFIG_SUBDIR


def generators_dir(config: Path | str | None = None) -> Path:
    """Return the directory holding generator modules.

    Args:
        config: Config directory. Defaults to ``config_dir()``.
    """
    base = Path(config) if config else config_dir()
    return base / _GENERATORS_SUBDIR
