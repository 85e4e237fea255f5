"""Shared environment variable helpers for interfaces."""

from __future__ import annotations

import os

from pathlib import Path

from stackscout.interfaces.toml_config import StackScoutConfig

CACHE_DIR_ENV = "STACKSCOUT_CACHE_DIR"


def resolve_cache_dir(config: StackScoutConfig) -> Path:
    """Cache directory from the environment, else from configuration.

    ``~`` is expanded in either source.
    """
    raw = os.environ.get(CACHE_DIR_ENV, "").strip() or config.cache_dir
    return Path(raw).expanduser()
