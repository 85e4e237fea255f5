"""TOML-based configuration loader.

Reads ``[tool.stackscout]`` from ``pyproject.toml`` and produces a typed
``StackScoutConfig`` dataclass.  Missing file or missing section → all
defaults apply (supports non-Python projects).
"""

from __future__ import annotations

import logging
import tomllib

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, cast

from stackscout.shared.constants import (
    DEFAULT_CACHE_DIR,
    MAX_PATTERN_PATHS,
    MAX_SAMPLED_FILES,
)
from stackscout.shared.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# ── defaults ────────────────────────────────────────────────────────────
_DEFAULTS: dict[str, Any] = {
    "cache_dir": DEFAULT_CACHE_DIR,
    "use_cache": True,
    "ignored_paths": [],
    "max_sampled_files": MAX_SAMPLED_FILES,
    "max_pattern_paths": MAX_PATTERN_PATHS,
    "log_level": "INFO",
}

_ALL_KNOWN_KEYS = frozenset(_DEFAULTS)

_INT_RANGES: dict[str, tuple[int, int]] = {
    "max_sampled_files": (1, 200),
    "max_pattern_paths": (1, 1000),
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class StackScoutConfig:
    """Typed configuration produced by the TOML loader."""

    cache_dir: str = DEFAULT_CACHE_DIR
    use_cache: bool = True
    ignored_paths: list[str] = field(default_factory=list[str])
    max_sampled_files: int = MAX_SAMPLED_FILES
    max_pattern_paths: int = MAX_PATTERN_PATHS
    log_level: str = "INFO"


def load_stackscout_config(project_root: Path | None = None) -> StackScoutConfig:
    """Load StackScout configuration from ``pyproject.toml``.

    Merge order (later wins): built-in defaults → ``[tool.stackscout]``.

    Args:
        project_root: Directory containing ``pyproject.toml``.
            Defaults to ``Path.cwd()``.

    Returns:
        A frozen ``StackScoutConfig`` dataclass.

    Raises:
        ConfigurationError: On TOML parse errors or invalid values.
    """
    if project_root is None:
        project_root = Path.cwd()

    merged: dict[str, Any] = dict(_DEFAULTS)

    tool_section = _read_tool_section(project_root / "pyproject.toml")
    if tool_section is not None:
        _warn_unknown_keys(tool_section)
        for key, value in tool_section.items():
            if key in _ALL_KNOWN_KEYS:
                merged[key] = value

    _validate_types(merged)
    _validate_ranges(merged)

    return StackScoutConfig(
        cache_dir=str(merged["cache_dir"]),
        use_cache=merged["use_cache"],
        ignored_paths=list(merged["ignored_paths"]),
        max_sampled_files=int(merged["max_sampled_files"]),
        max_pattern_paths=int(merged["max_pattern_paths"]),
        log_level=_validate_log_level(merged["log_level"]),
    )


# ── internal helpers ────────────────────────────────────────────────────


def _read_tool_section(toml_path: Path) -> dict[str, Any] | None:
    """Read ``[tool.stackscout]`` from *toml_path*, or ``None`` if absent."""
    if not toml_path.is_file():
        return None
    try:
        with toml_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Failed to parse {toml_path}: {exc}"
        raise ConfigurationError(msg) from exc
    tool: dict[str, Any] | None = data.get("tool")
    if not isinstance(tool, dict):
        return None
    section: dict[str, Any] | None = tool.get("stackscout")
    if not isinstance(section, dict):
        return None
    return section


def _warn_unknown_keys(section: dict[str, Any]) -> None:
    """Log a warning for any keys not in the known set."""
    for key in section:
        if key not in _ALL_KNOWN_KEYS:
            logger.warning("Unknown key in [tool.stackscout]: %r", key)


def _validate_types(merged: dict[str, Any]) -> None:
    if not isinstance(merged["cache_dir"], str) or not merged["cache_dir"]:
        msg = f"cache_dir must be a non-empty string, got {merged['cache_dir']!r}"
        raise ConfigurationError(msg)

    if not isinstance(merged["use_cache"], bool):
        msg = f"use_cache must be a boolean, got {merged['use_cache']!r}"
        raise ConfigurationError(msg)

    raw_paths: Any = merged["ignored_paths"]
    if not isinstance(raw_paths, list) or not all(
        isinstance(p, str) for p in cast(list[Any], raw_paths)
    ):
        msg = f"ignored_paths must be a list of strings, got {raw_paths!r}"
        raise ConfigurationError(msg)


def _validate_ranges(merged: dict[str, Any]) -> None:
    """Validate integer ranges; booleans are rejected."""
    for key, (low, high) in _INT_RANGES.items():
        value = merged[key]
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"{key} must be an integer, got {value!r}"
            raise ConfigurationError(msg)
        if not low <= value <= high:
            msg = f"{key} must be between {low} and {high}, got {value}"
            raise ConfigurationError(msg)


def _validate_log_level(raw: Any) -> str:
    level = str(raw).upper()
    if level not in _LOG_LEVELS:
        valid = ", ".join(_LOG_LEVELS)
        msg = f"Invalid log_level {raw!r} (valid: {valid})"
        raise ConfigurationError(msg)
    return level
