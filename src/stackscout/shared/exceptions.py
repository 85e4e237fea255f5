"""Typed exception hierarchy for StackScout."""

from __future__ import annotations

from pathlib import Path

# =============================================================================
# BASE
# =============================================================================


class StackScoutError(Exception):
    """Base exception for all StackScout errors."""


# =============================================================================
# ANALYSIS
# =============================================================================


class InvalidProjectRootError(StackScoutError):
    """Project root is empty, relative, or not a directory."""

    def __init__(self, project_root: str | Path, reason: str) -> None:
        self.project_root = str(project_root)
        super().__init__(f"Invalid project root {self.project_root!r}: {reason}")


class ManifestError(StackScoutError):
    """A manifest file exists but could not be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to parse {path.name}: {reason}")


# =============================================================================
# CONFIGURATION
# =============================================================================


class ConfigurationError(StackScoutError):
    """Invalid or missing configuration."""
