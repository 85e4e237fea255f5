"""Domain-specific types that prevent primitive obsession."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

# =============================================================================
# NEWTYPES
# =============================================================================


class FilePath(str):
    """A POSIX path to a file, relative to the project root."""


class Fingerprint(str):
    """An MD5 hex digest identifying a project's dependency and file shape."""


Clock = Callable[[], datetime]
"""Source of the current time; injectable for TTL and timing tests."""
