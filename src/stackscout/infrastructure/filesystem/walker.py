"""Directory walking with a single exclusion predicate.

The listing function is injectable so walks can be exercised against an
in-memory tree.
"""

from __future__ import annotations

import logging
import os

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path

from stackscout.infrastructure.constants import EXCLUDED_DIR_NAMES
from stackscout.shared.constants import IGNORE_FILENAME

logger = logging.getLogger(__name__)

ListDir = Callable[[Path], Iterable[tuple[Path, bool]]]
"""Lists one directory as ``(path, is_dir)`` pairs."""


def scan_dir(directory: Path) -> list[tuple[Path, bool]]:
    """Default listing backed by ``os.scandir``; symlinks are not followed."""
    with os.scandir(directory) as it:
        return [(Path(e.path), e.is_dir(follow_symlinks=False)) for e in it]


def is_excluded(name: str) -> bool:
    """Hidden names and build/vendor directories are never walked."""
    return name.startswith(".") or name in EXCLUDED_DIR_NAMES


# =============================================================================
# WALK
# =============================================================================


def walk_files(
    root: Path,
    *,
    list_dir: ListDir = scan_dir,
    exclude: Callable[[str], bool] = is_excluded,
) -> Iterator[Path]:
    """Yield every non-excluded file under *root*, depth first.

    Unreadable directories are skipped.
    """
    stack = [root]
    while stack:
        directory = stack.pop()
        try:
            entries = sorted(list_dir(directory))
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue
        for path, is_dir in entries:
            if exclude(path.name):
                continue
            if is_dir:
                stack.append(path)
            else:
                yield path


# =============================================================================
# IGNORE RULES
# =============================================================================


@dataclass(frozen=True)
class IgnoreRules:
    """Glob patterns excluding project-relative paths from analysis.

    A pattern without ``/`` matches any single path component; a pattern
    with ``/`` matches the path or any of its leading directories.
    """

    patterns: tuple[str, ...] = ()

    @classmethod
    def load(cls, project_root: Path, extra: Iterable[str] = ()) -> IgnoreRules:
        """Read the ignore file at *project_root* and merge *extra* patterns."""
        path = project_root / IGNORE_FILENAME
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            lines = []
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Could not read %s: %s", path, e)
            lines = []

        patterns: list[str] = []
        for raw in (*lines, *extra):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            patterns.append(line.strip("/"))
        return cls(patterns=tuple(p for p in patterns if p))

    def is_ignored(self, relative_path: str) -> bool:
        if not self.patterns:
            return False
        parts = relative_path.split("/")
        for pattern in self.patterns:
            if "/" in pattern:
                prefixes = ("/".join(parts[: i + 1]) for i in range(len(parts)))
                if any(fnmatchcase(p, pattern) for p in prefixes):
                    return True
            elif any(fnmatchcase(part, pattern) for part in parts):
                return True
        return False
