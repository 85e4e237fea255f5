"""Project fingerprinting for cache invalidation."""

from __future__ import annotations

import hashlib
import logging

from pathlib import Path

from stackscout.infrastructure.constants import (
    FINGERPRINT_MANIFESTS,
    FINGERPRINT_SOURCE_ROOTS,
)
from stackscout.infrastructure.filesystem.walker import ListDir, scan_dir, walk_files
from stackscout.shared.exceptions import InvalidProjectRootError
from stackscout.shared.types import Fingerprint

logger = logging.getLogger(__name__)


def md5_hex(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.md5(data, usedforsecurity=False).hexdigest()


def validate_project_root(project_root: str) -> Path:
    """Reject empty or relative roots before any I/O happens.

    Raises:
        InvalidProjectRootError: If *project_root* is empty or relative.
    """
    if not project_root:
        raise InvalidProjectRootError(project_root, "must not be empty")
    path = Path(project_root)
    if not path.is_absolute():
        raise InvalidProjectRootError(project_root, "must be an absolute path")
    return path


def validate_project_dir(project_root: str) -> Path:
    """Like ``validate_project_root``, but the root must also be a directory.

    Raises:
        InvalidProjectRootError: If *project_root* is empty, relative,
            or not a directory.
    """
    path = validate_project_root(project_root)
    if not path.is_dir():
        raise InvalidProjectRootError(project_root, "not a directory")
    return path


def compute_fingerprint(
    project_root: str,
    *,
    list_dir: ListDir = scan_dir,
) -> Fingerprint:
    """Hash the manifests and source-tree shape of a project.

    Manifests are hashed by raw content in a fixed order. Then, for each
    source root (``src``, ``app``) that exists, the sorted absolute POSIX
    listing of its files is hashed. The result is the MD5 of the
    ``-``-joined part hashes.

    Raises:
        InvalidProjectRootError: If *project_root* is empty, relative,
            or not a directory.
    """
    root = validate_project_dir(project_root)
    parts: list[str] = []

    for name in FINGERPRINT_MANIFESTS:
        content = _read_bytes(root / name)
        if content is not None:
            parts.append(md5_hex(content))

    for source_root in FINGERPRINT_SOURCE_ROOTS:
        directory = root / source_root
        if not directory.is_dir():
            continue
        listing = sorted(p.as_posix() for p in walk_files(directory, list_dir=list_dir))
        parts.append(md5_hex("\n".join(listing)))

    return Fingerprint(md5_hex("-".join(parts)))


def _read_bytes(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.debug("Treating unreadable manifest %s as absent: %s", path, e)
        return None
