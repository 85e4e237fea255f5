"""File-based cache for analyses, generated artifacts and evolve snapshots.

Every record is a JSON envelope ``{version, hash, timestamp, data}``.
Reads degrade to a miss on any problem; writes propagate ``OSError``.
"""

from __future__ import annotations

import json
import logging

from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.cache.value_objects import CacheStats, GenerationCacheKey
from stackscout.infrastructure.constants import (
    JSON_SUFFIX,
    META_SUFFIX,
    TEXT_SUFFIX,
    CacheFilePrefix,
)
from stackscout.infrastructure.storage import serializer
from stackscout.infrastructure.storage.fingerprint import (
    compute_fingerprint,
    md5_hex,
    validate_project_root,
)
from stackscout.shared.constants import ANALYSIS_TTL, CACHE_VERSION, GENERATION_TTL
from stackscout.shared.types import Clock
from stackscout.shared.utils import format_timestamp, utc_now

logger = logging.getLogger(__name__)

# =============================================================================
# RECORD SCHEMA
# =============================================================================


class CacheEntryMeta(BaseModel):
    """Envelope shared by every cache record."""

    version: str
    hash: str
    timestamp: datetime
    data: Any = None

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


# =============================================================================
# CACHE STORE
# =============================================================================


@dataclass
class FileCacheStore:
    """Implements AnalysisRepository using one JSON file per record.

    Satisfies ``AnalysisRepository`` via ``get_analysis`` / ``set_analysis``
    and ``get_snapshot`` / ``set_snapshot``.
    """

    cache_dir: Path
    clock: Clock = field(default=utc_now, repr=False)

    def init(self) -> None:
        """Create the cache directory if it does not exist."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Analysis records
    # ------------------------------------------------------------------

    def get_analysis(self, project_root: str) -> CodebaseAnalysis | None:
        """Load the analysis cached under the project's current fingerprint.

        Returns:
            The cached analysis, or None if absent, corrupt, written by a
            different cache version, or older than the analysis TTL.

        Raises:
            InvalidProjectRootError: If *project_root* is empty, relative,
                or not a directory.
        """
        fingerprint = compute_fingerprint(project_root)
        path = self._record_path(CacheFilePrefix.ANALYSIS, fingerprint)
        meta = self._read_meta(path, ttl=ANALYSIS_TTL)
        if meta is None:
            return None
        return self._load_body(path, meta, project_root)

    def set_analysis(self, project_root: str, analysis: CodebaseAnalysis) -> None:
        """Persist *analysis* under the project's current fingerprint.

        Raises:
            OSError: If the record cannot be written.
        """
        fingerprint = compute_fingerprint(project_root)
        path = self._record_path(CacheFilePrefix.ANALYSIS, fingerprint)
        self._write_record(path, fingerprint, serializer.to_dict(analysis))
        logger.debug("Cached analysis for %s at %s", project_root, path.name)

    # ------------------------------------------------------------------
    # Evolve snapshots
    # ------------------------------------------------------------------

    def get_snapshot(self, project_root: str) -> CodebaseAnalysis | None:
        """Load the evolve baseline for a project.

        Snapshots are keyed by the project path rather than its fingerprint
        and never expire; only the version gate applies.
        """
        root_hash = md5_hex(str(validate_project_root(project_root)))
        path = self._record_path(CacheFilePrefix.SNAPSHOT, root_hash)
        meta = self._read_meta(path, ttl=None)
        if meta is None:
            return None
        return self._load_body(path, meta, project_root)

    def set_snapshot(self, project_root: str, analysis: CodebaseAnalysis) -> None:
        root_hash = md5_hex(str(validate_project_root(project_root)))
        path = self._record_path(CacheFilePrefix.SNAPSHOT, root_hash)
        self._write_record(path, root_hash, serializer.to_dict(analysis))
        logger.debug("Recorded snapshot for %s", project_root)

    # ------------------------------------------------------------------
    # Generated artifacts
    # ------------------------------------------------------------------

    def get_generation(self, key: GenerationCacheKey) -> str | None:
        """Load generated text for *key*, or None on any miss."""
        key_hash = self._generation_hash(key)
        meta_path = self._generation_path(key_hash, META_SUFFIX)
        if self._read_meta(meta_path, ttl=GENERATION_TTL) is None:
            return None
        try:
            return self._generation_path(key_hash, TEXT_SUFFIX).read_text(
                encoding="utf-8"
            )
        except OSError as e:
            logger.debug("Generation content missing for %s: %s", key_hash, e)
            return None

    def set_generation(self, key: GenerationCacheKey, content: str) -> None:
        """Write generated text and its metadata record.

        Raises:
            OSError: If either file cannot be written.
        """
        key_hash = self._generation_hash(key)
        self.init()
        self._generation_path(key_hash, TEXT_SUFFIX).write_text(
            content, encoding="utf-8"
        )
        self._write_record(self._generation_path(key_hash, META_SUFFIX), key_hash, None)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def stats(self) -> CacheStats:
        """Count records by kind and sum their sizes. Never writes."""
        if not self.cache_dir.is_dir():
            return CacheStats()

        analysis = generation = snapshot = total = 0
        for path in self.cache_dir.iterdir():
            if not path.is_file():
                continue
            name = path.name
            if name.startswith(CacheFilePrefix.ANALYSIS):
                analysis += 1
            elif name.startswith(CacheFilePrefix.GENERATION) and name.endswith(
                TEXT_SUFFIX
            ):
                generation += 1
            elif name.startswith(CacheFilePrefix.SNAPSHOT):
                snapshot += 1
            try:
                total += path.stat().st_size
            except OSError:
                continue

        return CacheStats(
            analysis_count=analysis,
            generation_count=generation,
            snapshot_count=snapshot,
            total_size=total,
        )

    def clear(self) -> int:
        """Remove every record regardless of age or version.

        Returns:
            Number of files removed.
        """
        if not self.cache_dir.is_dir():
            return 0
        removed = 0
        for path in self.cache_dir.iterdir():
            if path.is_file():
                path.unlink()
                removed += 1
        logger.info("Cleared %d cache files from %s", removed, self.cache_dir)
        return removed

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record_path(self, prefix: CacheFilePrefix, digest: str) -> Path:
        return self.cache_dir / f"{prefix}{digest}{JSON_SUFFIX}"

    def _generation_path(self, key_hash: str, suffix: str) -> Path:
        return self.cache_dir / f"{CacheFilePrefix.GENERATION}{key_hash}{suffix}"

    @staticmethod
    def _generation_hash(key: GenerationCacheKey) -> str:
        payload = {k: str(v) for k, v in asdict(key).items()}
        return md5_hex(json.dumps(payload, sort_keys=True))

    def _read_meta(self, path: Path, ttl: timedelta | None) -> CacheEntryMeta | None:
        """Parse and gate a record envelope; version is checked before age."""
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Cache miss: %s", path.name)
            return None
        except OSError as e:
            logger.debug("Cache miss, unreadable %s: %s", path.name, e)
            return None

        try:
            meta = CacheEntryMeta.model_validate_json(raw)
        except ValidationError:
            logger.debug("Cache miss, corrupt record %s", path.name)
            return None

        if meta.version != CACHE_VERSION:
            logger.debug("Cache miss, version %s in %s", meta.version, path.name)
            return None

        if ttl is not None and self.clock() - meta.timestamp >= ttl:
            logger.debug("Cache miss, expired %s", path.name)
            return None

        return meta

    @staticmethod
    def _load_body(
        path: Path,
        meta: CacheEntryMeta,
        project_root: str,
    ) -> CodebaseAnalysis | None:
        try:
            return serializer.from_dict(meta.data, project_root)
        except ValueError:
            logger.warning("Corrupt cached analysis in %s, ignoring", path.name)
            return None

    def _write_record(self, path: Path, digest: str, data: object) -> None:
        self.init()
        record = {
            "version": CACHE_VERSION,
            "hash": digest,
            "timestamp": format_timestamp(self.clock()),
            "data": data,
        }
        path.write_text(json.dumps(record, indent=2), encoding="utf-8")
