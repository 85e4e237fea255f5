"""Tests for the file-based cache store."""

from __future__ import annotations

import json

from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.cache.value_objects import (
    CacheStats,
    GeneratedItemType,
    GenerationCacheKey,
)
from stackscout.infrastructure.storage.cache_store import FileCacheStore
from stackscout.infrastructure.storage.fingerprint import compute_fingerprint
from stackscout.shared.exceptions import InvalidProjectRootError

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

# =============================================================================
# Fixtures
# =============================================================================


@dataclass
class FakeClock:
    now: datetime = T0

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(tmp_path: Path, clock: FakeClock) -> FileCacheStore:
    return FileCacheStore(cache_dir=tmp_path / "cache", clock=clock)


@pytest.fixture
def project(tmp_path: Path) -> str:
    root = tmp_path / "shop"
    root.mkdir()
    (root / "package.json").write_text('{"name": "shop"}')
    return str(root)


@pytest.fixture
def analysis(nextjs_analysis: CodebaseAnalysis, project: str) -> CodebaseAnalysis:
    return replace(nextjs_analysis, project_root=project)


@pytest.fixture
def gen_key() -> GenerationCacheKey:
    return GenerationCacheKey(
        goal_description="Build a dashboard",
        codebase_hash="abc123",
        item_type=GeneratedItemType.AGENT,
        item_name="frontend-engineer",
        model="default",
    )


def _analysis_file(store: FileCacheStore, project: str) -> Path:
    return store.cache_dir / f"analysis-{compute_fingerprint(project)}.json"


# =============================================================================
# Analysis records
# =============================================================================


class TestAnalysisRecords:
    def test_miss_on_empty_cache(self, store: FileCacheStore, project: str) -> None:
        assert store.get_analysis(project) is None

    def test_round_trip(
        self, store: FileCacheStore, project: str, analysis: CodebaseAnalysis
    ) -> None:
        store.set_analysis(project, analysis)
        assert store.get_analysis(project) == analysis

    def test_record_envelope(
        self, store: FileCacheStore, project: str, analysis: CodebaseAnalysis
    ) -> None:
        store.set_analysis(project, analysis)

        record = json.loads(_analysis_file(store, project).read_text())
        assert record["version"] == "1"
        assert record["hash"] == compute_fingerprint(project)
        assert record["timestamp"] == "2026-01-01T12:00:00.000Z"
        assert record["data"]["projectType"] == "nextjs"

    def test_exactly_ttl_old_is_expired(
        self,
        store: FileCacheStore,
        clock: FakeClock,
        project: str,
        analysis: CodebaseAnalysis,
    ) -> None:
        store.set_analysis(project, analysis)
        clock.advance(timedelta(hours=24))
        assert store.get_analysis(project) is None

    def test_just_under_ttl_is_a_hit(
        self,
        store: FileCacheStore,
        clock: FakeClock,
        project: str,
        analysis: CodebaseAnalysis,
    ) -> None:
        store.set_analysis(project, analysis)
        clock.advance(timedelta(hours=24) - timedelta(milliseconds=1))
        assert store.get_analysis(project) == analysis

    def test_day_old_record_is_ignored_but_kept(
        self,
        store: FileCacheStore,
        clock: FakeClock,
        project: str,
        analysis: CodebaseAnalysis,
    ) -> None:
        store.set_analysis(project, analysis)
        clock.advance(timedelta(hours=25))

        assert store.get_analysis(project) is None
        assert _analysis_file(store, project).exists()

    def test_manifest_change_misses(
        self, store: FileCacheStore, project: str, analysis: CodebaseAnalysis
    ) -> None:
        store.set_analysis(project, analysis)
        (Path(project) / "package.json").write_text('{"name": "renamed"}')

        assert store.get_analysis(project) is None

    def test_version_mismatch_misses(
        self, store: FileCacheStore, project: str, analysis: CodebaseAnalysis
    ) -> None:
        store.set_analysis(project, analysis)
        path = _analysis_file(store, project)
        record = json.loads(path.read_text())
        record["version"] = "0"
        path.write_text(json.dumps(record))

        assert store.get_analysis(project) is None

    def test_version_checked_before_age(
        self,
        store: FileCacheStore,
        clock: FakeClock,
        project: str,
        analysis: CodebaseAnalysis,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        store.set_analysis(project, analysis)
        path = _analysis_file(store, project)
        record = json.loads(path.read_text())
        record["version"] = "0"
        path.write_text(json.dumps(record))
        clock.advance(timedelta(days=3))

        with caplog.at_level("DEBUG"):
            assert store.get_analysis(project) is None
        assert "version 0" in caplog.text
        assert "expired" not in caplog.text

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            '{"version": "1"}',
            '{"version": "1", "hash": "x", "timestamp": "yesterday"}',
        ],
    )
    def test_corrupt_envelope_misses(
        self, store: FileCacheStore, project: str, content: str
    ) -> None:
        store.init()
        _analysis_file(store, project).write_text(content)
        assert store.get_analysis(project) is None

    def test_corrupt_body_misses(
        self,
        store: FileCacheStore,
        project: str,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        store.init()
        _analysis_file(store, project).write_text(
            json.dumps(
                {
                    "version": "1",
                    "hash": "x",
                    "timestamp": "2026-01-01T12:00:00.000Z",
                    "data": {"projectType": "cobol"},
                }
            )
        )

        assert store.get_analysis(project) is None
        assert "Corrupt cached analysis" in caplog.text

    def test_naive_timestamp_is_treated_as_utc(
        self, store: FileCacheStore, clock: FakeClock, project: str
    ) -> None:
        store.init()
        _analysis_file(store, project).write_text(
            json.dumps(
                {
                    "version": "1",
                    "hash": "x",
                    "timestamp": "2026-01-01T12:00:00",
                    "data": {"projectType": "node"},
                }
            )
        )
        clock.advance(timedelta(hours=1))

        cached = store.get_analysis(project)
        assert cached is not None
        assert cached.project_type.value == "node"

    def test_relative_root_rejected(self, store: FileCacheStore) -> None:
        with pytest.raises(InvalidProjectRootError):
            store.get_analysis("shop")

    def test_missing_root_is_not_served_from_cache(
        self, store: FileCacheStore, tmp_path: Path, analysis: CodebaseAnalysis
    ) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        store.set_analysis(str(empty), replace(analysis, project_root=str(empty)))
        assert store.get_analysis(str(empty)) is not None

        with pytest.raises(InvalidProjectRootError, match="not a directory"):
            store.get_analysis(str(tmp_path / "does-not-exist"))

    def test_write_failure_propagates(
        self, tmp_path: Path, project: str, analysis: CodebaseAnalysis
    ) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = FileCacheStore(cache_dir=blocker / "cache")

        with pytest.raises(OSError):
            store.set_analysis(project, analysis)


# =============================================================================
# Snapshots
# =============================================================================


class TestSnapshots:
    def test_snapshot_round_trip(
        self, store: FileCacheStore, project: str, analysis: CodebaseAnalysis
    ) -> None:
        assert store.get_snapshot(project) is None
        store.set_snapshot(project, analysis)
        assert store.get_snapshot(project) == analysis

    def test_snapshot_never_expires(
        self,
        store: FileCacheStore,
        clock: FakeClock,
        project: str,
        analysis: CodebaseAnalysis,
    ) -> None:
        store.set_snapshot(project, analysis)
        clock.advance(timedelta(days=365))
        assert store.get_snapshot(project) == analysis

    def test_snapshot_survives_manifest_change(
        self, store: FileCacheStore, project: str, analysis: CodebaseAnalysis
    ) -> None:
        store.set_snapshot(project, analysis)
        (Path(project) / "package.json").write_text('{"name": "renamed"}')
        assert store.get_snapshot(project) == analysis


# =============================================================================
# Generated artifacts
# =============================================================================


class TestGenerations:
    def test_round_trip(
        self, store: FileCacheStore, gen_key: GenerationCacheKey
    ) -> None:
        assert store.get_generation(gen_key) is None
        store.set_generation(gen_key, "# Frontend Engineer\n")
        assert store.get_generation(gen_key) == "# Frontend Engineer\n"

    def test_distinct_keys_do_not_collide(
        self, store: FileCacheStore, gen_key: GenerationCacheKey
    ) -> None:
        store.set_generation(gen_key, "agent text")
        other = replace(gen_key, item_type=GeneratedItemType.SKILL)
        assert store.get_generation(other) is None

    def test_week_old_generation_expires(
        self,
        store: FileCacheStore,
        clock: FakeClock,
        gen_key: GenerationCacheKey,
    ) -> None:
        store.set_generation(gen_key, "agent text")
        clock.advance(timedelta(days=6, hours=23))
        assert store.get_generation(gen_key) == "agent text"
        clock.advance(timedelta(hours=1))
        assert store.get_generation(gen_key) is None

    def test_missing_content_file_misses(
        self, store: FileCacheStore, gen_key: GenerationCacheKey
    ) -> None:
        store.set_generation(gen_key, "agent text")
        for path in store.cache_dir.glob("gen-*.txt"):
            path.unlink()
        assert store.get_generation(gen_key) is None


# =============================================================================
# Maintenance
# =============================================================================


class TestMaintenance:
    def test_stats_on_missing_directory(self, store: FileCacheStore) -> None:
        assert store.stats() == CacheStats()
        assert not store.cache_dir.exists()

    def test_stats_counts_by_kind(
        self,
        store: FileCacheStore,
        project: str,
        analysis: CodebaseAnalysis,
        gen_key: GenerationCacheKey,
    ) -> None:
        store.set_analysis(project, analysis)
        store.set_snapshot(project, analysis)
        store.set_generation(gen_key, "agent text")

        stats = store.stats()

        assert stats.analysis_count == 1
        assert stats.snapshot_count == 1
        assert stats.generation_count == 1
        expected_size = sum(p.stat().st_size for p in store.cache_dir.iterdir())
        assert stats.total_size == expected_size

    def test_clear_removes_everything(
        self,
        store: FileCacheStore,
        project: str,
        analysis: CodebaseAnalysis,
        gen_key: GenerationCacheKey,
    ) -> None:
        store.set_analysis(project, analysis)
        store.set_generation(gen_key, "agent text")

        assert store.clear() == 3
        assert store.stats() == CacheStats()
        assert store.get_analysis(project) is None

    def test_clear_on_missing_directory(self, store: FileCacheStore) -> None:
        assert store.clear() == 0
