"""Tests for the command-line entry point."""

from __future__ import annotations

import json

from pathlib import Path
from typing import Any

import pytest

from stackscout.infrastructure.storage.cache_store import FileCacheStore
from stackscout.interfaces.env_utils import CACHE_DIR_ENV
from stackscout.interfaces.main import build_parser, main

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    path = tmp_path / "cache"
    monkeypatch.setenv(CACHE_DIR_ENV, str(path))
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "shop"
    root.mkdir()
    _write_package_json(root, {"react": "18.3.0"}, {})
    (root / "components").mkdir()
    (root / "components" / "Button.tsx").write_text("export {}\n")
    return root.resolve()


def _write_package_json(
    root: Path, dependencies: dict[str, str], dev_dependencies: dict[str, str]
) -> None:
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "shop",
                "dependencies": dependencies,
                "devDependencies": dev_dependencies,
            }
        )
    )


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> dict[str, Any]:
    assert main(list(argv)) == 0
    return json.loads(capsys.readouterr().out)


# =============================================================================
# analyze
# =============================================================================


class TestAnalyze:
    def test_second_run_is_served_from_cache(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        first = _run(capsys, "analyze", str(project))
        second = _run(capsys, "analyze", str(project))

        assert first["projectRoot"] == str(project)
        assert first["projectType"] == "react"
        assert first["fromCache"] is False
        assert second["fromCache"] is True
        assert "sampledFiles" not in first

    def test_no_cache_flag(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        _run(capsys, "analyze", str(project))
        again = _run(capsys, "analyze", "--no-cache", str(project))

        assert again["fromCache"] is False

    def test_defaults_to_current_directory(
        self,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
        cache_dir: Path,
        project: Path,
    ) -> None:
        monkeypatch.chdir(project)
        assert _run(capsys, "analyze")["projectRoot"] == str(project)

    def test_missing_project_fails(
        self,
        capsys: pytest.CaptureFixture[str],
        caplog: pytest.LogCaptureFixture,
        cache_dir: Path,
        tmp_path: Path,
    ) -> None:
        assert main(["analyze", str(tmp_path / "missing")]) == 1
        assert capsys.readouterr().out == ""
        assert "not a directory" in caplog.text

    def test_missing_project_is_not_served_from_cache(
        self,
        capsys: pytest.CaptureFixture[str],
        caplog: pytest.LogCaptureFixture,
        cache_dir: Path,
        tmp_path: Path,
    ) -> None:
        empty = tmp_path / "empty"
        empty.mkdir()
        _run(capsys, "analyze", str(empty))

        assert main(["analyze", str(tmp_path / "missing")]) == 1
        assert capsys.readouterr().out == ""
        assert "not a directory" in caplog.text

    def test_invalid_config_fails(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        (project / "pyproject.toml").write_text(
            "[tool.stackscout]\nmax_sampled_files = 0\n"
        )
        assert main(["analyze", str(project)]) == 1


# =============================================================================
# recommend
# =============================================================================


class TestRecommend:
    def test_goal_keywords_and_requirements(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        payload = _run(
            capsys,
            "recommend",
            str(project),
            "--goal",
            "Build a checkout with Stripe",
            "--category",
            "ecommerce",
            "--require",
            "payments",
        )

        assert "stripe" in payload["defaultSkills"]
        assert payload["defaultAgents"][0] == "backend-engineer"
        assert payload["agentSkillLinks"]["security-analyst"] == ["stripe"]

    def test_goal_is_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["recommend"])

    def test_unknown_category_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(
                ["recommend", "--goal", "x", "--category", "nope"]
            )


# =============================================================================
# evolve
# =============================================================================


class TestEvolve:
    def test_first_run_has_no_baseline(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        payload = _run(capsys, "evolve", str(project))

        assert payload["status"] == "no-baseline"
        assert payload["committed"] is False

    def test_detects_new_dev_dependency(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        _run(capsys, "analyze", "--snapshot", str(project))
        _write_package_json(project, {"react": "18.3.0"}, {"vitest": "1.6.0"})

        payload = _run(capsys, "evolve", "--commit", str(project))

        assert payload["status"] == "changes-detected"
        assert payload["committed"] is True
        assert payload["proposals"] == [
            {
                "type": "add-skill",
                "name": "vitest",
                "reason": 'New dependency "vitest" detected',
            }
        ]
        assert "recommendedAgents" in payload
        assert _run(capsys, "evolve", str(project))["status"] == "up-to-date"

    def test_installed_skills_flag(
        self, capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
    ) -> None:
        _run(capsys, "analyze", "--snapshot", str(project))
        _write_package_json(project, {"react": "18.3.0"}, {"vitest": "1.6.0"})

        payload = _run(capsys, "evolve", "--skills", "vitest, react", str(project))

        assert payload["status"] == "changes-detected"
        assert payload["proposals"] == []


# =============================================================================
# cache maintenance
# =============================================================================


def test_cache_stats_and_clear(
    capsys: pytest.CaptureFixture[str], cache_dir: Path, project: Path
) -> None:
    _run(capsys, "analyze", "--snapshot", str(project))

    stats = _run(capsys, "cache-stats", str(project))
    cleared = _run(capsys, "cache-clear", str(project))
    after = _run(capsys, "cache-stats", str(project))

    assert stats["cacheDir"] == str(cache_dir)
    assert stats["analysisCount"] == 1
    assert stats["snapshotCount"] == 1
    assert cleared["removed"] == 2
    assert after["analysisCount"] == 0
    assert after["totalSize"] == 0


# =============================================================================
# I/O failures
# =============================================================================


def _fail(*_args: object, **_kwargs: object) -> None:
    raise PermissionError("read-only cache")


def test_evolve_commit_write_failure_exits_with_error(
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
    cache_dir: Path,
    project: Path,
) -> None:
    monkeypatch.setattr(FileCacheStore, "set_snapshot", _fail)

    assert main(["evolve", "--commit", str(project)]) == 1
    assert capsys.readouterr().out == ""
    assert "read-only cache" in caplog.text


def test_cache_clear_failure_exits_with_error(
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
    monkeypatch: pytest.MonkeyPatch,
    cache_dir: Path,
    project: Path,
) -> None:
    monkeypatch.setattr(FileCacheStore, "clear", _fail)

    assert main(["cache-clear", str(project)]) == 1
    assert "read-only cache" in caplog.text
