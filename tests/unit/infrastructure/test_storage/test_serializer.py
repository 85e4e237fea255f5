"""Tests for CodebaseAnalysis JSON serialization."""

from __future__ import annotations

import json

from dataclasses import replace

import pytest

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.value_objects import (
    ExistingConfig,
    MonorepoInfo,
    MonorepoTool,
    SampledFile,
    SamplePurpose,
    WorkspacePackage,
)
from stackscout.infrastructure.storage.serializer import from_dict, to_dict
from stackscout.shared.types import FilePath

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def full_analysis(nextjs_analysis: CodebaseAnalysis) -> CodebaseAnalysis:
    return replace(
        nextjs_analysis,
        monorepo=MonorepoInfo(
            is_monorepo=True,
            tool=MonorepoTool.PNPM,
            packages=(WorkspacePackage("@shop/web", FilePath("apps/web")),),
        ),
        existing_config=ExistingConfig(
            has_config_dir=True,
            has_claude_md=True,
            agents=("frontend-engineer",),
            skills=("react",),
            hooks=("settings.json",),
        ),
        sampled_files=(
            SampledFile(
                FilePath("package.json"), '{"name": "shop"}', SamplePurpose.MANIFEST
            ),
        ),
        has_env_file=True,
    )


# =============================================================================
# Serialize
# =============================================================================


def test_body_uses_camel_case_keys(full_analysis: CodebaseAnalysis) -> None:
    body = json.loads(json.dumps(to_dict(full_analysis)))

    assert body["projectType"] == "nextjs"
    assert body["packageManager"] == "pnpm"
    assert body["devDependencies"] == [
        {"name": "typescript", "version": "5.4.0", "category": "other"}
    ]
    assert body["lintCommand"] == "pnpm run lint"
    assert body["testCommand"] is None
    assert body["existingClaudeConfig"]["hasClaudeDir"] is True
    assert body["monorepo"]["packages"] == [{"name": "@shop/web", "path": "apps/web"}]


def test_project_root_is_not_in_body(full_analysis: CodebaseAnalysis) -> None:
    body = to_dict(full_analysis)
    assert "projectRoot" not in body
    assert "/projects/shop" not in json.dumps(body)


# =============================================================================
# Deserialize
# =============================================================================


def test_round_trip_reattaches_root(full_analysis: CodebaseAnalysis) -> None:
    body = json.loads(json.dumps(to_dict(full_analysis)))
    restored = from_dict(body, "/elsewhere/shop")

    assert restored == replace(full_analysis, project_root="/elsewhere/shop")


def test_missing_optional_fields_take_defaults() -> None:
    restored = from_dict({"projectType": "go"}, "/srv/api")

    assert restored.project_type.value == "go"
    assert restored.framework is None
    assert restored.dependencies == ()
    assert restored.monorepo is None
    assert restored.total_files == 0


def test_non_object_body_raises_value_error() -> None:
    with pytest.raises(ValueError, match="must be an object"):
        from_dict([1, 2, 3], "/srv/api")  # type: ignore[arg-type]


def test_unknown_enum_value_raises_value_error() -> None:
    with pytest.raises(ValueError):
        from_dict({"projectType": "cobol"}, "/srv/api")


def test_malformed_nested_record_raises_value_error() -> None:
    with pytest.raises(ValueError, match="malformed"):
        from_dict({"dependencies": [{"version": "1.0.0"}]}, "/srv/api")
