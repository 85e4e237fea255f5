"""Fixtures shared across unit test layers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.value_objects import (
    Dependency,
    DependencyCategory,
    DetectedPattern,
    Framework,
    Language,
    NegativeConstraint,
    PackageManager,
    PatternType,
    ProjectType,
)
from stackscout.shared.types import FilePath

AnalysisFactory = Callable[..., CodebaseAnalysis]


@pytest.fixture
def make_analysis() -> AnalysisFactory:
    """Build a CodebaseAnalysis with sensible defaults for one project."""

    def _make(**overrides: Any) -> CodebaseAnalysis:
        fields: dict[str, Any] = {"project_root": "/projects/shop"}
        fields.update(overrides)
        return CodebaseAnalysis(**fields)

    return _make


@pytest.fixture
def nextjs_analysis(make_analysis: AnalysisFactory) -> CodebaseAnalysis:
    return make_analysis(
        project_type=ProjectType.NEXTJS,
        framework=Framework.NEXTJS,
        language=Language.TYPESCRIPT,
        package_manager=PackageManager.PNPM,
        dependencies=(
            Dependency("next", "14.2.0", DependencyCategory.FRAMEWORK),
            Dependency("react", "18.3.0", DependencyCategory.FRAMEWORK),
            Dependency("@prisma/client", "5.0.0", DependencyCategory.ORM),
        ),
        dev_dependencies=(
            Dependency("typescript", "5.4.0", DependencyCategory.OTHER),
        ),
        detected_patterns=(
            DetectedPattern(
                type=PatternType.COMPONENTS,
                paths=(
                    FilePath("components/Button.tsx"),
                    FilePath("components/Card.tsx"),
                ),
                confidence=1.0,
                description="UI components",
            ),
        ),
        negative_constraints=(NegativeConstraint.between("Prisma", "Drizzle"),),
        suggested_agents=("code-reviewer", "debugger", "frontend-engineer"),
        suggested_skills=("nextjs", "typescript", "react", "prisma"),
        lint_command="pnpm run lint",
        test_command=None,
        total_files=42,
        total_lines=1800,
        analyzed_at="2026-01-01T00:00:00.000Z",
    )
