"""Tests for the analysis differ."""

from __future__ import annotations

from dataclasses import replace

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.value_objects import (
    Dependency,
    DependencyCategory,
    DetectedPattern,
    Framework,
    NegativeConstraint,
    PatternType,
)
from stackscout.domain.evolve.differ import diff_analyses
from stackscout.domain.evolve.value_objects import DeltaField, EvolveDelta
from stackscout.shared.types import FilePath


def test_self_diff_is_empty(nextjs_analysis: CodebaseAnalysis) -> None:
    assert diff_analyses(nextjs_analysis, nextjs_analysis) == []


def test_volatile_fields_are_ignored(nextjs_analysis: CodebaseAnalysis) -> None:
    later = replace(
        nextjs_analysis,
        analyzed_at="2026-02-01T00:00:00.000Z",
        total_files=99,
        analysis_time_ms=12,
    )
    assert diff_analyses(nextjs_analysis, later) == []


def test_new_dev_dependency(nextjs_analysis: CodebaseAnalysis) -> None:
    after = replace(
        nextjs_analysis,
        dev_dependencies=nextjs_analysis.dev_dependencies
        + (Dependency("vitest", "1.6.0", DependencyCategory.TESTING),),
    )

    assert diff_analyses(nextjs_analysis, after) == [
        EvolveDelta(
            field=DeltaField.DEV_DEPENDENCIES,
            label="Dev Dependencies",
            before="(none)",
            after="vitest",
        )
    ]


def test_added_and_removed_dependencies_are_sorted(
    nextjs_analysis: CodebaseAnalysis,
) -> None:
    after = replace(
        nextjs_analysis,
        dependencies=(
            Dependency("next", "14.2.0"),
            Dependency("zod", "3.0.0"),
            Dependency("drizzle-orm", "0.30.0"),
        ),
    )

    [delta] = diff_analyses(nextjs_analysis, after)
    assert delta.field == DeltaField.DEPENDENCIES
    assert delta.before == "@prisma/client, react"
    assert delta.after == "drizzle-orm, zod"


def test_version_bump_is_not_a_change(nextjs_analysis: CodebaseAnalysis) -> None:
    after = replace(
        nextjs_analysis,
        dependencies=tuple(
            replace(d, version="99.0.0") for d in nextjs_analysis.dependencies
        ),
    )
    assert diff_analyses(nextjs_analysis, after) == []


def test_only_new_patterns_are_reported(nextjs_analysis: CodebaseAnalysis) -> None:
    tests = DetectedPattern(
        type=PatternType.TESTS,
        paths=(FilePath("tests/a.test.ts"),),
        confidence=1.0,
        description="Test suites",
    )
    api = replace(tests, type=PatternType.API_ROUTES, description="API")
    grown = replace(nextjs_analysis, detected_patterns=(tests, api))

    [delta] = diff_analyses(nextjs_analysis, grown)
    assert delta.field == DeltaField.DETECTED_PATTERNS
    assert delta.before == "(none new)"
    assert delta.after == "api-routes, tests"

    # Losing the components pattern (and keeping the others) emits nothing.
    assert diff_analyses(grown, replace(grown, detected_patterns=(tests,))) == []


def test_framework_change_uses_none_sentinel(make_analysis) -> None:
    before = make_analysis()
    after = make_analysis(framework=Framework.FASTAPI)

    assert diff_analyses(before, after) == [
        EvolveDelta(
            field=DeltaField.FRAMEWORK,
            label="Framework",
            before="none",
            after="fastapi",
        )
    ]


def test_constraints_joined_with_semicolons(make_analysis) -> None:
    after = make_analysis(
        negative_constraints=(
            NegativeConstraint.between("Zod", "Joi"),
            NegativeConstraint.between("Zod", "Yup"),
        )
    )

    [delta] = diff_analyses(make_analysis(), after)
    assert delta.field == DeltaField.NEGATIVE_CONSTRAINTS
    assert delta.after == "Use Zod, NOT Joi; Use Zod, NOT Yup"
    assert delta.before == "(none)"


def test_command_changes(nextjs_analysis: CodebaseAnalysis) -> None:
    after = replace(nextjs_analysis, lint_command=None, test_command="pnpm test")

    deltas = diff_analyses(nextjs_analysis, after)

    assert deltas == [
        EvolveDelta(
            field=DeltaField.LINT_COMMAND,
            label="lint command",
            before="pnpm run lint",
            after="(none)",
        ),
        EvolveDelta(
            field=DeltaField.TEST_COMMAND,
            label="test command",
            before="(none)",
            after="pnpm test",
        ),
    ]
    assert all(d.field.is_command for d in deltas)
