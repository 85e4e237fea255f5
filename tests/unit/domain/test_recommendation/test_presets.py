"""Tests for goal presets, reasons and recommendation value objects."""

from __future__ import annotations

import pytest

from stackscout.domain.analysis.value_objects import DetectedPattern, PatternType
from stackscout.domain.recommendation.presets import GOAL_PRESETS
from stackscout.domain.recommendation.reasons import project_specific_reason
from stackscout.domain.recommendation.value_objects import (
    GoalCategory,
    PresetEntry,
    ProjectGoal,
)
from stackscout.shared.types import FilePath

# =============================================================================
# Presets
# =============================================================================


def test_every_category_has_a_preset() -> None:
    assert set(GOAL_PRESETS) == set(GoalCategory)


def test_preset_agents_are_unique_per_category() -> None:
    for preset in GOAL_PRESETS.values():
        names = [entry.name for entry in preset.agents]
        assert len(names) == len(set(names))


@pytest.mark.parametrize("priority", [0, 11])
def test_preset_entry_rejects_out_of_range_priority(priority: int) -> None:
    with pytest.raises(ValueError, match="priority"):
        PresetEntry("architect", priority, "System design")


def test_goal_rejects_out_of_range_confidence() -> None:
    with pytest.raises(ValueError, match="confidence"):
        ProjectGoal("x", GoalCategory.CUSTOM, confidence=1.5)


# =============================================================================
# Project-specific reasons
# =============================================================================


def _tests_pattern(count: int) -> DetectedPattern:
    return DetectedPattern(
        type=PatternType.TESTS,
        paths=tuple(FilePath(f"tests/test_{i}.py") for i in range(count)),
        confidence=1.0,
        description="Test suites",
    )


@pytest.fixture
def custom_goal() -> ProjectGoal:
    return ProjectGoal("Anything", GoalCategory.CUSTOM)


def test_testing_reason_singular(make_analysis, custom_goal: ProjectGoal) -> None:
    analysis = make_analysis(detected_patterns=(_tests_pattern(1),))
    assert project_specific_reason("testing-specialist", analysis, custom_goal) == (
        "1 test file found; helps expand coverage systematically"
    )


def test_testing_reason_plural(make_analysis, custom_goal: ProjectGoal) -> None:
    analysis = make_analysis(detected_patterns=(_tests_pattern(4),))
    reason = project_specific_reason("testing-specialist", analysis, custom_goal)
    assert reason is not None and reason.startswith("4 test files found")


def test_testing_reason_without_tests(make_analysis, custom_goal: ProjectGoal) -> None:
    reason = project_specific_reason("testing-specialist", make_analysis(), custom_goal)
    assert reason == "No tests found yet; helps build coverage from scratch"


def test_copywriter_reason_depends_on_goal(make_analysis) -> None:
    cli = ProjectGoal("A CLI", GoalCategory.CLI_TOOL)
    custom = ProjectGoal("Anything", GoalCategory.CUSTOM)

    assert project_specific_reason("copywriter", make_analysis(), cli) is not None
    assert project_specific_reason("copywriter", make_analysis(), custom) is None


def test_agent_without_rule_has_no_reason(
    make_analysis, custom_goal: ProjectGoal
) -> None:
    assert project_specific_reason("architect", make_analysis(), custom_goal) is None
