"""Tests for RecommendForGoal use case."""

from __future__ import annotations

from unittest.mock import MagicMock

from stackscout.application.dto import (
    AnalyzeProjectCommand,
    AnalyzeProjectResult,
    RecommendCommand,
)
from stackscout.application.recommend_for_goal import RecommendForGoal
from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.recommendation.value_objects import GoalCategory, ProjectGoal


def test_recommends_against_cached_analysis(
    nextjs_analysis: CodebaseAnalysis,
) -> None:
    analyze_project = MagicMock()
    analyze_project.execute.return_value = AnalyzeProjectResult(
        analysis=nextjs_analysis, from_cache=True
    )
    use_case = RecommendForGoal(analyze_project=analyze_project)
    goal = ProjectGoal("Internal metrics dashboard", GoalCategory.SAAS_DASHBOARD)

    result = use_case.execute(
        RecommendCommand(project_root="/projects/shop", goal=goal, use_cache=False)
    )

    analyze_project.execute.assert_called_once_with(
        AnalyzeProjectCommand(project_root="/projects/shop", use_cache=False)
    )
    assert result.from_cache
    assert result.analysis is nextjs_analysis
    assert result.recommendations.default_agents[0] == "frontend-engineer"


def test_uses_injected_engine(nextjs_analysis: CodebaseAnalysis) -> None:
    analyze_project = MagicMock()
    analyze_project.execute.return_value = AnalyzeProjectResult(
        analysis=nextjs_analysis, from_cache=False
    )
    engine = MagicMock()
    use_case = RecommendForGoal(analyze_project=analyze_project, engine=engine)
    goal = ProjectGoal("Anything", GoalCategory.CUSTOM)

    command = RecommendCommand(project_root="/projects/shop", goal=goal)
    result = use_case.execute(command)

    engine.recommend.assert_called_once_with(goal, nextjs_analysis)
    assert result.recommendations is engine.recommend.return_value
