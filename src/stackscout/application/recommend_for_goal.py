"""Recommend For Goal use case."""

from __future__ import annotations

from dataclasses import dataclass, field

from stackscout.application.analyze_project import AnalyzeProject
from stackscout.application.dto import (
    AnalyzeProjectCommand,
    RecommendCommand,
    RecommendResult,
)
from stackscout.domain.recommendation.engine import RecommendationEngine

# =============================================================================
# USE CASE
# =============================================================================


@dataclass
class RecommendForGoal:
    """Analyze the project (through the cache) and rank agents and skills."""

    analyze_project: AnalyzeProject
    engine: RecommendationEngine = field(default_factory=RecommendationEngine)

    def execute(self, cmd: RecommendCommand) -> RecommendResult:
        analyzed = self.analyze_project.execute(
            AnalyzeProjectCommand(
                project_root=cmd.project_root,
                use_cache=cmd.use_cache,
            )
        )
        recommendations = self.engine.recommend(cmd.goal, analyzed.analysis)
        return RecommendResult(
            analysis=analyzed.analysis,
            recommendations=recommendations,
            from_cache=analyzed.from_cache,
        )
