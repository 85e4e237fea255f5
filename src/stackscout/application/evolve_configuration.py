"""Evolve Configuration use case."""

from __future__ import annotations

import logging

from dataclasses import dataclass, field

from stackscout.application.dto import EvolveCommand, EvolveResult
from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.repositories import AnalysisRepository, ProjectAnalyzer
from stackscout.domain.evolve.differ import diff_analyses
from stackscout.domain.evolve.proposer import (
    DEFAULT_EVOLVE_TABLES,
    EvolveTables,
    propose_changes,
)
from stackscout.domain.evolve.value_objects import EvolveStatus
from stackscout.domain.recommendation.engine import RecommendationEngine
from stackscout.domain.recommendation.value_objects import GoalCategory, ProjectGoal

logger = logging.getLogger(__name__)

EVOLVE_GOAL = ProjectGoal(
    description="Evolve existing configuration",
    category=GoalCategory.CUSTOM,
)

# =============================================================================
# USE CASE
# =============================================================================


@dataclass
class EvolveConfiguration:
    """Diff a fresh analysis against the recorded baseline and propose updates.

    ``execute`` never writes; ``commit`` records the fresh analysis as the
    new baseline once the caller has acted on the result.
    """

    analyzer: ProjectAnalyzer
    repository: AnalysisRepository
    engine: RecommendationEngine = field(default_factory=RecommendationEngine)
    tables: EvolveTables = field(default_factory=lambda: DEFAULT_EVOLVE_TABLES)

    def execute(self, cmd: EvolveCommand) -> EvolveResult:
        """Execute the evolve workflow.

        Args:
            cmd: Project root and, optionally, the installed agents/skills.

        Returns:
            ``no-baseline`` when nothing was recorded before,
            ``up-to-date`` when the diff is empty, else the deltas,
            proposals and today's recommendations.
        """
        baseline = self._baseline(cmd.project_root)
        fresh = self.analyzer.analyze(cmd.project_root)

        if baseline is None:
            logger.info("No baseline recorded for %s", cmd.project_root)
            return EvolveResult(status=EvolveStatus.NO_BASELINE, fresh=fresh)

        deltas = diff_analyses(baseline, fresh)
        if not deltas:
            return EvolveResult(status=EvolveStatus.UP_TO_DATE, fresh=fresh)

        installed = fresh.existing_config
        agents = cmd.installed_agents
        if agents is None:
            agents = installed.agents if installed is not None else ()
        skills = cmd.installed_skills
        if skills is None:
            skills = installed.skills if installed is not None else ()

        proposals = propose_changes(deltas, agents, skills, self.tables)
        logger.info(
            "Detected %d changes, %d proposals for %s",
            len(deltas),
            len(proposals),
            cmd.project_root,
        )

        return EvolveResult(
            status=EvolveStatus.CHANGES_DETECTED,
            fresh=fresh,
            deltas=deltas,
            proposals=proposals,
            recommendations=self.engine.recommend(EVOLVE_GOAL, fresh),
        )

    def commit(self, result: EvolveResult) -> None:
        """Record *result*'s fresh analysis as the new baseline.

        Raises:
            OSError: If the snapshot cannot be written.
        """
        self.repository.set_snapshot(result.fresh.project_root, result.fresh)

    def _baseline(self, project_root: str) -> CodebaseAnalysis | None:
        snapshot = self.repository.get_snapshot(project_root)
        if snapshot is not None:
            return snapshot
        return self.repository.get_analysis(project_root)
