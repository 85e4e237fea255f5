"""Analyze Project use case."""

from __future__ import annotations

import logging

from dataclasses import dataclass

from stackscout.application.dto import AnalyzeProjectCommand, AnalyzeProjectResult
from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.repositories import AnalysisRepository, ProjectAnalyzer

logger = logging.getLogger(__name__)

# =============================================================================
# USE CASE
# =============================================================================


@dataclass
class AnalyzeProject:
    """Cache-through analysis: return a fresh cached profile or build one."""

    analyzer: ProjectAnalyzer
    repository: AnalysisRepository

    def execute(self, cmd: AnalyzeProjectCommand) -> AnalyzeProjectResult:
        """Execute the analysis workflow.

        Cache writes are best-effort: a failed write is logged and the
        freshly built analysis is still returned.

        Args:
            cmd: Project root plus cache and snapshot switches.

        Returns:
            The analysis and whether it came from the cache.

        Raises:
            InvalidProjectRootError: If the project root is invalid.
        """
        if cmd.use_cache:
            cached = self.repository.get_analysis(cmd.project_root)
            if cached is not None:
                logger.info("Using cached analysis for %s", cmd.project_root)
                self._record_snapshot(cmd, cached)
                return AnalyzeProjectResult(analysis=cached, from_cache=True)

        analysis = self.analyzer.analyze(cmd.project_root)

        if cmd.use_cache:
            try:
                self.repository.set_analysis(cmd.project_root, analysis)
            except OSError as e:
                logger.warning(
                    "Could not cache analysis for %s: %s", cmd.project_root, e
                )

        self._record_snapshot(cmd, analysis)
        return AnalyzeProjectResult(analysis=analysis, from_cache=False)

    def _record_snapshot(
        self,
        cmd: AnalyzeProjectCommand,
        analysis: CodebaseAnalysis,
    ) -> None:
        if not cmd.record_snapshot:
            return
        try:
            self.repository.set_snapshot(cmd.project_root, analysis)
        except OSError as e:
            logger.warning(
                "Could not record snapshot for %s: %s", cmd.project_root, e
            )
