"""Repository protocols for the Codebase Analysis bounded context."""

from __future__ import annotations

from typing import Protocol

from stackscout.domain.analysis.entities import CodebaseAnalysis

# =============================================================================
# PROTOCOLS
# =============================================================================


class AnalysisRepository(Protocol):
    """Persistence interface for cached analyses and evolve baselines."""

    def get_analysis(self, project_root: str) -> CodebaseAnalysis | None:
        """Load the cached analysis for the project's current fingerprint.

        Args:
            project_root: Absolute path to the project.

        Returns:
            The cached analysis, or None on any miss (absent, corrupt,
            version mismatch, expired).

        Raises:
            InvalidProjectRootError: If *project_root* is empty or relative.
        """
        ...

    def set_analysis(self, project_root: str, analysis: CodebaseAnalysis) -> None:
        """Persist an analysis under the project's current fingerprint.

        Raises:
            OSError: If the cache directory is not writable.
        """
        ...

    def get_snapshot(self, project_root: str) -> CodebaseAnalysis | None:
        """Load the baseline analysis recorded for evolve comparisons."""
        ...

    def set_snapshot(self, project_root: str, analysis: CodebaseAnalysis) -> None:
        """Record *analysis* as the evolve baseline for the project."""
        ...


class ProjectAnalyzer(Protocol):
    """Interface for turning a project directory into a CodebaseAnalysis."""

    def analyze(self, project_root: str) -> CodebaseAnalysis:
        """Analyze the project at *project_root*.

        Raises:
            InvalidProjectRootError: If *project_root* is empty, relative,
                or not a directory.
        """
        ...
