"""Application-layer command and result DTOs."""

from __future__ import annotations

from dataclasses import dataclass, field

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.evolve.value_objects import (
    EvolveDelta,
    EvolveProposal,
    EvolveStatus,
)
from stackscout.domain.recommendation.value_objects import (
    ProjectGoal,
    Recommendations,
)

# =============================================================================
# ANALYZE PROJECT
# =============================================================================


@dataclass(frozen=True)
class AnalyzeProjectCommand:
    """Command to analyze a project, reading and writing the cache."""

    project_root: str
    use_cache: bool = True
    record_snapshot: bool = False


@dataclass(frozen=True)
class AnalyzeProjectResult:
    """Result of a project analysis."""

    analysis: CodebaseAnalysis
    from_cache: bool


# =============================================================================
# RECOMMEND FOR GOAL
# =============================================================================


@dataclass(frozen=True)
class RecommendCommand:
    """Command to recommend agents and skills for a goal."""

    project_root: str
    goal: ProjectGoal
    use_cache: bool = True


@dataclass(frozen=True)
class RecommendResult:
    """Result of a recommendation run."""

    analysis: CodebaseAnalysis
    recommendations: Recommendations
    from_cache: bool


# =============================================================================
# EVOLVE CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class EvolveCommand:
    """Command to compare a project against its recorded baseline.

    ``installed_agents`` / ``installed_skills`` default to what the fresh
    analysis finds in the project's configuration folder.
    """

    project_root: str
    installed_agents: tuple[str, ...] | None = None
    installed_skills: tuple[str, ...] | None = None


@dataclass(frozen=True)
class EvolveResult:
    """Outcome of an evolve run."""

    status: EvolveStatus
    fresh: CodebaseAnalysis
    deltas: list[EvolveDelta] = field(default_factory=list)
    proposals: list[EvolveProposal] = field(default_factory=list)
    recommendations: Recommendations | None = None
