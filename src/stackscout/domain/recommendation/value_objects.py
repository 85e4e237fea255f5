"""Value objects for the Recommendation bounded context."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum

# =============================================================================
# GOAL
# =============================================================================


class GoalCategory(StrEnum):
    """Closed set of goal categories, each backed by a preset."""

    SAAS_DASHBOARD = "saas-dashboard"
    ECOMMERCE = "ecommerce"
    CONTENT_PLATFORM = "content-platform"
    API_SERVICE = "api-service"
    MOBILE_APP = "mobile-app"
    CLI_TOOL = "cli-tool"
    DATA_PIPELINE = "data-pipeline"
    AUTH_SERVICE = "auth-service"
    BUSINESS_PLAN = "business-plan"
    MARKETING_CAMPAIGN = "marketing-campaign"
    CONTENT_CREATION = "content-creation"
    RESEARCH_ANALYSIS = "research-analysis"
    PROJECT_DOCS = "project-docs"
    CUSTOM = "custom"


class ProjectRequirement(StrEnum):
    """Structured requirement flags selected alongside a goal."""

    AUTH = "auth"
    PAYMENTS = "payments"
    DATABASE = "database"
    REALTIME = "realtime"
    API = "api"


@dataclass(frozen=True)
class ProjectGoal:
    """What the user wants to build."""

    description: str
    category: GoalCategory
    requirements: tuple[ProjectRequirement, ...] = ()
    confidence: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be in [0.0, 1.0], got {self.confidence}"
            raise ValueError(msg)


# =============================================================================
# PRESETS
# =============================================================================


@dataclass(frozen=True)
class PresetEntry:
    """A preset suggestion; contributes ``priority * 10`` to its score."""

    name: str
    priority: int
    reason: str

    def __post_init__(self) -> None:
        if not 1 <= self.priority <= 10:
            msg = f"priority must be in [1, 10], got {self.priority}"
            raise ValueError(msg)


@dataclass(frozen=True)
class GoalPreset:
    """Recommended agents and skills for one goal category."""

    agents: tuple[PresetEntry, ...]
    skills: tuple[PresetEntry, ...] = ()


@dataclass(frozen=True)
class KeywordRule:
    """A technology keyword and the skills/agents it implies."""

    keyword: str
    skills: tuple[str, ...] = ()
    agents: tuple[str, ...] = ()


@dataclass(frozen=True)
class RequirementBoost:
    """Agents and skills boosted by a requirement flag."""

    agents: tuple[str, ...]
    skills: tuple[str, ...]
    reason: str


# =============================================================================
# SCORES
# =============================================================================


@dataclass
class AgentScore:
    """Accumulated score for one agent. Mutated only within one recommend call."""

    name: str
    score: int
    reasons: list[str] = field(default_factory=list[str])


@dataclass
class SkillScore:
    """Accumulated score for one skill."""

    name: str
    score: int
    reasons: list[str] = field(default_factory=list[str])


@dataclass(frozen=True)
class Recommendations:
    """Ranked agents and skills plus the pre-selected defaults."""

    agents: tuple[AgentScore, ...]
    skills: tuple[SkillScore, ...]
    default_agents: tuple[str, ...]
    default_skills: tuple[str, ...]
    agent_skill_links: Mapping[str, tuple[str, ...]]

    def agent(self, name: str) -> AgentScore | None:
        return next((a for a in self.agents if a.name == name), None)

    def skill(self, name: str) -> SkillScore | None:
        return next((s for s in self.skills if s.name == name), None)
