"""Static scoring tables for the recommendation engine.

Bundled into ``RecommendationTables`` so callers (and tests) can pass an
alternate table set to ``recommend`` without touching module state.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from stackscout.domain.recommendation.presets import GOAL_PRESETS
from stackscout.domain.recommendation.value_objects import (
    GoalCategory,
    GoalPreset,
    KeywordRule,
    ProjectRequirement,
    RequirementBoost,
)

# =============================================================================
# TECHNOLOGY KEYWORDS
# =============================================================================

_FRONTEND = ("frontend-engineer",)
_BACKEND = ("backend-engineer",)
_DATABASE = ("database-specialist",)
_DEVOPS = ("devops-specialist",)
_TESTING = ("testing-specialist",)
_CFO = ("cfo",)
_SQL_SKILLS = ("prisma", "drizzle")

TECH_KEYWORDS: tuple[KeywordRule, ...] = (
    # Python ecosystem
    KeywordRule("fastapi", ("fastapi", "python"), ("backend-engineer", "api-designer")),
    KeywordRule("django", ("python",), _BACKEND),
    KeywordRule("flask", ("python",), _BACKEND),
    KeywordRule("python", ("python",), _BACKEND),
    # JavaScript / TypeScript ecosystem
    KeywordRule("react", ("react", "typescript"), _FRONTEND),
    KeywordRule("nextjs", ("nextjs", "react", "typescript"), _FRONTEND + _BACKEND),
    KeywordRule("next.js", ("nextjs", "react", "typescript"), _FRONTEND + _BACKEND),
    KeywordRule("vue", ("vue", "typescript"), _FRONTEND),
    KeywordRule("nuxt", ("vue", "typescript"), _FRONTEND),
    KeywordRule("express", ("express", "nodejs"), _BACKEND),
    KeywordRule("node", ("nodejs",), _BACKEND),
    KeywordRule("nodejs", ("nodejs",), _BACKEND),
    KeywordRule("typescript", ("typescript",)),
    # Databases
    KeywordRule("postgresql", _SQL_SKILLS, _DATABASE),
    KeywordRule("postgres", _SQL_SKILLS, _DATABASE),
    KeywordRule("mysql", _SQL_SKILLS, _DATABASE),
    KeywordRule("mongodb", (), _DATABASE),
    KeywordRule("supabase", ("supabase",), _DATABASE),
    KeywordRule("redis", (), _DATABASE),
    # ORMs
    KeywordRule("prisma", ("prisma",), _DATABASE),
    KeywordRule("drizzle", ("drizzle",), _DATABASE),
    # Cloud and DevOps
    KeywordRule("docker", ("docker",), _DEVOPS),
    KeywordRule("kubernetes", ("docker",), _DEVOPS),
    KeywordRule("aws", (), _DEVOPS),
    KeywordRule("gcp", (), _DEVOPS),
    KeywordRule("azure", (), _DEVOPS),
    # Testing
    KeywordRule("vitest", ("vitest",), _TESTING),
    KeywordRule("jest", (), _TESTING),
    KeywordRule("pytest", ("python",), _TESTING),
    # Styling
    KeywordRule("tailwind", ("tailwind",), _FRONTEND),
    KeywordRule("tailwindcss", ("tailwind",), _FRONTEND),
    # Additional frameworks
    KeywordRule("angular", ("angular", "typescript"), _FRONTEND),
    KeywordRule("svelte", ("svelte", "typescript"), _FRONTEND),
    KeywordRule("sveltekit", ("svelte", "typescript"), _FRONTEND),
    KeywordRule("nestjs", ("nestjs", "typescript"), _BACKEND),
    KeywordRule("nest", ("nestjs", "typescript"), _BACKEND),
    # Payments
    KeywordRule("stripe", ("stripe",), ("backend-engineer", "security-analyst")),
    # E2E testing
    KeywordRule("playwright", ("playwright",), _TESTING),
    KeywordRule("cypress", ("playwright",), _TESTING),
    # Finance and business
    KeywordRule("financial", ("financial-planning",), _CFO),
    KeywordRule("fundraising", ("fundraising", "financial-planning"), _CFO),
    KeywordRule("investor", ("fundraising",), _CFO),
    KeywordRule("pitch deck", ("fundraising",), ("cfo", "copywriter")),
    KeywordRule("revenue", ("financial-planning",), _CFO),
    KeywordRule("pricing", ("financial-planning",), _CFO),
    KeywordRule("budget", ("financial-planning",), _CFO),
    # API
    KeywordRule("graphql", ("graphql",), ("api-designer",)),
    KeywordRule("rest", (), ("api-designer",)),
    KeywordRule("api", (), ("api-designer",)),
    # MCP
    KeywordRule("mcp", ("mcp",)),
)

# =============================================================================
# REQUIREMENT BOOSTS
# =============================================================================

REQUIREMENT_BOOSTS: MappingProxyType[ProjectRequirement, RequirementBoost] = (
    MappingProxyType(
        {
            ProjectRequirement.AUTH: RequirementBoost(
                agents=("security-analyst", "backend-engineer"),
                skills=("nodejs", "typescript"),
                reason="Authentication requires security focus",
            ),
            ProjectRequirement.PAYMENTS: RequirementBoost(
                agents=("security-analyst", "backend-engineer", "api-designer"),
                skills=("typescript", "nodejs"),
                reason="Payment processing requires security and API design",
            ),
            ProjectRequirement.DATABASE: RequirementBoost(
                agents=("database-specialist", "backend-engineer"),
                skills=("prisma", "drizzle"),
                reason="Data storage requires database expertise",
            ),
            ProjectRequirement.REALTIME: RequirementBoost(
                agents=("backend-engineer", "frontend-engineer"),
                skills=("nodejs", "react"),
                reason="Real-time features span frontend and backend",
            ),
            ProjectRequirement.API: RequirementBoost(
                agents=("api-designer", "backend-engineer", "docs-writer"),
                skills=("typescript", "nodejs"),
                reason="API integrations require design and documentation",
            ),
        }
    )
)

# =============================================================================
# DEFAULT SELECTION
# =============================================================================

SUPPRESSED_FROM_DEFAULTS = frozenset(
    {
        "debugger",
        "docs-writer",
        "code-reviewer",
        "product-manager",
        "accessibility-specialist",
    }
)

# Within a group, at most one member survives in the defaults.
AGENT_OVERLAP_GROUPS: tuple[tuple[str, ...], ...] = (
    ("docs-writer", "copywriter"),
    ("code-reviewer", "testing-specialist"),
    ("architect", "tech-lead"),
)

AGENT_SKILL_LINKS: MappingProxyType[str, tuple[str, ...]] = MappingProxyType(
    {
        "testing-specialist": ("vitest", "playwright"),
        "frontend-engineer": (
            "react",
            "nextjs",
            "vue",
            "tailwind",
            "angular",
            "svelte",
        ),
        "backend-engineer": ("nodejs", "express", "nestjs", "python", "fastapi"),
        "database-specialist": ("prisma", "drizzle", "supabase"),
        "devops-specialist": ("docker",),
        "api-designer": ("graphql",),
        "security-analyst": ("stripe",),
        "mobile-specialist": ("react",),
        "cfo": ("financial-planning", "fundraising"),
    }
)

# =============================================================================
# TABLE BUNDLE
# =============================================================================


@dataclass(frozen=True)
class RecommendationTables:
    """Every static input the scoring pass reads."""

    presets: Mapping[GoalCategory, GoalPreset] = field(
        default_factory=lambda: GOAL_PRESETS
    )
    keywords: tuple[KeywordRule, ...] = TECH_KEYWORDS
    requirement_boosts: Mapping[ProjectRequirement, RequirementBoost] = field(
        default_factory=lambda: REQUIREMENT_BOOSTS
    )
    suppressed_defaults: frozenset[str] = SUPPRESSED_FROM_DEFAULTS
    overlap_groups: tuple[tuple[str, ...], ...] = AGENT_OVERLAP_GROUPS
    agent_skill_links: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: AGENT_SKILL_LINKS
    )


DEFAULT_TABLES = RecommendationTables()
