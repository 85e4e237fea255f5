"""Rule-based proposals from evolve deltas.

Maps dependency changes to skill suggestions and new patterns to agent
suggestions via static tables; no AI involved.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from stackscout.domain.evolve.value_objects import (
    CLAUDE_MD,
    NONE_SENTINEL,
    DeltaField,
    EvolveDelta,
    EvolveProposal,
    ProposalType,
)

# =============================================================================
# TABLES
# =============================================================================

DEPENDENCY_TO_SKILL: MappingProxyType[str, str] = MappingProxyType(
    {
        "prisma": "prisma",
        "@prisma/client": "prisma",
        "drizzle-orm": "drizzle",
        "vitest": "vitest",
        "tailwindcss": "tailwind",
        "@tailwindcss/vite": "tailwind",
        "next": "nextjs",
        "react": "react",
        "vue": "vue",
        "svelte": "svelte",
        "express": "express",
        "fastify": "fastify",
        "@nestjs/core": "nestjs",
        "typescript": "typescript",
        "zod": "zod",
        "trpc": "trpc",
        "@trpc/server": "trpc",
        "stripe": "stripe",
        "next-auth": "auth",
        "@auth/core": "auth",
        "supabase": "supabase",
        "@supabase/supabase-js": "supabase",
    }
)

PATTERN_TO_AGENT: MappingProxyType[str, str] = MappingProxyType(
    {
        "api-routes": "backend-engineer",
        "tests": "testing-specialist",
        "components": "frontend-engineer",
        "middleware": "backend-engineer",
        "models": "backend-engineer",
    }
)


@dataclass(frozen=True)
class EvolveTables:
    """Lookup tables the proposer reads."""

    dependency_to_skill: Mapping[str, str] = field(
        default_factory=lambda: DEPENDENCY_TO_SKILL
    )
    pattern_to_agent: Mapping[str, str] = field(
        default_factory=lambda: PATTERN_TO_AGENT
    )


DEFAULT_EVOLVE_TABLES = EvolveTables()

_DEPENDENCY_FIELDS = frozenset({DeltaField.DEPENDENCIES, DeltaField.DEV_DEPENDENCIES})

# =============================================================================
# PROPOSER
# =============================================================================


def propose_changes(
    deltas: list[EvolveDelta],
    existing_agents: Collection[str],
    existing_skills: Collection[str],
    tables: EvolveTables = DEFAULT_EVOLVE_TABLES,
) -> list[EvolveProposal]:
    """Turn deltas into proposals, deduplicated on (type, name).

    Args:
        deltas: Output of ``diff_analyses``.
        existing_agents: Agent names currently installed.
        existing_skills: Skill names currently installed.
        tables: Dependency and pattern lookup tables.
    """
    proposals: list[EvolveProposal] = []

    for delta in deltas:
        if delta.field in _DEPENDENCY_FIELDS:
            proposals.extend(_dependency_proposals(delta, existing_skills, tables))

        if delta.field == DeltaField.DETECTED_PATTERNS and delta.after != NONE_SENTINEL:
            for pattern in delta.after.split(", "):
                agent = tables.pattern_to_agent.get(pattern)
                if agent is not None and agent not in existing_agents:
                    proposals.append(
                        EvolveProposal(
                            type=ProposalType.ADD_AGENT,
                            name=agent,
                            reason=f'New "{pattern}" pattern detected in codebase',
                        )
                    )

        if delta.field == DeltaField.FRAMEWORK:
            proposals.append(
                EvolveProposal(
                    type=ProposalType.UPDATE_CLAUDE_MD,
                    name=CLAUDE_MD,
                    reason=f"Framework changed from {delta.before} to {delta.after}",
                )
            )

        if delta.field.is_command:
            proposals.append(
                EvolveProposal(
                    type=ProposalType.UPDATE_CLAUDE_MD,
                    name=CLAUDE_MD,
                    reason=f"{delta.label} changed",
                )
            )

    return _dedupe(proposals)


def _dependency_proposals(
    delta: EvolveDelta,
    existing_skills: Collection[str],
    tables: EvolveTables,
) -> list[EvolveProposal]:
    proposals: list[EvolveProposal] = []

    if delta.after != NONE_SENTINEL:
        for dep in delta.after.split(", "):
            skill = tables.dependency_to_skill.get(dep)
            if skill is not None and skill not in existing_skills:
                proposals.append(
                    EvolveProposal(
                        type=ProposalType.ADD_SKILL,
                        name=skill,
                        reason=f'New dependency "{dep}" detected',
                    )
                )

    if delta.before != NONE_SENTINEL:
        for dep in delta.before.split(", "):
            skill = tables.dependency_to_skill.get(dep)
            if skill is not None and skill in existing_skills:
                proposals.append(
                    EvolveProposal(
                        type=ProposalType.REMOVE_SKILL,
                        name=skill,
                        reason=f'Dependency "{dep}" was removed',
                    )
                )

    return proposals


def _dedupe(proposals: list[EvolveProposal]) -> list[EvolveProposal]:
    """First occurrence of each (type, name) wins."""
    seen: set[tuple[ProposalType, str]] = set()
    unique: list[EvolveProposal] = []
    for proposal in proposals:
        key = (proposal.type, proposal.name)
        if key in seen:
            continue
        seen.add(key)
        unique.append(proposal)
    return unique
