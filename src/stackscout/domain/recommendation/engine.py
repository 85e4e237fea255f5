"""Recommendation engine: combines a goal and a codebase analysis.

Scores accumulate from four sources in a fixed order (goal preset,
keywords in the goal description, requirement flags, codebase signals).
Every source only adds to a score; none overwrites.
"""

from __future__ import annotations

import logging
import re

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.recommendation.reasons import project_specific_reason
from stackscout.domain.recommendation.tables import (
    DEFAULT_TABLES,
    RecommendationTables,
)
from stackscout.domain.recommendation.value_objects import (
    AgentScore,
    KeywordRule,
    ProjectGoal,
    Recommendations,
    SkillScore,
)
from stackscout.shared.constants import (
    CODEBASE_SIGNAL_BOOST,
    DEFAULT_AGENT_MIN_SCORE,
    DEFAULT_SKILL_MIN_SCORE,
    KEYWORD_AGENT_BOOST,
    KEYWORD_AGENT_SEED,
    KEYWORD_SKILL_BOOST,
    KEYWORD_SKILL_SEED,
    MAX_DEFAULT_AGENTS,
    MAX_DEFAULT_SKILLS,
    PRESET_PRIORITY_WEIGHT,
    REQUIREMENT_AGENT_BOOST,
    REQUIREMENT_AGENT_SEED,
    REQUIREMENT_SKILL_BOOST,
    REQUIREMENT_SKILL_SEED,
)

logger = logging.getLogger(__name__)

MENTIONED_IN_GOAL = "Mentioned in your goal"
RELEVANT_TO_STACK = "Relevant to your tech stack"
DETECTED_IN_CODEBASE = "Detected in your codebase"
ALREADY_IN_USE = "Already in use"

S = TypeVar("S", AgentScore, SkillScore)

# =============================================================================
# SCOREBOARD
# =============================================================================


@dataclass
class _Scoreboard(Generic[S]):
    """Insertion-ordered accumulator for one recommend call."""

    factory: Callable[[str, int, list[str]], S]
    entries: dict[str, S] = field(default_factory=dict)

    def seed(self, name: str, score: int, reason: str) -> None:
        self.entries[name] = self.factory(name, score, [reason])

    def add(
        self,
        name: str,
        *,
        seed: int,
        boost: int,
        reason: str,
        prepend: bool,
    ) -> None:
        """Boost an existing entry or seed a new one.

        Prepended reasons are deduplicated; appended ones are not, since
        each appending source contributes at most once per name.
        """
        existing = self.entries.get(name)
        if existing is None:
            self.seed(name, seed, reason)
            return
        existing.score += boost
        if not prepend:
            existing.reasons.append(reason)
        elif reason not in existing.reasons:
            existing.reasons.insert(0, reason)

    def ranked(self) -> list[S]:
        # sorted() is stable, so ties keep insertion (preset table) order.
        return sorted(self.entries.values(), key=lambda e: e.score, reverse=True)


# =============================================================================
# RECOMMEND
# =============================================================================


def recommend(
    goal: ProjectGoal,
    analysis: CodebaseAnalysis,
    tables: RecommendationTables = DEFAULT_TABLES,
) -> Recommendations:
    """Rank agents and skills for *goal* given *analysis*.

    Pure: all mutable state is local to this call, so identical inputs
    always yield identical output.
    """
    agents: _Scoreboard[AgentScore] = _Scoreboard(AgentScore)
    skills: _Scoreboard[SkillScore] = _Scoreboard(SkillScore)

    # 1. Goal-category preset.
    preset = tables.presets.get(goal.category)
    if preset is not None:
        for entry in preset.agents:
            agents.seed(
                entry.name, entry.priority * PRESET_PRIORITY_WEIGHT, entry.reason
            )
        for entry in preset.skills:
            skills.seed(
                entry.name, entry.priority * PRESET_PRIORITY_WEIGHT, entry.reason
            )

    # 2. Technology keywords in the description.
    for rule in extract_keywords(goal.description, tables.keywords):
        for name in rule.skills:
            skills.add(
                name,
                seed=KEYWORD_SKILL_SEED,
                boost=KEYWORD_SKILL_BOOST,
                reason=MENTIONED_IN_GOAL,
                prepend=True,
            )
        for name in rule.agents:
            agents.add(
                name,
                seed=KEYWORD_AGENT_SEED,
                boost=KEYWORD_AGENT_BOOST,
                reason=RELEVANT_TO_STACK,
                prepend=True,
            )

    # 3. Explicit requirement flags.
    for requirement in goal.requirements:
        boost = tables.requirement_boosts.get(requirement)
        if boost is None:
            continue
        for name in boost.agents:
            agents.add(
                name,
                seed=REQUIREMENT_AGENT_SEED,
                boost=REQUIREMENT_AGENT_BOOST,
                reason=boost.reason,
                prepend=True,
            )
        for name in boost.skills:
            skills.add(
                name,
                seed=REQUIREMENT_SKILL_SEED,
                boost=REQUIREMENT_SKILL_BOOST,
                reason=boost.reason,
                prepend=True,
            )

    # 4. Codebase-detected signals rank below explicit intent.
    for name in analysis.suggested_agents:
        agents.add(
            name,
            seed=CODEBASE_SIGNAL_BOOST,
            boost=CODEBASE_SIGNAL_BOOST,
            reason=DETECTED_IN_CODEBASE,
            prepend=False,
        )
    for name in analysis.suggested_skills:
        skills.add(
            name,
            seed=CODEBASE_SIGNAL_BOOST,
            boost=CODEBASE_SIGNAL_BOOST,
            reason=ALREADY_IN_USE,
            prepend=False,
        )

    ranked_agents = agents.ranked()
    ranked_skills = skills.ranked()

    default_agents = [
        a.name
        for a in ranked_agents
        if a.score >= DEFAULT_AGENT_MIN_SCORE
        and a.name not in tables.suppressed_defaults
    ][:MAX_DEFAULT_AGENTS]
    default_agents = apply_overlap_suppression(
        ranked_agents, default_agents, tables.overlap_groups
    )
    default_skills = [
        s.name for s in ranked_skills if s.score >= DEFAULT_SKILL_MIN_SCORE
    ][:MAX_DEFAULT_SKILLS]

    for agent in ranked_agents:
        specific = project_specific_reason(agent.name, analysis, goal)
        if specific is not None:
            agent.reasons[0] = specific

    logger.debug(
        "Recommended %d agents (%d default), %d skills (%d default) for %s",
        len(ranked_agents),
        len(default_agents),
        len(ranked_skills),
        len(default_skills),
        goal.category,
    )

    return Recommendations(
        agents=tuple(ranked_agents),
        skills=tuple(ranked_skills),
        default_agents=tuple(default_agents),
        default_skills=tuple(default_skills),
        agent_skill_links=tables.agent_skill_links,
    )


def extract_keywords(
    description: str,
    keywords: Iterable[KeywordRule],
) -> list[KeywordRule]:
    """Keyword rules whose keyword appears as a whole word, in table order."""
    return [
        rule
        for rule in keywords
        if re.search(rf"\b{re.escape(rule.keyword)}\b", description, re.IGNORECASE)
    ]


def apply_overlap_suppression(
    ranked_agents: Iterable[AgentScore],
    defaults: list[str],
    overlap_groups: Iterable[tuple[str, ...]],
) -> list[str]:
    """Keep only the highest-scored member of each overlap group.

    Ties go to the member listed first in the group.
    """
    scores = {a.name: a.score for a in ranked_agents}
    result = list(defaults)
    for group in overlap_groups:
        present = [name for name in group if name in result]
        if len(present) <= 1:
            continue
        present.sort(key=lambda name: scores.get(name, 0), reverse=True)
        for loser in present[1:]:
            result.remove(loser)
    return result


# =============================================================================
# ENGINE
# =============================================================================


@dataclass
class RecommendationEngine:
    """Holds a table set and scores goals against analyses."""

    tables: RecommendationTables = field(default_factory=lambda: DEFAULT_TABLES)

    def recommend(
        self,
        goal: ProjectGoal,
        analysis: CodebaseAnalysis,
    ) -> Recommendations:
        return recommend(goal, analysis, self.tables)
