"""JSON-ready views of use-case results for the CLI."""

from __future__ import annotations

from collections.abc import Iterable

from stackscout.application.dto import (
    AnalyzeProjectResult,
    EvolveResult,
    RecommendResult,
)
from stackscout.domain.cache.value_objects import CacheStats
from stackscout.domain.recommendation.value_objects import (
    AgentScore,
    Recommendations,
    SkillScore,
)
from stackscout.infrastructure.constants import SerializerField
from stackscout.infrastructure.storage import serializer


def present_analysis(result: AnalyzeProjectResult) -> dict[str, object]:
    body = serializer.to_dict(result.analysis)
    # Sample contents are for downstream generators, not the terminal.
    body.pop(SerializerField.SAMPLED_FILES, None)
    return {
        "projectRoot": result.analysis.project_root,
        "fromCache": result.from_cache,
        **body,
    }


def present_recommendations(recommendations: Recommendations) -> dict[str, object]:
    return {
        "defaultAgents": list(recommendations.default_agents),
        "defaultSkills": list(recommendations.default_skills),
        "agents": _scores(recommendations.agents),
        "skills": _scores(recommendations.skills),
        "agentSkillLinks": {
            agent: list(skills)
            for agent, skills in recommendations.agent_skill_links.items()
        },
    }


def present_recommend(result: RecommendResult) -> dict[str, object]:
    return {
        "projectRoot": result.analysis.project_root,
        "fromCache": result.from_cache,
        **present_recommendations(result.recommendations),
    }


def present_evolve(result: EvolveResult, committed: bool) -> dict[str, object]:
    payload: dict[str, object] = {
        "status": result.status.value,
        "committed": committed,
        "deltas": [
            {
                "field": d.field.value,
                "label": d.label,
                "before": d.before,
                "after": d.after,
            }
            for d in result.deltas
        ],
        "proposals": [
            {"type": p.type.value, "name": p.name, "reason": p.reason}
            for p in result.proposals
        ],
    }
    if result.recommendations is not None:
        payload["recommendedAgents"] = list(result.recommendations.default_agents)
        payload["recommendedSkills"] = list(result.recommendations.default_skills)
    return payload


def present_stats(stats: CacheStats) -> dict[str, int]:
    return {
        "analysisCount": stats.analysis_count,
        "generationCount": stats.generation_count,
        "snapshotCount": stats.snapshot_count,
        "totalSize": stats.total_size,
    }


def _scores(scores: Iterable[AgentScore | SkillScore]) -> list[dict[str, object]]:
    return [
        {"name": s.name, "score": s.score, "reasons": list(s.reasons)} for s in scores
    ]
