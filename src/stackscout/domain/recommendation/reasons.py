"""Project-specific reason sentences for recommended agents.

Applied after scoring; replaces an agent's first reason and never affects
score or ranking.
"""

from __future__ import annotations

from collections.abc import Callable

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.value_objects import PatternType
from stackscout.domain.recommendation.value_objects import GoalCategory, ProjectGoal

ReasonRule = Callable[[CodebaseAnalysis, ProjectGoal], str | None]


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def _runtime_dependency_names(analysis: CodebaseAnalysis) -> set[str]:
    return {d.name for d in analysis.dependencies}


# =============================================================================
# RULES
# =============================================================================


def _backend_engineer(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    utils = analysis.pattern_count(PatternType.UTILS)
    if utils > 0:
        return (
            f"Your project has {utils} utility modules; "
            "clean architecture keeps this maintainable"
        )
    if analysis.total_files > 20:
        return (
            f"{analysis.total_files} files detected; "
            "structured backend patterns keep complexity manageable"
        )
    return None


def _testing_specialist(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    tests = analysis.pattern(PatternType.TESTS)
    if tests is not None:
        found = _plural(len(tests.paths), "test file")
        return f"{found} found; helps expand coverage systematically"
    if analysis.test_command:
        return (
            f"Test runner detected ({analysis.test_command}); "
            "helps expand coverage systematically"
        )
    return "No tests found yet; helps build coverage from scratch"


def _frontend_engineer(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    components = analysis.pattern_count(PatternType.COMPONENTS)
    if components > 0:
        found = _plural(components, "component")
        return f"{found} detected; maintains consistent UI patterns"
    if _runtime_dependency_names(analysis) & {"react", "vue", "svelte"}:
        return "Frontend framework detected; ensures component best practices"
    return None


def _copywriter(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    if goal.category == GoalCategory.CLI_TOOL:
        return "CLI help text, error messages, and README need clear writing"
    if goal.category == GoalCategory.ECOMMERCE:
        return "Product descriptions, CTAs, and checkout copy drive conversions"
    return None


def _docs_writer(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    if (
        goal.category == GoalCategory.API_SERVICE
        or analysis.pattern(PatternType.API_ROUTES) is not None
    ):
        return "API documentation helps consumers integrate correctly"
    return None


def _security_analyst(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    if _runtime_dependency_names(analysis) & {"stripe", "@stripe/stripe-js"}:
        return "Payment integration detected; ensures secure transaction handling"
    return None


def _database_specialist(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    if _runtime_dependency_names(analysis) & {"prisma", "drizzle-orm"}:
        return "ORM detected; optimizes queries and data modeling"
    return None


def _api_designer(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    routes = analysis.pattern_count(PatternType.API_ROUTES)
    if routes > 0:
        found = _plural(routes, "API route")
        return f"{found} found; ensures consistent API design"
    return None


def _devops_specialist(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    signals = set(analysis.suggested_skills) | _runtime_dependency_names(analysis)
    if "docker" in signals:
        return "Container setup detected; ensures reliable deployments"
    return None


def _code_reviewer(analysis: CodebaseAnalysis, goal: ProjectGoal) -> str | None:
    if analysis.total_files > 30:
        return (
            f"{analysis.total_files} files; "
            "code review catches issues before they compound"
        )
    return None


PROJECT_REASON_RULES: dict[str, ReasonRule] = {
    "backend-engineer": _backend_engineer,
    "testing-specialist": _testing_specialist,
    "frontend-engineer": _frontend_engineer,
    "copywriter": _copywriter,
    "docs-writer": _docs_writer,
    "security-analyst": _security_analyst,
    "database-specialist": _database_specialist,
    "api-designer": _api_designer,
    "devops-specialist": _devops_specialist,
    "code-reviewer": _code_reviewer,
}


def project_specific_reason(
    agent_name: str,
    analysis: CodebaseAnalysis,
    goal: ProjectGoal,
) -> str | None:
    """Return a codebase-derived reason for *agent_name*, or None."""
    rule = PROJECT_REASON_RULES.get(agent_name)
    if rule is None:
        return None
    return rule(analysis, goal)
