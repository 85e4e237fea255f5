"""Command-line entry point.

Subcommands:

- ``analyze``: profile a project (through the cache)
- ``recommend``: rank agents and skills for a stated goal
- ``evolve``: diff the project against its recorded baseline
- ``cache-stats`` / ``cache-clear``: inspect or empty the cache directory

Results are printed to stdout as JSON; logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pathlib import Path

from stackscout.application.analyze_project import AnalyzeProject
from stackscout.application.dto import (
    AnalyzeProjectCommand,
    EvolveCommand,
    RecommendCommand,
)
from stackscout.application.evolve_configuration import EvolveConfiguration
from stackscout.application.recommend_for_goal import RecommendForGoal
from stackscout.domain.evolve.value_objects import EvolveStatus
from stackscout.domain.recommendation.value_objects import (
    GoalCategory,
    ProjectGoal,
    ProjectRequirement,
)
from stackscout.infrastructure.analysis.codebase_analyzer import CodebaseAnalyzer
from stackscout.infrastructure.storage.cache_store import FileCacheStore
from stackscout.interfaces import presenters
from stackscout.interfaces.env_utils import resolve_cache_dir
from stackscout.interfaces.toml_config import StackScoutConfig, load_stackscout_config
from stackscout.shared.exceptions import StackScoutError

logger = logging.getLogger(__name__)

# =============================================================================
# PARSER
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackscout",
        description="Analyze a codebase and recommend agents and skills.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Profile a project")
    _add_project_argument(analyze)
    analyze.add_argument(
        "--no-cache", action="store_true", help="Bypass the analysis cache"
    )
    analyze.add_argument(
        "--snapshot",
        action="store_true",
        help="Record this analysis as the evolve baseline",
    )

    recommend = subparsers.add_parser("recommend", help="Recommend for a goal")
    _add_project_argument(recommend)
    recommend.add_argument("--goal", required=True, help="What you are building")
    recommend.add_argument(
        "--category",
        choices=[c.value for c in GoalCategory],
        default=GoalCategory.CUSTOM.value,
        help="Goal category (default: custom)",
    )
    recommend.add_argument(
        "--require",
        action="append",
        choices=[r.value for r in ProjectRequirement],
        default=[],
        help="Explicit requirement; may be repeated",
    )
    recommend.add_argument(
        "--no-cache", action="store_true", help="Bypass the analysis cache"
    )

    evolve = subparsers.add_parser("evolve", help="Detect changes since baseline")
    _add_project_argument(evolve)
    evolve.add_argument(
        "--commit",
        action="store_true",
        help="Record the fresh analysis as the new baseline",
    )
    evolve.add_argument("--agents", help="Comma-separated installed agents")
    evolve.add_argument("--skills", help="Comma-separated installed skills")

    stats = subparsers.add_parser("cache-stats", help="Show cache statistics")
    _add_project_argument(stats)
    clear = subparsers.add_parser("cache-clear", help="Remove every cache record")
    _add_project_argument(clear)

    return parser


def _add_project_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "project",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )


# =============================================================================
# COMMAND HANDLERS
# =============================================================================


def cmd_analyze(
    args: argparse.Namespace,
    config: StackScoutConfig,
    store: FileCacheStore,
) -> dict[str, object]:
    use_case = AnalyzeProject(analyzer=_build_analyzer(config), repository=store)
    result = use_case.execute(
        AnalyzeProjectCommand(
            project_root=args.project_root,
            use_cache=config.use_cache and not args.no_cache,
            record_snapshot=args.snapshot,
        )
    )
    return presenters.present_analysis(result)


def cmd_recommend(
    args: argparse.Namespace,
    config: StackScoutConfig,
    store: FileCacheStore,
) -> dict[str, object]:
    goal = ProjectGoal(
        description=args.goal,
        category=GoalCategory(args.category),
        requirements=tuple(ProjectRequirement(r) for r in args.require),
    )
    use_case = RecommendForGoal(
        analyze_project=AnalyzeProject(
            analyzer=_build_analyzer(config), repository=store
        )
    )
    result = use_case.execute(
        RecommendCommand(
            project_root=args.project_root,
            goal=goal,
            use_cache=config.use_cache and not args.no_cache,
        )
    )
    return presenters.present_recommend(result)


def cmd_evolve(
    args: argparse.Namespace,
    config: StackScoutConfig,
    store: FileCacheStore,
) -> dict[str, object]:
    use_case = EvolveConfiguration(
        analyzer=_build_analyzer(config), repository=store
    )
    result = use_case.execute(
        EvolveCommand(
            project_root=args.project_root,
            installed_agents=_split_names(args.agents),
            installed_skills=_split_names(args.skills),
        )
    )

    committed = False
    if args.commit and result.status != EvolveStatus.UP_TO_DATE:
        use_case.commit(result)
        committed = True
    return presenters.present_evolve(result, committed)


def cmd_cache_stats(
    _args: argparse.Namespace,
    _config: StackScoutConfig,
    store: FileCacheStore,
) -> dict[str, object]:
    return {"cacheDir": str(store.cache_dir), **presenters.present_stats(store.stats())}


def cmd_cache_clear(
    _args: argparse.Namespace,
    _config: StackScoutConfig,
    store: FileCacheStore,
) -> dict[str, object]:
    return {"cacheDir": str(store.cache_dir), "removed": store.clear()}


_HANDLERS = {
    "analyze": cmd_analyze,
    "recommend": cmd_recommend,
    "evolve": cmd_evolve,
    "cache-stats": cmd_cache_stats,
    "cache-clear": cmd_cache_clear,
}


def _build_analyzer(config: StackScoutConfig) -> CodebaseAnalyzer:
    return CodebaseAnalyzer(
        ignored_paths=tuple(config.ignored_paths),
        max_sampled_files=config.max_sampled_files,
        max_pattern_paths=config.max_pattern_paths,
    )


def _split_names(raw: str | None) -> tuple[str, ...] | None:
    if raw is None:
        return None
    return tuple(name.strip() for name in raw.split(",") if name.strip())


# =============================================================================
# ENTRY POINT
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, wire dependencies and run one subcommand."""
    args = build_parser().parse_args(argv)
    project_root = Path(args.project).resolve()
    args.project_root = str(project_root)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_stackscout_config(project_root)
        if not args.verbose:
            logging.getLogger().setLevel(config.log_level)

        store = FileCacheStore(cache_dir=resolve_cache_dir(config))
        payload = _HANDLERS[args.command](args, config, store)
    except (StackScoutError, OSError) as e:
        logger.error("%s", e)
        return 1

    json.dump(payload, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
