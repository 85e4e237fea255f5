"""CodebaseAnalysis JSON serialization.

``project_root`` is the identity key of a record, not part of its body:
it is omitted on the way out and re-attached on the way in.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.value_objects import (
    Dependency,
    DependencyCategory,
    DetectedPattern,
    ExistingConfig,
    Framework,
    Language,
    MonorepoInfo,
    MonorepoTool,
    NegativeConstraint,
    PackageManager,
    PatternType,
    ProjectType,
    SampledFile,
    SamplePurpose,
    WorkspacePackage,
)
from stackscout.infrastructure.constants import SerializerField as F
from stackscout.shared.types import FilePath

E = TypeVar("E")

# =============================================================================
# SERIALIZE
# =============================================================================


def to_dict(analysis: CodebaseAnalysis) -> dict[str, object]:
    """Convert an analysis into its camelCase JSON body."""
    return {
        F.PROJECT_TYPE: analysis.project_type.value,
        F.FRAMEWORK: _value(analysis.framework),
        F.LANGUAGE: _value(analysis.language),
        F.PACKAGE_MANAGER: _value(analysis.package_manager),
        F.DEPENDENCIES: [_dependency(d) for d in analysis.dependencies],
        F.DEV_DEPENDENCIES: [_dependency(d) for d in analysis.dev_dependencies],
        F.DETECTED_PATTERNS: [_pattern(p) for p in analysis.detected_patterns],
        F.NEGATIVE_CONSTRAINTS: [
            {
                F.TECHNOLOGY: c.technology,
                F.ALTERNATIVE: c.alternative,
                F.RULE: c.rule,
            }
            for c in analysis.negative_constraints
        ],
        F.SUGGESTED_AGENTS: list(analysis.suggested_agents),
        F.SUGGESTED_SKILLS: list(analysis.suggested_skills),
        F.MONOREPO: _monorepo(analysis.monorepo),
        F.LINT_COMMAND: analysis.lint_command,
        F.FORMAT_COMMAND: analysis.format_command,
        F.TEST_COMMAND: analysis.test_command,
        F.DEV_COMMAND: analysis.dev_command,
        F.BUILD_COMMAND: analysis.build_command,
        F.HAS_ENV_FILE: analysis.has_env_file,
        F.EXISTING_CONFIG: _existing_config(analysis.existing_config),
        F.SAMPLED_FILES: [
            {F.PATH: str(s.path), F.CONTENT: s.content, F.PURPOSE: s.purpose.value}
            for s in analysis.sampled_files
        ],
        F.TOTAL_FILES: analysis.total_files,
        F.TOTAL_LINES: analysis.total_lines,
        F.ANALYZED_AT: analysis.analyzed_at,
        F.ANALYSIS_TIME_MS: analysis.analysis_time_ms,
    }


def _value(member: Framework | Language | PackageManager | None) -> str | None:
    return member.value if member is not None else None


def _dependency(dep: Dependency) -> dict[str, str]:
    return {F.NAME: dep.name, F.VERSION: dep.version, F.CATEGORY: dep.category.value}


def _pattern(pattern: DetectedPattern) -> dict[str, object]:
    return {
        F.TYPE: pattern.type.value,
        F.PATHS: [str(p) for p in pattern.paths],
        F.CONFIDENCE: pattern.confidence,
        F.DESCRIPTION: pattern.description,
    }


def _monorepo(info: MonorepoInfo | None) -> dict[str, object] | None:
    if info is None:
        return None
    return {
        F.IS_MONOREPO: info.is_monorepo,
        F.TOOL: info.tool.value,
        F.PACKAGES: [{F.NAME: p.name, F.PATH: str(p.path)} for p in info.packages],
    }


def _existing_config(config: ExistingConfig | None) -> dict[str, object] | None:
    if config is None:
        return None
    return {
        F.HAS_CONFIG_DIR: config.has_config_dir,
        F.HAS_CLAUDE_MD: config.has_claude_md,
        F.AGENTS: list(config.agents),
        F.SKILLS: list(config.skills),
        F.HOOKS: list(config.hooks),
    }


# =============================================================================
# DESERIALIZE
# =============================================================================


def from_dict(data: dict[str, Any], project_root: str) -> CodebaseAnalysis:
    """Rebuild an analysis from its JSON body.

    Raises:
        ValueError: If a field is missing, mistyped, or outside its vocabulary.
    """
    if not isinstance(data, dict):
        msg = f"analysis body must be an object, got {type(data).__name__}"
        raise ValueError(msg)
    try:
        return CodebaseAnalysis(
            project_root=project_root,
            project_type=ProjectType(data.get(F.PROJECT_TYPE, ProjectType.UNKNOWN)),
            framework=_optional(Framework, data.get(F.FRAMEWORK)),
            language=_optional(Language, data.get(F.LANGUAGE)),
            package_manager=_optional(PackageManager, data.get(F.PACKAGE_MANAGER)),
            dependencies=_dependencies(data.get(F.DEPENDENCIES, [])),
            dev_dependencies=_dependencies(data.get(F.DEV_DEPENDENCIES, [])),
            detected_patterns=tuple(
                DetectedPattern(
                    type=PatternType(p[F.TYPE]),
                    paths=tuple(FilePath(str(x)) for x in p[F.PATHS]),
                    confidence=float(p[F.CONFIDENCE]),
                    description=str(p[F.DESCRIPTION]),
                )
                for p in data.get(F.DETECTED_PATTERNS, [])
            ),
            negative_constraints=tuple(
                NegativeConstraint(
                    technology=str(c[F.TECHNOLOGY]),
                    alternative=str(c[F.ALTERNATIVE]),
                    rule=str(c[F.RULE]),
                )
                for c in data.get(F.NEGATIVE_CONSTRAINTS, [])
            ),
            suggested_agents=tuple(str(a) for a in data.get(F.SUGGESTED_AGENTS, [])),
            suggested_skills=tuple(str(s) for s in data.get(F.SUGGESTED_SKILLS, [])),
            monorepo=_load_monorepo(data.get(F.MONOREPO)),
            lint_command=data.get(F.LINT_COMMAND),
            format_command=data.get(F.FORMAT_COMMAND),
            test_command=data.get(F.TEST_COMMAND),
            dev_command=data.get(F.DEV_COMMAND),
            build_command=data.get(F.BUILD_COMMAND),
            has_env_file=bool(data.get(F.HAS_ENV_FILE, False)),
            existing_config=_load_existing_config(data.get(F.EXISTING_CONFIG)),
            sampled_files=tuple(
                SampledFile(
                    path=FilePath(str(s[F.PATH])),
                    content=str(s[F.CONTENT]),
                    purpose=SamplePurpose(s[F.PURPOSE]),
                )
                for s in data.get(F.SAMPLED_FILES, [])
            ),
            total_files=int(data.get(F.TOTAL_FILES, 0)),
            total_lines=int(data.get(F.TOTAL_LINES, 0)),
            analyzed_at=str(data.get(F.ANALYZED_AT, "")),
            analysis_time_ms=int(data.get(F.ANALYSIS_TIME_MS, 0)),
        )
    except (KeyError, TypeError, AttributeError) as e:
        msg = f"malformed analysis body: {e!r}"
        raise ValueError(msg) from e


def _optional(enum_type: Callable[[str], E], raw: object) -> E | None:
    return enum_type(str(raw)) if raw is not None else None


def _dependencies(items: list[dict[str, Any]]) -> tuple[Dependency, ...]:
    return tuple(
        Dependency(
            name=str(d[F.NAME]),
            version=str(d[F.VERSION]),
            category=DependencyCategory(d.get(F.CATEGORY, DependencyCategory.OTHER)),
        )
        for d in items
    )


def _load_monorepo(raw: dict[str, Any] | None) -> MonorepoInfo | None:
    if raw is None:
        return None
    return MonorepoInfo(
        is_monorepo=bool(raw[F.IS_MONOREPO]),
        tool=MonorepoTool(raw[F.TOOL]),
        packages=tuple(
            WorkspacePackage(name=str(p[F.NAME]), path=FilePath(str(p[F.PATH])))
            for p in raw.get(F.PACKAGES, [])
        ),
    )


def _load_existing_config(raw: dict[str, Any] | None) -> ExistingConfig | None:
    if raw is None:
        return None
    return ExistingConfig(
        has_config_dir=bool(raw.get(F.HAS_CONFIG_DIR, False)),
        has_claude_md=bool(raw.get(F.HAS_CLAUDE_MD, False)),
        agents=tuple(str(a) for a in raw.get(F.AGENTS, [])),
        skills=tuple(str(s) for s in raw.get(F.SKILLS, [])),
        hooks=tuple(str(h) for h in raw.get(F.HOOKS, [])),
    )
