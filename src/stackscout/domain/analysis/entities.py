"""Entities for the Codebase Analysis bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field

from stackscout.domain.analysis.value_objects import (
    Dependency,
    DetectedPattern,
    ExistingConfig,
    Framework,
    Language,
    MonorepoInfo,
    NegativeConstraint,
    PackageManager,
    PatternType,
    ProjectType,
    SampledFile,
)

# =============================================================================
# CODEBASE ANALYSIS
# =============================================================================


@dataclass(frozen=True)
class CodebaseAnalysis:
    """Immutable profile of a project at one point in time.

    Produced by the analyzer, cached by fingerprint, and superseded (never
    mutated) by the next analysis run. ``project_root`` is the identity key
    and is not part of the serialized body.
    """

    project_root: str
    project_type: ProjectType = ProjectType.UNKNOWN
    framework: Framework | None = None
    language: Language | None = None
    package_manager: PackageManager | None = None
    dependencies: tuple[Dependency, ...] = ()
    dev_dependencies: tuple[Dependency, ...] = ()
    detected_patterns: tuple[DetectedPattern, ...] = ()
    negative_constraints: tuple[NegativeConstraint, ...] = ()
    suggested_agents: tuple[str, ...] = ()
    suggested_skills: tuple[str, ...] = ()
    monorepo: MonorepoInfo | None = None
    lint_command: str | None = None
    format_command: str | None = None
    test_command: str | None = None
    dev_command: str | None = None
    build_command: str | None = None
    has_env_file: bool = False
    existing_config: ExistingConfig | None = None
    sampled_files: tuple[SampledFile, ...] = field(default=(), repr=False)
    total_files: int = 0
    total_lines: int = 0
    analyzed_at: str = ""
    analysis_time_ms: int = 0

    def dependency_names(self) -> set[str]:
        """Names of runtime and dev dependencies combined."""
        return {d.name for d in self.dependencies} | {
            d.name for d in self.dev_dependencies
        }

    def has_dependency(self, name: str) -> bool:
        return name in self.dependency_names()

    def pattern(self, pattern_type: PatternType) -> DetectedPattern | None:
        for detected in self.detected_patterns:
            if detected.type == pattern_type:
                return detected
        return None

    def pattern_count(self, pattern_type: PatternType) -> int:
        """Number of files backing a pattern, 0 if not detected."""
        detected = self.pattern(pattern_type)
        return len(detected.paths) if detected is not None else 0
