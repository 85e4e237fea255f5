"""Pure classifiers for the Codebase Analysis bounded context.

Each function takes already-collected facts (root file names, dependency
names, manifest text) and applies the static tables in ``rules``. None of
them touch the filesystem.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping, Sequence

from stackscout.domain.analysis import rules
from stackscout.domain.analysis.value_objects import (
    Dependency,
    DependencyCategory,
    Framework,
    Language,
    NegativeConstraint,
    PackageManager,
    PatternType,
    ProjectCommands,
    ProjectType,
)

# =============================================================================
# CLASSIFICATION
# =============================================================================


def detect_project_type(
    root_files: Collection[str],
    js_dependency_names: Collection[str],
) -> ProjectType:
    """First match over config markers, manifest dependencies, then manifests."""
    for marker in rules.PROJECT_CONFIG_MARKERS:
        if any(name in root_files for name in marker.files):
            return marker.value

    for rule in rules.PROJECT_TYPE_BY_DEPENDENCY:
        if rule.matches(js_dependency_names):
            return rule.value

    for marker in rules.LANGUAGE_MANIFEST_MARKERS:
        if any(name in root_files for name in marker.files):
            return marker.value

    if any(name.endswith(rules.DOTNET_SUFFIXES) for name in root_files):
        return ProjectType.CSHARP

    return ProjectType.UNKNOWN


def detect_framework(
    js_dependency_names: Collection[str],
    python_dependency_names: Collection[str],
    manifest_texts: Mapping[str, str],
) -> Framework | None:
    for rule in rules.JS_FRAMEWORKS:
        if rule.matches(js_dependency_names):
            return rule.value

    for rule in rules.PYTHON_FRAMEWORKS:
        if rule.matches(python_dependency_names):
            return rule.value

    for manifest, framework_rules in rules.MANIFEST_TEXT_FRAMEWORKS.items():
        text = manifest_texts.get(manifest)
        if text is None:
            continue
        for rule in framework_rules:
            if any(name in text for name in rule.names):
                return rule.value

    return None


def detect_package_manager(root_files: Collection[str]) -> PackageManager | None:
    """Lockfiles first, then the default manager for whichever manifest exists."""
    priority: Sequence[tuple[tuple[str, ...], PackageManager]] = (
        (("bun.lockb", "bun.lock"), PackageManager.BUN),
        (("pnpm-lock.yaml",), PackageManager.PNPM),
        (("yarn.lock",), PackageManager.YARN),
        (("package-lock.json", "package.json"), PackageManager.NPM),
        (("poetry.lock",), PackageManager.POETRY),
        (("uv.lock",), PackageManager.UV),
        (("Pipfile.lock", "Pipfile"), PackageManager.PIPENV),
        (("requirements.txt", "pyproject.toml", "setup.py"), PackageManager.PIP),
        (("go.mod",), PackageManager.GO),
        (("Cargo.toml",), PackageManager.CARGO),
        (("composer.json",), PackageManager.COMPOSER),
        (("Gemfile",), PackageManager.BUNDLER),
    )
    for files, manager in priority:
        if any(name in root_files for name in files):
            return manager
    return None


def detect_language(
    root_files: Collection[str],
    project_type: ProjectType,
) -> Language | None:
    if "tsconfig.json" in root_files:
        return Language.TYPESCRIPT
    if "package.json" in root_files:
        return Language.JAVASCRIPT
    return rules.LANGUAGE_BY_PROJECT_TYPE.get(project_type)


def categorize_dependency(name: str) -> DependencyCategory:
    for rule in rules.CATEGORY_RULES:
        if rule.matches(name):
            return rule.category
    return DependencyCategory.OTHER


def build_dependencies(declared: Mapping[str, str]) -> tuple[Dependency, ...]:
    """Attach categories to ``name -> version`` pairs, preserving order."""
    return tuple(
        Dependency(name=name, version=version, category=categorize_dependency(name))
        for name, version in declared.items()
    )


# =============================================================================
# NEGATIVE CONSTRAINTS
# =============================================================================


def build_negative_constraints(
    dependency_names: Collection[str],
) -> tuple[NegativeConstraint, ...]:
    """Emit "Use A, NOT B" for every present A whose competitor B is absent."""
    constraints: list[NegativeConstraint] = []
    for group in rules.COMPETING_TECHNOLOGIES:
        for chosen in group:
            if chosen.dependency not in dependency_names:
                continue
            for other in group:
                if other is chosen or other.dependency in dependency_names:
                    continue
                constraints.append(
                    NegativeConstraint.between(chosen.display, other.display)
                )
    return tuple(constraints)


# =============================================================================
# AGENT / SKILL INFERENCE
# =============================================================================


def infer_agents(
    project_type: ProjectType,
    dependencies: Iterable[Dependency],
    pattern_types: Iterable[PatternType],
    root_files: Collection[str],
) -> tuple[str, ...]:
    """Goal-independent agent suggestions, baseline agents first."""
    agents: list[str] = list(rules.BASELINE_AGENTS)

    if project_type in rules.FRONTEND_PROJECT_TYPES:
        agents.append("frontend-engineer")
    if project_type in rules.BACKEND_PROJECT_TYPES:
        agents.append("backend-engineer")

    for pattern_type in pattern_types:
        agent = rules.AGENTS_BY_PATTERN.get(pattern_type)
        if agent is not None:
            agents.append(agent)

    for dependency in dependencies:
        agent = rules.AGENTS_BY_CATEGORY.get(dependency.category)
        if agent is not None:
            agents.append(agent)

    for marker, agent in rules.AGENTS_BY_MARKER.items():
        if marker in root_files:
            agents.append(agent)

    return _unique(agents)


def infer_skills(
    project_type: ProjectType,
    framework: Framework | None,
    language: Language | None,
    dependency_names: Iterable[str],
    root_files: Collection[str],
) -> tuple[str, ...]:
    skills: list[str] = []

    if framework is not None:
        skills.append(framework.value)
    if language is not None and language in rules.SKILLS_BY_LANGUAGE:
        skills.append(rules.SKILLS_BY_LANGUAGE[language])
    if project_type in rules.SKILL_BY_PROJECT_TYPE:
        skills.append(rules.SKILL_BY_PROJECT_TYPE[project_type])

    for name in dependency_names:
        skill = rules.SKILLS_BY_DEPENDENCY.get(name)
        if skill is None:
            skill = next(
                (
                    mapped
                    for prefix, mapped in rules.SKILL_DEPENDENCY_PREFIXES.items()
                    if name.startswith(prefix)
                ),
                None,
            )
        if skill is not None:
            skills.append(skill)

    for marker, skill in rules.SKILLS_BY_MARKER.items():
        if marker in root_files:
            skills.append(skill)

    return _unique(skills)


# =============================================================================
# COMMANDS
# =============================================================================


def detect_commands(
    scripts: Mapping[str, str],
    package_manager: PackageManager | None,
    project_type: ProjectType,
    dependency_names: Collection[str],
) -> ProjectCommands:
    """Derive lint/format/test/dev/build commands.

    ``package.json`` scripts win; toolchain defaults fill the gaps for
    Python, Go and Rust projects.
    """
    commands: dict[str, str | None] = dict.fromkeys(
        ("lint", "format", "test", "dev", "build")
    )

    runner = _js_runner(package_manager)
    for script in commands:
        if script not in scripts:
            continue
        if script == "test" and runner != PackageManager.BUN:
            commands[script] = f"{runner} test"
        else:
            commands[script] = f"{runner} run {script}"

    for script, default in _toolchain_defaults(project_type, dependency_names).items():
        if commands[script] is None:
            commands[script] = default

    return ProjectCommands(**commands)


_NATIVE_JS_RUNNERS = frozenset(
    {PackageManager.YARN, PackageManager.PNPM, PackageManager.BUN}
)


def _js_runner(package_manager: PackageManager | None) -> PackageManager:
    if package_manager in _NATIVE_JS_RUNNERS:
        return package_manager
    return PackageManager.NPM


def _toolchain_defaults(
    project_type: ProjectType,
    dependency_names: Collection[str],
) -> dict[str, str]:
    if project_type == ProjectType.PYTHON:
        defaults: dict[str, str] = {}
        if "pytest" in dependency_names:
            defaults["test"] = "pytest"
        if "ruff" in dependency_names:
            defaults["lint"] = "ruff check ."
            defaults["format"] = "ruff format ."
        elif "black" in dependency_names:
            defaults["format"] = "black ."
        if "flake8" in dependency_names:
            defaults.setdefault("lint", "flake8")
        return defaults
    if project_type == ProjectType.GO:
        return {
            "test": "go test ./...",
            "build": "go build ./...",
            "format": "go fmt ./...",
            "lint": "go vet ./...",
        }
    if project_type == ProjectType.RUST:
        return {
            "test": "cargo test",
            "build": "cargo build",
            "dev": "cargo run",
            "lint": "cargo clippy",
            "format": "cargo fmt",
        }
    return {}


# =============================================================================
# HELPERS
# =============================================================================


def _unique(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))
