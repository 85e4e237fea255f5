"""Filesystem-backed codebase analyzer.

Collects facts from the project tree (root file names, manifests, pattern
directories, installed configuration) and hands them to the pure
classifiers in ``domain.analysis.services``. Only an invalid project root
is an error; every unreadable or malformed file degrades to "signal
absent".
"""

from __future__ import annotations

import json
import logging
import re
import time
import tomllib

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypeVar

import yaml

from stackscout.domain.analysis import rules, services
from stackscout.domain.analysis.entities import CodebaseAnalysis
from stackscout.domain.analysis.value_objects import (
    DetectedPattern,
    ExistingConfig,
    MonorepoInfo,
    MonorepoTool,
    SampledFile,
    SamplePurpose,
    WorkspacePackage,
)
from stackscout.infrastructure.constants import (
    CLAUDE_MD_FILENAME,
    CONFIG_DIR,
    ENV_FILES,
    SAMPLE_CONFIGS,
    SAMPLE_ENTRY_POINTS,
    SAMPLE_MANIFESTS,
    SKILL_FILENAME,
    SOURCE_EXTENSIONS,
)
from stackscout.infrastructure.filesystem.walker import (
    IgnoreRules,
    ListDir,
    scan_dir,
    walk_files,
)
from stackscout.infrastructure.storage.fingerprint import validate_project_dir
from stackscout.shared.constants import (
    MAX_FILE_SIZE_BYTES,
    MAX_PATTERN_PATHS,
    MAX_SAMPLE_FILE_BYTES,
    MAX_SAMPLE_LINES,
    MAX_SAMPLED_FILES,
    MAX_SAMPLES_PER_PATTERN,
    TRUNCATION_MARKER,
)
from stackscout.shared.exceptions import ManifestError
from stackscout.shared.types import Clock, FilePath
from stackscout.shared.utils import format_timestamp, utc_now

logger = logging.getLogger(__name__)

M = TypeVar("M")

_REQUIREMENT = re.compile(r"^([A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*([^;#]*)")
_PYTHON_DEV_EXTRAS = ("dev", "test")

# =============================================================================
# ANALYZER
# =============================================================================


@dataclass
class CodebaseAnalyzer:
    """Implements ProjectAnalyzer by reading manifests and walking the tree.

    Attributes:
        ignored_paths: Extra glob patterns merged with ``.stackscoutignore``.
        max_sampled_files: Cap on captured sample files.
        max_pattern_paths: Cap on paths recorded per detected pattern.
        list_dir: Directory listing used by every walk.
        clock: Source of ``analyzed_at``.
    """

    ignored_paths: tuple[str, ...] = ()
    max_sampled_files: int = MAX_SAMPLED_FILES
    max_pattern_paths: int = MAX_PATTERN_PATHS
    list_dir: ListDir = field(default=scan_dir, repr=False)
    clock: Clock = field(default=utc_now, repr=False)

    def analyze(self, project_root: str) -> CodebaseAnalysis:
        """Build a CodebaseAnalysis for the directory at *project_root*.

        Raises:
            InvalidProjectRootError: If *project_root* is empty, relative,
                or not a directory.
        """
        started = time.perf_counter()
        root = validate_project_dir(project_root)

        ignore = IgnoreRules.load(root, self.ignored_paths)
        root_files = self._root_files(root)

        package_json = _load_manifest(root / "package.json", _parse_json_object)
        js_deps = _string_map(package_json, "dependencies")
        js_dev_deps = _string_map(package_json, "devDependencies")
        py_deps, py_dev_deps = self._python_dependencies(root, root_files)

        js_names = set(js_deps) | set(js_dev_deps)
        python_names = set(py_deps) | set(py_dev_deps)
        manifest_texts = {
            name: text
            for name in rules.MANIFEST_TEXT_FRAMEWORKS
            if name in root_files
            and (text := _load_manifest(root / name, _parse_text)) is not None
        }

        project_type = services.detect_project_type(root_files, js_names)
        framework = services.detect_framework(js_names, python_names, manifest_texts)
        package_manager = services.detect_package_manager(root_files)
        language = services.detect_language(root_files, project_type)

        dependencies = services.build_dependencies({**js_deps, **py_deps})
        dev_dependencies = services.build_dependencies({**js_dev_deps, **py_dev_deps})
        all_names = [d.name for d in (*dependencies, *dev_dependencies)]

        patterns = self._detect_patterns(root, ignore)
        commands = services.detect_commands(
            _string_map(package_json, "scripts"),
            package_manager,
            project_type,
            set(all_names),
        )
        total_files, total_lines = self._count_sources(root, ignore)

        analysis = CodebaseAnalysis(
            project_root=project_root,
            project_type=project_type,
            framework=framework,
            language=language,
            package_manager=package_manager,
            dependencies=dependencies,
            dev_dependencies=dev_dependencies,
            detected_patterns=patterns,
            negative_constraints=services.build_negative_constraints(set(all_names)),
            suggested_agents=services.infer_agents(
                project_type,
                (*dependencies, *dev_dependencies),
                (p.type for p in patterns),
                root_files,
            ),
            suggested_skills=services.infer_skills(
                project_type, framework, language, all_names, root_files
            ),
            monorepo=_detect_monorepo(root, root_files, package_json),
            lint_command=commands.lint,
            format_command=commands.format,
            test_command=commands.test,
            dev_command=commands.dev,
            build_command=commands.build,
            has_env_file=any(name in root_files for name in ENV_FILES),
            existing_config=_detect_existing_config(root),
            sampled_files=self._sample_files(root, patterns, ignore),
            total_files=total_files,
            total_lines=total_lines,
            analyzed_at=format_timestamp(self.clock()),
            analysis_time_ms=int((time.perf_counter() - started) * 1000),
        )

        logger.info(
            "Analyzed %s: type=%s framework=%s, %d deps, %d patterns",
            project_root,
            analysis.project_type,
            analysis.framework,
            len(dependencies) + len(dev_dependencies),
            len(patterns),
        )
        return analysis

    # ------------------------------------------------------------------
    # Collection
    # ------------------------------------------------------------------

    def _root_files(self, root: Path) -> frozenset[str]:
        try:
            entries = self.list_dir(root)
            return frozenset(path.name for path, is_dir in entries if not is_dir)
        except OSError as e:
            logger.debug("Could not list %s: %s", root, e)
            return frozenset()

    def _python_dependencies(
        self,
        root: Path,
        root_files: frozenset[str],
    ) -> tuple[dict[str, str], dict[str, str]]:
        runtime: dict[str, str] = {}
        dev: dict[str, str] = {}

        if "requirements.txt" in root_files:
            parsed = _load_manifest(root / "requirements.txt", _parse_requirements)
            runtime.update(parsed or {})

        if "pyproject.toml" in root_files:
            pyproject = _load_manifest(root / "pyproject.toml", _parse_toml)
            if pyproject is not None:
                project_runtime, project_dev = _pyproject_dependencies(pyproject)
                runtime.update(project_runtime)
                dev.update(project_dev)

        return runtime, dev

    def _detect_patterns(
        self,
        root: Path,
        ignore: IgnoreRules,
    ) -> tuple[DetectedPattern, ...]:
        patterns: list[DetectedPattern] = []
        for rule in rules.PATTERN_RULES:
            paths: set[str] = set()
            for directory in rule.directories:
                if ignore.is_ignored(directory):
                    continue
                paths.update(self._files_under(root, root / directory, ignore))
            if not paths:
                continue
            patterns.append(
                DetectedPattern(
                    type=rule.type,
                    paths=tuple(FilePath(p) for p in sorted(paths))[
                        : self.max_pattern_paths
                    ],
                    confidence=rule.confidence,
                    description=rule.description,
                )
            )
        return tuple(patterns)

    def _files_under(
        self,
        root: Path,
        directory: Path,
        ignore: IgnoreRules,
    ) -> Iterator[str]:
        for path in walk_files(directory, list_dir=self.list_dir):
            relative = path.relative_to(root).as_posix()
            if not ignore.is_ignored(relative):
                yield relative

    def _count_sources(self, root: Path, ignore: IgnoreRules) -> tuple[int, int]:
        files = lines = 0
        for relative in self._files_under(root, root, ignore):
            path = root / relative
            if path.suffix not in SOURCE_EXTENSIONS:
                continue
            files += 1
            try:
                if path.stat().st_size > MAX_FILE_SIZE_BYTES:
                    continue
                content = path.read_bytes()
            except OSError as e:
                logger.debug("Skipping line count for %s: %s", relative, e)
                continue
            lines += content.count(b"\n")
            if content and not content.endswith(b"\n"):
                lines += 1
        return files, lines

    def _sample_files(
        self,
        root: Path,
        patterns: Iterable[DetectedPattern],
        ignore: IgnoreRules,
    ) -> tuple[SampledFile, ...]:
        sampler = _Sampler(root=root, limit=self.max_sampled_files, ignore=ignore)
        for name in SAMPLE_MANIFESTS:
            sampler.add(name, SamplePurpose.MANIFEST)
        for name in SAMPLE_CONFIGS:
            sampler.add(name, SamplePurpose.CONFIG)
        for pattern in patterns:
            for path in pattern.paths[:MAX_SAMPLES_PER_PATTERN]:
                sampler.add(path, SamplePurpose.PATTERN)
        for name in SAMPLE_ENTRY_POINTS:
            sampler.add(name, SamplePurpose.ENTRY_POINT)
        return tuple(sampler.samples)


# =============================================================================
# SAMPLING
# =============================================================================


@dataclass
class _Sampler:
    """Collects readable, size-bounded files up to a fixed count."""

    root: Path
    limit: int
    ignore: IgnoreRules
    samples: list[SampledFile] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set)

    def add(self, relative: str, purpose: SamplePurpose) -> None:
        if len(self.samples) >= self.limit or relative in self._seen:
            return
        if self.ignore.is_ignored(relative):
            return
        self._seen.add(relative)

        path = self.root / relative
        try:
            if not path.is_file() or path.stat().st_size > MAX_SAMPLE_FILE_BYTES:
                return
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping sample %s: %s", relative, e)
            return

        lines = content.split("\n")
        if len(lines) > MAX_SAMPLE_LINES:
            content = "\n".join(lines[:MAX_SAMPLE_LINES]) + "\n\n" + TRUNCATION_MARKER

        self.samples.append(
            SampledFile(path=FilePath(relative), content=content, purpose=purpose)
        )


# =============================================================================
# MANIFEST PARSING
# =============================================================================


def _load_manifest(path: Path, parse: Callable[[Path, str], M]) -> M | None:
    """Read and parse a manifest; absent or malformed files yield None."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return None
    try:
        return parse(path, text)
    except ManifestError as e:
        logger.debug("%s", e)
        return None


def _parse_text(_path: Path, text: str) -> str:
    return text


def _parse_json_object(path: Path, text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(path, str(e)) from e
    if not isinstance(data, dict):
        raise ManifestError(path, "expected a JSON object")
    return data


def _parse_toml(path: Path, text: str) -> dict[str, Any]:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(path, str(e)) from e


def _parse_yaml_object(path: Path, text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ManifestError(path, str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(path, "expected a YAML mapping")
    return data


def _parse_requirements(_path: Path, text: str) -> dict[str, str]:
    """Parse ``requirements.txt``; options and includes are skipped."""
    requirements: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "-")):
            continue
        parsed = _parse_requirement(line)
        if parsed is not None:
            requirements[parsed[0]] = parsed[1]
    return requirements


def _parse_requirement(spec: str) -> tuple[str, str] | None:
    match = _REQUIREMENT.match(spec.strip())
    if match is None:
        return None
    name, version = match.group(1).lower(), match.group(2).strip()
    return name, version or "*"


def _pyproject_dependencies(
    pyproject: Mapping[str, Any],
) -> tuple[dict[str, str], dict[str, str]]:
    """Runtime and dev dependencies from PEP 621 and Poetry tables."""
    runtime: dict[str, str] = {}
    dev: dict[str, str] = {}

    project = pyproject.get("project")
    if isinstance(project, dict):
        runtime.update(_pep508_map(project.get("dependencies")))
        extras = project.get("optional-dependencies")
        if isinstance(extras, dict):
            for extra in _PYTHON_DEV_EXTRAS:
                dev.update(_pep508_map(extras.get(extra)))

    tool = pyproject.get("tool")
    poetry = tool.get("poetry") if isinstance(tool, dict) else None
    if isinstance(poetry, dict):
        runtime.update(_poetry_map(poetry.get("dependencies")))
        dev.update(_poetry_map(poetry.get("dev-dependencies")))
        groups = poetry.get("group")
        if isinstance(groups, dict):
            for group in _PYTHON_DEV_EXTRAS:
                spec = groups.get(group)
                if isinstance(spec, dict):
                    dev.update(_poetry_map(spec.get("dependencies")))

    return runtime, dev


def _pep508_map(specs: object) -> dict[str, str]:
    if not isinstance(specs, list):
        return {}
    result: dict[str, str] = {}
    for spec in specs:
        parsed = _parse_requirement(str(spec))
        if parsed is not None:
            result[parsed[0]] = parsed[1]
    return result


def _poetry_map(table: object) -> dict[str, str]:
    if not isinstance(table, dict):
        return {}
    result: dict[str, str] = {}
    for name, spec in table.items():
        if name == "python":
            continue
        if isinstance(spec, dict):
            spec = spec.get("version", "*")
        result[str(name).lower()] = str(spec)
    return result


def _string_map(manifest: Mapping[str, Any] | None, key: str) -> dict[str, str]:
    if manifest is None:
        return {}
    table = manifest.get(key)
    if not isinstance(table, dict):
        return {}
    return {str(name): str(value) for name, value in table.items()}


# =============================================================================
# MONOREPO
# =============================================================================


def _detect_monorepo(
    root: Path,
    root_files: frozenset[str],
    package_json: Mapping[str, Any] | None,
) -> MonorepoInfo | None:
    """Detect workspace tooling and enumerate member packages."""
    globs: list[str]

    if "pnpm-workspace.yaml" in root_files:
        workspace = _load_manifest(root / "pnpm-workspace.yaml", _parse_yaml_object)
        globs = _string_list((workspace or {}).get("packages"))
        tool = MonorepoTool.PNPM
    elif "lerna.json" in root_files:
        lerna = _load_manifest(root / "lerna.json", _parse_json_object)
        globs = _string_list((lerna or {}).get("packages")) or ["packages/*"]
        tool = MonorepoTool.LERNA
    elif package_json is not None and "workspaces" in package_json:
        workspaces = package_json["workspaces"]
        if isinstance(workspaces, dict):
            workspaces = workspaces.get("packages")
        globs = _string_list(workspaces)
        tool = _workspace_tool(root_files)
    else:
        return None

    return MonorepoInfo(
        is_monorepo=True,
        tool=tool,
        packages=_expand_workspaces(root, globs),
    )


def _workspace_tool(root_files: frozenset[str]) -> MonorepoTool:
    if "turbo.json" in root_files:
        return MonorepoTool.TURBOREPO
    if "nx.json" in root_files:
        return MonorepoTool.NX
    if "yarn.lock" in root_files:
        return MonorepoTool.YARN
    if "bun.lockb" in root_files or "bun.lock" in root_files:
        return MonorepoTool.BUN
    return MonorepoTool.NPM


def _expand_workspaces(
    root: Path,
    globs: Iterable[str],
) -> tuple[WorkspacePackage, ...]:
    """Directories matched by workspace globs that contain a package.json."""
    packages: dict[str, WorkspacePackage] = {}
    for pattern in globs:
        pattern = pattern.strip("/")
        if not pattern or pattern.startswith("!") or ".." in pattern.split("/"):
            continue
        try:
            candidates = sorted(root.glob(pattern))
        except (ValueError, NotImplementedError):
            logger.debug("Skipping unsupported workspace glob %r", pattern)
            continue
        for candidate in candidates:
            manifest_path = candidate / "package.json"
            if not manifest_path.is_file():
                continue
            try:
                relative = candidate.relative_to(root).as_posix()
            except ValueError:
                logger.debug("Skipping workspace outside the root: %s", candidate)
                continue
            if relative in packages:
                continue
            manifest = _load_manifest(manifest_path, _parse_json_object) or {}
            name = manifest.get("name")
            packages[relative] = WorkspacePackage(
                name=name if isinstance(name, str) and name else candidate.name,
                path=FilePath(relative),
            )
    return tuple(packages.values())


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


# =============================================================================
# EXISTING CONFIGURATION
# =============================================================================


def _detect_existing_config(root: Path) -> ExistingConfig | None:
    """Agents, skills and hooks already installed under the config folder."""
    config_dir = root / CONFIG_DIR
    has_config_dir = config_dir.is_dir()
    has_claude_md = (root / CLAUDE_MD_FILENAME).is_file()
    if not has_config_dir and not has_claude_md:
        return None

    agents: list[str] = []
    skills: set[str] = set()
    hooks: list[str] = []
    if has_config_dir:
        agents = sorted(p.stem for p in (config_dir / "agents").glob("*.md"))
        skills_dir = config_dir / "skills"
        skills.update(p.stem for p in skills_dir.glob("*.md"))
        skills.update(p.parent.name for p in skills_dir.glob(f"*/{SKILL_FILENAME}"))
        hooks_dir = config_dir / "hooks"
        if hooks_dir.is_dir():
            hooks = sorted(p.name for p in hooks_dir.iterdir() if p.is_file())

    return ExistingConfig(
        has_config_dir=has_config_dir,
        has_claude_md=has_claude_md,
        agents=tuple(agents),
        skills=tuple(sorted(skills)),
        hooks=tuple(hooks),
    )
