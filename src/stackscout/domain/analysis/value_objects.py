"""Value objects for the Codebase Analysis bounded context."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from stackscout.shared.types import FilePath

# =============================================================================
# CLASSIFICATION VOCABULARIES
# =============================================================================


class ProjectType(StrEnum):
    """Coarse project classification."""

    NEXTJS = "nextjs"
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"
    SVELTE = "svelte"
    NODE = "node"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    CSHARP = "csharp"
    PHP = "php"
    RUBY = "ruby"
    UNKNOWN = "unknown"


class Framework(StrEnum):
    """Primary application framework."""

    NEXTJS = "nextjs"
    NUXTJS = "nuxtjs"
    VUE = "vue"
    ANGULAR = "angular"
    SVELTE = "svelte"
    EXPRESS = "express"
    FASTIFY = "fastify"
    NESTJS = "nestjs"
    REACT = "react"
    DJANGO = "django"
    FASTAPI = "fastapi"
    FLASK = "flask"
    GIN = "gin"
    FIBER = "fiber"
    ACTIX = "actix"
    ROCKET = "rocket"
    SPRING = "spring"
    LARAVEL = "laravel"
    RAILS = "rails"


class Language(StrEnum):
    """Primary implementation language."""

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    JAVA = "java"
    CSHARP = "csharp"
    PHP = "php"
    RUBY = "ruby"


class PackageManager(StrEnum):
    """Dependency manager inferred from lockfiles and manifests."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    PIP = "pip"
    POETRY = "poetry"
    UV = "uv"
    PIPENV = "pipenv"
    GO = "go"
    CARGO = "cargo"
    COMPOSER = "composer"
    BUNDLER = "bundler"


class DependencyCategory(StrEnum):
    """Role a dependency plays in the project."""

    FRAMEWORK = "framework"
    UI = "ui"
    DATABASE = "database"
    ORM = "orm"
    AUTH = "auth"
    PAYMENTS = "payments"
    TESTING = "testing"
    BUILD = "build"
    OTHER = "other"


class PatternType(StrEnum):
    """Conventional project structures recognized by directory name."""

    API_ROUTES = "api-routes"
    SERVER_ACTIONS = "server-actions"
    COMPONENTS = "components"
    SERVICES = "services"
    MODELS = "models"
    CONTROLLERS = "controllers"
    MIDDLEWARE = "middleware"
    HOOKS = "hooks"
    UTILS = "utils"
    TESTS = "tests"


class MonorepoTool(StrEnum):
    """Workspace tooling that declared the monorepo."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    LERNA = "lerna"
    TURBOREPO = "turborepo"
    NX = "nx"


class SamplePurpose(StrEnum):
    """Why a file was included in the sample."""

    MANIFEST = "manifest"
    CONFIG = "config"
    PATTERN = "pattern"
    ENTRY_POINT = "entry-point"


# =============================================================================
# VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class Dependency:
    """A declared dependency with its inferred category."""

    name: str
    version: str
    category: DependencyCategory = DependencyCategory.OTHER


@dataclass(frozen=True)
class DetectedPattern:
    """A structural signal found in the project tree."""

    type: PatternType
    paths: tuple[FilePath, ...]
    confidence: float
    description: str

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            msg = f"confidence must be in [0.0, 1.0], got {self.confidence}"
            raise ValueError(msg)


@dataclass(frozen=True)
class NegativeConstraint:
    """A "use X, not Y" rule derived from competing technologies."""

    technology: str
    alternative: str
    rule: str

    @classmethod
    def between(cls, technology: str, alternative: str) -> NegativeConstraint:
        return cls(
            technology=technology,
            alternative=alternative,
            rule=f"Use {technology}, NOT {alternative}",
        )


@dataclass(frozen=True)
class WorkspacePackage:
    """A member package of a monorepo."""

    name: str
    path: FilePath


@dataclass(frozen=True)
class MonorepoInfo:
    """Workspace layout of a monorepo."""

    is_monorepo: bool
    tool: MonorepoTool
    packages: tuple[WorkspacePackage, ...] = ()


@dataclass(frozen=True)
class SampledFile:
    """A representative file captured for downstream consumers."""

    path: FilePath
    content: str
    purpose: SamplePurpose


@dataclass(frozen=True)
class ExistingConfig:
    """Agent configuration already installed in the project."""

    has_config_dir: bool = False
    has_claude_md: bool = False
    agents: tuple[str, ...] = field(default_factory=tuple)
    skills: tuple[str, ...] = field(default_factory=tuple)
    hooks: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ProjectCommands:
    """Developer commands detected from scripts and toolchains."""

    lint: str | None = None
    format: str | None = None
    test: str | None = None
    dev: str | None = None
    build: str | None = None
