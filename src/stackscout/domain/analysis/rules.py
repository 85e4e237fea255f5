"""Static detection tables for codebase analysis.

All tables are immutable data. Classifiers in ``services`` walk them in
declaration order, so earlier entries win.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from types import MappingProxyType
from typing import Generic, TypeVar

from stackscout.domain.analysis.value_objects import (
    DependencyCategory,
    Framework,
    Language,
    PatternType,
    ProjectType,
)

T = TypeVar("T")

# =============================================================================
# RECORD TYPES
# =============================================================================


@dataclass(frozen=True)
class MarkerRule:
    """Any of ``files`` present at the project root implies ``value``."""

    files: tuple[str, ...]
    value: ProjectType


@dataclass(frozen=True)
class DependencyRule(Generic[T]):
    """Any of ``names`` among the dependencies implies ``value``."""

    names: tuple[str, ...]
    value: T

    def matches(self, dependency_names: Collection[str]) -> bool:
        return any(name in dependency_names for name in self.names)


@dataclass(frozen=True)
class CategoryRule:
    """Exact names or name substrings that map to a dependency category."""

    category: DependencyCategory
    exact: frozenset[str] = frozenset()
    substrings: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        return name in self.exact or any(s in name for s in self.substrings)


@dataclass(frozen=True)
class PatternRule:
    """Conventional directories that signal a structural pattern."""

    type: PatternType
    directories: tuple[str, ...]
    confidence: float
    description: str


@dataclass(frozen=True)
class Competitor:
    """A dependency name and its display name in constraint rules."""

    dependency: str
    display: str


# =============================================================================
# PROJECT TYPE
# =============================================================================

PROJECT_CONFIG_MARKERS: tuple[MarkerRule, ...] = (
    MarkerRule(
        ("next.config.js", "next.config.mjs", "next.config.ts"),
        ProjectType.NEXTJS,
    ),
    MarkerRule(("angular.json",), ProjectType.ANGULAR),
    MarkerRule(("svelte.config.js", "svelte.config.ts"), ProjectType.SVELTE),
    MarkerRule(("nuxt.config.js", "nuxt.config.ts"), ProjectType.VUE),
)

SERVER_DEPS: tuple[str, ...] = (
    "express",
    "fastify",
    "@nestjs/core",
    "koa",
    "hapi",
    "@hapi/hapi",
    "restify",
)

CLI_DEPS: tuple[str, ...] = (
    "commander",
    "yargs",
    "oclif",
    "@oclif/core",
    "ink",
    "meow",
    "cac",
    "citty",
)

PROJECT_TYPE_BY_DEPENDENCY: tuple[DependencyRule[ProjectType], ...] = (
    DependencyRule(("next",), ProjectType.NEXTJS),
    DependencyRule(("react",), ProjectType.REACT),
    DependencyRule(("vue",), ProjectType.VUE),
    DependencyRule(("@angular/core",), ProjectType.ANGULAR),
    DependencyRule(("svelte",), ProjectType.SVELTE),
    DependencyRule(SERVER_DEPS + CLI_DEPS, ProjectType.NODE),
)

LANGUAGE_MANIFEST_MARKERS: tuple[MarkerRule, ...] = (
    MarkerRule(("package.json",), ProjectType.NODE),
    MarkerRule(
        ("requirements.txt", "pyproject.toml", "setup.py", "Pipfile"),
        ProjectType.PYTHON,
    ),
    MarkerRule(("go.mod",), ProjectType.GO),
    MarkerRule(("Cargo.toml",), ProjectType.RUST),
    MarkerRule(("pom.xml", "build.gradle", "build.gradle.kts"), ProjectType.JAVA),
    MarkerRule(("composer.json",), ProjectType.PHP),
    MarkerRule(("Gemfile",), ProjectType.RUBY),
)

DOTNET_SUFFIXES: tuple[str, ...] = (".csproj", ".sln")

# =============================================================================
# FRAMEWORK
# =============================================================================

FrameworkRule = DependencyRule[Framework]

JS_FRAMEWORKS: tuple[FrameworkRule, ...] = (
    DependencyRule(("next",), Framework.NEXTJS),
    DependencyRule(("nuxt", "@nuxt/core"), Framework.NUXTJS),
    DependencyRule(("vue",), Framework.VUE),
    DependencyRule(("@angular/core",), Framework.ANGULAR),
    DependencyRule(("svelte",), Framework.SVELTE),
    DependencyRule(("express",), Framework.EXPRESS),
    DependencyRule(("fastify",), Framework.FASTIFY),
    DependencyRule(("@nestjs/core",), Framework.NESTJS),
    DependencyRule(("react",), Framework.REACT),
)

PYTHON_FRAMEWORKS: tuple[FrameworkRule, ...] = (
    DependencyRule(("django",), Framework.DJANGO),
    DependencyRule(("fastapi",), Framework.FASTAPI),
    DependencyRule(("flask",), Framework.FLASK),
)

# Matched as substrings of the raw manifest text.
_SPRING = (DependencyRule(("spring-boot",), Framework.SPRING),)

MANIFEST_TEXT_FRAMEWORKS: MappingProxyType[str, tuple[FrameworkRule, ...]] = (
    MappingProxyType(
        {
            "go.mod": (
                DependencyRule(("github.com/gin-gonic/gin",), Framework.GIN),
                DependencyRule(("github.com/gofiber/fiber",), Framework.FIBER),
            ),
            "Cargo.toml": (
                DependencyRule(("actix-web",), Framework.ACTIX),
                DependencyRule(("rocket",), Framework.ROCKET),
            ),
            "pom.xml": _SPRING,
            "build.gradle": _SPRING,
            "build.gradle.kts": _SPRING,
            "composer.json": (
                DependencyRule(("laravel/framework",), Framework.LARAVEL),
            ),
            "Gemfile": (DependencyRule(("rails",), Framework.RAILS),),
        }
    )
)

# =============================================================================
# LANGUAGE
# =============================================================================

LANGUAGE_BY_PROJECT_TYPE: MappingProxyType[ProjectType, Language] = MappingProxyType(
    {
        ProjectType.PYTHON: Language.PYTHON,
        ProjectType.GO: Language.GO,
        ProjectType.RUST: Language.RUST,
        ProjectType.JAVA: Language.JAVA,
        ProjectType.CSHARP: Language.CSHARP,
        ProjectType.PHP: Language.PHP,
        ProjectType.RUBY: Language.RUBY,
    }
)

# =============================================================================
# DEPENDENCY CATEGORIES
# =============================================================================

CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        DependencyCategory.FRAMEWORK,
        exact=frozenset(
            {
                "react",
                "vue",
                "@angular/core",
                "svelte",
                "next",
                "django",
                "fastapi",
                "flask",
            }
        ),
    ),
    CategoryRule(
        DependencyCategory.UI,
        exact=frozenset({"tailwindcss", "@shadcn/ui", "styled-components"}),
    ),
    CategoryRule(
        DependencyCategory.DATABASE,
        substrings=("postgres", "mysql", "mongodb", "redis", "psycopg"),
    ),
    CategoryRule(
        DependencyCategory.ORM,
        exact=frozenset(
            {
                "prisma",
                "@prisma/client",
                "drizzle-orm",
                "typeorm",
                "sequelize",
                "sqlalchemy",
            }
        ),
    ),
    CategoryRule(
        DependencyCategory.AUTH,
        substrings=("next-auth", "@clerk/nextjs", "@supabase/auth"),
    ),
    CategoryRule(DependencyCategory.PAYMENTS, substrings=("stripe", "paypal")),
    CategoryRule(
        DependencyCategory.TESTING,
        exact=frozenset(
            {"vitest", "jest", "playwright", "@playwright/test", "cypress", "pytest"}
        ),
    ),
    CategoryRule(
        DependencyCategory.BUILD,
        exact=frozenset({"vite", "webpack", "esbuild", "turbo"}),
    ),
)

# =============================================================================
# PATTERNS
# =============================================================================

PATTERN_RULES: tuple[PatternRule, ...] = (
    PatternRule(
        PatternType.API_ROUTES,
        ("app/api", "src/app/api", "pages/api", "src/pages/api"),
        1.0,
        "API route handlers",
    ),
    PatternRule(
        PatternType.SERVER_ACTIONS,
        ("app/actions", "src/actions", "actions"),
        0.8,
        "Server actions",
    ),
    PatternRule(
        PatternType.COMPONENTS,
        ("components", "src/components", "app/components"),
        1.0,
        "UI components",
    ),
    PatternRule(
        PatternType.SERVICES,
        ("services", "src/services"),
        0.9,
        "Service layer",
    ),
    PatternRule(PatternType.MODELS, ("models", "src/models"), 0.9, "Data models"),
    PatternRule(
        PatternType.CONTROLLERS,
        ("controllers", "src/controllers"),
        0.9,
        "Request controllers",
    ),
    PatternRule(
        PatternType.MIDDLEWARE,
        ("middleware", "src/middleware"),
        0.8,
        "Middleware",
    ),
    PatternRule(PatternType.HOOKS, ("hooks", "src/hooks"), 0.8, "Custom hooks"),
    PatternRule(
        PatternType.UTILS,
        ("utils", "src/utils", "lib", "src/lib"),
        0.7,
        "Utility modules",
    ),
    PatternRule(
        PatternType.TESTS,
        ("tests", "test", "__tests__", "src/__tests__", "spec"),
        1.0,
        "Test suites",
    ),
)

# =============================================================================
# NEGATIVE CONSTRAINTS
# =============================================================================

COMPETING_TECHNOLOGIES: tuple[tuple[Competitor, ...], ...] = (
    (Competitor("prisma", "Prisma"), Competitor("drizzle-orm", "Drizzle")),
    (Competitor("vitest", "Vitest"), Competitor("jest", "Jest")),
    (
        Competitor("tailwindcss", "Tailwind CSS"),
        Competitor("styled-components", "styled-components"),
        Competitor("@emotion/react", "Emotion"),
    ),
    (
        Competitor("express", "Express"),
        Competitor("fastify", "Fastify"),
        Competitor("@nestjs/core", "NestJS"),
    ),
    (
        Competitor("react", "React"),
        Competitor("vue", "Vue"),
        Competitor("svelte", "Svelte"),
        Competitor("@angular/core", "Angular"),
    ),
    (Competitor("next", "Next.js"), Competitor("nuxt", "Nuxt")),
    (Competitor("pino", "Pino"), Competitor("winston", "Winston")),
    (Competitor("zod", "Zod"), Competitor("joi", "Joi"), Competitor("yup", "Yup")),
    (Competitor("playwright", "Playwright"), Competitor("cypress", "Cypress")),
    (
        Competitor("@supabase/supabase-js", "Supabase"),
        Competitor("firebase", "Firebase"),
    ),
)

# =============================================================================
# AGENT / SKILL INFERENCE
# =============================================================================

BASELINE_AGENTS: tuple[str, ...] = ("code-reviewer", "debugger")

FRONTEND_PROJECT_TYPES = frozenset(
    {
        ProjectType.NEXTJS,
        ProjectType.REACT,
        ProjectType.VUE,
        ProjectType.ANGULAR,
        ProjectType.SVELTE,
    }
)

BACKEND_PROJECT_TYPES = frozenset(
    {
        ProjectType.NEXTJS,
        ProjectType.NODE,
        ProjectType.PYTHON,
        ProjectType.GO,
        ProjectType.RUST,
        ProjectType.JAVA,
        ProjectType.CSHARP,
        ProjectType.PHP,
        ProjectType.RUBY,
    }
)

AGENTS_BY_PATTERN: MappingProxyType[PatternType, str] = MappingProxyType(
    {
        PatternType.COMPONENTS: "frontend-engineer",
        PatternType.HOOKS: "frontend-engineer",
        PatternType.API_ROUTES: "backend-engineer",
        PatternType.SERVER_ACTIONS: "backend-engineer",
        PatternType.SERVICES: "backend-engineer",
        PatternType.CONTROLLERS: "backend-engineer",
        PatternType.MIDDLEWARE: "backend-engineer",
        PatternType.MODELS: "backend-engineer",
        PatternType.TESTS: "testing-specialist",
    }
)

AGENTS_BY_CATEGORY: MappingProxyType[DependencyCategory, str] = MappingProxyType(
    {
        DependencyCategory.DATABASE: "database-specialist",
        DependencyCategory.ORM: "database-specialist",
        DependencyCategory.AUTH: "security-analyst",
        DependencyCategory.PAYMENTS: "security-analyst",
    }
)

AGENTS_BY_MARKER: MappingProxyType[str, str] = MappingProxyType(
    {
        "Dockerfile": "devops-specialist",
        "docker-compose.yml": "devops-specialist",
        "docker-compose.yaml": "devops-specialist",
    }
)

SKILLS_BY_DEPENDENCY: MappingProxyType[str, str] = MappingProxyType(
    {
        "typescript": "typescript",
        "tailwindcss": "tailwind",
        "@supabase/supabase-js": "supabase",
        "stripe": "stripe",
        "drizzle-orm": "drizzle",
        "vitest": "vitest",
        "playwright": "playwright",
        "@playwright/test": "playwright",
        "graphql": "graphql",
        "react": "react",
    }
)

SKILL_DEPENDENCY_PREFIXES: MappingProxyType[str, str] = MappingProxyType(
    {
        "prisma": "prisma",
        "@prisma/": "prisma",
    }
)

SKILLS_BY_LANGUAGE: MappingProxyType[Language, str] = MappingProxyType(
    {
        Language.TYPESCRIPT: "typescript",
        Language.PYTHON: "python",
    }
)

SKILL_BY_PROJECT_TYPE: MappingProxyType[ProjectType, str] = MappingProxyType(
    {ProjectType.NODE: "nodejs"}
)

SKILLS_BY_MARKER: MappingProxyType[str, str] = MappingProxyType(
    {marker: "docker" for marker in AGENTS_BY_MARKER}
)
