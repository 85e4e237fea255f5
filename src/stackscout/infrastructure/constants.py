"""Infrastructure-layer constants and enums.

Eliminates magic strings across all infrastructure modules.
"""

from __future__ import annotations

from enum import StrEnum

# =============================================================================
# FILESYSTEM
# =============================================================================

EXCLUDED_DIR_NAMES: frozenset[str] = frozenset(
    {
        "node_modules",
        "dist",
        "build",
        ".next",
        "__pycache__",
        "venv",
        "target",
        "coverage",
    }
)
"""Directory names skipped by every walk; hidden names are skipped too."""

FINGERPRINT_MANIFESTS: tuple[str, ...] = (
    "package.json",
    "tsconfig.json",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "requirements.txt",
    "pyproject.toml",
    "go.mod",
    "Cargo.toml",
)
"""Files whose raw content feeds the fingerprint, in hashing order."""

FINGERPRINT_SOURCE_ROOTS: tuple[str, ...] = ("src", "app")

SOURCE_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".mjs",
        ".cjs",
        ".vue",
        ".svelte",
        ".py",
        ".go",
        ".rs",
        ".java",
        ".kt",
        ".cs",
        ".php",
        ".rb",
        ".swift",
    }
)

ENV_FILES: tuple[str, ...] = (
    ".env",
    ".env.local",
    ".env.development",
    ".env.production",
)

SAMPLE_MANIFESTS: tuple[str, ...] = (
    "package.json",
    "pyproject.toml",
    "requirements.txt",
    "go.mod",
    "Cargo.toml",
    "composer.json",
    "Gemfile",
)

SAMPLE_CONFIGS: tuple[str, ...] = (
    "tsconfig.json",
    "next.config.js",
    "next.config.mjs",
    "next.config.ts",
    "vite.config.ts",
    "vite.config.js",
    "nuxt.config.ts",
    "svelte.config.js",
    "angular.json",
    "tailwind.config.js",
    "tailwind.config.ts",
    "docker-compose.yml",
    "Dockerfile",
)

SAMPLE_ENTRY_POINTS: tuple[str, ...] = (
    "src/index.ts",
    "src/index.js",
    "src/main.ts",
    "src/main.tsx",
    "src/main.py",
    "src/app.ts",
    "app/layout.tsx",
    "app/page.tsx",
    "src/app/layout.tsx",
    "src/app/page.tsx",
    "index.js",
    "main.py",
    "app.py",
    "manage.py",
    "main.go",
    "cmd/main.go",
    "src/main.rs",
    "src/lib.rs",
)

CONFIG_DIR = ".claude"
CLAUDE_MD_FILENAME = "CLAUDE.md"
SKILL_FILENAME = "SKILL.md"

# =============================================================================
# CACHE FILE NAMING
# =============================================================================


class CacheFilePrefix(StrEnum):
    """Record kinds in the cache directory, by file-name prefix."""

    ANALYSIS = "analysis-"
    GENERATION = "gen-"
    SNAPSHOT = "snapshot-"


JSON_SUFFIX = ".json"
TEXT_SUFFIX = ".txt"
META_SUFFIX = ".meta.json"

# =============================================================================
# SERIALIZER FIELD NAMES
# =============================================================================


class SerializerField(StrEnum):
    """JSON field names for CodebaseAnalysis serialization.

    camelCase keeps records interchangeable with existing cache files.
    """

    PROJECT_TYPE = "projectType"
    FRAMEWORK = "framework"
    LANGUAGE = "language"
    PACKAGE_MANAGER = "packageManager"
    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    DETECTED_PATTERNS = "detectedPatterns"
    NEGATIVE_CONSTRAINTS = "negativeConstraints"
    SUGGESTED_AGENTS = "suggestedAgents"
    SUGGESTED_SKILLS = "suggestedSkills"
    MONOREPO = "monorepo"
    LINT_COMMAND = "lintCommand"
    FORMAT_COMMAND = "formatCommand"
    TEST_COMMAND = "testCommand"
    DEV_COMMAND = "devCommand"
    BUILD_COMMAND = "buildCommand"
    HAS_ENV_FILE = "hasEnvFile"
    EXISTING_CONFIG = "existingClaudeConfig"
    SAMPLED_FILES = "sampledFiles"
    TOTAL_FILES = "totalFiles"
    TOTAL_LINES = "totalLines"
    ANALYZED_AT = "analyzedAt"
    ANALYSIS_TIME_MS = "analysisTimeMs"
    NAME = "name"
    VERSION = "version"
    CATEGORY = "category"
    TYPE = "type"
    PATHS = "paths"
    PATH = "path"
    CONFIDENCE = "confidence"
    DESCRIPTION = "description"
    TECHNOLOGY = "technology"
    ALTERNATIVE = "alternative"
    RULE = "rule"
    IS_MONOREPO = "isMonorepo"
    TOOL = "tool"
    PACKAGES = "packages"
    CONTENT = "content"
    PURPOSE = "purpose"
    HAS_CONFIG_DIR = "hasClaudeDir"
    HAS_CLAUDE_MD = "hasClaudeMd"
    AGENTS = "agents"
    SKILLS = "skills"
    HOOKS = "hooks"
