"""Centralized defaults for StackScout. Overridable via configuration."""

from __future__ import annotations

from datetime import timedelta

# =============================================================================
# CACHE
# =============================================================================

CACHE_VERSION = "1"
DEFAULT_CACHE_DIR = "~/.stackscout/cache"
ANALYSIS_TTL = timedelta(hours=24)
GENERATION_TTL = timedelta(days=7)

# =============================================================================
# ANALYSIS LIMITS
# =============================================================================

MAX_SAMPLED_FILES = 20
MAX_SAMPLE_FILE_BYTES = 100_000
MAX_SAMPLE_LINES = 500
MAX_PATTERN_PATHS = 50
MAX_SAMPLES_PER_PATTERN = 3
MAX_FILE_SIZE_BYTES = 1_000_000

IGNORE_FILENAME = ".stackscoutignore"
TRUNCATION_MARKER = "[... truncated ...]"

# =============================================================================
# RECOMMENDATION THRESHOLDS
# =============================================================================

DEFAULT_AGENT_MIN_SCORE = 80
DEFAULT_SKILL_MIN_SCORE = 70
MAX_DEFAULT_AGENTS = 3
MAX_DEFAULT_SKILLS = 5

PRESET_PRIORITY_WEIGHT = 10

KEYWORD_SKILL_SEED = 80
KEYWORD_SKILL_BOOST = 50
KEYWORD_AGENT_SEED = 60
KEYWORD_AGENT_BOOST = 30

REQUIREMENT_AGENT_SEED = 70
REQUIREMENT_AGENT_BOOST = 40
REQUIREMENT_SKILL_SEED = 60
REQUIREMENT_SKILL_BOOST = 30

CODEBASE_SIGNAL_BOOST = 15
