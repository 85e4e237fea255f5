"""Value objects for the Cache bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class GeneratedItemType(StrEnum):
    """Kinds of generated artifact stored in the generation cache."""

    AGENT = "agent"
    SKILL = "skill"
    CLAUDE_MD = "claude-md"


@dataclass(frozen=True)
class GenerationCacheKey:
    """Identity of one generated artifact.

    Two keys with equal fields address the same cache record, so the
    field set must capture everything that influences the generated text.
    """

    goal_description: str
    codebase_hash: str
    item_type: GeneratedItemType
    item_name: str
    model: str

    def __post_init__(self) -> None:
        if not self.item_name:
            msg = "item_name must not be empty"
            raise ValueError(msg)


@dataclass(frozen=True)
class CacheStats:
    """Record counts and on-disk size of the cache directory."""

    analysis_count: int = 0
    generation_count: int = 0
    snapshot_count: int = 0
    total_size: int = 0
