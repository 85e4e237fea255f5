"""Tests for Cache value objects."""

from __future__ import annotations

import pytest

from stackscout.domain.cache.value_objects import (
    CacheStats,
    GeneratedItemType,
    GenerationCacheKey,
)


def _key(**overrides: str) -> GenerationCacheKey:
    fields = {
        "goal_description": "Build a dashboard",
        "codebase_hash": "abc123",
        "item_type": GeneratedItemType.AGENT,
        "item_name": "frontend-engineer",
        "model": "default",
    }
    fields.update(overrides)
    return GenerationCacheKey(**fields)  # type: ignore[arg-type]


def test_equal_fields_make_equal_keys() -> None:
    assert _key() == _key()
    assert hash(_key()) == hash(_key())


def test_any_field_distinguishes_keys() -> None:
    assert _key() != _key(model="other")
    assert _key() != _key(item_type=GeneratedItemType.SKILL)


def test_empty_item_name_rejected() -> None:
    with pytest.raises(ValueError, match="item_name"):
        _key(item_name="")


def test_item_type_values() -> None:
    assert {t.value for t in GeneratedItemType} == {"agent", "skill", "claude-md"}


def test_stats_default_to_zero() -> None:
    assert CacheStats() == CacheStats(0, 0, 0, 0)
