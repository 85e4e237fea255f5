"""Tests for shared type definitions."""

from __future__ import annotations

from stackscout.shared.types import FilePath, Fingerprint

# =============================================================================
# FilePath
# =============================================================================


def test_file_path_preserves_value() -> None:
    assert str(FilePath("src/components/Button.tsx")) == "src/components/Button.tsx"


def test_file_path_equality_same_value() -> None:
    assert FilePath("a.ts") == FilePath("a.ts")


def test_file_path_equality_different_value() -> None:
    assert FilePath("a.ts") != FilePath("b.ts")


def test_file_path_is_hashable() -> None:
    assert len({FilePath("a.ts"), FilePath("a.ts")}) == 1


# =============================================================================
# Fingerprint
# =============================================================================


def test_fingerprint_compares_as_string() -> None:
    assert Fingerprint("d41d8cd98f00b204e9800998ecf8427e") == (
        "d41d8cd98f00b204e9800998ecf8427e"
    )
