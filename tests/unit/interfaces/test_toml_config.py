"""Tests for TOML configuration loader."""

from __future__ import annotations

import logging
import textwrap

from pathlib import Path

import pytest

from stackscout.interfaces.toml_config import StackScoutConfig, load_stackscout_config
from stackscout.shared.exceptions import ConfigurationError


def _write_toml(tmp_path: Path, content: str) -> Path:
    """Write a pyproject.toml in *tmp_path* and return its parent dir."""
    (tmp_path / "pyproject.toml").write_text(textwrap.dedent(content))
    return tmp_path


# =============================================================================
# Default behaviour (no pyproject.toml)
# =============================================================================


class TestDefaults:
    def test_load_no_pyproject_uses_defaults(self, tmp_path: Path) -> None:
        assert load_stackscout_config(tmp_path) == StackScoutConfig()

    def test_load_empty_tool_section_uses_defaults(self, tmp_path: Path) -> None:
        _write_toml(
            tmp_path,
            """\
            [project]
            name = "foo"
        """,
        )
        cfg = load_stackscout_config(tmp_path)
        assert cfg.cache_dir == "~/.stackscout/cache"
        assert cfg.use_cache is True
        assert cfg.max_sampled_files == 20

    def test_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_toml(
            tmp_path,
            """\
            [tool.stackscout]
            use_cache = false
        """,
        )
        monkeypatch.chdir(tmp_path)
        assert load_stackscout_config().use_cache is False


# =============================================================================
# Overrides
# =============================================================================


class TestOverrides:
    def test_all_keys(self, tmp_path: Path) -> None:
        _write_toml(
            tmp_path,
            """\
            [tool.stackscout]
            cache_dir = "/tmp/scout"
            use_cache = false
            ignored_paths = ["legacy", "*.snap"]
            max_sampled_files = 5
            max_pattern_paths = 10
            log_level = "debug"
        """,
        )
        cfg = load_stackscout_config(tmp_path)
        assert cfg == StackScoutConfig(
            cache_dir="/tmp/scout",
            use_cache=False,
            ignored_paths=["legacy", "*.snap"],
            max_sampled_files=5,
            max_pattern_paths=10,
            log_level="DEBUG",
        )

    def test_unknown_key_warns(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        _write_toml(
            tmp_path,
            """\
            [tool.stackscout]
            max_sampled = 5
        """,
        )
        with caplog.at_level(logging.WARNING):
            cfg = load_stackscout_config(tmp_path)
        assert "max_sampled" in caplog.text
        assert cfg.max_sampled_files == 20


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    def test_malformed_toml(self, tmp_path: Path) -> None:
        _write_toml(tmp_path, "[tool.stackscout\n")
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            load_stackscout_config(tmp_path)

    @pytest.mark.parametrize(
        ("line", "message"),
        [
            ('cache_dir = ""', "cache_dir"),
            ('use_cache = "yes"', "use_cache"),
            ('ignored_paths = "legacy"', "ignored_paths"),
            ("ignored_paths = [1, 2]", "ignored_paths"),
            ("max_sampled_files = true", "must be an integer"),
            ('max_pattern_paths = "10"', "must be an integer"),
            ("max_sampled_files = 0", "between 1 and 200"),
            ("max_pattern_paths = 1001", "between 1 and 1000"),
            ('log_level = "TRACE"', "Invalid log_level"),
        ],
    )
    def test_invalid_values(self, tmp_path: Path, line: str, message: str) -> None:
        _write_toml(tmp_path, f"[tool.stackscout]\n{line}\n")
        with pytest.raises(ConfigurationError, match=message):
            load_stackscout_config(tmp_path)
