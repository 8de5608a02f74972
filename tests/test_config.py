"""Tests for data directory resolution and Settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from quickmeet.config import (
    DEFAULT_DATA_DIR,
    Settings,
    ensure_secure_directory,
    resolve_data_dir,
)
from quickmeet.errors import ConfigError


class TestResolveDataDir:
    def test_cli_value_wins(self, tmp_path: Path):
        env = {"QUICKMEET_DATA": str(tmp_path / "env")}
        assert resolve_data_dir(str(tmp_path / "cli"), env) == tmp_path / "cli"

    def test_environment_variable_used_without_flag(self, tmp_path: Path):
        env = {"QUICKMEET_DATA": str(tmp_path / "env")}
        assert resolve_data_dir(None, env) == tmp_path / "env"

    def test_default_is_dotfolder_in_home(self):
        assert resolve_data_dir(None, {}) == DEFAULT_DATA_DIR
        assert DEFAULT_DATA_DIR == Path.home() / ".meet_data"

    def test_empty_values_fall_through(self):
        assert resolve_data_dir("", {"QUICKMEET_DATA": ""}) == DEFAULT_DATA_DIR

    def test_tilde_is_expanded(self):
        resolved = resolve_data_dir("~/meet", {})
        assert "~" not in str(resolved)
        assert resolved == Path.home() / "meet"


class TestSettings:
    def test_file_locations(self, tmp_path: Path):
        settings = Settings(data_dir=tmp_path)
        assert settings.credentials_file == tmp_path / "credentials.json"
        assert settings.token_cache_file == tmp_path / "tokencache.json"
        assert settings.ledger_file == tmp_path / "request_id_cache"
        assert settings.error_log_file == tmp_path / "error.log"

    def test_is_immutable(self, tmp_path: Path):
        settings = Settings(data_dir=tmp_path)
        with pytest.raises(AttributeError):
            settings.data_dir = tmp_path / "other"

    def test_require_data_dir_passes_for_existing(self, tmp_path: Path):
        Settings(data_dir=tmp_path).require_data_dir()

    def test_require_data_dir_raises_for_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="does not exist"):
            Settings(data_dir=tmp_path / "missing").require_data_dir()


def test_ensure_secure_directory_creates_owner_only(tmp_path: Path):
    target = tmp_path / "nested" / "data"
    ensure_secure_directory(target)
    assert target.is_dir()
    assert target.stat().st_mode & 0o777 == 0o700
