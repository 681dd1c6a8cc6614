"""Tests for config file discovery."""

from pathlib import Path

import pytest

from logrange.config.discovery import CONFIG_FILENAME, find_config, user_config_path


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[search]\nrange_separator = "|"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv("LOGRANGE_CONFIG", str(config_file))
        assert find_config(tmp_path) == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOGRANGE_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None

    def test_user_config_fallback(self, tmp_path: Path) -> None:
        user_file = user_config_path()
        user_file.parent.mkdir(parents=True)
        user_file.write_text("")
        child = tmp_path / "project"
        child.mkdir()
        assert find_config(child) == user_file

    def test_user_config_path_honors_xdg(self, tmp_path: Path) -> None:
        assert user_config_path() == tmp_path / "xdg" / "logrange" / CONFIG_FILENAME
