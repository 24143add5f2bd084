"""Tests for skyfetch.config -- XDG paths, atomic writes, API key precedence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from skyfetch.config import (
    DEMO_API_KEY,
    _atomic_write,
    get_config_dir,
    get_data_dir,
    load_global_config,
    load_project_config,
    resolve_api_key,
    resolve_credential,
    save_global_config,
)
from skyfetch.exceptions import ConfigError
from skyfetch.models import CacheConfig, GlobalConfig, RequestConfig


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("skyfetch.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "skyfetch"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("skyfetch.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "skyfetch"

    def test_data_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_data"
        monkeypatch.setattr("skyfetch.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_DATA_HOME", str(custom))

        result = get_data_dir()
        assert result == custom / "skyfetch"
        assert result.is_dir()

    def test_fallback_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("skyfetch.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".skyfetch"
        assert get_data_dir() == tmp_path / ".skyfetch"


# ---------------------------------------------------------------------------
# Atomic writes
# ---------------------------------------------------------------------------


class TestAtomicWrite:
    def test_creates_file_with_content(self, tmp_path: Path) -> None:
        target = tmp_path / "out.json"
        _atomic_write(target, '{"a": 1}')
        assert target.read_text(encoding="utf-8") == '{"a": 1}'

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b" / "out.json"
        _atomic_write(target, "x")
        assert target.is_file()

    def test_no_temp_files_left_on_success(self, tmp_path: Path) -> None:
        _atomic_write(tmp_path / "out.json", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["out.json"]


# ---------------------------------------------------------------------------
# Global config
# ---------------------------------------------------------------------------


class TestGlobalConfig:
    def test_load_returns_defaults_when_missing(self, isolated_config: Path) -> None:
        config = load_global_config()
        assert config == GlobalConfig()
        assert config.request.max_attempts == 3
        assert config.cache.default_ttl_seconds == 3600.0

    def test_save_and_load_roundtrip(self, isolated_config: Path) -> None:
        config = GlobalConfig(
            api_key_source="env:NASA_KEY",
            request=RequestConfig(timeout=5, max_attempts=5),
            cache=CacheConfig(enabled=False),
        )
        save_global_config(config)
        assert load_global_config() == config

    def test_load_invalid_json_raises_config_error(self, isolated_config: Path) -> None:
        (get_config_dir() / "config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_global_config()

    def test_load_invalid_schema_raises_config_error(self, isolated_config: Path) -> None:
        _write_json(get_config_dir() / "config.json", {"request": {"max_attempts": 0}})
        with pytest.raises(ConfigError):
            load_global_config()


# ---------------------------------------------------------------------------
# Project config
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_returns_none_when_missing(self, isolated_config: Path) -> None:
        assert load_project_config() is None

    def test_loads_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "skyfetch.json", {"api_key_source": "env:X"})
        assert load_project_config() == {"api_key_source": "env:X"}

    def test_rejects_non_object(self, isolated_config: Path) -> None:
        _write_json(isolated_config / "skyfetch.json", ["not", "an", "object"])
        with pytest.raises(ConfigError):
            load_project_config()

    def test_rejects_invalid_json(self, isolated_config: Path) -> None:
        (isolated_config / "skyfetch.json").write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_project_config()


# ---------------------------------------------------------------------------
# API key precedence
# ---------------------------------------------------------------------------


class TestResolveApiKey:
    def test_demo_key_when_nothing_configured(self, isolated_config: Path) -> None:
        assert resolve_api_key() == DEMO_API_KEY

    def test_global_source(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GLOBAL_KEY", "from-global")
        config = GlobalConfig(api_key_source="env:GLOBAL_KEY")
        assert resolve_api_key(config) == "from-global"

    def test_global_source_loaded_from_disk(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GLOBAL_KEY", "from-disk")
        save_global_config(GlobalConfig(api_key_source="env:GLOBAL_KEY"))
        assert resolve_api_key() == "from-disk"

    def test_project_beats_global(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("GLOBAL_KEY", "from-global")
        monkeypatch.setenv("PROJECT_KEY", "from-project")
        _write_json(isolated_config / "skyfetch.json", {"api_key_source": "env:PROJECT_KEY"})
        config = GlobalConfig(api_key_source="env:GLOBAL_KEY")
        assert resolve_api_key(config) == "from-project"

    def test_env_beats_project(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SKYFETCH_API_KEY", "from-env")
        _write_json(isolated_config / "skyfetch.json", {"api_key_source": "env:MISSING"})
        assert resolve_api_key() == "from-env"

    def test_cli_beats_everything(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("SKYFETCH_API_KEY", "from-env")
        assert resolve_api_key(GlobalConfig(), "from-cli") == "from-cli"

    def test_unresolvable_source(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigError):
            resolve_api_key(GlobalConfig(api_key_source="env:SKYFETCH_TEST_UNSET"))


class TestResolveCredential:
    def test_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_KEY", "abc")
        assert resolve_credential("env:MY_KEY") == "abc"

    def test_env_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("MY_KEY", raising=False)
        with pytest.raises(ConfigError, match="MY_KEY"):
            resolve_credential("env:MY_KEY")

    def test_file(self, tmp_path: Path) -> None:
        key_file = tmp_path / "key.txt"
        key_file.write_text("  secret\n", encoding="utf-8")
        assert resolve_credential(f"file:{key_file}") == "secret"

    def test_file_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            resolve_credential(f"file:{tmp_path / 'nope.txt'}")

    def test_prompt_without_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("sys.stdin.isatty", lambda: False)
        with pytest.raises(ConfigError, match="TTY"):
            resolve_credential("prompt")

    def test_unknown_format(self) -> None:
        with pytest.raises(ConfigError):
            resolve_credential("vault:secret/nasa")
