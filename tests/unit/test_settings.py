from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from typed_json_mapper.exceptions import SettingsError
from typed_json_mapper.settings import Settings, get_settings

if TYPE_CHECKING:
    from pathlib import Path


def test_settings_load_from_env_file(tmp_path: Path, monkeypatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "APP_ENV=test\nLOG_LEVEL=DEBUG\nLOG_JSON=false\nDISABLE_TRANSFORM_KEYS=true\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.app_env == "test"
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    assert settings.disable_transform_keys is True


def test_settings_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("APP_ENV", "LOG_LEVEL", "LOG_JSON", "LOG_FILE", "DISABLE_TRANSFORM_KEYS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()

    assert settings.project_name == "typed-json-mapper"
    assert settings.log_level == "INFO"
    assert settings.log_file is None
    assert settings.disable_transform_keys is False


def test_get_settings_uses_environment(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("APP_ENV", "ci")

    settings = get_settings()
    assert settings.app_env == "ci"
    assert get_settings() is settings

    get_settings.cache_clear()


def test_get_settings_wraps_validation_errors(monkeypatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("LOG_JSON", "not-a-bool")

    with pytest.raises(SettingsError, match="Failed to load settings"):
        get_settings()

    get_settings.cache_clear()


def test_get_settings_wraps_unexpected_errors(monkeypatch) -> None:
    get_settings.cache_clear()

    def _raise_runtime_error():
        raise RuntimeError("boom")

    monkeypatch.setattr("typed_json_mapper.settings.Settings", _raise_runtime_error)

    with pytest.raises(SettingsError, match="boom"):
        get_settings()

    get_settings.cache_clear()
