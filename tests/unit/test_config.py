"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from undersea.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.default_seed is None
    assert settings.data_dir.name == "campaigns"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("UNDERSEA_DATA_DIR", str(tmp_path / "saves"))
    monkeypatch.setenv("UNDERSEA_DEFAULT_SEED", "fixed")
    monkeypatch.setenv("UNDERSEA_LOG_LEVEL", "DEBUG")

    settings = get_settings()

    assert settings.data_dir == tmp_path / "saves"
    assert settings.data_dir.is_dir()
    assert settings.default_seed == "fixed"
    assert settings.log_level == "DEBUG"
    assert get_settings() is settings
