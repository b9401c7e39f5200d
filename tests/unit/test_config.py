from __future__ import annotations

import pytest
from cryptography.fernet import Fernet

from common.mockapi import DEFAULT_BASE_URL
from frontend.config import load_settings

_ENV = (
    "PRISONER_API_BASE_URL",
    "PRISONER_HTTP_TIMEOUT",
    "PRISONER_STORAGE_DIR",
    "PRISONER_STORAGE_KEY",
    "PRISONER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings()
    assert s.api_base_url == DEFAULT_BASE_URL
    assert s.http_timeout == 15.0
    assert s.storage_key is None
    assert s.log_level == "WARNING"
    assert str(s.storage_path).replace("\\", "/") == ".cache/local_storage.json"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path):
    key = Fernet.generate_key().decode("ascii")
    monkeypatch.setenv("PRISONER_API_BASE_URL", "https://example.mockapi.io/api/")
    monkeypatch.setenv("PRISONER_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("PRISONER_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("PRISONER_STORAGE_KEY", key)
    monkeypatch.setenv("PRISONER_LOG_LEVEL", "debug")

    s = load_settings()
    assert s.api_base_url == "https://example.mockapi.io/api"
    assert s.http_timeout == 2.5
    assert s.storage_path == tmp_path / "local_storage.json"
    assert s.storage_key == key
    assert s.log_level == "DEBUG"


def test_empty_values_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PRISONER_API_BASE_URL", "")
    monkeypatch.setenv("PRISONER_STORAGE_KEY", "")
    s = load_settings()
    assert s.api_base_url == DEFAULT_BASE_URL
    assert s.storage_key is None


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout_raises(monkeypatch: pytest.MonkeyPatch, raw):
    monkeypatch.setenv("PRISONER_HTTP_TIMEOUT", raw)
    with pytest.raises(RuntimeError):
        load_settings()


@pytest.mark.parametrize("raw", ["k" * 44, "not-a-key", "a" * 42 + "=="])
def test_invalid_storage_key_raises(monkeypatch: pytest.MonkeyPatch, raw):
    monkeypatch.setenv("PRISONER_STORAGE_KEY", raw)
    with pytest.raises(RuntimeError, match="PRISONER_STORAGE_KEY"):
        load_settings()


@pytest.mark.parametrize("raw", ["verbose", "BASICCONFIG", "getLogger"])
def test_unknown_log_level_raises(monkeypatch: pytest.MonkeyPatch, raw):
    monkeypatch.setenv("PRISONER_LOG_LEVEL", raw)
    with pytest.raises(RuntimeError, match="PRISONER_LOG_LEVEL"):
        load_settings()


def test_log_level_names_are_case_insensitive(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("PRISONER_LOG_LEVEL", " info ")
    assert load_settings().log_level == "INFO"
