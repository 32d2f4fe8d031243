from pathlib import Path

import pytest

from thinking_tools.core.errors import ConfigError
from thinking_tools.utils.config import AppConfig

ENV_VARS = ["LLM_PROVIDER", "LLM_MODEL", "GEMINI_API_KEY", "ANTHROPIC_API_KEY", "OPENAI_API_KEY",
            "THINKING_OUTPUT_DIR", "HTTP_PORT", "HTTP_API_KEY", "LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for k in ENV_VARS:
        monkeypatch.delenv(k, raising=False)


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    cfg = AppConfig.load(dotenv=False).validate()
    assert cfg.provider == "gemini"
    assert cfg.model == "gemini-2.0-flash"
    assert cfg.api_key == "g-key"
    assert cfg.output_dir == (Path(tmp_path) / "output").resolve()
    assert cfg.http_port == 8000


def test_missing_credential_fails_fast():
    with pytest.raises(ConfigError) as ei:
        AppConfig.load(dotenv=False).validate()
    assert "GEMINI_API_KEY" in str(ei.value)


def test_provider_selects_its_key(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "Anthropic")
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    with pytest.raises(ConfigError):
        AppConfig.load(dotenv=False).validate()
    monkeypatch.setenv("ANTHROPIC_API_KEY", "a-key")
    cfg = AppConfig.load(dotenv=False).validate()
    assert cfg.api_key == "a-key"
    assert cfg.model == "claude-sonnet-4-20250514"


def test_unknown_provider_and_bad_port(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "mistral")
    with pytest.raises(ConfigError):
        AppConfig.load(dotenv=False).validate()
    monkeypatch.setenv("HTTP_PORT", "eighty")
    with pytest.raises(ConfigError):
        AppConfig.load(dotenv=False)


def test_log_level_must_be_known(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert AppConfig.load(dotenv=False).validate().log_level == "DEBUG"
    monkeypatch.setenv("LOG_LEVEL", "FOO")
    with pytest.raises(ConfigError) as ei:
        AppConfig.load(dotenv=False).validate()
    assert "LOG_LEVEL" in str(ei.value)
