from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

from thinking_tools.core.errors import ConfigError

PROVIDER_KEYS = {
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "anthropic": "claude-sonnet-4-20250514",
    "openai": "gpt-5",
}


def _get_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    try:
        return int(v)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {v!r}") from e


@dataclass(frozen=True)
class AppConfig:
    provider: str
    model: str
    api_key: str | None
    output_dir: Path
    log_level: str
    http_host: str
    http_port: int
    http_api_key: str | None

    @staticmethod
    def load(dotenv: bool = True) -> "AppConfig":
        if dotenv:
            load_dotenv()
        provider = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
        key_var = PROVIDER_KEYS.get(provider)
        return AppConfig(
            provider=provider,
            model=os.getenv("LLM_MODEL") or DEFAULT_MODELS.get(provider, ""),
            api_key=os.getenv(key_var) if key_var else None,
            output_dir=Path(os.getenv("THINKING_OUTPUT_DIR", "output")).resolve(),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            http_host=os.getenv("HTTP_HOST", "127.0.0.1"),
            http_port=_get_int("HTTP_PORT", 8000),
            http_api_key=os.getenv("HTTP_API_KEY") or None,
        )

    def validate(self) -> "AppConfig":
        if self.provider not in PROVIDER_KEYS:
            raise ConfigError(
                f"Unsupported LLM_PROVIDER {self.provider!r} (expected one of: {', '.join(PROVIDER_KEYS)})"
            )
        if not self.api_key:
            raise ConfigError(f"{PROVIDER_KEYS[self.provider]} environment variable is not set")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"LOG_LEVEL {self.log_level!r} is not a logging level name")
        return self
