# thinking_tools/llm/client.py
from __future__ import annotations
from typing import List, Dict, Any, cast

from thinking_tools.core.errors import ConfigError, ModelRequestError
from thinking_tools.utils.config import AppConfig, DEFAULT_MODELS


# Fixed for every session; callers cannot override these.
TEMPERATURE = 0.7
TOP_P = 0.95
TOP_K = 64
MAX_OUTPUT_TOKENS = 8192


def _normalize_anthropic_model(name: str) -> str:
    n = name.strip().lower()
    aliases = {
        "claude-4-sonnet": "claude-sonnet-4-20250514",
        "claude-sonnet-4": "claude-sonnet-4-20250514",
        "claude-sonnet-4-latest": "claude-sonnet-4-20250514",
    }
    return aliases.get(n, name)


class LLMClient:
    """Stateless wrapper over one provider SDK.

    chat() takes the whole transcript each time; conversation state lives in
    ChatSession, not here.
    """

    def __init__(self, provider: str, api_key: str, model: str | None = None):
        self.provider = provider.lower()
        selected = model or DEFAULT_MODELS.get(self.provider, "")
        if self.provider == "anthropic":
            selected = _normalize_anthropic_model(selected)
        self.model = selected
        self._client: Any = None
        if not api_key:
            raise ConfigError(f"API key for provider {self.provider!r} is empty")
        if self.provider == "gemini":
            from google import genai
            self._client = genai.Client(api_key=api_key)
        elif self.provider == "openai":
            from openai import OpenAI
            self._client = OpenAI(api_key=api_key)
        elif self.provider == "anthropic":
            import anthropic
            self._client = anthropic.Anthropic(api_key=api_key)
        else:
            raise ConfigError(f"Unsupported provider: {self.provider}")

    @classmethod
    def from_config(cls, cfg: AppConfig) -> "LLMClient":
        return cls(cfg.provider, cfg.api_key or "", model=cfg.model)

    def chat(self, messages: List[Dict[str, str]]) -> str:
        try:
            if self.provider == "gemini":
                text = self._chat_gemini(messages)
            elif self.provider == "openai":
                text = self._chat_openai(messages)
            else:
                text = self._chat_anthropic(messages)
        except ModelRequestError:
            raise
        except Exception as e:
            raise ModelRequestError(f"{self.provider} request failed: {e}") from e
        if not text:
            raise ModelRequestError(f"{self.provider} returned an empty response")
        return text

    def _chat_gemini(self, messages: List[Dict[str, str]]) -> str:
        from google.genai import types
        contents = [
            types.Content(
                # Gemini uses "model" for assistant role
                role="model" if m["role"] == "assistant" else "user",
                parts=[types.Part(text=m["content"])],
            )
            for m in messages
        ]
        config = types.GenerateContentConfig(
            temperature=TEMPERATURE,
            top_p=TOP_P,
            top_k=TOP_K,
            max_output_tokens=MAX_OUTPUT_TOKENS,
        )
        resp = self._client.models.generate_content(model=self.model, contents=contents, config=config)
        return resp.text or ""

    def _chat_openai(self, messages: List[Dict[str, str]]) -> str:
        # gpt-5 系は sampling パラメータを受け付けない
        is_gpt5 = str(self.model).lower().startswith("gpt-5")
        token_arg_name = "max_completion_tokens" if is_gpt5 else "max_tokens"
        kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            token_arg_name: MAX_OUTPUT_TOKENS,
        }
        if not is_gpt5:
            kwargs["temperature"] = TEMPERATURE
            kwargs["top_p"] = TOP_P
        resp = cast(Any, self._client).chat.completions.create(**kwargs)
        return resp.choices[0].message.content or ""

    def _chat_anthropic(self, messages: List[Dict[str, str]]) -> str:
        resp = cast(Any, self._client).messages.create(
            model=self.model,
            max_tokens=MAX_OUTPUT_TOKENS,
            temperature=TEMPERATURE,
            top_k=TOP_K,
            messages=[{"role": m["role"], "content": m["content"]} for m in messages],
        )
        # Flatten text content
        parts = []
        for c in resp.content:
            if getattr(c, "type", "text") == "text":
                parts.append(getattr(c, "text", ""))
        return "\n".join([p for p in parts if p])
