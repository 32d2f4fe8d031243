from types import SimpleNamespace

import pytest

from thinking_tools.core.errors import ConfigError, ModelRequestError
from thinking_tools.llm import client as client_mod
from thinking_tools.llm.client import LLMClient


def _bare(provider, sdk):
    c = LLMClient.__new__(LLMClient)
    c.provider = provider
    c.model = "test-model"
    c._client = sdk
    return c


class _Messages:
    def __init__(self, resp=None, exc=None):
        self.resp, self.exc, self.kwargs = resp, exc, None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.exc:
            raise self.exc
        return self.resp


def test_anthropic_text_is_flattened_with_fixed_params():
    msgs = _Messages(resp=SimpleNamespace(content=[SimpleNamespace(type="text", text="hello"), SimpleNamespace(type="text", text="world")]))
    c = _bare("anthropic", SimpleNamespace(messages=msgs))
    assert c.chat([{"role": "user", "content": "hi"}]) == "hello\nworld"
    assert msgs.kwargs["temperature"] == client_mod.TEMPERATURE
    assert msgs.kwargs["top_k"] == client_mod.TOP_K
    assert msgs.kwargs["max_tokens"] == client_mod.MAX_OUTPUT_TOKENS


def test_sdk_failure_becomes_model_request_error():
    c = _bare("anthropic", SimpleNamespace(messages=_Messages(exc=RuntimeError("429 quota"))))
    with pytest.raises(ModelRequestError) as ei:
        c.chat([{"role": "user", "content": "hi"}])
    assert "429 quota" in str(ei.value)


def test_empty_response_is_model_request_error():
    c = _bare("anthropic", SimpleNamespace(messages=_Messages(resp=SimpleNamespace(content=[]))))
    with pytest.raises(ModelRequestError):
        c.chat([{"role": "user", "content": "hi"}])


def test_openai_gpt5_skips_sampling_params():
    completions = _Messages(resp=SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="ok"))]))
    c = _bare("openai", SimpleNamespace(chat=SimpleNamespace(completions=completions)))
    c.model = "gpt-5"
    assert c.chat([{"role": "user", "content": "hi"}]) == "ok"
    assert "temperature" not in completions.kwargs
    assert completions.kwargs["max_completion_tokens"] == client_mod.MAX_OUTPUT_TOKENS


def test_constructor_rejects_bad_config():
    with pytest.raises(ConfigError):
        LLMClient("gemini", "")
    with pytest.raises(ConfigError):
        LLMClient("mistral", "key")


class _Models:
    def __init__(self, text):
        self.text, self.kwargs = text, None

    def generate_content(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(text=self.text)


def test_gemini_maps_roles_and_fixed_params():
    models = _Models("thought")
    c = _bare("gemini", SimpleNamespace(models=models))
    transcript = [
        {"role": "user", "content": "q1"},
        {"role": "assistant", "content": "a1"},
        {"role": "user", "content": "q2"},
    ]
    assert c.chat(transcript) == "thought"
    contents = models.kwargs["contents"]
    assert [x.role for x in contents] == ["user", "model", "user"]
    assert [x.parts[0].text for x in contents] == ["q1", "a1", "q2"]
    assert models.kwargs["model"] == "test-model"
    cfg = models.kwargs["config"]
    assert cfg.temperature == client_mod.TEMPERATURE
    assert cfg.top_p == client_mod.TOP_P
    assert cfg.top_k == client_mod.TOP_K
    assert cfg.max_output_tokens == client_mod.MAX_OUTPUT_TOKENS


def test_gemini_empty_text_is_model_request_error():
    c = _bare("gemini", SimpleNamespace(models=_Models(None)))
    with pytest.raises(ModelRequestError):
        c.chat([{"role": "user", "content": "hi"}])


@pytest.mark.parametrize(
    "requested,resolved",
    [
        ("claude-4-sonnet", "claude-sonnet-4-20250514"),
        (" Claude-Sonnet-4 ", "claude-sonnet-4-20250514"),
        ("claude-3-5-haiku-latest", "claude-3-5-haiku-latest"),
    ],
)
def test_anthropic_model_aliases(requested, resolved):
    assert LLMClient("anthropic", "key", model=requested).model == resolved
