"""Tests for the refinement proxy (providers are faked, no network)."""

import asyncio
from types import SimpleNamespace

import anthropic
import httpx
import openai
import pytest

from promptmaker.models.refine import DEFAULT_REFINE_INSTRUCTIONS, RefineRequest
from promptmaker.refine import client
from promptmaker.refine.client import (
    ANTHROPIC_DEFAULT_MAX_TOKENS,
    CONTACT_FAILURE,
    OPENROUTER_BASE_URL,
    OPENROUTER_HEADERS,
    SYSTEM_MESSAGE,
    RefineError,
    build_user_message,
    extract_refined_prompt,
    refine_prompt,
)


def _http_request(url: str) -> httpx.Request:
    return httpx.Request("POST", url)


def _status_error(module, status_code: int, message: str):
    """A real SDK APIStatusError carrying the given status."""
    request = _http_request("https://provider.test/v1")
    return module.APIStatusError(
        message,
        response=httpx.Response(status_code, request=request),
        body=None,
    )


class FakeOpenAI:
    """Stands in for openai.AsyncOpenAI and records what the proxy sends."""

    instances: list = []
    answer: str | None = "Final Prompt: Be brief."
    choices: bool = True
    error: Exception | None = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.params = None
        self.closed = False
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        FakeOpenAI.instances.append(self)

    async def _create(self, **params):
        self.params = params
        if FakeOpenAI.error is not None:
            raise FakeOpenAI.error
        if not FakeOpenAI.choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=FakeOpenAI.answer)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True


class FakeAnthropic:
    """Stands in for anthropic.AsyncAnthropic and records what the proxy sends."""

    instances: list = []
    blocks: list = []
    error: Exception | None = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.params = None
        self.closed = False
        self.messages = SimpleNamespace(create=self._create)
        FakeAnthropic.instances.append(self)

    async def _create(self, **params):
        self.params = params
        if FakeAnthropic.error is not None:
            raise FakeAnthropic.error
        return SimpleNamespace(content=FakeAnthropic.blocks)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.closed = True


@pytest.fixture
def fake_openai(monkeypatch):
    FakeOpenAI.instances = []
    FakeOpenAI.answer = "Final Prompt: Be brief."
    FakeOpenAI.choices = True
    FakeOpenAI.error = None
    monkeypatch.setattr(openai, "AsyncOpenAI", FakeOpenAI)
    return FakeOpenAI


@pytest.fixture
def fake_anthropic(monkeypatch):
    FakeAnthropic.instances = []
    FakeAnthropic.blocks = []
    FakeAnthropic.error = None
    monkeypatch.setattr(anthropic, "AsyncAnthropic", FakeAnthropic)
    return FakeAnthropic


def _refine(**fields):
    return asyncio.run(refine_prompt(RefineRequest(**fields)))


class TestExtractRefinedPrompt:
    """Test pulling the refined prompt out of provider answers."""

    def test_code_block_wins(self):
        """The first fenced block is returned, trimmed."""
        content = (
            "## Critique\nToo vague.\n\n"
            "```markdown\n  You are a precise analyst.\n```\n\n"
            "```\nsecond block\n```"
        )
        assert extract_refined_prompt(content) == "You are a precise analyst."

    def test_final_prompt_label(self):
        """Without a code block, text after the label is used."""
        content = "Critique: fine.\n\nFinal Prompt:\nSummarize the doc in 3 bullets."
        assert extract_refined_prompt(content) == "Summarize the doc in 3 bullets."

    def test_label_is_case_insensitive(self):
        content = "upgraded prompt - Be brief."
        assert extract_refined_prompt(content) == "- Be brief."

    def test_nothing_to_extract(self):
        """Plain prose and empty answers yield None."""
        assert extract_refined_prompt("Looks good as is.") is None
        assert extract_refined_prompt("") is None
        assert extract_refined_prompt(None) is None


class TestBuildUserMessage:
    def test_layout(self):
        assert build_user_message("Do X.", "Make it better.") == (
            "PROMPT TO REFINE:\nDo X.\n\nINSTRUCTIONS:\nMake it better."
        )

    def test_default_instructions(self):
        """Requests without instructions get the generic rewrite request."""
        request = RefineRequest(prompt="Do X.")
        assert request.instructions == DEFAULT_REFINE_INSTRUCTIONS
        assert request.instructions == (
            "Rewrite this prompt to be clearer, safer, and more actionable."
        )


class TestRefinePromptValidation:
    """Requests rejected before any provider is called."""

    def setup_method(self):
        self.calls = []

    def fake_llm(self, monkeypatch, answer="ok"):
        async def _fake(request, provider, api_key):
            self.calls.append((provider, api_key))
            return answer

        monkeypatch.setattr(client, "_call_llm", _fake)

    def test_blank_prompt(self, monkeypatch):
        self.fake_llm(monkeypatch)
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="  \n", api_key="k")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Prompt is required for refinement."
        assert self.calls == []

    def test_unsupported_provider(self, monkeypatch):
        self.fake_llm(monkeypatch)
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="acme", api_key="k")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Unsupported provider: acme"

    def test_missing_api_key(self, monkeypatch):
        """No key in the request or the environment is a 400."""
        self.fake_llm(monkeypatch)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="openai")
        assert exc_info.value.status_code == 400
        assert self.calls == []

    def test_key_checked_before_provider(self, monkeypatch):
        """An unknown provider without a key reports the missing key."""
        self.fake_llm(monkeypatch)
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="acme")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "API key is required to call the selected provider."


class TestRefinePromptSuccess:
    """Successful calls with the dispatch layer faked."""

    def setup_method(self):
        self.calls = []

    def install(self, monkeypatch, answer):
        async def _fake(request, provider, api_key):
            self.calls.append((provider, api_key))
            return answer

        monkeypatch.setattr(client, "_call_llm", _fake)

    def test_analysis_and_refined_prompt(self, monkeypatch):
        self.install(monkeypatch, "Critique...\n\nFinal Prompt: Be concise.")
        response = _refine(prompt="Do X.", provider="openai", api_key="sk-test")
        assert response.analysis.startswith("Critique")
        assert response.refined_prompt == "Be concise."
        assert response.error is None
        assert self.calls == [("openai", "sk-test")]

    def test_provider_name_case_insensitive(self, monkeypatch):
        self.install(monkeypatch, "No changes needed.")
        response = _refine(prompt="Do X.", provider="Anthropic", api_key="k")
        assert self.calls == [("anthropic", "k")]
        assert response.refined_prompt is None

    def test_key_read_from_environment(self, monkeypatch):
        """Without a request key the provider's env var is used."""
        self.install(monkeypatch, "ok")
        monkeypatch.setenv("OPENROUTER_API_KEY", "or-env")
        _refine(prompt="Do X.", provider="openrouter")
        assert self.calls == [("openrouter", "or-env")]


class TestOpenAIClient:
    """The OpenAI SDK layer, shared by the openai and openrouter providers."""

    def test_openai_request_shape(self, fake_openai):
        """System and user messages, model and temperature are forwarded."""
        response = _refine(
            prompt="Do X.",
            instructions="Tighten it.",
            provider="openai",
            model="gpt-4o-mini",
            temperature=0.2,
            api_key="sk-test",
        )
        [instance] = fake_openai.instances
        assert instance.kwargs == {"api_key": "sk-test"}
        assert instance.params == {
            "model": "gpt-4o-mini",
            "temperature": 0.2,
            "messages": [
                {"role": "system", "content": SYSTEM_MESSAGE},
                {"role": "user", "content": "PROMPT TO REFINE:\nDo X.\n\nINSTRUCTIONS:\nTighten it."},
            ],
        }
        assert response.analysis == "Final Prompt: Be brief."
        assert response.refined_prompt == "Be brief."

    def test_max_tokens_forwarded_when_set(self, fake_openai):
        _refine(prompt="Do X.", provider="openai", api_key="k", max_tokens=256)
        assert fake_openai.instances[0].params["max_tokens"] == 256

    def test_openrouter_uses_base_url_and_headers(self, fake_openai):
        _refine(prompt="Do X.", provider="openrouter", api_key="or-key")
        [instance] = fake_openai.instances
        assert instance.kwargs == {
            "api_key": "or-key",
            "base_url": OPENROUTER_BASE_URL,
            "default_headers": OPENROUTER_HEADERS,
        }

    def test_client_closed_after_call(self, fake_openai):
        _refine(prompt="Do X.", provider="openai", api_key="k")
        assert fake_openai.instances[0].closed

    def test_empty_choices_give_empty_analysis(self, fake_openai):
        fake_openai.choices = False
        response = _refine(prompt="Do X.", provider="openai", api_key="k")
        assert response.analysis == ""
        assert response.refined_prompt is None

    def test_status_error_keeps_status_code(self, fake_openai):
        fake_openai.error = _status_error(openai, 429, "Rate limit reached")
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="openai", api_key="k")
        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "Rate limit reached"
        assert fake_openai.instances[0].closed

    def test_connection_error_is_500(self, fake_openai):
        fake_openai.error = openai.APIConnectionError(
            request=_http_request("https://api.openai.com/v1/chat/completions")
        )
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="openai", api_key="k")
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == CONTACT_FAILURE


class TestAnthropicClient:
    """The Anthropic SDK layer."""

    def test_request_shape_and_default_max_tokens(self, fake_anthropic):
        """System prompt goes in system=, max_tokens defaults when unset."""
        fake_anthropic.blocks = [SimpleNamespace(type="text", text="ok")]
        _refine(
            prompt="Do X.",
            instructions="Tighten it.",
            provider="anthropic",
            model="claude-test",
            api_key="ak",
        )
        [instance] = fake_anthropic.instances
        assert instance.kwargs == {"api_key": "ak"}
        assert instance.params == {
            "model": "claude-test",
            "max_tokens": ANTHROPIC_DEFAULT_MAX_TOKENS,
            "temperature": 0.4,
            "system": SYSTEM_MESSAGE,
            "messages": [
                {"role": "user", "content": "PROMPT TO REFINE:\nDo X.\n\nINSTRUCTIONS:\nTighten it."},
            ],
        }
        assert instance.closed

    def test_max_tokens_forwarded(self, fake_anthropic):
        fake_anthropic.blocks = [SimpleNamespace(type="text", text="ok")]
        _refine(prompt="Do X.", provider="anthropic", api_key="ak", max_tokens=300)
        assert fake_anthropic.instances[0].params["max_tokens"] == 300

    def test_text_blocks_joined(self, fake_anthropic):
        """Only blocks carrying text are concatenated."""
        fake_anthropic.blocks = [
            SimpleNamespace(type="text", text="Critique. "),
            SimpleNamespace(type="tool_use", id="t1"),
            SimpleNamespace(type="text", text="Final Prompt: Be exact."),
        ]
        response = _refine(prompt="Do X.", provider="anthropic", api_key="ak")
        assert response.analysis == "Critique. Final Prompt: Be exact."
        assert response.refined_prompt == "Be exact."

    def test_status_error_keeps_status_code(self, fake_anthropic):
        fake_anthropic.error = _status_error(anthropic, 401, "invalid x-api-key")
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="anthropic", api_key="bad")
        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "invalid x-api-key"

    def test_connection_error_is_500(self, fake_anthropic):
        fake_anthropic.error = anthropic.APIConnectionError(
            request=_http_request("https://api.anthropic.com/v1/messages")
        )
        with pytest.raises(RefineError) as exc_info:
            _refine(prompt="Do X.", provider="anthropic", api_key="ak")
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == CONTACT_FAILURE
