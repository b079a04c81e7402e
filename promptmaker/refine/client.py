"""Prompt refinement proxy.

Forwards a compiled prompt to an LLM provider with refinement instructions
and extracts the refined prompt from the answer. Supports OpenAI, OpenRouter
(OpenAI-compatible endpoint) and Anthropic (Claude) models.

The caller's API key is used when given; otherwise the provider's environment
variable is read. A client is opened and closed per request so keys never
leak between callers.
"""

import logging
import os
import re

import anthropic
import openai

from promptmaker.models.refine import RefineRequest, RefineResponse

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
OPENROUTER_HEADERS = {
    "HTTP-Referer": "https://prompt-maker-ai",
    "X-Title": "Prompt Maker AI",
}

# provider -> environment variable holding its API key
PROVIDER_KEY_ENV = {
    "openai": "OPENAI_API_KEY",
    "openrouter": "OPENROUTER_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}

SYSTEM_MESSAGE = (
    "You are an elite prompt engineer. Critique the prompt, describe the upgrades, "
    "and then deliver a refined version that maximizes clarity, guardrails, and "
    "evaluation instructions."
)

# anthropic requires max_tokens
ANTHROPIC_DEFAULT_MAX_TOKENS = 4096

CONTACT_FAILURE = "Failed to contact the provider. Verify network and credentials."
NON_200_FAILURE = "Provider returned a non-200 response. Check credentials and quota."

_CODE_BLOCK = re.compile(r"```[a-zA-Z0-9_-]*\n([\s\S]*?)```")
_FINAL_PROMPT = re.compile(r"(?:Final Prompt|Upgraded Prompt)[:\s]*([\s\S]*)", re.IGNORECASE)


class RefineError(Exception):
    """Refinement failed; status_code is the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def extract_refined_prompt(content: str | None) -> str | None:
    """Pull the refined prompt out of the provider's answer.

    Checks, in order:
    1. the body of the first fenced code block
    2. everything after a "Final Prompt" / "Upgraded Prompt" label
    """
    if not content:
        return None

    code_block = _CODE_BLOCK.search(content)
    if code_block and code_block.group(1):
        return code_block.group(1).strip()

    final_prompt = _FINAL_PROMPT.search(content)
    if final_prompt and final_prompt.group(1):
        return final_prompt.group(1).strip()

    return None


def build_user_message(prompt: str, instructions: str) -> str:
    """User turn sent along with SYSTEM_MESSAGE."""
    return f"PROMPT TO REFINE:\n{prompt}\n\nINSTRUCTIONS:\n{instructions}"


def _resolve_api_key(provider: str, api_key: str | None) -> str:
    env_var = PROVIDER_KEY_ENV.get(provider)
    key = api_key or (os.getenv(env_var) if env_var else None)
    if not key:
        raise RefineError(
            "API key is required to call the selected provider.",
            status_code=400,
        )
    return key


async def _call_openai_compatible(request: RefineRequest, provider: str, api_key: str) -> str:
    """Call OpenAI (or OpenRouter through the same SDK) and return the text."""
    client_kwargs = {"api_key": api_key}
    if provider == "openrouter":
        client_kwargs["base_url"] = OPENROUTER_BASE_URL
        client_kwargs["default_headers"] = OPENROUTER_HEADERS

    params = {
        "model": request.model,
        "temperature": request.temperature,
        "messages": [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": build_user_message(request.prompt, request.instructions)},
        ],
    }
    if request.max_tokens:
        params["max_tokens"] = request.max_tokens

    async with openai.AsyncOpenAI(**client_kwargs) as client:
        try:
            response = await client.chat.completions.create(**params)
        except openai.APIStatusError as e:
            logger.warning("%s returned status %s: %s", provider, e.status_code, e.message)
            raise RefineError(e.message or NON_200_FAILURE, status_code=e.status_code) from e
        except openai.APIError as e:
            logger.error("Refinement call to %s failed: %s", provider, e)
            raise RefineError(CONTACT_FAILURE, status_code=500) from e

    if not response.choices:
        return ""
    return response.choices[0].message.content or ""


async def _call_anthropic(request: RefineRequest, api_key: str) -> str:
    """Call Anthropic and return the concatenated text blocks."""
    async with anthropic.AsyncAnthropic(api_key=api_key) as client:
        try:
            response = await client.messages.create(
                model=request.model,
                max_tokens=request.max_tokens or ANTHROPIC_DEFAULT_MAX_TOKENS,
                temperature=request.temperature,
                system=SYSTEM_MESSAGE,
                messages=[
                    {"role": "user", "content": build_user_message(request.prompt, request.instructions)},
                ],
            )
        except anthropic.APIStatusError as e:
            logger.warning("anthropic returned status %s: %s", e.status_code, e.message)
            raise RefineError(e.message or NON_200_FAILURE, status_code=e.status_code) from e
        except anthropic.APIError as e:
            logger.error("Refinement call to anthropic failed: %s", e)
            raise RefineError(CONTACT_FAILURE, status_code=500) from e

    return "".join(
        block.text for block in response.content
        if hasattr(block, "text")
    )


async def _call_llm(request: RefineRequest, provider: str, api_key: str) -> str:
    """Dispatch to the provider's SDK."""
    if provider == "anthropic":
        return await _call_anthropic(request, api_key)
    return await _call_openai_compatible(request, provider, api_key)


async def refine_prompt(request: RefineRequest) -> RefineResponse:
    """Send the prompt for refinement and return the provider's analysis.

    Checks run in order: prompt, API key, provider.

    Raises:
        RefineError: 400 for a blank prompt, a missing API key or an
            unsupported provider; the provider's status for upstream errors;
            500 when the provider cannot be reached.
    """
    if not request.prompt.strip():
        raise RefineError("Prompt is required for refinement.", status_code=400)

    provider = request.provider.lower()
    api_key = _resolve_api_key(provider, request.api_key)

    if provider not in PROVIDER_KEY_ENV:
        raise RefineError(f"Unsupported provider: {request.provider}", status_code=400)

    logger.info("Refining prompt with %s/%s", provider, request.model)
    content = await _call_llm(request, provider, api_key)

    return RefineResponse(
        analysis=content,
        refined_prompt=extract_refined_prompt(content),
    )
