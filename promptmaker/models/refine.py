"""Request/response models for the prompt refinement proxy.

The proxy takes a compiled prompt, forwards it to an LLM provider with
refinement instructions, and hands back the provider's analysis.
"""

import os

from pydantic import BaseModel

DEFAULT_REFINE_INSTRUCTIONS = "Rewrite this prompt to be clearer, safer, and more actionable."

DEFAULT_PROVIDER = os.getenv("REFINE_DEFAULT_PROVIDER", "openai")
DEFAULT_MODEL = os.getenv("REFINE_DEFAULT_MODEL", "gpt-4o-mini")


class RefineRequest(BaseModel):
    """Input to the refinement proxy (created by a client so input only)."""

    prompt: str
    instructions: str = DEFAULT_REFINE_INSTRUCTIONS
    provider: str = DEFAULT_PROVIDER  # "openai", "openrouter", "anthropic"
    model: str = DEFAULT_MODEL
    temperature: float = 0.4
    max_tokens: int | None = None
    api_key: str | None = None  # falls back to the provider's env var


class RefineResponse(BaseModel):
    """Output of the refinement proxy. Exactly one of error or analysis is set."""

    analysis: str | None = None
    refined_prompt: str | None = None  # extracted from analysis when present
    error: str | None = None
