"""Refinement proxy: forward a compiled prompt to an LLM for critique."""

from promptmaker.refine.client import (
    RefineError,
    build_user_message,
    extract_refined_prompt,
    refine_prompt,
)

__all__ = [
    "RefineError",
    "build_user_message",
    "extract_refined_prompt",
    "refine_prompt",
]
