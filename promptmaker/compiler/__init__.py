"""Prompt compiler: state snapshot -> canonical prompt text."""

from promptmaker.compiler.prompt_compiler import compile_prompt

__all__ = ["compile_prompt"]
