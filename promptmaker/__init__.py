"""Prompt Maker - structured prompt authoring, compilation and quality scoring."""

from promptmaker.models.prompt_state import (
    PromptState,
    PromptVariable,
    WorkflowStage,
)
from promptmaker.models.evaluation import (
    DimensionScore,
    EvaluationReport,
)
from promptmaker.models.refine import (
    RefineRequest,
    RefineResponse,
)
from promptmaker.state import (
    PromptCommand,
    StateNormalizer,
    apply_command,
    create_default,
    merge_template,
)
from promptmaker.compiler import compile_prompt
from promptmaker.evaluation import evaluate_prompt
from promptmaker.templates import list_templates, load_template

__all__ = [
    # Prompt state
    "PromptState",
    "PromptVariable",
    "WorkflowStage",
    # Evaluation
    "DimensionScore",
    "EvaluationReport",
    # Refinement proxy
    "RefineRequest",
    "RefineResponse",
    # State construction and edits
    "PromptCommand",
    "StateNormalizer",
    "apply_command",
    "create_default",
    "merge_template",
    # High-level APIs
    "compile_prompt",
    "evaluate_prompt",
    "list_templates",
    "load_template",
]
