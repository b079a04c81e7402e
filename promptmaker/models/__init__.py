"""Core data models for promptmaker."""

from promptmaker.models.prompt_state import (
    TAG_GROUP_KEYS,
    TAG_GROUPS,
    TEXT_FIELD_KEYS,
    TEXT_SECTIONS,
    PromptState,
    PromptVariable,
    SectionInfo,
    TagGroupKey,
    TextFieldKey,
    WorkflowStage,
)
from promptmaker.models.evaluation import (
    DimensionScore,
    EvaluationReport,
)
from promptmaker.models.template import (
    PromptTemplate,
    TemplateSummary,
)
from promptmaker.models.refine import (
    RefineRequest,
    RefineResponse,
)

__all__ = [
    # Prompt state
    "TAG_GROUP_KEYS",
    "TAG_GROUPS",
    "TEXT_FIELD_KEYS",
    "TEXT_SECTIONS",
    "PromptState",
    "PromptVariable",
    "SectionInfo",
    "TagGroupKey",
    "TextFieldKey",
    "WorkflowStage",
    # Evaluation
    "DimensionScore",
    "EvaluationReport",
    # Templates
    "PromptTemplate",
    "TemplateSummary",
    # Refinement proxy
    "RefineRequest",
    "RefineResponse",
]
