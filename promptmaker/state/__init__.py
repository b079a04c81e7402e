"""Snapshot construction and edit transitions."""

from promptmaker.state.normalizer import (
    StateNormalizer,
    create_blank_variable,
    create_blank_workflow_stage,
    create_default,
    merge_template,
)
from promptmaker.state.commands import (
    AddTag,
    AddVariable,
    AddWorkflowStage,
    CommandAdapter,
    Hydrate,
    PromptCommand,
    RemoveTag,
    RemoveVariable,
    RemoveWorkflowStage,
    SetTags,
    UpdateField,
    UpdateVariable,
    UpdateWorkflowStage,
    apply_command,
)

__all__ = [
    # normalizer
    "StateNormalizer",
    "create_blank_variable",
    "create_blank_workflow_stage",
    "create_default",
    "merge_template",
    # commands
    "AddTag",
    "AddVariable",
    "AddWorkflowStage",
    "CommandAdapter",
    "Hydrate",
    "PromptCommand",
    "RemoveTag",
    "RemoveVariable",
    "RemoveWorkflowStage",
    "SetTags",
    "UpdateField",
    "UpdateVariable",
    "UpdateWorkflowStage",
    "apply_command",
]
