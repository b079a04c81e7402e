"""Edit commands and the pure transition function that applies them.

Each command is a small pydantic model tagged by its `type` literal, so a
command list can be parsed straight from JSON:

    command = CommandAdapter.validate_python({"type": "add_tag", "key": "keywords", "value": "RACI"})
    state = apply_command(state, command)
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from promptmaker.models.prompt_state import (
    PromptState,
    TagGroupKey,
    TextFieldKey,
)
from promptmaker.state.normalizer import StateNormalizer
from promptmaker.utils.text import normalize_variable_name


class UpdateField(BaseModel):
    type: Literal["update_field"] = "update_field"
    key: TextFieldKey
    value: str


class AddTag(BaseModel):
    type: Literal["add_tag"] = "add_tag"
    key: TagGroupKey
    value: str


class RemoveTag(BaseModel):
    type: Literal["remove_tag"] = "remove_tag"
    key: TagGroupKey
    value: str


class SetTags(BaseModel):
    type: Literal["set_tags"] = "set_tags"
    key: TagGroupKey
    values: list[str]


class Hydrate(BaseModel):
    """Replace the whole snapshot (template load, workspace reset)."""

    type: Literal["hydrate"] = "hydrate"
    payload: PromptState


class AddVariable(BaseModel):
    type: Literal["add_variable"] = "add_variable"


class RemoveVariable(BaseModel):
    type: Literal["remove_variable"] = "remove_variable"
    id: str


class UpdateVariable(BaseModel):
    type: Literal["update_variable"] = "update_variable"
    id: str
    field: Literal["name", "description", "example"]
    value: str


class AddWorkflowStage(BaseModel):
    type: Literal["add_workflow_stage"] = "add_workflow_stage"


class RemoveWorkflowStage(BaseModel):
    type: Literal["remove_workflow_stage"] = "remove_workflow_stage"
    id: str


class UpdateWorkflowStage(BaseModel):
    type: Literal["update_workflow_stage"] = "update_workflow_stage"
    id: str
    field: Literal["title", "instruction", "expected_output"]
    value: str


PromptCommand = Annotated[
    UpdateField
    | AddTag
    | RemoveTag
    | SetTags
    | Hydrate
    | AddVariable
    | RemoveVariable
    | UpdateVariable
    | AddWorkflowStage
    | RemoveWorkflowStage
    | UpdateWorkflowStage,
    Field(discriminator="type"),
]

CommandAdapter = TypeAdapter(PromptCommand)


def apply_command(
    state: PromptState,
    command: PromptCommand,
    normalizer: StateNormalizer | None = None,
) -> PromptState:
    """Return the snapshot that results from applying command to state.

    state is never modified. Commands naming an id that does not exist leave
    the state unchanged, and the last variable / workflow stage cannot be
    removed.

    Args:
        state: Current snapshot.
        command: Any PromptCommand.
        normalizer: Source of new rows for add_variable / add_workflow_stage.
            Defaults to a StateNormalizer with random UUID ids.
    """
    normalizer = normalizer or StateNormalizer()

    if isinstance(command, UpdateField):
        return state.model_copy(update={command.key: command.value})

    if isinstance(command, AddTag):
        tag = command.value.strip()
        existing = state.tags(command.key)
        if not tag or tag in existing:
            return state
        return state.model_copy(update={command.key: existing + (tag,)})

    if isinstance(command, RemoveTag):
        tag = command.value.strip()
        remaining = tuple(t for t in state.tags(command.key) if t != tag)
        return state.model_copy(update={command.key: remaining})

    if isinstance(command, SetTags):
        # revalidate so blank and repeated tags are dropped
        return PromptState.model_validate({**dict(state), command.key: tuple(command.values)})

    if isinstance(command, Hydrate):
        return command.payload

    if isinstance(command, AddVariable):
        variables = state.variables + (normalizer.create_blank_variable(),)
        return state.model_copy(update={"variables": variables})

    if isinstance(command, RemoveVariable):
        if len(state.variables) <= 1:
            return state
        variables = tuple(v for v in state.variables if v.id != command.id)
        return state.model_copy(update={"variables": variables})

    if isinstance(command, UpdateVariable):
        value = command.value
        if command.field == "name":
            value = normalize_variable_name(value)
        variables = tuple(
            v.model_copy(update={command.field: value}) if v.id == command.id else v
            for v in state.variables
        )
        return state.model_copy(update={"variables": variables})

    if isinstance(command, AddWorkflowStage):
        workflow = state.workflow + (normalizer.create_blank_workflow_stage(),)
        return state.model_copy(update={"workflow": workflow})

    if isinstance(command, RemoveWorkflowStage):
        if len(state.workflow) <= 1:
            return state
        workflow = tuple(s for s in state.workflow if s.id != command.id)
        return state.model_copy(update={"workflow": workflow})

    if isinstance(command, UpdateWorkflowStage):
        workflow = tuple(
            s.model_copy(update={command.field: command.value}) if s.id == command.id else s
            for s in state.workflow
        )
        return state.model_copy(update={"workflow": workflow})

    raise TypeError(f"Unsupported command: {type(command).__name__}")
