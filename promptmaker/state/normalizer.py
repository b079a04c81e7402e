"""Builds complete, well-formed prompt state snapshots.

Every snapshot handed to the compiler or evaluator starts here: either as the
blank default or as a template merged over the default.
"""

import logging
from collections.abc import Mapping
from typing import Any

from promptmaker.models.prompt_state import PromptState, PromptVariable, WorkflowStage
from promptmaker.utils.identifiers import IdFactory, generate_entity_id

logger = logging.getLogger(__name__)


class StateNormalizer:
    """Create default snapshots and blank rows with an injected id factory."""

    def __init__(self, id_factory: IdFactory = generate_entity_id) -> None:
        """
        Args:
            id_factory: Callable returning a fresh id for each new variable
                or workflow stage.
        """
        self.id_factory = id_factory

    def create_blank_variable(self) -> PromptVariable:
        """A variable row with a new id and nothing filled in."""
        return PromptVariable(id=self.id_factory())

    def create_blank_workflow_stage(self) -> WorkflowStage:
        """A workflow stage with a new id and nothing filled in."""
        return WorkflowStage(id=self.id_factory())

    def create_default(self) -> PromptState:
        """An empty snapshot with one blank variable and one blank stage.

        Editors always have at least one row of each list to show.
        """
        return PromptState(
            variables=(self.create_blank_variable(),),
            workflow=(self.create_blank_workflow_stage(),),
        )

    def merge_template(
        self,
        base: PromptState,
        partial: Mapping[str, Any],
    ) -> PromptState:
        """Override base field-wise with the values present in partial.

        Keys missing from partial, or set to None, keep the base value. List
        fields are replaced as a whole, never spliced. Ids inside partial are
        used as given. Keys that are not PromptState fields are dropped.

        Raises:
            pydantic.ValidationError: if the merged snapshot breaks an
                invariant (e.g. duplicate variable ids in the template).
        """
        fields = PromptState.model_fields
        unknown = sorted(key for key in partial if key not in fields)
        if unknown:
            logger.warning("Ignoring unknown template field(s): %s", ", ".join(unknown))

        merged: dict[str, Any] = dict(base)
        for key, value in partial.items():
            if key in fields and value is not None:
                merged[key] = value

        return PromptState.model_validate(merged)


_default_normalizer = StateNormalizer()


def create_default() -> PromptState:
    """Module-level shortcut using random UUID ids."""
    return _default_normalizer.create_default()


def create_blank_variable() -> PromptVariable:
    """Module-level shortcut using random UUID ids."""
    return _default_normalizer.create_blank_variable()


def create_blank_workflow_stage() -> WorkflowStage:
    """Module-level shortcut using random UUID ids."""
    return _default_normalizer.create_blank_workflow_stage()


def merge_template(base: PromptState, partial: Mapping[str, Any]) -> PromptState:
    """Module-level shortcut for StateNormalizer.merge_template."""
    return _default_normalizer.merge_template(base, partial)
