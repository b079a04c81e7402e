"""Tests for the state normalizer and id factories."""

import logging

import pytest
from pydantic import ValidationError

from promptmaker.models.prompt_state import PromptState, PromptVariable, WorkflowStage
from promptmaker.state.normalizer import (
    StateNormalizer,
    create_blank_variable,
    create_blank_workflow_stage,
    create_default,
    merge_template,
)
from promptmaker.utils.identifiers import SequentialIds, generate_entity_id


class TestIdFactories:
    """Test id generation."""

    def test_blank_variable_ids_are_unique(self):
        """N blank variables should carry N distinct ids."""
        ids = {create_blank_variable().id for _ in range(200)}
        assert len(ids) == 200

    def test_blank_stage_ids_are_unique(self):
        """N blank stages should carry N distinct ids."""
        ids = {create_blank_workflow_stage().id for _ in range(200)}
        assert len(ids) == 200

    def test_entity_id_is_uuid_string(self):
        """Default ids are UUID4 strings."""
        assert len(generate_entity_id()) == 36

    def test_sequential_ids_are_per_instance(self):
        """Each SequentialIds instance counts on its own."""
        first = SequentialIds("var")
        second = SequentialIds("var")
        assert [first(), first()] == ["var-1", "var-2"]
        assert second() == "var-1"


class TestCreateDefault:
    """Test default snapshot construction."""

    def setup_method(self):
        self.normalizer = StateNormalizer(SequentialIds("row"))

    def test_default_has_one_blank_row_each(self):
        """Editors always get one variable row and one workflow row."""
        state = self.normalizer.create_default()
        assert len(state.variables) == 1
        assert len(state.workflow) == 1
        assert state.variables[0] == PromptVariable(id="row-1")
        assert state.workflow[0] == WorkflowStage(id="row-2")

    def test_default_text_and_tags_empty(self):
        """All text fields and tag sets start empty."""
        state = self.normalizer.create_default()
        assert state.core_objective == ""
        assert state.call_to_action == ""
        assert state.constraints == ()

    def test_blank_variable_has_no_example(self):
        """A blank variable carries no example."""
        variable = self.normalizer.create_blank_variable()
        assert variable.name == ""
        assert variable.description == ""
        assert variable.example is None

    def test_module_default_uses_random_ids(self):
        """The module-level shortcut works without an injected factory."""
        state = create_default()
        assert state.variables[0].id != state.workflow[0].id


class TestMergeTemplate:
    """Test merging template fragments over a base snapshot."""

    def setup_method(self):
        self.normalizer = StateNormalizer(SequentialIds("base"))
        self.base = self.normalizer.create_default()

    def test_absent_fields_fall_back_to_base(self):
        """Fields missing from the partial keep their base value."""
        base = self.base.model_copy(update={"target_audience": "Analysts"})
        merged = merge_template(base, {"core_objective": "Write a memo."})
        assert merged.core_objective == "Write a memo."
        assert merged.target_audience == "Analysts"
        assert merged.variables == base.variables

    def test_none_values_fall_back_to_base(self):
        """A None value counts as absent."""
        merged = merge_template(self.base, {"core_objective": None, "keywords": None})
        assert merged == self.base

    def test_lists_replaced_wholesale(self):
        """List fields from the partial replace, never extend, the base."""
        base = self.base.model_copy(update={"keywords": ("alpha", "beta")})
        merged = merge_template(
            base,
            {
                "keywords": ["gamma"],
                "workflow": [{"id": "tpl-1", "title": "Plan"}],
            },
        )
        assert merged.keywords == ("gamma",)
        assert [s.id for s in merged.workflow] == ["tpl-1"]

    def test_ids_kept_as_given(self):
        """The merge never rewrites ids supplied by the template."""
        merged = merge_template(
            self.base,
            {"variables": [{"id": "tpl-var", "name": "TOPIC"}]},
        )
        assert merged.variables[0].id == "tpl-var"

    def test_base_not_modified(self):
        """Merging returns a new snapshot."""
        merge_template(self.base, {"guardrails": "No guessing."})
        assert self.base.guardrails == ""

    def test_unknown_keys_dropped_with_warning(self, caplog):
        """Keys outside the closed field set are logged and ignored."""
        with caplog.at_level(logging.WARNING):
            merged = merge_template(self.base, {"mood": "sunny", "guardrails": "Be safe."})
        assert merged.guardrails == "Be safe."
        assert "mood" in caplog.text

    def test_duplicate_template_ids_rejected(self):
        """A template that breaks id uniqueness fails validation."""
        with pytest.raises(ValidationError):
            merge_template(
                self.base,
                {"variables": [{"id": "dup"}, {"id": "dup"}]},
            )

    def test_result_is_prompt_state(self):
        """The merge always produces a full snapshot."""
        merged = self.normalizer.merge_template(PromptState(), {})
        assert merged == PromptState()
