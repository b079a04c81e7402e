"""Prompt state models for the authoring layer.

A PromptState is one immutable snapshot of everything the user has entered.
Edits never mutate a snapshot; they produce a new one (see
promptmaker.state.commands).
"""

from dataclasses import dataclass
from typing import Literal, Self, get_args

from pydantic import BaseModel, field_validator, model_validator

from promptmaker.utils.text import is_blank

TextFieldKey = Literal[
    "project_title",
    "core_objective",
    "target_audience",
    "background_context",
    "required_inputs",
    "desired_output",
    "success_criteria",
    "guardrails",
    "creative_angles",
    "reference_material",
    "evaluation_strategy",
    "model_preferences",
    "call_to_action",
]

TagGroupKey = Literal["tone_traits", "style_guidelines", "constraints", "keywords"]

TEXT_FIELD_KEYS: tuple[str, ...] = get_args(TextFieldKey)
TAG_GROUP_KEYS: tuple[str, ...] = get_args(TagGroupKey)


@dataclass(frozen=True)
class SectionInfo:
    """Display metadata for one field of the prompt state."""

    key: str
    title: str
    helper: str


# declaration order is the order sections are compiled and evaluated in
TEXT_SECTIONS: tuple[SectionInfo, ...] = (
    SectionInfo(
        "project_title",
        "Project Codename",
        "Optional naming to make the prompt memorable.",
    ),
    SectionInfo(
        "core_objective",
        "Core Objective",
        "Give context, stakes, and boundaries. The model should know what success looks like.",
    ),
    SectionInfo(
        "target_audience",
        "Target Audience / Persona",
        "Helps the model tailor tone, reading level, and references.",
    ),
    SectionInfo(
        "background_context",
        "Background Context",
        "Provide only verified facts. Flag assumptions inline.",
    ),
    SectionInfo(
        "required_inputs",
        "Required Inputs",
        "Make it explicit so the model can validate presence of required inputs.",
    ),
    SectionInfo(
        "desired_output",
        "Desired Deliverable",
        "Pair structure with rationale. Models love specificity.",
    ),
    SectionInfo(
        "success_criteria",
        "Success Criteria",
        "This powers automated QA and self-evaluation.",
    ),
    SectionInfo(
        "guardrails",
        "Guardrails & Refusal Policy",
        "Explicit guardrails drastically reduce hallucinations and policy drift.",
    ),
    SectionInfo(
        "creative_angles",
        "Creative Directions",
        "Encourage the model to produce divergent options.",
    ),
    SectionInfo(
        "reference_material",
        "Reference Material",
        "Grounding references reduces hallucinations and lifts specificity.",
    ),
    SectionInfo(
        "evaluation_strategy",
        "Self-Evaluation Strategy",
        "Tell the model to find its own mistakes before handing off.",
    ),
    SectionInfo(
        "model_preferences",
        "Model / Tooling Preferences",
        "Useful when orchestrating across multiple systems.",
    ),
    SectionInfo(
        "call_to_action",
        "Respond With",
        "Makes downstream automation simpler.",
    ),
)

TAG_GROUPS: tuple[SectionInfo, ...] = (
    SectionInfo(
        "tone_traits",
        "Tone DNA",
        "Select the emotional stance and voice the model should adopt.",
    ),
    SectionInfo(
        "style_guidelines",
        "Style Rules",
        "Structure, pacing, and formatting requirements.",
    ),
    SectionInfo(
        "constraints",
        "Operational Constraints",
        "Boundary conditions that keep the model on-rails.",
    ),
    SectionInfo(
        "keywords",
        "Linguistic Anchors",
        "Terms, jargon, or frameworks to incorporate.",
    ),
)


class PromptVariable(BaseModel):
    """A reusable placeholder the prompt's consumers fill in."""

    model_config = {"extra": "forbid", "frozen": True}

    id: str
    name: str = ""  # UPPER_SNAKE, normalized on every edit
    description: str = ""
    example: str | None = None


class WorkflowStage(BaseModel):
    """One step of the task decomposition handed to the model."""

    model_config = {"extra": "forbid", "frozen": True}

    id: str
    title: str = ""
    instruction: str = ""
    expected_output: str = ""

    def is_meaningful(self) -> bool:
        """A stage counts once it has a title or an instruction."""
        return not (is_blank(self.title) and is_blank(self.instruction))


class PromptState(BaseModel):
    """A complete snapshot of the prompt being authored.

    The field set is closed. Sequences are tuples so a published snapshot
    cannot be changed in place; build a new one with model_copy(update=...)
    or model_validate instead.
    """

    model_config = {"extra": "forbid", "frozen": True, "protected_namespaces": ()}

    # free text, in compile order
    project_title: str = ""
    core_objective: str = ""
    target_audience: str = ""
    background_context: str = ""
    required_inputs: str = ""
    desired_output: str = ""
    success_criteria: str = ""
    guardrails: str = ""
    creative_angles: str = ""
    reference_material: str = ""
    evaluation_strategy: str = ""
    model_preferences: str = ""
    call_to_action: str = ""

    # tag sets
    tone_traits: tuple[str, ...] = ()
    style_guidelines: tuple[str, ...] = ()
    constraints: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()

    variables: tuple[PromptVariable, ...] = ()
    workflow: tuple[WorkflowStage, ...] = ()

    @field_validator("tone_traits", "style_guidelines", "constraints", "keywords")
    @classmethod
    def clean_tags(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Trim tags, drop blank ones and keep the first occurrence of each."""
        return tuple(dict.fromkeys(tag.strip() for tag in value if not is_blank(tag)))

    @model_validator(mode="after")
    def validate_unique_ids(self) -> Self:
        """Variable ids and workflow stage ids must be unique per sequence."""
        self._check_unique("variables", [v.id for v in self.variables])
        self._check_unique("workflow", [s.id for s in self.workflow])
        return self

    @staticmethod
    def _check_unique(sequence: str, ids: list[str]) -> None:
        seen: set[str] = set()
        for entity_id in ids:
            if entity_id in seen:
                raise ValueError(f"{sequence} contains duplicate id '{entity_id}'")
            seen.add(entity_id)

    def text(self, key: str) -> str:
        """Return the free-text field named key."""
        return getattr(self, key)

    def tags(self, key: str) -> tuple[str, ...]:
        """Return the non-blank tags of the set named key."""
        return tuple(tag for tag in getattr(self, key) if not is_blank(tag))

    def meaningful_stages(self) -> list[WorkflowStage]:
        """Workflow stages with a title or instruction, in array order."""
        return [stage for stage in self.workflow if stage.is_meaningful()]

    def named_variables(self) -> list[PromptVariable]:
        """Variables with a non-blank name, in array order."""
        return [variable for variable in self.variables if not is_blank(variable.name)]
