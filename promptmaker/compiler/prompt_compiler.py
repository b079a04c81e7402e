"""Compile a prompt state into the canonical prompt document.

The output is the exact text sent to a model, copied to the clipboard, or
exported. It depends on nothing but the snapshot: the same snapshot always
compiles to the same string.

Layout (sections separated by one blank line):

    ## Core Objective
    <text>

    ## Tone DNA
    - <tag>

    ## Workflow
    1. <title>
       Instruction: <text>
       Expected output: <text>

    ## Variables
    - NAME — description (example: value)
"""

from promptmaker.models.prompt_state import (
    TAG_GROUPS,
    TEXT_SECTIONS,
    PromptState,
    PromptVariable,
    WorkflowStage,
)
from promptmaker.utils.text import is_blank

SECTION_SEPARATOR = "\n\n"
UNTITLED_STAGE = "Untitled stage"


def _heading(title: str) -> str:
    return f"## {title}"


def _text_sections(state: PromptState) -> list[str]:
    sections = []
    for section in TEXT_SECTIONS:
        content = state.text(section.key)
        if is_blank(content):
            continue
        sections.append(f"{_heading(section.title)}\n{content.strip()}")
    return sections


def _tag_sections(state: PromptState) -> list[str]:
    sections = []
    for group in TAG_GROUPS:
        tags = state.tags(group.key)
        if not tags:
            continue
        bullets = "\n".join(f"- {tag.strip()}" for tag in tags)
        sections.append(f"{_heading(group.title)}\n{bullets}")
    return sections


def _format_stage(number: int, stage: WorkflowStage) -> str:
    title = stage.title.strip() or UNTITLED_STAGE
    lines = [f"{number}. {title}"]
    if not is_blank(stage.instruction):
        lines.append(f"   Instruction: {stage.instruction.strip()}")
    if not is_blank(stage.expected_output):
        lines.append(f"   Expected output: {stage.expected_output.strip()}")
    return "\n".join(lines)


def _workflow_section(state: PromptState) -> str | None:
    # numbering follows emitted steps, so skipped blank stages leave no gaps
    stages = state.meaningful_stages()
    if not stages:
        return None
    steps = [_format_stage(number, stage) for number, stage in enumerate(stages, start=1)]
    return f"{_heading('Workflow')}\n" + "\n".join(steps)


def _format_variable(variable: PromptVariable) -> str:
    line = f"- {variable.name.strip()}"
    if not is_blank(variable.description):
        line += f" — {variable.description.strip()}"
    if not is_blank(variable.example):
        line += f" (example: {variable.example.strip()})"
    return line


def _variables_section(state: PromptState) -> str | None:
    variables = state.named_variables()
    if not variables:
        return None
    lines = "\n".join(_format_variable(variable) for variable in variables)
    return f"{_heading('Variables')}\n{lines}"


def compile_prompt(state: PromptState) -> str:
    """Compile a snapshot into one prompt document.

    Blank text fields, empty tag sets, blank workflow stages and unnamed
    variables are left out entirely; a snapshot with nothing filled in
    compiles to an empty string.

    Args:
        state: The snapshot to compile.

    Returns:
        The prompt text, sections joined by a single blank line in the order
        text fields, tag groups, workflow, variables.
    """
    sections = _text_sections(state) + _tag_sections(state)

    workflow = _workflow_section(state)
    if workflow:
        sections.append(workflow)

    variables = _variables_section(state)
    if variables:
        sections.append(variables)

    return SECTION_SEPARATOR.join(sections)
