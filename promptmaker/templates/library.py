"""Canned prompt templates.

A template is a partial prompt state. Loading one merges it over a fresh
default snapshot, so anything the template leaves out starts blank.
"""

from promptmaker.models.prompt_state import PromptState
from promptmaker.models.template import PromptTemplate, TemplateSummary
from promptmaker.state.normalizer import StateNormalizer


class TemplateNotFound(Exception):
    """Raised when a template id is not in the library."""


PROMPT_TEMPLATES: tuple[PromptTemplate, ...] = (
    PromptTemplate(
        id="product-launch-brief",
        title="Product Launch Brief",
        subtitle="Turn raw product notes into a launch narrative with positioning and risks.",
        category="Marketing",
        tags=["positioning", "go-to-market"],
        sections={
            "project_title": "Launch Narrative Builder",
            "core_objective": (
                "Transform the supplied product notes into a launch brief that explains "
                "who the product is for, the problem it solves, how it differs from "
                "alternatives, and the top risks to address before launch."
            ),
            "target_audience": (
                "Product marketing managers preparing an internal launch review; "
                "comfortable with positioning frameworks, short on time."
            ),
            "required_inputs": "Product notes, target segment, known competitors, launch date.",
            "desired_output": (
                "A one-page brief with sections: Summary, Audience, Positioning "
                "Statement, Differentiators (table), Risks & Mitigations, Open Questions."
            ),
            "success_criteria": "Every claim traces back to the supplied notes; no invented metrics.",
            "guardrails": (
                "Do not fabricate customer quotes, pricing or market-size figures. "
                "Flag any assumption explicitly as an assumption."
            ),
            "evaluation_strategy": (
                "Before answering, check each differentiator against the competitor "
                "list and remove any that a competitor also offers."
            ),
            "call_to_action": "Respond with the brief in markdown, then a list of open questions.",
            "tone_traits": ["Confident", "Plainspoken"],
            "style_guidelines": ["Use tables for comparisons", "Keep paragraphs under 80 words"],
            "constraints": ["Stay under 600 words"],
            "keywords": ["positioning statement", "differentiator"],
            "workflow": [
                {
                    "id": "launch-stage-1",
                    "title": "Extract facts",
                    "instruction": "List every concrete fact in the product notes.",
                    "expected_output": "Bullet list of facts with source line references.",
                },
                {
                    "id": "launch-stage-2",
                    "title": "Position",
                    "instruction": "Draft the positioning statement and differentiators.",
                    "expected_output": "Positioning statement plus differentiator table.",
                },
                {
                    "id": "launch-stage-3",
                    "title": "Stress test",
                    "instruction": "Identify launch risks and propose mitigations.",
                    "expected_output": "Risk table with owner suggestions.",
                },
            ],
            "variables": [
                {
                    "id": "launch-var-1",
                    "name": "PRODUCT_NOTES",
                    "description": "Raw notes from the product team.",
                },
                {
                    "id": "launch-var-2",
                    "name": "LAUNCH_DATE",
                    "description": "Planned public launch date.",
                    "example": "2025-03-01",
                },
            ],
        },
    ),
    PromptTemplate(
        id="code-review-assistant",
        title="Code Review Assistant",
        subtitle="Structured review of a diff with severity-ranked findings.",
        category="Engineering",
        tags=["code review", "quality"],
        sections={
            "core_objective": (
                "Review the supplied diff for correctness, security and maintainability "
                "issues and rank findings by severity so the author knows what to fix first."
            ),
            "target_audience": "The pull request author, a mid-level engineer familiar with the codebase.",
            "background_context": "The repository follows the team style guide; tests run in CI.",
            "required_inputs": "The unified diff and, optionally, the linked ticket description.",
            "desired_output": (
                "A findings table (severity, file, line, issue, suggested fix) followed "
                "by a short overall assessment."
            ),
            "guardrails": (
                "Only comment on code present in the diff. Never approve changes that "
                "disable tests or security checks."
            ),
            "evaluation_strategy": "Re-read each finding and drop any that is purely stylistic.",
            "tone_traits": ["Direct", "Constructive"],
            "constraints": ["No more than 15 findings", "Cite exact line numbers"],
            "workflow": [
                {
                    "id": "review-stage-1",
                    "title": "Understand intent",
                    "instruction": "Summarize what the change is trying to do.",
                    "expected_output": "Two-sentence summary.",
                },
                {
                    "id": "review-stage-2",
                    "title": "Inspect",
                    "instruction": "Walk the diff file by file and record issues.",
                    "expected_output": "Findings table.",
                },
            ],
            "variables": [
                {
                    "id": "review-var-1",
                    "name": "DIFF",
                    "description": "Unified diff under review.",
                },
            ],
        },
    ),
    PromptTemplate(
        id="research-synthesis",
        title="Research Synthesis",
        subtitle="Condense interview notes into themes with supporting evidence.",
        category="Research",
        tags=["ux research", "synthesis"],
        sections={
            "core_objective": (
                "Synthesize the supplied interview notes into recurring themes, each "
                "backed by direct evidence, and highlight contradictions between participants."
            ),
            "target_audience": "Product designers deciding what to prototype next.",
            "desired_output": "Themes ranked by frequency, each with two or three supporting quotes.",
            "success_criteria": "Each theme cites at least two distinct participants.",
            "guardrails": "Quote participants verbatim; never merge quotes from different people.",
            "style_guidelines": ["Lead with the strongest theme"],
            "keywords": ["theme", "evidence"],
        },
    ),
)


def list_templates() -> list[TemplateSummary]:
    """Summaries of every template in library order."""
    return [
        TemplateSummary(
            id=template.id,
            title=template.title,
            subtitle=template.subtitle,
            category=template.category,
            tags=template.tags,
        )
        for template in PROMPT_TEMPLATES
    ]


def get_template(template_id: str) -> PromptTemplate:
    """Look up a template by id.

    Raises:
        TemplateNotFound: if no template has this id.
    """
    for template in PROMPT_TEMPLATES:
        if template.id == template_id:
            return template
    raise TemplateNotFound(f"Template not found: {template_id}")


def load_template(
    template_id: str,
    normalizer: StateNormalizer | None = None,
) -> PromptState:
    """Build a snapshot from a template merged over a fresh default.

    Lists the template provides replace the default blank rows; lists it
    omits keep them.
    """
    normalizer = normalizer or StateNormalizer()
    template = get_template(template_id)
    return normalizer.merge_template(normalizer.create_default(), template.sections)
