"""The quality rubric: dimensions, criteria, weights, thresholds and tip wording.

Everything that decides a score lives in this module. Any change to a weight,
threshold or tip must bump RUBRIC_VERSION so stored reports stay comparable.

Each dimension is a list of criteria worth integer points; a dimension's score
is the sum of the points of the criteria the state meets. The first criterion
of every dimension is its presence check: when it fails the dimension is
reported as a missing section. Points across all dimensions add up to
MAX_SCORE.

Checks only count content that is present, so filling in a blank field or
row never lowers a score.
"""

from dataclasses import dataclass
from typing import Callable

from promptmaker.models.prompt_state import PromptState
from promptmaker.utils.text import is_blank

RUBRIC_VERSION = "1.1.0"

MAX_SCORE = 100

# a dimension below this share of its max is a candidate for impact tips,
# at or above it (but not full) it is a candidate for quick wins
IMPACT_RATIO = 0.6
MAX_IMPACT_TIPS = 4
MAX_QUICK_WINS = 3

# character thresholds, measured on trimmed text
OBJECTIVE_SPECIFIC_CHARS = 80
OBJECTIVE_DETAILED_CHARS = 160
AUDIENCE_DETAILED_CHARS = 60
DELIVERABLE_DETAILED_CHARS = 80
GUARDRAILS_DETAILED_CHARS = 60
EVALUATION_DETAILED_CHARS = 80

# count thresholds
CONSTRAINTS_THOROUGH_COUNT = 3
WORKFLOW_THOROUGH_STAGES = 3

# (minimum total score, label), highest first
SUMMARY_BANDS: tuple[tuple[int, str], ...] = (
    (85, "Production-ready prompt with clear scope and built-in self-checks."),
    (65, "Solid foundation. A few targeted upgrades will make it production-ready."),
    (40, "Taking shape. Fill the flagged gaps before relying on it."),
    (1, "Early draft. Key sections are still missing."),
    (0, "Empty prompt. Start with the core objective."),
)

Check = Callable[[PromptState], bool]


@dataclass(frozen=True)
class Criterion:
    """One scored heuristic inside a dimension."""

    label: str
    points: int
    check: Check
    tip: str  # shown when the criterion is not met


@dataclass(frozen=True)
class Dimension:
    """A scored axis of prompt quality."""

    title: str
    criteria: tuple[Criterion, ...]

    @property
    def max_score(self) -> int:
        return sum(criterion.points for criterion in self.criteria)


# --- check builders ---


def text_present(key: str) -> Check:
    return lambda state: not is_blank(state.text(key))


def any_text_present(*keys: str) -> Check:
    return lambda state: any(not is_blank(state.text(key)) for key in keys)


def text_at_least(key: str, chars: int) -> Check:
    return lambda state: len(state.text(key).strip()) >= chars


def tags_at_least(key: str, count: int) -> Check:
    return lambda state: len(state.tags(key)) >= count


def stages_at_least(count: int) -> Check:
    return lambda state: len(state.meaningful_stages()) >= count


def stage_outputs_at_least(count: int) -> Check:
    return lambda state: sum(
        1 for s in state.meaningful_stages() if not is_blank(s.expected_output)
    ) >= count


def variables_at_least(count: int) -> Check:
    return lambda state: len(state.named_variables()) >= count


def described_variables_at_least(count: int) -> Check:
    return lambda state: sum(
        1 for v in state.named_variables() if not is_blank(v.description)
    ) >= count


# --- the rubric ---


DIMENSIONS: tuple[Dimension, ...] = (
    Dimension(
        "Clarity of Objective",
        (
            Criterion(
                "objective present",
                10,
                text_present("core_objective"),
                "Define the core objective: the problem, the transformation you want, "
                "and what success looks like.",
            ),
            Criterion(
                "objective specific",
                6,
                text_at_least("core_objective", OBJECTIVE_SPECIFIC_CHARS),
                "Expand the core objective with stakes and boundaries so the model "
                "knows what is in and out of scope.",
            ),
            Criterion(
                "objective detailed",
                4,
                text_at_least("core_objective", OBJECTIVE_DETAILED_CHARS),
                "Add the why behind the objective (business context, downstream use) "
                "to remove the remaining ambiguity.",
            ),
        ),
    ),
    Dimension(
        "Audience Definition",
        (
            Criterion(
                "audience present",
                6,
                text_present("target_audience"),
                "Describe the target audience: their expertise and what motivates "
                "or worries them.",
            ),
            Criterion(
                "audience detailed",
                4,
                text_at_least("target_audience", AUDIENCE_DETAILED_CHARS),
                "Flesh out the persona with reading level and vocabulary so tone "
                "and references land.",
            ),
        ),
    ),
    Dimension(
        "Context & Grounding",
        (
            Criterion(
                "context present",
                4,
                any_text_present("background_context", "required_inputs", "reference_material"),
                "Add background context: systems involved, known constraints and "
                "prior work, with assumptions flagged.",
            ),
            Criterion(
                "required inputs present",
                3,
                text_present("required_inputs"),
                "List the required inputs so the model can check they are present "
                "before it starts.",
            ),
            Criterion(
                "reference material present",
                3,
                text_present("reference_material"),
                "Attach reference material to ground the answer, and say why each "
                "item matters.",
            ),
        ),
    ),
    Dimension(
        "Output Specification",
        (
            Criterion(
                "deliverable present",
                6,
                text_present("desired_output"),
                "Describe the desired deliverable, including its structure and length.",
            ),
            Criterion(
                "deliverable detailed",
                3,
                text_at_least("desired_output", DELIVERABLE_DETAILED_CHARS),
                "Spell out the deliverable's sections, tables or decision frameworks "
                "to cut guesswork.",
            ),
            Criterion(
                "success criteria present",
                4,
                text_present("success_criteria"),
                "Write success criteria or acceptance tests that define what good "
                "looks like.",
            ),
            Criterion(
                "response format present",
                2,
                text_present("call_to_action"),
                "Add a 'Respond With' instruction so the final answer has a "
                "predictable shape.",
            ),
        ),
    ),
    Dimension(
        "Guardrails Coverage",
        (
            Criterion(
                "guardrails present",
                7,
                text_present("guardrails"),
                "Add explicit guardrails: refusal conditions, compliance rules and "
                "biases to avoid.",
            ),
            Criterion(
                "guardrails detailed",
                3,
                text_at_least("guardrails", GUARDRAILS_DETAILED_CHARS),
                "Make the guardrails concrete by naming the situations that must "
                "trigger a refusal or escalation.",
            ),
            Criterion(
                "constraint present",
                3,
                tags_at_least("constraints", 1),
                "Add at least one operational constraint to keep the model on-rails.",
            ),
            Criterion(
                "constraints thorough",
                2,
                tags_at_least("constraints", CONSTRAINTS_THOROUGH_COUNT),
                "Round out the operational constraints (scope, length, sources) to "
                "close loopholes.",
            ),
        ),
    ),
    Dimension(
        "Self-Evaluation Rigor",
        (
            Criterion(
                "evaluation strategy present",
                6,
                text_present("evaluation_strategy"),
                "Add a self-evaluation strategy so the model critiques its draft "
                "before answering.",
            ),
            Criterion(
                "evaluation strategy detailed",
                4,
                text_at_least("evaluation_strategy", EVALUATION_DETAILED_CHARS),
                "Turn the self-evaluation strategy into a checklist or scoring "
                "rubric the model can apply.",
            ),
        ),
    ),
    Dimension(
        "Structural Completeness",
        (
            Criterion(
                "workflow present",
                4,
                stages_at_least(1),
                "Break the task into workflow stages so the model reasons step by step.",
            ),
            Criterion(
                "workflow thorough",
                3,
                stages_at_least(WORKFLOW_THOROUGH_STAGES),
                "Extend the workflow to at least three stages, e.g. analyse, draft "
                "and verify.",
            ),
            Criterion(
                "stage output stated",
                3,
                stage_outputs_at_least(1),
                "State the expected output of each workflow stage so every step can be checked.",
            ),
        ),
    ),
    Dimension(
        "Voice & Style",
        (
            Criterion(
                "tone present",
                2,
                tags_at_least("tone_traits", 1),
                "Pick tone traits to set the voice the model should adopt.",
            ),
            Criterion(
                "style rule present",
                2,
                tags_at_least("style_guidelines", 1),
                "Add a style rule covering structure, pacing or formatting.",
            ),
            Criterion(
                "anchor present",
                1,
                tags_at_least("keywords", 1),
                "Add linguistic anchors: terms or frameworks the answer must use.",
            ),
        ),
    ),
    Dimension(
        "Reusability",
        (
            Criterion(
                "variable named",
                3,
                variables_at_least(1),
                "Name at least one reusable variable so the prompt can be re-run "
                "with new context.",
            ),
            Criterion(
                "variable described",
                2,
                described_variables_at_least(1),
                "Describe your variables so others know what to supply.",
            ),
        ),
    ),
)
