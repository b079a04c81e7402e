"""Quality evaluator: state snapshot -> scored report with tips."""

from promptmaker.evaluation.evaluator import evaluate_prompt
from promptmaker.evaluation.rubric import DIMENSIONS, MAX_SCORE, RUBRIC_VERSION

__all__ = [
    "DIMENSIONS",
    "MAX_SCORE",
    "RUBRIC_VERSION",
    "evaluate_prompt",
]
