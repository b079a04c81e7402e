"""Score a prompt state against the rubric and suggest improvements.

This is a fixed, auditable heuristic pass: presence and length checks over the
snapshot's fields, nothing model-backed. See rubric.py for the numbers.
"""

from dataclasses import dataclass

from promptmaker.evaluation.rubric import (
    DIMENSIONS,
    IMPACT_RATIO,
    MAX_IMPACT_TIPS,
    MAX_QUICK_WINS,
    MAX_SCORE,
    RUBRIC_VERSION,
    SUMMARY_BANDS,
    Criterion,
    Dimension,
)
from promptmaker.models.evaluation import DimensionScore, EvaluationReport
from promptmaker.models.prompt_state import PromptState


@dataclass
class DimensionResult:
    """How one dimension fared on a given state."""

    index: int  # position in DIMENSIONS
    dimension: Dimension
    met: list[bool]

    @property
    def score(self) -> int:
        return sum(c.points for c, ok in zip(self.dimension.criteria, self.met) if ok)

    @property
    def ratio(self) -> float:
        return self.score / self.dimension.max_score

    @property
    def gap(self) -> int:
        return self.dimension.max_score - self.score

    @property
    def present(self) -> bool:
        return self.met[0]

    def unmet(self) -> list[tuple[int, Criterion]]:
        return [
            (position, criterion)
            for position, (criterion, ok) in enumerate(zip(self.dimension.criteria, self.met))
            if not ok
        ]


def _score_dimensions(state: PromptState) -> list[DimensionResult]:
    return [
        DimensionResult(
            index=index,
            dimension=dimension,
            met=[criterion.check(state) for criterion in dimension.criteria],
        )
        for index, dimension in enumerate(DIMENSIONS)
    ]


def _impact_tips(results: list[DimensionResult]) -> list[str]:
    """First unmet criterion of each weak dimension, lowest score first."""
    weak = [r for r in results if r.ratio < IMPACT_RATIO]
    # sorted() is stable, so equal scores keep declaration order
    weak = sorted(weak, key=lambda r: r.score)
    return [r.unmet()[0][1].tip for r in weak[:MAX_IMPACT_TIPS]]


def _quick_wins(
    results: list[DimensionResult],
    total_score: int,
    impact_tips: list[str],
) -> list[str]:
    """Small omissions on dimensions that are already adequate.

    Ordered by how close the dimension is to full marks, then by the points
    the fix is worth. If no adequate dimension has an omission but the prompt
    can still improve, fall back to the cheapest unmet criteria that are not
    already listed as impact tips.
    """
    candidates = [
        (r.gap, criterion.points, r.index, position, criterion.tip)
        for r in results
        if IMPACT_RATIO <= r.ratio < 1
        for position, criterion in r.unmet()
    ]
    if not candidates and total_score < MAX_SCORE:
        candidates = [
            (0, criterion.points, r.index, position, criterion.tip)
            for r in results
            for position, criterion in r.unmet()
            if criterion.tip not in impact_tips
        ]
    candidates.sort(key=lambda c: c[:4])
    return [tip for *_, tip in candidates[:MAX_QUICK_WINS]]


def _summary(total_score: int, results: list[DimensionResult], missing: int) -> str:
    label = next(text for floor, text in SUMMARY_BANDS if total_score >= floor)
    complete = sum(1 for r in results if r.gap == 0)
    return (
        f"{label} {complete} of {len(results)} dimensions complete; "
        f"{missing} missing section{'' if missing == 1 else 's'}."
    )


def evaluate_prompt(state: PromptState) -> EvaluationReport:
    """Evaluate a snapshot against the rubric.

    Args:
        state: The snapshot to evaluate.

    Returns:
        EvaluationReport with the total and per-dimension scores, the titles
        of dimensions whose presence check fails (declaration order), impact
        tips for the weakest dimensions and quick wins for nearly complete
        ones.
    """
    results = _score_dimensions(state)

    total_score = max(0, min(MAX_SCORE, sum(r.score for r in results)))
    missing_sections = [r.dimension.title for r in results if not r.present]
    impact_tips = _impact_tips(results)
    quick_wins = _quick_wins(results, total_score, impact_tips)

    return EvaluationReport(
        total_score=total_score,
        max_score=MAX_SCORE,
        summary=_summary(total_score, results, len(missing_sections)),
        breakdown=[
            DimensionScore(
                title=r.dimension.title,
                score=r.score,
                max_score=r.dimension.max_score,
            )
            for r in results
        ],
        missing_sections=missing_sections,
        impact_tips=impact_tips,
        quick_wins=quick_wins,
        rubric_version=RUBRIC_VERSION,
    )
