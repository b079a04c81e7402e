"""Evaluation report models produced by the quality evaluator."""

from pydantic import BaseModel


class DimensionScore(BaseModel):
    """Score of one rubric dimension."""

    model_config = {"extra": "forbid", "frozen": True}

    title: str
    score: int
    max_score: int


class EvaluationReport(BaseModel):
    """Structured quality report for one prompt state.

    Rendered by clients as a score badge, a breakdown list, a missing-section
    checklist, and two tip lists.
    """

    model_config = {"extra": "forbid", "frozen": True}

    total_score: int
    max_score: int
    summary: str
    breakdown: list[DimensionScore]
    missing_sections: list[str]  # dimension titles, declaration order
    impact_tips: list[str]  # worst dimension first
    quick_wins: list[str]  # smallest gap first
    rubric_version: str
