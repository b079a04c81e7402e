"""Prompt template model for the template library."""

from typing import Any

from pydantic import BaseModel


class PromptTemplate(BaseModel):
    """A canned starting point for a new prompt.

    sections is a partial prompt state keyed by PromptState field names; it is
    merged over the defaults by StateNormalizer.merge_template.
    """

    model_config = {"extra": "forbid", "frozen": True}

    id: str  # e.g., "product-launch-brief"
    title: str
    subtitle: str
    category: str
    tags: list[str]
    sections: dict[str, Any]


class TemplateSummary(BaseModel):
    """Listing item for the template library (no section content)."""

    id: str
    title: str
    subtitle: str
    category: str
    tags: list[str]
