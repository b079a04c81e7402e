"""API routes for the template library and editor metadata."""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from promptmaker.models.prompt_state import TAG_GROUPS, TEXT_SECTIONS
from promptmaker.models.template import TemplateSummary
from promptmaker.templates import (
    CHIP_SUGGESTIONS,
    TemplateNotFound,
    list_templates,
    load_template,
)
from studio_api.prompt_routes import WorkspaceView, build_workspace_view

router = APIRouter()


@router.get("/templates", response_model=list[TemplateSummary])
def get_templates() -> list[TemplateSummary]:
    """List available templates."""
    return list_templates()


@router.get("/templates/{template_id}", response_model=WorkspaceView)
def get_template_workspace(template_id: str) -> WorkspaceView:
    """Load a template merged over a blank workspace."""
    try:
        state = load_template(template_id)
    except TemplateNotFound:
        raise HTTPException(status_code=404, detail=f"Template not found: {template_id}")
    return build_workspace_view(state)


@router.get("/sections")
def get_sections() -> dict[str, list[dict[str, str]]]:
    """Titles and helper text for every text field and tag set, in compile order."""
    return {
        "text_fields": [asdict(section) for section in TEXT_SECTIONS],
        "tag_groups": [asdict(group) for group in TAG_GROUPS],
    }


@router.get("/suggestions")
def get_suggestions() -> dict[str, list[str]]:
    """Suggested tags for each tag set."""
    return CHIP_SUGGESTIONS
