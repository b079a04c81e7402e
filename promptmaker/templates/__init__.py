"""Template library and tag suggestions."""

from promptmaker.templates.library import (
    PROMPT_TEMPLATES,
    TemplateNotFound,
    get_template,
    list_templates,
    load_template,
)
from promptmaker.templates.suggestions import CHIP_SUGGESTIONS

__all__ = [
    "CHIP_SUGGESTIONS",
    "PROMPT_TEMPLATES",
    "TemplateNotFound",
    "get_template",
    "list_templates",
    "load_template",
]
