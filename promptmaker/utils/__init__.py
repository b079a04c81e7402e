"""Utility functions for promptmaker."""

from promptmaker.utils.identifiers import (
    IdFactory,
    SequentialIds,
    generate_entity_id,
)
from promptmaker.utils.text import is_blank, normalize_variable_name

__all__ = [
    "IdFactory",
    "SequentialIds",
    "generate_entity_id",
    "is_blank",
    "normalize_variable_name",
]
