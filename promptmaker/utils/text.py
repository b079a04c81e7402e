"""Small text helpers shared by the normalizer, compiler and evaluator."""

import re

_WHITESPACE_RUN = re.compile(r"\s+")


def is_blank(value: str | None) -> bool:
    """True when value is None or only whitespace."""
    return value is None or not value.strip()


def normalize_variable_name(name: str) -> str:
    """Turn whitespace runs into underscores and upper-case the result.

    "customer name" -> "CUSTOMER_NAME"
    """
    return _WHITESPACE_RUN.sub("_", name).upper()
