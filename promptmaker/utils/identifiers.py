"""ID factories for list-typed sub-entities (variables, workflow stages).

Factories are plain callables returning a fresh string id. They are passed
into the StateNormalizer instead of being looked up globally, so compiling and
evaluating never depend on where ids come from.
"""

import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def generate_entity_id() -> str:
    """Generate a unique entity ID (UUID4)."""
    return str(uuid.uuid4())


class SequentialIds:
    """Deterministic id factory: prefix-1, prefix-2, ...

    Each instance owns its counter, so two factories never share state.
    """

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"
