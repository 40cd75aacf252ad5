from __future__ import annotations

from typing import List, Union


class DomainError(ValueError):
    """Input violates a mathematical precondition of a calculation."""

    def __init__(self, errors: Union[str, List[str]]):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__("; ".join(errors))
        self.errors = errors
