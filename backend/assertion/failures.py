"""
Failure identifiers.

Every check and coercion reports failure as one of these stable dotted
codes. Callers match on them to pick their own user-facing messages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Failure(str, Enum):
    """Closed set of failure identifiers."""

    # Check failures
    REQUIRED = "assert.required"
    MIN_LENGTH = "assert.minlength"
    MAX_LENGTH = "assert.maxlength"
    MIN_NUM = "assert.minnum"
    MAX_NUM = "assert.maxnum"
    REGEX = "assert.regex"
    REGEX_COMPILE = "assert.regex.compile"

    # Coercion failures
    INT = "assert.int"
    FLOAT = "assert.float"

    @property
    def code(self) -> str:
        return self.value

    @property
    def is_coercion(self) -> bool:
        """True when raised by a terminal type coercion rather than a check."""
        return self in (Failure.INT, Failure.FLOAT)

    @classmethod
    def from_code(cls, code: str) -> "Failure":
        """
        Look up a failure by its dotted code.

        Args:
            code: Code such as "assert.minlength".

        Returns:
            The matching Failure member.
        """
        try:
            return cls(code)
        except ValueError:
            raise ValueError(f"Unknown failure code: {code}") from None

    def __str__(self) -> str:
        return self.value


def first(*failures: Optional[Failure]) -> Optional[Failure]:
    """Return the first failure that is not None, or None if all passed."""
    for failure in failures:
        if failure is not None:
            return failure
    return None
