"""
Check definitions.

A Check is a kind plus the configuration captured when it was registered
(a bound or a pattern). Evaluation dispatches on the kind and returns
None on success or the Failure for that kind.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .canonical import parse_int, to_text
from .failures import Failure

# Built-in patterns; `\Z` matches only at the very end of the text
EMAIL_PATTERN = (
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*\Z"
)
ALPHA_PATTERN = r"^[a-zA-Z]+\Z"
ALPHA_NUMERIC_PATTERN = r"^[a-zA-Z0-9]+\Z"

FORMAT_PATTERNS: Dict[str, str] = {
    "email": EMAIL_PATTERN,
    "alpha": ALPHA_PATTERN,
    "alphanumeric": ALPHA_NUMERIC_PATTERN,
}


class CheckKind(str, Enum):
    """Kinds of check a chain can hold."""

    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    MIN_NUM = "min_num"
    MAX_NUM = "max_num"
    REGEX = "regex"


@dataclass(frozen=True)
class Check:
    """A single registered check and its configuration."""

    kind: CheckKind
    bound: Optional[int] = None
    pattern: Optional[str] = None

    @classmethod
    def required(cls) -> "Check":
        return cls(CheckKind.REQUIRED)

    @classmethod
    def min_length(cls, n: int) -> "Check":
        return cls(CheckKind.MIN_LENGTH, bound=_require_int(n))

    @classmethod
    def max_length(cls, n: int) -> "Check":
        return cls(CheckKind.MAX_LENGTH, bound=_require_int(n))

    @classmethod
    def min_num(cls, n: int) -> "Check":
        return cls(CheckKind.MIN_NUM, bound=_require_int(n))

    @classmethod
    def max_num(cls, n: int) -> "Check":
        return cls(CheckKind.MAX_NUM, bound=_require_int(n))

    @classmethod
    def regex(cls, pattern: str) -> "Check":
        if not isinstance(pattern, str):
            raise TypeError(f"Expected string pattern, got {type(pattern).__name__}")
        return cls(CheckKind.REGEX, pattern=pattern)

    def run(self, value: Any) -> Optional[Failure]:
        """
        Evaluate this check against a value.

        Args:
            value: Value to check; read through its canonical text.

        Returns:
            None if the check passed, otherwise its Failure.
        """
        text = to_text(value)

        if self.kind is CheckKind.REQUIRED:
            return None if text != "" else Failure.REQUIRED

        if self.kind is CheckKind.MIN_LENGTH:
            return None if len(text) >= self.bound else Failure.MIN_LENGTH

        if self.kind is CheckKind.MAX_LENGTH:
            return None if len(text) <= self.bound else Failure.MAX_LENGTH

        if self.kind is CheckKind.MIN_NUM:
            number = parse_int(text)
            # Unparseable text fails with the range code
            if number is None or number < self.bound:
                return Failure.MIN_NUM
            return None

        if self.kind is CheckKind.MAX_NUM:
            number = parse_int(text)
            if number is None or number > self.bound:
                return Failure.MAX_NUM
            return None

        if self.kind is CheckKind.REGEX:
            try:
                compiled = re.compile(self.pattern)
            except re.error:
                return Failure.REGEX_COMPILE
            return None if compiled.search(text) else Failure.REGEX

        raise ValueError(f"Unknown check kind: {self.kind}")

    def describe(self) -> str:
        """Short human-readable form, e.g. "min_length(4)"."""
        if self.bound is not None:
            return f"{self.kind.value}({self.bound})"
        if self.pattern is not None:
            return f"{self.kind.value}({self.pattern!r})"
        return self.kind.value


def _require_int(n: Any) -> int:
    # bool is an int subclass but never a meaningful bound
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Expected integer bound, got {type(n).__name__}")
    return n
