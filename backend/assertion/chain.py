"""
Validation chain.

Wraps one source value, collects checks through fluent builder calls and
runs them lazily when a typed result is requested:

    name, failure = is_("alice").not_empty().min_len(3).alpha().to_str()
    age, failure = is_(form["age"]).min_num(18).max_num(130).to_int()

Checks run in registration order and the first failure wins. Failures are
returned as values, never raised.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional, Tuple

from .canonical import parse_float, parse_int, to_text
from .checks import (
    ALPHA_NUMERIC_PATTERN,
    ALPHA_PATTERN,
    EMAIL_PATTERN,
    Check,
)
from .failures import Failure

logger = logging.getLogger(__name__)


class ChainState(str, Enum):
    BUILDING = "building"
    EVALUATED = "evaluated"


class Assertion:
    """
    Builder holding a source value and its ordered checks.

    Builder methods append one check and return the same instance.
    Terminal methods (to_str, to_int, to_float) evaluate every check
    against the source and coerce it on success.
    """

    def __init__(self, source: Any):
        self._source = source
        self._checks: List[Check] = []
        self._state = ChainState.BUILDING

    @property
    def source(self) -> Any:
        return self._source

    @property
    def checks(self) -> Tuple[Check, ...]:
        return tuple(self._checks)

    @property
    def state(self) -> ChainState:
        return self._state

    def __len__(self) -> int:
        return len(self._checks)

    def __repr__(self) -> str:
        checks = ", ".join(c.describe() for c in self._checks)
        return f"Assertion({self._source!r}, [{checks}])"

    def add(self, check: Check) -> "Assertion":
        """Append a check to run later."""
        if self._state is ChainState.EVALUATED:
            logger.warning(
                "Check %s registered on an evaluated chain for %r",
                check.describe(),
                self._source,
            )
        self._checks.append(check)
        return self

    # Builder methods

    def not_empty(self) -> "Assertion":
        """Require a non-empty canonical form."""
        return self.add(Check.required())

    def min_len(self, n: int) -> "Assertion":
        """Require at least n characters (code points)."""
        return self.add(Check.min_length(n))

    def max_len(self, n: int) -> "Assertion":
        """Require at most n characters (code points)."""
        return self.add(Check.max_length(n))

    def min_num(self, n: int) -> "Assertion":
        """Require an integer value greater than or equal to n."""
        return self.add(Check.min_num(n))

    def max_num(self, n: int) -> "Assertion":
        """Require an integer value less than or equal to n."""
        return self.add(Check.max_num(n))

    def regex(self, pattern: str) -> "Assertion":
        """Require the pattern to match somewhere in the value."""
        return self.add(Check.regex(pattern))

    def email(self) -> "Assertion":
        return self.regex(EMAIL_PATTERN)

    def alpha(self) -> "Assertion":
        return self.regex(ALPHA_PATTERN)

    def alpha_numeric(self) -> "Assertion":
        return self.regex(ALPHA_NUMERIC_PATTERN)

    # Terminal methods

    def evaluate(self) -> Optional[Failure]:
        """
        Run all checks in order against the source.

        Returns:
            The first Failure encountered, or None if every check passed.
        """
        self._state = ChainState.EVALUATED
        for check in self._checks:
            failure = check.run(self._source)
            if failure is not None:
                logger.debug(
                    "Check %s failed for %r: %s",
                    check.describe(),
                    self._source,
                    failure.code,
                )
                return failure
        return None

    def to_str(self) -> Tuple[str, Optional[Failure]]:
        """Return the canonical form of the source, or the first failure."""
        failure = self.evaluate()
        if failure is not None:
            return "", failure
        return to_text(self._source), None

    def to_int(self) -> Tuple[int, Optional[Failure]]:
        """Return the source parsed as a base-10 integer."""
        failure = self.evaluate()
        if failure is not None:
            return 0, failure
        number = parse_int(to_text(self._source))
        if number is None:
            logger.debug("Cannot coerce %r to int", self._source)
            return 0, Failure.INT
        return number, None

    def to_float(self) -> Tuple[float, Optional[Failure]]:
        """Return the source parsed as a float."""
        failure = self.evaluate()
        if failure is not None:
            return 0.0, failure
        number = parse_float(to_text(self._source))
        if number is None:
            logger.debug("Cannot coerce %r to float", self._source)
            return 0.0, Failure.FLOAT
        return number, None


def is_(value: Any) -> Assertion:
    """Start a validation chain for a value."""
    return Assertion(value)
