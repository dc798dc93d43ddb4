"""
Assertion: fluent single-value validation.

Build a chain around a value, register checks, then ask for a typed
result. Checks run lazily, in order, and the first failure is returned
as a stable identifier instead of being raised.
"""

from .failures import Failure, first
from .canonical import to_text, parse_int, parse_float
from .checks import (
    Check,
    CheckKind,
    EMAIL_PATTERN,
    ALPHA_PATTERN,
    ALPHA_NUMERIC_PATTERN,
    FORMAT_PATTERNS,
)
from .chain import Assertion, ChainState, is_
from .rules import RuleSet, load_rule_sets, check_value

__version__ = "1.0.0"
__all__ = [
    # Chain
    "is_",
    "Assertion",
    "ChainState",
    # Failures
    "Failure",
    "first",
    # Checks
    "Check",
    "CheckKind",
    "EMAIL_PATTERN",
    "ALPHA_PATTERN",
    "ALPHA_NUMERIC_PATTERN",
    "FORMAT_PATTERNS",
    # Canonical form
    "to_text",
    "parse_int",
    "parse_float",
    # Rule sets
    "RuleSet",
    "load_rule_sets",
    "check_value",
]
