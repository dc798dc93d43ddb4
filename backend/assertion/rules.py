"""
Declarative rule sets.

Describes the checks for one value in the same shape as input constraint
blocks, so they can live in YAML:

    username:
      required: true
      min_length: 3
      max_length: 20
      format: alphanumeric
    age:
      min_num: 18
      max_num: 130
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .chain import Assertion
from .checks import FORMAT_PATTERNS
from .failures import Failure


class RuleSet(BaseModel):
    """Checks to apply to a single value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    required: bool = False
    min_length: Optional[int] = Field(default=None, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    min_num: Optional[int] = None
    max_num: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in FORMAT_PATTERNS:
            known = ", ".join(sorted(FORMAT_PATTERNS))
            raise ValueError(f"Unknown format '{v}' (expected one of: {known})")
        return v

    @model_validator(mode="after")
    def validate_ranges(self) -> "RuleSet":
        if (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        ):
            raise ValueError("min_length cannot be greater than max_length")
        if (
            self.min_num is not None
            and self.max_num is not None
            and self.min_num > self.max_num
        ):
            raise ValueError("min_num cannot be greater than max_num")
        return self

    def build(self, value: Any) -> Assertion:
        """
        Build a chain for a value from these rules.

        Checks are registered in a fixed order: required, min_length,
        max_length, min_num, max_num, pattern, format.

        Args:
            value: Source value.

        Returns:
            An unevaluated Assertion.
        """
        chain = Assertion(value)
        if self.required:
            chain.not_empty()
        if self.min_length is not None:
            chain.min_len(self.min_length)
        if self.max_length is not None:
            chain.max_len(self.max_length)
        if self.min_num is not None:
            chain.min_num(self.min_num)
        if self.max_num is not None:
            chain.max_num(self.max_num)
        if self.pattern is not None:
            chain.regex(self.pattern)
        if self.format is not None:
            chain.regex(FORMAT_PATTERNS[self.format])
        return chain

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RuleSet":
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "RuleSet":
        """Load a rule set from YAML content."""
        return cls.from_dict(yaml.safe_load(yaml_content))

    @classmethod
    def from_file(cls, path: Path) -> "RuleSet":
        """Load a rule set from a file."""
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_yaml(f.read())


def load_rule_sets(yaml_content: str) -> Dict[str, RuleSet]:
    """
    Load a mapping of named rule sets from YAML.

    Args:
        yaml_content: YAML document whose top level maps names to rules.

    Returns:
        Rule sets keyed by name.
    """
    data = yaml.safe_load(yaml_content) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping of rule sets, got {type(data).__name__}")
    return {str(name): RuleSet.from_dict(rules) for name, rules in data.items()}


def check_value(value: Any, rules: RuleSet) -> Optional[Failure]:
    """Validate a value against a rule set; None if it passes."""
    return rules.build(value).evaluate()
