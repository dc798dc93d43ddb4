"""
Tests for declarative rule sets.
"""

import pytest
import yaml
from pydantic import ValidationError

from backend.assertion import CheckKind, Failure, RuleSet, check_value, load_rule_sets


RULES_YAML = """
username:
  required: true
  min_length: 3
  max_length: 12
  format: alphanumeric
age:
  min_num: 18
  max_num: 130
contact:
  format: email
empty:
"""


class TestRuleSetModel:
    """Tests for RuleSet field validation."""

    def test_defaults(self):
        """Test an empty rule set has no checks."""
        rules = RuleSet()
        assert rules.required is False
        assert len(rules.build("anything")) == 0

    def test_negative_length(self):
        """Test that negative lengths are rejected."""
        with pytest.raises(ValidationError):
            RuleSet(min_length=-1)

    def test_min_length_greater_than_max(self):
        """Test detection of min_length > max_length."""
        with pytest.raises(ValidationError) as exc_info:
            RuleSet(min_length=5, max_length=2)
        assert "min_length cannot be greater than max_length" in str(exc_info.value)

    def test_min_num_greater_than_max(self):
        """Test detection of min_num > max_num."""
        with pytest.raises(ValidationError):
            RuleSet(min_num=10, max_num=1)

    def test_unknown_format(self):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            RuleSet(format="uuid")
        assert "Unknown format" in str(exc_info.value)

    def test_unknown_field(self):
        """Test that misspelled rule names are rejected."""
        with pytest.raises(ValidationError):
            RuleSet.from_dict({"min_len": 3})


class TestRuleSetBuild:
    """Tests for building chains from rule sets."""

    def test_registration_order(self):
        """Test checks are registered in the fixed order."""
        rules = RuleSet(
            format="alpha",
            pattern="^a",
            max_num=9,
            min_num=1,
            max_length=5,
            min_length=1,
            required=True,
        )
        kinds = [c.kind for c in rules.build("a").checks]
        assert kinds == [
            CheckKind.REQUIRED,
            CheckKind.MIN_LENGTH,
            CheckKind.MAX_LENGTH,
            CheckKind.MIN_NUM,
            CheckKind.MAX_NUM,
            CheckKind.REGEX,
            CheckKind.REGEX,
        ]

    def test_build_and_coerce(self):
        """Test a built chain can be finished with a terminal method."""
        rules = RuleSet(min_num=18, max_num=130)
        assert rules.build("42").to_int() == (42, None)
        assert rules.build("12").to_int() == (0, Failure.MIN_NUM)

    def test_check_value(self):
        """Test the check_value convenience function."""
        rules = RuleSet(required=True, format="email")
        assert check_value("some@email.com", rules) is None
        assert check_value("", rules) is Failure.REQUIRED
        assert check_value("nope", rules) is Failure.REGEX

    def test_invalid_pattern_is_a_value_failure(self):
        """Test that a bad pattern surfaces at evaluation, not load."""
        rules = RuleSet(pattern="[oops")
        assert check_value("x", rules) is Failure.REGEX_COMPILE


class TestRuleSetLoading:
    """Tests for loading rule sets from YAML."""

    def test_from_yaml(self):
        """Test loading a single rule set."""
        rules = RuleSet.from_yaml("required: true\nmax_length: 4\n")
        assert rules == RuleSet(required=True, max_length=4)

    def test_from_empty_yaml(self):
        """Test an empty document is an empty rule set."""
        assert RuleSet.from_yaml("") == RuleSet()

    def test_from_file(self, tmp_path):
        """Test loading a rule set from a file."""
        path = tmp_path / "rules.yaml"
        path.write_text("min_length: 2\nformat: alpha\n", encoding="utf-8")
        rules = RuleSet.from_file(path)
        assert rules.min_length == 2
        assert rules.format == "alpha"

    def test_load_rule_sets(self):
        """Test loading named rule sets."""
        rule_sets = load_rule_sets(RULES_YAML)
        assert set(rule_sets) == {"username", "age", "contact", "empty"}
        assert rule_sets["empty"] == RuleSet()

        assert check_value("alice01", rule_sets["username"]) is None
        assert check_value("al", rule_sets["username"]) is Failure.MIN_LENGTH
        assert check_value("alice_01", rule_sets["username"]) is Failure.REGEX
        assert check_value(17, rule_sets["age"]) is Failure.MIN_NUM
        assert check_value("some@email.com", rule_sets["contact"]) is None

    def test_load_rule_sets_empty(self):
        """Test an empty document has no rule sets."""
        assert load_rule_sets("") == {}

    def test_load_rule_sets_not_mapping(self):
        """Test that a non-mapping document is rejected."""
        with pytest.raises(ValueError):
            load_rule_sets("- a\n- b\n")

    def test_invalid_rules_in_document(self):
        """Test that invalid rules inside a document are reported."""
        with pytest.raises(ValidationError):
            load_rule_sets("age:\n  min_num: ten\n")

    def test_malformed_yaml(self):
        """Test that malformed YAML propagates the parser error."""
        with pytest.raises(yaml.YAMLError):
            load_rule_sets("username: [unclosed\n")
