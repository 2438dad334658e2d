"""Tests for reconciliation rules validation."""

import json

import pytest

from rapprochement.domain.errors import ValidationError
from rapprochement.domain.rules import ReconciliationRules


def test_defaults():
    """Test the default rules sent to the service."""
    assert ReconciliationRules().to_payload() == {
        "amount_tolerance": 0.01,
        "date_tolerance_days": 1,
        "fuzzy_date_tolerance_days": 3,
        "weak_date_tolerance_days": 7,
        "label_similarity_threshold": 0.95,
        "fuzzy_label_threshold": 0.80,
        "weak_label_threshold": 0.60,
        "enable_group_matching": True,
        "max_group_size": 5,
        "enable_ai_assistance": True,
    }


def test_from_mapping_partial():
    """Test that missing options keep their defaults."""
    rules = ReconciliationRules.from_mapping({"amount_tolerance": 0.5, "enable_ai_assistance": False})
    assert rules.amount_tolerance == 0.5
    assert rules.enable_ai_assistance is False
    assert rules.max_group_size == 5


def test_from_mapping_unknown_option():
    """Test that unknown options are rejected."""
    with pytest.raises(ValidationError) as excinfo:
        ReconciliationRules.from_mapping({"amount_tolerence": 0.5})
    assert "amount_tolerence" in str(excinfo.value)


@pytest.mark.parametrize(
    "options",
    [
        {"amount_tolerance": -0.01},
        {"amount_tolerance": "0.01"},
        {"date_tolerance_days": -1},
        {"fuzzy_date_tolerance_days": 1.5},
        {"weak_date_tolerance_days": True},
        {"label_similarity_threshold": 1.2},
        {"fuzzy_label_threshold": -0.1},
        {"weak_label_threshold": None},
        {"enable_group_matching": "yes"},
        {"enable_ai_assistance": 1},
        {"max_group_size": 1},
        {"max_group_size": 11},
    ],
)
def test_malformed_options(options):
    """Test that malformed options are rejected."""
    with pytest.raises(ValidationError):
        ReconciliationRules.from_mapping(options)


def test_all_errors_reported():
    """Test that every malformed option is listed in the message."""
    with pytest.raises(ValidationError) as excinfo:
        ReconciliationRules(amount_tolerance=-1, weak_label_threshold=2)
    message = str(excinfo.value)
    assert "amount_tolerance" in message
    assert "weak_label_threshold" in message


def test_threshold_bounds_inclusive():
    """Test that 0 and 1 are valid thresholds."""
    rules = ReconciliationRules(label_similarity_threshold=1, weak_label_threshold=0)
    assert rules.label_similarity_threshold == 1


def test_with_overrides():
    """Test that overrides are validated and None is ignored."""
    rules = ReconciliationRules().with_overrides(max_group_size=3, amount_tolerance=None)
    assert rules.max_group_size == 3
    assert rules.amount_tolerance == 0.01

    with pytest.raises(ValidationError):
        ReconciliationRules().with_overrides(max_group_size=20)


def test_from_json_file(tmp_path):
    """Test loading rules from a JSON file."""
    rules_path = tmp_path / "rules.json"
    rules_path.write_text(json.dumps({"date_tolerance_days": 2}), encoding="utf-8")

    rules = ReconciliationRules.from_json_file(rules_path)
    assert rules.date_tolerance_days == 2


def test_from_json_file_invalid(tmp_path):
    """Test that invalid JSON and non-object JSON are rejected."""
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValidationError):
        ReconciliationRules.from_json_file(bad)

    array = tmp_path / "array.json"
    array.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValidationError):
        ReconciliationRules.from_json_file(array)
