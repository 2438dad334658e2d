"""Rules configuration sent along with a reconciliation request.

The rules drive the remote matching tiers (exact, fuzzy strong, fuzzy weak,
AI-assisted, group). They are only checked for well-formedness here.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Union

from rapprochement.domain.errors import ValidationError

MIN_GROUP_SIZE = 2
MAX_GROUP_SIZE = 10

DAY_WINDOW_OPTIONS = (
    "date_tolerance_days",
    "fuzzy_date_tolerance_days",
    "weak_date_tolerance_days",
)
THRESHOLD_OPTIONS = (
    "label_similarity_threshold",
    "fuzzy_label_threshold",
    "weak_label_threshold",
)
FLAG_OPTIONS = ("enable_group_matching", "enable_ai_assistance")


@dataclass(frozen=True)
class ReconciliationRules:
    """Matching rules with the defaults of the reconciliation service."""

    amount_tolerance: float = 0.01
    date_tolerance_days: int = 1
    fuzzy_date_tolerance_days: int = 3
    weak_date_tolerance_days: int = 7
    label_similarity_threshold: float = 0.95
    fuzzy_label_threshold: float = 0.80
    weak_label_threshold: float = 0.60
    enable_group_matching: bool = True
    max_group_size: int = 5
    enable_ai_assistance: bool = True

    def __post_init__(self):
        errors = _collect_errors(self)
        if errors:
            raise ValidationError("Invalid reconciliation rules: " + "; ".join(errors))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ReconciliationRules":
        """Build rules from a mapping, unknown options rejected.

        Options missing from ``data`` keep their defaults.

        Raises:
            ValidationError: If an option is unknown or malformed
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValidationError(f"Unknown reconciliation rule(s): {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_json_file(cls, path: Union[str, Path]) -> "ReconciliationRules":
        """Load rules from a JSON object file."""
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValidationError(f"Rules file '{path}' is not valid JSON: {e}")
        if not isinstance(data, dict):
            raise ValidationError(f"Rules file '{path}' must contain a JSON object")
        return cls.from_mapping(data)

    def with_overrides(self, **overrides: Any) -> "ReconciliationRules":
        """Return a copy with the given options replaced; ``None`` values are ignored."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError(f"Unknown reconciliation rule(s): {', '.join(unknown)}")
        return replace(self, **changes)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body fragment expected by the service."""
        return asdict(self)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _collect_errors(rules: ReconciliationRules) -> list[str]:
    errors = []

    if not _is_number(rules.amount_tolerance) or rules.amount_tolerance < 0:
        errors.append("amount_tolerance must be a non-negative number")

    for name in DAY_WINDOW_OPTIONS:
        value = getattr(rules, name)
        if not _is_integer(value) or value < 0:
            errors.append(f"{name} must be a non-negative integer")

    for name in THRESHOLD_OPTIONS:
        value = getattr(rules, name)
        if not _is_number(value) or not 0 <= value <= 1:
            errors.append(f"{name} must be a number between 0 and 1")

    for name in FLAG_OPTIONS:
        if not isinstance(getattr(rules, name), bool):
            errors.append(f"{name} must be true or false")

    if not _is_integer(rules.max_group_size) or not (
        MIN_GROUP_SIZE <= rules.max_group_size <= MAX_GROUP_SIZE
    ):
        errors.append(
            f"max_group_size must be an integer between {MIN_GROUP_SIZE} and {MAX_GROUP_SIZE}"
        )

    return errors
