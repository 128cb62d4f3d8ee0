"""
Schema validation utilities for AdaptLearn.

Provides JSON Schema validation with clear error messages and
automatic repair for common validation failures.

Features:
- Format validation (datetime)
- Deep copy to prevent mutations
- Removal of unknown keys
- Type coercion for skill levels stored as strings
- Skill-level range checks against the configured difficulty bound
- Transparent repair tracking
"""

import json
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from jsonschema import Draft7Validator, FormatChecker, ValidationError

from ..config import config


class ValidationResult:
    """
    Result of a validation attempt.

    Attributes:
        valid: Whether data passed validation
        errors: List of error messages
        data: The validated data (may be modified if repair was attempted)
        repairs: List of repairs applied (for transparency)
    """

    def __init__(
        self,
        valid: bool,
        errors: list[str],
        data: Any = None,
        repairs: Optional[list[str]] = None,
    ):
        self.valid = valid
        self.errors = errors
        self.data = data
        self.repairs = repairs or []

    def __bool__(self) -> bool:
        """Allow using result in boolean context."""
        return self.valid

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.valid:
            msg = "✓ Validation passed"
            if self.repairs:
                msg += f" (with {len(self.repairs)} repair(s))"
            return msg
        return f"✗ Validation failed with {len(self.errors)} error(s):\n" + "\n".join(
            f"  - {error}" for error in self.errors
        )


class SchemaValidator:
    """
    JSON Schema validator with auto-repair capabilities.

    Usage:
        validator = SchemaValidator("path/to/schema.json")
        result = validator.validate(data)
        if not result:
            print(result.errors)
    """

    def __init__(self, schema_path: Path | str):
        """
        Initialize validator with a schema file.

        Args:
            schema_path: Path to JSON Schema file
        """
        self.schema_path = Path(schema_path)
        with open(self.schema_path, "r") as f:
            self.schema = json.load(f)
        self.validator = Draft7Validator(self.schema, format_checker=FormatChecker())

    def validate(self, data: dict, auto_repair: bool = False) -> ValidationResult:
        """
        Validate data against schema.

        Args:
            data: Data to validate
            auto_repair: If True, attempt to fix common validation errors

        Returns:
            ValidationResult with validation status and any errors
        """
        errors = [self._format_error(error) for error in self.validator.iter_errors(data)]

        if errors:
            if auto_repair:
                repaired_data, repairs = self._attempt_repair(data)
                result = self.validate(repaired_data, auto_repair=False)
                result.repairs = repairs
                return result
            return ValidationResult(valid=False, errors=errors, data=data)

        return ValidationResult(valid=True, errors=[], data=data)

    def _format_error(self, error: ValidationError) -> str:
        """
        Convert ValidationError to human-readable message with details.

        Args:
            error: jsonschema ValidationError

        Returns:
            Formatted error message with validator and schema path
        """
        path = " -> ".join(str(p) for p in error.path) if error.path else "root"
        validator_name = getattr(error, "validator", "unknown")
        schema_path = "/".join(str(p) for p in error.schema_path)
        return (
            f"At '{path}': {error.message} "
            f"[validator={validator_name}, schema_path=/{schema_path}]"
        )

    def _attempt_repair(self, data: dict) -> tuple[dict, list[str]]:
        """
        Attempt to automatically fix common validation errors.

        Returns:
            Tuple of (repaired data, list of repairs applied)
        """
        # Deep copy to prevent mutation of original
        repaired = deepcopy(data)
        repairs: list[str] = []

        self._strip_additional_props(repaired, self.schema, repairs)

        if not isinstance(repaired.get("meta"), dict):
            repaired["meta"] = {}
            repairs.append("Created missing 'meta' object")
        if "schema_version" not in repaired["meta"]:
            repaired["meta"]["schema_version"] = 1
            repairs.append("Added meta.schema_version = 1")
        now = datetime.now(timezone.utc).isoformat()
        for key in ("created_at", "last_updated"):
            if key not in repaired["meta"]:
                repaired["meta"][key] = now
                repairs.append(f"Added meta.{key} = {now}")

        return repaired, repairs

    def _strip_additional_props(
        self, obj: Any, schema: dict, repairs: list[str], path: str = "root"
    ):
        """
        Recursively remove keys not allowed by schema (additionalProperties: false).
        Handles both objects and arrays.
        """
        if not isinstance(schema, dict):
            return

        if isinstance(obj, dict) and "properties" in schema:
            allowed = set(schema.get("properties", {}).keys())
            if schema.get("additionalProperties") is False:
                extra_keys = [k for k in list(obj.keys()) if k not in allowed]
                for k in extra_keys:
                    obj.pop(k, None)
                    repairs.append(f"Removed unknown key '{k}' at {path}")

            for k, subschema in schema.get("properties", {}).items():
                if k in obj:
                    self._strip_additional_props(obj[k], subschema, repairs, f"{path}.{k}")

        if isinstance(obj, list) and "items" in schema:
            for i, item in enumerate(obj):
                self._strip_additional_props(item, schema["items"], repairs, f"{path}[{i}]")


class LearnerProfileValidator(SchemaValidator):
    """
    Validator for learner profile data with profile-specific checks.

    Features:
    - JSON Schema validation
    - Skill levels within [1, upper_bound]
    - Assessment history consistent with skill levels
    """

    def __init__(self, upper_bound: Optional[int] = None):
        """
        Initialize validator with learner profile schema.

        Args:
            upper_bound: Maximum skill level (defaults to config)
        """
        super().__init__(config.paths.learner_profile_schema)
        self.upper_bound = (
            config.assessment.difficulty_upper_bound if upper_bound is None else upper_bound
        )

    def validate(self, data: dict, auto_repair: bool = False) -> ValidationResult:
        """
        Validate learner profile with profile-specific checks.

        Args:
            data: Learner profile data
            auto_repair: Whether to attempt automatic repairs

        Returns:
            ValidationResult
        """
        if auto_repair:
            data, coercions = self._coerce_skill_levels(data)
        else:
            coercions = []

        result = super().validate(data, auto_repair=auto_repair)
        result.repairs = coercions + result.repairs

        if not result.valid:
            return result

        data_to_validate = result.data
        profile_errors = []

        # Check 1: Skill levels within the configured bound
        for key, level in data_to_validate.get("skill_levels", {}).items():
            if level > self.upper_bound:
                profile_errors.append(
                    f"Skill '{key}' level {level} exceeds upper bound {self.upper_bound}"
                )

        # Check 2: Assessed skills must have a level
        levels = data_to_validate.get("skill_levels", {})
        for i, entry in enumerate(data_to_validate.get("assessment_history", [])):
            if entry["skill_key"] not in levels:
                profile_errors.append(
                    f"Assessment {i}: skill '{entry['skill_key']}' has no skill level"
                )
            for field_name in ("difficulty_before", "difficulty_after"):
                if entry[field_name] > self.upper_bound:
                    profile_errors.append(
                        f"Assessment {i}: {field_name} {entry[field_name]} exceeds upper bound {self.upper_bound}"
                    )

        all_errors = result.errors + profile_errors

        return ValidationResult(
            valid=len(all_errors) == 0,
            errors=all_errors,
            data=result.data,
            repairs=result.repairs,
        )

    def _coerce_skill_levels(self, data: dict) -> tuple[dict, list[str]]:
        """Coerce skill levels stored as strings (e.g. "3") to integers."""
        repaired = deepcopy(data)
        repairs = []
        levels = repaired.get("skill_levels")
        if isinstance(levels, dict):
            for key, level in levels.items():
                if isinstance(level, str):
                    try:
                        levels[key] = int(float(level))
                    except ValueError:
                        continue
                    repairs.append(f"Coerced skill level '{key}': '{level}' → {levels[key]}")
        return repaired, repairs


def validate_learner_profile(
    data: dict, auto_repair: bool = False, upper_bound: Optional[int] = None
) -> ValidationResult:
    """
    Quick validation of learner profile data.

    Args:
        data: Learner profile dictionary to validate
        auto_repair: Whether to attempt automatic repairs
        upper_bound: Maximum skill level (defaults to config)

    Returns:
        ValidationResult

    Example:
        result = validate_learner_profile(profile_dict)
        if not result:
            print("Errors:", result.errors)
    """
    validator = LearnerProfileValidator(upper_bound=upper_bound)
    return validator.validate(data, auto_repair=auto_repair)
