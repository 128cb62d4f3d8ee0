"""
Utility modules for AdaptLearn.

This module contains utility functions:
- validation: JSON Schema validation with auto-repair
- progress: Skill level and adaptation analytics
"""

from .validation import (
    LearnerProfileValidator,
    SchemaValidator,
    ValidationResult,
    validate_learner_profile,
)
from .progress import (
    adaptation_summary,
    skill_level_histogram,
    skill_level_summary,
)

__all__ = [
    # Validation
    "LearnerProfileValidator",
    "SchemaValidator",
    "ValidationResult",
    "validate_learner_profile",
    # Progress analytics
    "adaptation_summary",
    "skill_level_histogram",
    "skill_level_summary",
]
