"""
Learner Profile: learning style, per-skill difficulty levels and progress.

This module holds the per-learner state that outlives a single assessment
session:
- Current learning style
- Difficulty level per (subject, skill), created lazily at level 1
- Latest progress per skill and earned achievements
- Assessment history used for analytics

Profiles live in memory only; they are validated against
schemas/learner_profile.schema.json on demand.
"""

from __future__ import annotations

import uuid
from copy import deepcopy
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Dict, Optional

from jsonschema import ValidationError

from ..config import config
from ..engine.difficulty import DifficultyAdjuster
from ..utils.progress import skill_level_histogram, skill_level_summary
from ..utils.validation import LearnerProfileValidator
from .observation import Style, validate_style

if TYPE_CHECKING:
    from .assessment_session import SessionSummary

PERFECT_SESSION = "perfect-session"
STREAK_FIVE = "streak-5"


def skill_key(subject: str, skill: str) -> str:
    """Key identifying a skill within a subject."""
    return f"{subject}-{skill}"


class LearnerProfile:
    """
    Learner profile with per-skill difficulty state.

    One instance per learner; not shared across threads.
    """

    # One validator per difficulty upper bound
    _validators: Dict[int, LearnerProfileValidator] = {}

    def __init__(
        self,
        learner_id: Optional[str] = None,
        name: str = "Anonymous Learner",
        learning_style: Optional[Style] = None,
        upper_bound: Optional[int] = None,
        validate: bool = True,
    ):
        """
        Initialize a new learner profile.

        Args:
            learner_id: Unique identifier (auto-generated if None)
            name: Learner's name
            learning_style: Preferred style (defaults to config)
            upper_bound: Maximum skill level (defaults to config)
            validate: Whether to validate on creation (set False for testing)
        """
        self.upper_bound = (
            config.assessment.difficulty_upper_bound if upper_bound is None else upper_bound
        )
        now = self._utc_now()
        self._data = {
            "meta": {
                "schema_version": 1,
                "created_at": now,
                "last_updated": now,
            },
            "learner_id": learner_id or self._generate_id(),
            "name": name,
            "learning_style": (
                config.adaptation.default_style if learning_style is None else learning_style
            ),
            "skill_levels": {},
            "progress": {},
            "achievements": [],
            "assessment_history": [],
        }
        if validate:
            self._validate()

    @staticmethod
    def _generate_id() -> str:
        """Generate unique learner ID in required format."""
        return f"learner-{uuid.uuid4()}"

    @staticmethod
    def _utc_now() -> str:
        """Get current UTC timestamp in ISO 8601 format."""
        return datetime.now(timezone.utc).isoformat()

    @classmethod
    def _get_validator(cls, upper_bound: int) -> LearnerProfileValidator:
        """Get cached validator instance for a difficulty bound."""
        if upper_bound not in cls._validators:
            cls._validators[upper_bound] = LearnerProfileValidator(upper_bound=upper_bound)
        return cls._validators[upper_bound]

    def _validate(self) -> None:
        """
        Validate profile against schema.

        Raises:
            ValidationError: If profile is invalid
        """
        result = self._get_validator(self.upper_bound).validate(self._data, auto_repair=False)
        if not result.valid:
            raise ValidationError("\n".join(result.errors))

    def _update_timestamp(self) -> None:
        self._data["meta"]["last_updated"] = self._utc_now()

    # ==================== Profile Access ====================

    @property
    def learner_id(self) -> str:
        return self._data["learner_id"]

    @property
    def name(self) -> str:
        return self._data["name"]

    @property
    def learning_style(self) -> Style:
        return self._data["learning_style"]

    @property
    def skill_levels(self) -> dict[str, int]:
        return dict(self._data["skill_levels"])

    @property
    def achievements(self) -> list[str]:
        return list(self._data["achievements"])

    @property
    def assessment_history(self) -> list[dict]:
        return deepcopy(self._data["assessment_history"])

    def set_learning_style(self, style: Style) -> None:
        """
        Change the preferred learning style.

        Raises:
            ValueError: If the style is unknown
        """
        self._data["learning_style"] = validate_style(style)
        self._update_timestamp()

    # ==================== Skill Difficulty ====================

    def get_skill_level(self, subject: str, skill: str) -> int:
        """Difficulty level for a skill, created at the default level on first reference."""
        key = skill_key(subject, skill)
        levels = self._data["skill_levels"]
        if key not in levels:
            levels[key] = config.assessment.default_difficulty
            self._update_timestamp()
        return levels[key]

    def apply_session_summary(
        self, summary: SessionSummary, adjuster: Optional[DifficultyAdjuster] = None
    ) -> int:
        """
        Record a finished session and update the skill's difficulty level.

        The session's recommended difficulty (already produced by the
        DifficultyAdjuster at completion) becomes the skill's new level,
        clamped to the adjuster's bound.

        Args:
            summary: Summary of the completed session
            adjuster: Adjuster whose bound applies (defaults to the profile's bound)

        Raises:
            ValueError: If the adjuster's bound differs from the profile's

        Returns:
            The new difficulty level for the skill
        """
        adjuster = adjuster or DifficultyAdjuster(self.upper_bound)
        if adjuster.upper_bound != self.upper_bound:
            raise ValueError(
                f"Adjuster bound {adjuster.upper_bound} does not match profile bound {self.upper_bound}"
            )

        key = skill_key(summary.subject, summary.skill)
        before = self.get_skill_level(summary.subject, summary.skill)
        after = adjuster.clamp(summary.recommended_difficulty)

        self._data["skill_levels"][key] = after
        self._data["assessment_history"].append(
            {
                "session_id": summary.session_id,
                "skill_key": key,
                "timestamp": self._utc_now(),
                "style": summary.style,
                "accuracy": round(summary.accuracy, 4),
                "average_hints": round(summary.average_hints, 4),
                "performance_level": summary.performance_level,
                "difficulty_before": before,
                "difficulty_after": after,
            }
        )
        self.update_progress(summary.subject, summary.skill, summary.accuracy * 100)

        if summary.accuracy == 1.0:
            self.add_achievement(PERFECT_SESSION)
        if summary.best_streak >= 5:
            self.add_achievement(STREAK_FIVE)

        self._update_timestamp()
        return after

    # ==================== Progress & Achievements ====================

    def update_progress(self, subject: str, skill: str, completion: float) -> None:
        """Store latest completion percentage (clamped to [0, 100]) for a skill."""
        self._data["progress"][skill_key(subject, skill)] = round(
            max(0.0, min(100.0, completion)), 2
        )
        self._update_timestamp()

    def get_progress(self, subject: str, skill: str) -> float:
        return self._data["progress"].get(skill_key(subject, skill), 0.0)

    def add_achievement(self, achievement: str) -> bool:
        """Add an achievement. Returns False if it was already earned."""
        if not achievement or achievement in self._data["achievements"]:
            return False
        self._data["achievements"].append(achievement)
        self._update_timestamp()
        return True

    def skill_summary(self) -> dict:
        """
        Summary statistics of skill difficulty levels.

        Returns:
            Dict with mean, median, min, max, count and per-level counts
        """
        levels = self._data["skill_levels"]
        return {
            **skill_level_summary(levels),
            "by_level": dict(skill_level_histogram(levels)),
        }

    # ==================== Export ====================

    def to_dict(self) -> dict:
        """Export profile as dictionary (deep copy to prevent mutations)."""
        return deepcopy(self._data)

    def validate(self) -> None:
        """Validate current state (raises ValidationError when invalid)."""
        self._validate()

    def __repr__(self) -> str:
        return (
            f"LearnerProfile(id={self.learner_id}, "
            f"name='{self.name}', "
            f"style={self.learning_style}, "
            f"skills={len(self._data['skill_levels'])})"
        )
