"""Difficulty adjustment: performance classification and clamped level deltas."""

from __future__ import annotations

from ..config import config
from ..models.observation import PerformanceLevel

DIFFICULTY_DELTAS: dict[str, int] = {
    "excellent": 1,
    "good": 0,
    "fair": 0,
    "needs_improvement": -1,
}

MIN_DIFFICULTY = 1


def classify_performance(accuracy: float, avg_hints: float) -> PerformanceLevel:
    """
    Classify a finished session.

    Levels:
    - excellent: accuracy >= 0.8 and at most 1 hint per question on average
    - good: accuracy >= 0.6
    - fair: accuracy >= 0.4
    - needs_improvement: anything lower
    """
    thresholds = config.assessment
    if accuracy >= thresholds.excellent_accuracy and avg_hints <= thresholds.excellent_max_hints:
        return "excellent"
    elif accuracy >= thresholds.good_accuracy:
        return "good"
    elif accuracy >= thresholds.fair_accuracy:
        return "fair"
    else:
        return "needs_improvement"


def adjust(current: int, classification: PerformanceLevel, upper_bound: int) -> int:
    """
    Apply the delta for a classification and clamp to [1, upper_bound].

    Raises:
        ValueError: If upper_bound < 1 or classification is unknown
    """
    if upper_bound < MIN_DIFFICULTY:
        raise ValueError(f"Upper bound must be >= {MIN_DIFFICULTY}, got {upper_bound}")
    if classification not in DIFFICULTY_DELTAS:
        raise ValueError(f"Unknown performance classification: {classification!r}")

    return max(MIN_DIFFICULTY, min(upper_bound, current + DIFFICULTY_DELTAS[classification]))


class DifficultyAdjuster:
    """Holds the difficulty upper bound for a deployment."""

    def __init__(self, upper_bound: int):
        if upper_bound < MIN_DIFFICULTY:
            raise ValueError(f"Upper bound must be >= {MIN_DIFFICULTY}, got {upper_bound}")
        self.upper_bound = upper_bound

    @classmethod
    def from_config(cls) -> DifficultyAdjuster:
        return cls(config.assessment.difficulty_upper_bound)

    def adjust(self, current: int, classification: PerformanceLevel) -> int:
        return adjust(current, classification, self.upper_bound)

    def clamp(self, level: int) -> int:
        return max(MIN_DIFFICULTY, min(self.upper_bound, level))

    def __repr__(self) -> str:
        return f"DifficultyAdjuster(upper_bound={self.upper_bound})"
