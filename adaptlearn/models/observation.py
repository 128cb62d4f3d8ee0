"""
Performance observations and adaptation records.

Value types shared by the effectiveness pipeline:
- PerformanceObservation: one answered question (immutable)
- ContentTypeStats: per-content-type aggregates within the analysis window
- AdaptationEvent: append-only record of a learning-style switch
- StyleChange: notification returned to the caller when the style switches
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Literal

# Type aliases for clarity
Style = Literal["visual", "auditory", "kinesthetic"]
PerformanceLevel = Literal["excellent", "good", "fair", "needs_improvement"]

# Declared order doubles as the tie-break order
STYLES: tuple[Style, ...] = ("visual", "auditory", "kinesthetic")

REASON_PERFORMANCE_PATTERN = "performance pattern adaptation"
REASON_LOW_EFFECTIVENESS = "low effectiveness detected"


def validate_style(style: str) -> Style:
    """Return style unchanged, or raise ValueError if it is not a known style."""
    if style not in STYLES:
        raise ValueError(f"Unknown learning style {style!r}, expected one of {STYLES}")
    return style


@dataclass(frozen=True)
class PerformanceObservation:
    """
    Outcome of a single answered question.

    Attributes:
        content_type: Presentation format tag (e.g. "visual-diagrams")
        correct: Whether the answer was correct
        time_spent: Time spent on the question (>= 0)
        engagement: Engagement metric in [0, 1]
    """
    content_type: str
    correct: bool
    time_spent: float = 0.0
    engagement: float = 1.0

    def __post_init__(self):
        if not self.content_type:
            raise ValueError("Content type cannot be empty")
        if self.time_spent < 0:
            raise ValueError(f"Time spent cannot be negative: {self.time_spent}")
        if not (0.0 <= self.engagement <= 1.0):
            raise ValueError(f"Engagement must be in [0, 1], got {self.engagement}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class ContentTypeStats:
    """Aggregates for one content type inside the analysis window."""
    attempts: int = 0
    successes: int = 0
    total_time: float = 0.0
    total_engagement: float = 0.0
    effectiveness: float = 0.0

    @property
    def success_rate(self) -> float:
        return self.successes / self.attempts

    @property
    def average_time(self) -> float:
        return self.total_time / self.attempts

    @property
    def average_engagement(self) -> float:
        return self.total_engagement / self.attempts


@dataclass(frozen=True)
class AdaptationEvent:
    """Recorded transition of the learner's active style."""
    timestamp: str  # ISO 8601
    from_style: Style
    to_style: Style
    reason: str

    @classmethod
    def now(cls, from_style: Style, to_style: Style, reason: str) -> AdaptationEvent:
        return cls(
            timestamp=datetime.now(timezone.utc).isoformat(),
            from_style=from_style,
            to_style=to_style,
            reason=reason,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class StyleChange:
    """Style-change notification handed back to the caller."""
    from_style: Style
    to_style: Style
    reason: str
