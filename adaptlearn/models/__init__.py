"""
Data models for adaptive learning.

This module contains core data models:
- PerformanceObservation / AdaptationEvent / StyleChange: effectiveness pipeline values
- AssessmentSession: style-tagged question sessions with streaks and hints
- LearnerProfile: learning style, per-skill difficulty levels and progress
"""

from .observation import (
    STYLES,
    AdaptationEvent,
    ContentTypeStats,
    PerformanceObservation,
    StyleChange,
)
from .assessment_session import (
    AssessmentSession,
    InvalidSessionStateError,
    QuestionResponse,
    SessionStatus,
    SessionSummary,
)
from .learner_profile import LearnerProfile

__all__ = [
    "STYLES",
    "AdaptationEvent",
    "ContentTypeStats",
    "PerformanceObservation",
    "StyleChange",
    "AssessmentSession",
    "InvalidSessionStateError",
    "QuestionResponse",
    "SessionStatus",
    "SessionSummary",
    "LearnerProfile",
]
