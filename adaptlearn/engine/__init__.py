"""
Decision logic for adaptive learning.

This module contains:
- effectiveness: sliding-window effectiveness analysis
- style_selector: learning-style selection and content recommendations
- difficulty: performance classification and clamped difficulty adjustment
- controller: per-learner adaptation controller
"""

from .effectiveness import analyze, attribute_style, style_rolling_effectiveness, style_scores
from .style_selector import recommend_content, select, select_alternative
from .difficulty import DifficultyAdjuster, adjust, classify_performance
from .controller import AdaptationController

__all__ = [
    "analyze",
    "attribute_style",
    "style_rolling_effectiveness",
    "style_scores",
    "recommend_content",
    "select",
    "select_alternative",
    "DifficultyAdjuster",
    "adjust",
    "classify_performance",
    "AdaptationController",
]
