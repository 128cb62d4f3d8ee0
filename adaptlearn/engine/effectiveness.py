"""
Effectiveness analysis over a sliding window of performance observations.

Effectiveness of a content type combines success rate, time cost and
engagement:

    0.4 * success_rate + 0.3 * (1 - avg_time / 100) + 0.3 * avg_engagement

The time term goes negative when the average time exceeds 100 units. Scores
are passed through unclamped; callers must tolerate values outside [0, 1].
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence

from ..config import config
from ..models.observation import STYLES, ContentTypeStats, PerformanceObservation, Style

SUCCESS_WEIGHT = 0.4
TIME_WEIGHT = 0.3
ENGAGEMENT_WEIGHT = 0.3

# Average time per item at which the time term reaches zero
TIME_SCALE = 100.0

PerformancePatterns = Dict[str, ContentTypeStats]
StyleEffectivenessMap = Dict[Style, float]


def effectiveness_score(
    attempts: int, successes: int, total_time: float, total_engagement: float
) -> float:
    """Weighted effectiveness for aggregated counts (attempts must be > 0)."""
    return (
        SUCCESS_WEIGHT * (successes / attempts)
        + TIME_WEIGHT * (1 - total_time / (attempts * TIME_SCALE))
        + ENGAGEMENT_WEIGHT * (total_engagement / attempts)
    )


def observation_effectiveness(observation: PerformanceObservation) -> float:
    """Effectiveness of a single observation."""
    return effectiveness_score(
        1, int(observation.correct), observation.time_spent, observation.engagement
    )


def analyze(
    history: Sequence[PerformanceObservation],
    window: Optional[int] = None,
) -> Optional[PerformancePatterns]:
    """
    Compute per-content-type statistics for the most recent observations.

    Args:
        history: All observations so far, oldest first
        window: Number of recent observations to analyze (defaults to config)

    Returns:
        Mapping of content type to ContentTypeStats, or None when the history
        is shorter than the window (insufficient data)
    """
    window = config.adaptation.window if window is None else window
    if window < 1:
        raise ValueError(f"Window must be >= 1, got {window}")

    if len(history) < window:
        return None

    patterns: PerformancePatterns = {}
    for observation in history[-window:]:
        stats = patterns.setdefault(observation.content_type, ContentTypeStats())
        stats.attempts += 1
        if observation.correct:
            stats.successes += 1
        stats.total_time += observation.time_spent
        stats.total_engagement += observation.engagement

    # Every group holds at least one observation, so attempts > 0
    for stats in patterns.values():
        stats.effectiveness = effectiveness_score(
            stats.attempts, stats.successes, stats.total_time, stats.total_engagement
        )

    return patterns


def attribute_style(content_type: str) -> Optional[Style]:
    """
    Map a content type to a learning style by substring match.

    The first style (in declared order) whose name occurs in the content type
    wins. Content types naming no style return None.
    """
    for style in STYLES:
        if style in content_type:
            return style
    return None


def style_scores(patterns: Optional[PerformancePatterns]) -> Optional[StyleEffectivenessMap]:
    """
    Sum content-type effectiveness into the three style buckets.

    Styles without any attributed content type score 0.0. Unattributed
    content types are ignored.
    """
    if patterns is None:
        return None

    scores: StyleEffectivenessMap = {style: 0.0 for style in STYLES}
    for content_type, stats in patterns.items():
        style = attribute_style(content_type)
        if style is not None:
            scores[style] += stats.effectiveness
    return scores


def style_rolling_effectiveness(
    patterns: Optional[PerformancePatterns], style: Style
) -> Optional[float]:
    """
    Mean per-observation effectiveness of one style within the window.

    Returns None when the window holds no observation attributed to the style.
    """
    if not patterns:
        return None

    attempts = 0
    weighted = 0.0
    for content_type, stats in patterns.items():
        if attribute_style(content_type) == style:
            attempts += stats.attempts
            weighted += stats.effectiveness * stats.attempts

    if attempts == 0:
        return None
    return weighted / attempts
