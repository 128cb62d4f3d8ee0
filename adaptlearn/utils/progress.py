"""
Progress analytics helpers for dashboards and reporting.

Provides:
- Skill level summary statistics (mean, median, min, max)
- Skill level histograms
- Adaptation history summaries
"""

from __future__ import annotations

import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Tuple

from ..models.observation import AdaptationEvent


def skill_level_summary(levels: Dict[str, int]) -> Dict[str, float]:
    """
    Calculate summary statistics for skill difficulty levels.

    Args:
        levels: Dict mapping skill keys to difficulty levels

    Returns:
        Dict with mean, median, min, max, std_dev, count

    Example:
        >>> skill_level_summary({"math-addition": 3, "math-fractions": 1})["mean"]
        2.0
    """
    if not levels:
        return {
            "mean": 0.0,
            "median": 0.0,
            "min": 0.0,
            "max": 0.0,
            "std_dev": 0.0,
            "count": 0,
        }

    values = sorted(levels.values())
    n = len(values)

    mean_val = sum(values) / n

    if n % 2 == 1:
        median_val = float(values[n // 2])
    else:
        median_val = (values[n // 2 - 1] + values[n // 2]) / 2.0

    variance = sum((v - mean_val) ** 2 for v in values) / n
    std_dev = math.sqrt(variance)

    return {
        "mean": round(mean_val, 2),
        "median": round(median_val, 2),
        "min": float(values[0]),
        "max": float(values[-1]),
        "std_dev": round(std_dev, 2),
        "count": n,
    }


def skill_level_histogram(levels: Dict[str, int]) -> List[Tuple[int, int]]:
    """
    Count skills per difficulty level.

    Returns:
        List of (level, count) tuples, sorted by level

    Example:
        >>> skill_level_histogram({"a": 2, "b": 2, "c": 5})
        [(2, 2), (5, 1)]
    """
    return sorted(Counter(levels.values()).items())


def adaptation_summary(events: Iterable[AdaptationEvent]) -> Dict[str, Any]:
    """
    Summarize learning-style switches.

    Returns:
        Dict with total switches, counts per reason and per target style,
        and the most recent target style (None when there were no switches)
    """
    events = list(events)
    return {
        "total_switches": len(events),
        "by_reason": dict(Counter(e.reason for e in events)),
        "by_target_style": dict(Counter(e.to_style for e in events)),
        "latest_style": events[-1].to_style if events else None,
    }
