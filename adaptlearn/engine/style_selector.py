"""
Learning-style selection policy.

Pure decision functions over a StyleEffectivenessMap. Nothing here mutates
state; the controller decides whether to apply a recommendation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.observation import STYLES, Style

# Recommended content types per style
STYLE_CONTENT_TYPES: Dict[str, List[str]] = {
    "visual": [
        "interactive-diagrams",
        "video-explanations",
        "mind-maps",
        "infographics",
    ],
    "auditory": [
        "audio-lessons",
        "discussion-based",
        "verbal-explanations",
        "music-based-learning",
    ],
    "kinesthetic": [
        "interactive-simulations",
        "hands-on-exercises",
        "role-playing",
        "physical-demonstrations",
    ],
}


@dataclass
class ContentRecommendation:
    """
    Content adjustment suggested from style effectiveness.

    Attributes:
        type: "content_mix" or "content_type"
        description: Human-readable summary
        styles: Styles the recommendation applies to
        ratio: Style -> percentage (content_mix only)
        content_types: Style -> recommended content types (content_type only)
    """
    type: str
    description: str
    styles: List[Style] = field(default_factory=list)
    ratio: Dict[str, int] = field(default_factory=dict)
    content_types: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type,
            "description": self.description,
            "styles": list(self.styles),
            "ratio": dict(self.ratio),
            "content_types": {k: list(v) for k, v in self.content_types.items()},
        }


def _best(scores: Mapping[str, float], candidates: Iterable[Style]) -> Optional[Style]:
    best_style: Optional[Style] = None
    best_score = 0.0
    for style in candidates:
        score = scores.get(style, 0.0)
        # Strict comparison keeps the first style on ties
        if best_style is None or score > best_score:
            best_style, best_score = style, score

    if best_style is None or best_score <= 0:
        return None
    return best_style


def select(scores: Optional[Mapping[str, float]]) -> Optional[Style]:
    """
    Choose the style with the greatest aggregate effectiveness.

    Ties are broken by declared order (visual, auditory, kinesthetic).

    Args:
        scores: Style -> aggregate effectiveness (missing styles count as 0)

    Returns:
        The selected style, or None if no style is net-positive
    """
    if scores is None:
        return None
    return _best(scores, STYLES)


def select_alternative(
    scores: Optional[Mapping[str, float]], current: Style
) -> Optional[Style]:
    """Best net-positive style other than the current one."""
    if scores is None:
        return None
    return _best(scores, [style for style in STYLES if style != current])


def hybrid_styles(scores: Optional[Mapping[str, float]], threshold: float) -> List[Style]:
    """Styles scoring strictly above threshold, in declared order."""
    if scores is None:
        return []
    return [style for style in STYLES if scores.get(style, 0.0) > threshold]


def content_types_for_style(style: str) -> List[str]:
    """Recommended content types for a style (empty for unknown styles)."""
    return list(STYLE_CONTENT_TYPES.get(style, []))


def recommend_content(
    scores: Optional[Mapping[str, float]], threshold: float
) -> List[ContentRecommendation]:
    """
    Build content recommendations from style effectiveness.

    Strategy:
    - More than one style above threshold: blend them, weighted by score
    - Always list the content types suited to each style above threshold

    Returns:
        List of ContentRecommendation (empty when scores is None)
    """
    if scores is None:
        return []

    hybrid = hybrid_styles(scores, threshold)
    recommendations = []

    if len(hybrid) > 1:
        recommendations.append(
            ContentRecommendation(
                type="content_mix",
                description="Blend multiple learning styles",
                styles=hybrid,
                ratio={style: round(scores[style] * 100) for style in hybrid},
            )
        )

    recommendations.append(
        ContentRecommendation(
            type="content_type",
            description="Optimal content types",
            styles=hybrid,
            content_types={style: content_types_for_style(style) for style in hybrid},
        )
    )

    return recommendations
