"""
Adaptation Controller - per-learner owner of observation history and style.

After every observation (and once per finished session) the controller runs
the pure pipeline analyze -> style_scores -> select and decides whether the
learner's presentation style switches. Two triggers exist:

- performance pattern: the best-scoring style differs from the current one
- low effectiveness: the current style's rolling effectiveness in the window
  is below the threshold (or absent); the best alternative style is chosen

At most one AdaptationEvent is recorded per evaluation. When both triggers
hold, the low-effectiveness reason is used.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from ..config import config
from ..models.observation import (
    REASON_LOW_EFFECTIVENESS,
    REASON_PERFORMANCE_PATTERN,
    STYLES,
    AdaptationEvent,
    PerformanceObservation,
    Style,
    StyleChange,
    validate_style,
)
from . import effectiveness, style_selector
from .effectiveness import StyleEffectivenessMap
from .style_selector import ContentRecommendation

if TYPE_CHECKING:
    from ..models.assessment_session import SessionSummary

logger = logging.getLogger(__name__)


class AdaptationController:
    """
    Learning-style adaptation state for a single learner.

    Not shared between learners; construct one instance per learner.
    """

    def __init__(
        self,
        initial_style: Optional[Style] = None,
        window: Optional[int] = None,
        threshold: Optional[float] = None,
    ):
        """
        Initialize the controller.

        Args:
            initial_style: Starting style (defaults to config)
            window: Sliding-window size (defaults to config)
            threshold: Style effectiveness threshold (defaults to config)
        """
        self._current_style: Style = validate_style(
            config.adaptation.default_style if initial_style is None else initial_style
        )
        self.window = config.adaptation.window if window is None else window
        if self.window < 1:
            raise ValueError(f"Window must be >= 1, got {self.window}")
        self.threshold = (
            config.adaptation.style_effectiveness_threshold if threshold is None else threshold
        )

        self._history: List[PerformanceObservation] = []
        self._adaptation_log: List[AdaptationEvent] = []
        self._style_effectiveness: StyleEffectivenessMap = {
            style: 0.0 for style in STYLES
        }

    # ==================== State Access ====================

    @property
    def current_style(self) -> Style:
        return self._current_style

    @property
    def history(self) -> tuple[PerformanceObservation, ...]:
        return tuple(self._history)

    @property
    def adaptation_log(self) -> tuple[AdaptationEvent, ...]:
        return tuple(self._adaptation_log)

    @property
    def style_effectiveness(self) -> StyleEffectivenessMap:
        """Style scores from the latest evaluation (zeros before the first)."""
        return dict(self._style_effectiveness)

    def recommendations(self) -> List[ContentRecommendation]:
        """Content recommendations from the latest style scores."""
        if len(self._history) < self.window:
            return []
        return style_selector.recommend_content(self._style_effectiveness, self.threshold)

    # ==================== Events ====================

    def on_observation(self, observation: PerformanceObservation) -> Optional[StyleChange]:
        """
        Record one observation and re-evaluate the style.

        Returns:
            StyleChange if the style switched, else None
        """
        self._history.append(observation)
        return self._evaluate()

    def on_session_end(self, summary: SessionSummary) -> Optional[StyleChange]:
        """
        Record every observation of a finished session, then evaluate once.

        Returns:
            StyleChange if the style switched, else None
        """
        self._history.extend(summary.observations)
        return self._evaluate()

    def _evaluate(self) -> Optional[StyleChange]:
        patterns = effectiveness.analyze(self._history, self.window)
        if patterns is None:
            return None

        scores = effectiveness.style_scores(patterns)
        self._style_effectiveness = scores
        current = self._current_style

        target: Optional[Style] = None
        reason: Optional[str] = None

        selected = style_selector.select(scores)
        if selected is not None and selected != current:
            target, reason = selected, REASON_PERFORMANCE_PATTERN

        rolling = effectiveness.style_rolling_effectiveness(patterns, current)
        if rolling is None or rolling < self.threshold:
            alternative = style_selector.select_alternative(scores, current)
            if alternative is not None:
                target, reason = alternative, REASON_LOW_EFFECTIVENESS

        if target is None:
            return None
        return self._switch(target, reason)

    def _switch(self, target: Style, reason: str) -> StyleChange:
        event = AdaptationEvent.now(self._current_style, target, reason)
        self._adaptation_log.append(event)
        self._current_style = target

        logger.info("Learning style %s -> %s (%s)", event.from_style, target, reason)
        return StyleChange(from_style=event.from_style, to_style=target, reason=reason)
