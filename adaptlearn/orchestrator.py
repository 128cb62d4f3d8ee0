"""
Personalization Engine - the call contracts exposed to the UI layer.

Wires the pieces for one learner:
1. Assessment sessions (questions, answers, hints, streaks)
2. Style adaptation after every answered question
3. Difficulty adjustment when a session completes
4. Learner profile bookkeeping (skill levels, progress, achievements)

The UI layer only ever sees plain values: session handles, answer results,
hint text, summary dicts and StyleChange notifications.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .engine.controller import AdaptationController
from .engine.difficulty import DifficultyAdjuster
from .models.assessment_session import AssessmentSession
from .models.learner_profile import LearnerProfile
from .models.observation import Style, StyleChange

logger = logging.getLogger(__name__)

StyleChangedCallback = Callable[[Style], None]

# (subject, skill, style, difficulty)
SessionKey = Tuple[str, str, Style, int]


@dataclass(frozen=True)
class SessionHandle:
    """Opaque reference to a started session."""
    session_id: str


@dataclass(frozen=True)
class AnswerResult:
    """Outcome of submitting an answer."""
    streak: int
    completed: bool
    correct: bool
    style_change: Optional[StyleChange] = None


class PersonalizationEngine:
    """
    Personalization controller for a single learner.

    Manages:
    - Session lifecycle keyed by SessionHandle; starting a session for the
      same (subject, skill, style, difficulty) resets the existing one
    - Forwarding observations to the AdaptationController
    - Applying completed-session difficulty to the LearnerProfile
    - Notifying style changes (returned value plus optional callback)
    """

    def __init__(
        self,
        profile: Optional[LearnerProfile] = None,
        controller: Optional[AdaptationController] = None,
        adjuster: Optional[DifficultyAdjuster] = None,
        on_style_changed: Optional[StyleChangedCallback] = None,
    ):
        """
        Initialize the engine.

        Args:
            profile: Learner profile (a new one is created if None)
            controller: Adaptation controller (starts from the profile's style if None)
            adjuster: Difficulty adjuster (profile's bound, else configured bound, if None)
            on_style_changed: Called with the new style after each style change

        Raises:
            ValueError: If the profile's upper bound differs from the adjuster's
        """
        if adjuster is None:
            adjuster = (
                DifficultyAdjuster(profile.upper_bound) if profile else DifficultyAdjuster.from_config()
            )
        self.adjuster = adjuster
        self.profile = profile or LearnerProfile(upper_bound=self.adjuster.upper_bound)
        if self.profile.upper_bound != self.adjuster.upper_bound:
            raise ValueError(
                f"Profile bound {self.profile.upper_bound} does not match "
                f"adjuster bound {self.adjuster.upper_bound}"
            )
        self.controller = controller or AdaptationController(
            initial_style=self.profile.learning_style
        )
        self.on_style_changed = on_style_changed

        self._sessions: Dict[str, AssessmentSession] = {}
        self._session_ids: Dict[SessionKey, str] = {}

    @property
    def current_style(self) -> Style:
        return self.controller.current_style

    def _session(self, handle: SessionHandle) -> AssessmentSession:
        try:
            return self._sessions[handle.session_id]
        except KeyError:
            raise KeyError(f"Unknown session handle: {handle.session_id}") from None

    # ==================== Call Contracts ====================

    def start_session(
        self,
        subject: str,
        skill: str,
        style: Optional[Style] = None,
        difficulty: Optional[int] = None,
    ) -> SessionHandle:
        """
        Start an assessment session.

        Args:
            subject: Subject name
            skill: Skill within the subject
            style: Presentation style (defaults to the current adapted style)
            difficulty: Difficulty level (defaults to the profile's level for the skill)

        Returns:
            SessionHandle for subsequent calls
        """
        key: SessionKey = (
            subject,
            skill,
            style or self.controller.current_style,
            difficulty if difficulty is not None else self.profile.get_skill_level(subject, skill),
        )
        session_id = self._session_ids.get(key)
        if session_id is None:
            session = AssessmentSession(adjuster=self.adjuster)
        else:
            session = self._sessions[session_id]

        # Restarting resets the previous state for the same key
        session.start(*key)
        self._session_ids[key] = session.session_id
        self._sessions[session.session_id] = session
        return SessionHandle(session.session_id)

    def submit_answer(
        self,
        handle: SessionHandle,
        question_id: str,
        option_id: str,
        time_spent: float = 0.0,
        engagement: float = 1.0,
    ) -> AnswerResult:
        """
        Submit an answer for the current question.

        When the answer completes the session, the profile is updated before
        any style-change callback runs.

        Raises:
            KeyError: Unknown handle
            InvalidSessionStateError: Session not in progress or wrong question
        """
        session = self._session(handle)
        response = session.answer(question_id, option_id, time_spent, engagement)

        change = self.controller.on_observation(response.to_observation())

        # Only the answer that completes a session sees a summary here;
        # later answers are rejected by the session
        summary = session.summary
        if summary is not None:
            new_level = self.profile.apply_session_summary(summary, self.adjuster)
            logger.info(
                "Session %s complete: %s/%s accuracy=%.2f level=%s difficulty -> %d",
                session.session_id, summary.subject, summary.skill,
                summary.accuracy, summary.performance_level, new_level,
            )

        if change is not None:
            self._notify(change)

        return AnswerResult(
            streak=session.streak,
            completed=summary is not None,
            correct=response.is_correct,
            style_change=change,
        )

    def request_hint(self, handle: SessionHandle, question_id: str) -> str:
        """
        Request a style-specific hint for the current question.

        Raises:
            KeyError: Unknown handle
            InvalidSessionStateError: Session not in progress or wrong question
        """
        return self._session(handle).request_hint(question_id)

    def get_session_summary(self, handle: SessionHandle) -> Optional[Dict[str, Any]]:
        """
        Summary of a completed session (None until completed).

        Returns:
            Dict with accuracy, average_hints, performance_level,
            recommended_difficulty and style_effectiveness
        """
        summary = self._session(handle).summary
        if summary is None:
            return None
        return {
            "accuracy": summary.accuracy,
            "average_hints": summary.average_hints,
            "performance_level": summary.performance_level,
            "recommended_difficulty": summary.recommended_difficulty,
            "style_effectiveness": dict(summary.style_effectiveness),
        }

    def get_session(self, handle: SessionHandle) -> AssessmentSession:
        """Underlying session, for question display."""
        return self._session(handle)

    # ==================== Notifications ====================

    def _notify(self, change: StyleChange) -> None:
        self.profile.set_learning_style(change.to_style)
        if self.on_style_changed is not None:
            self.on_style_changed(change.to_style)

    def status(self) -> Dict[str, Any]:
        """Snapshot of adaptation state for dashboards."""
        return {
            "learner_id": self.profile.learner_id,
            "current_style": self.controller.current_style,
            "style_effectiveness": self.controller.style_effectiveness,
            "observations": len(self.controller.history),
            "adaptations": [e.to_dict() for e in self.controller.adaptation_log],
            "recommendations": [r.to_dict() for r in self.controller.recommendations()],
            "skill_levels": self.profile.skill_levels,
            "window": self.controller.window,
            "threshold": self.controller.threshold,
            "difficulty_upper_bound": self.adjuster.upper_bound,
        }
