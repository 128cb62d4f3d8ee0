"""
Assessment Session - fixed-size, style-tagged question sets with streaks and hints.

State machine: idle -> in_progress -> completed.

A session produces one PerformanceObservation per answered question and,
on completion, exactly one SessionSummary carrying the recommended
difficulty for the assessed skill.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..config import config
from ..engine.difficulty import DifficultyAdjuster, classify_performance
from .observation import PerformanceLevel, PerformanceObservation, Style, validate_style

logger = logging.getLogger(__name__)


# Question components per learning style; content types are "{style}-{component}"
STYLE_COMPONENTS: Dict[str, List[str]] = {
    "visual": ["diagrams", "charts", "images"],
    "auditory": ["audio-clips", "verbal-descriptions", "discussions"],
    "kinesthetic": ["interactive-simulations", "hands-on-activities", "drag-drop"],
}

HINT_TEMPLATES: Dict[str, str] = {
    "visual": "Try visualizing the problem...",
    "auditory": "Think about how this would sound...",
    "kinesthetic": "Try working through this step by step...",
}
GENERIC_HINT = "Consider the relationship between the concepts..."

OPTION_IDS = ("a", "b", "c")


class InvalidSessionStateError(ValueError):
    """Raised when a session operation is called out of order."""


class SessionStatus(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


def generate_hint(style: str) -> str:
    """Style-specific hint text, falling back to a generic hint."""
    return HINT_TEMPLATES.get(style, GENERIC_HINT)


@dataclass
class AnswerOption:
    option_id: str
    text: str
    is_correct: bool = False


@dataclass
class AssessmentQuestion:
    """
    A generated assessment question.

    Attributes:
        question_id: Question identifier (unique within the session)
        content: Question text
        style: Learning style the question is presented in
        difficulty: Difficulty level the question was generated for
        content_type: Presentation format tag used for effectiveness analysis
        options: Answer options (exactly one correct)
        hint_count: Hints requested for this question so far
    """
    question_id: str
    content: str
    style: Style
    difficulty: int
    content_type: str
    options: List[AnswerOption] = field(default_factory=list)
    hint_count: int = 0

    def find_option(self, option_id: str) -> Optional[AnswerOption]:
        return next((opt for opt in self.options if opt.option_id == option_id), None)

    @property
    def correct_option_id(self) -> Optional[str]:
        option = next((opt for opt in self.options if opt.is_correct), None)
        return option.option_id if option else None


@dataclass
class QuestionResponse:
    """
    Learner's response to a question.

    Attributes:
        question_id: Question identifier
        content_type: Presentation format of the question
        difficulty: Question difficulty
        selected_option: Option the learner picked
        is_correct: Whether the answer is correct
        hints_used: Hints requested before answering
        time_spent: Time spent on the question
        engagement: Engagement metric in [0, 1]
        streak: Streak after this answer
    """
    question_id: str
    content_type: str
    difficulty: int
    selected_option: str
    is_correct: bool
    hints_used: int = 0
    time_spent: float = 0.0
    engagement: float = 1.0
    streak: int = 0

    def to_observation(self) -> PerformanceObservation:
        return PerformanceObservation(
            content_type=self.content_type,
            correct=self.is_correct,
            time_spent=self.time_spent,
            engagement=self.engagement,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "question_id": self.question_id,
            "content_type": self.content_type,
            "difficulty": self.difficulty,
            "selected_option": self.selected_option,
            "is_correct": self.is_correct,
            "hints_used": self.hints_used,
            "time_spent": self.time_spent,
            "engagement": self.engagement,
            "streak": self.streak,
        }


@dataclass(frozen=True)
class SessionSummary:
    """Result of a completed session, produced exactly once."""
    session_id: str
    subject: str
    skill: str
    style: Style
    difficulty: int
    total_questions: int
    correct_count: int
    accuracy: float
    average_hints: float
    performance_level: PerformanceLevel
    recommended_difficulty: int
    final_streak: int
    best_streak: int
    style_effectiveness: Dict[str, Any]
    observations: tuple[PerformanceObservation, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (external summary contract plus details)."""
        return {
            "session_id": self.session_id,
            "subject": self.subject,
            "skill": self.skill,
            "style": self.style,
            "difficulty": self.difficulty,
            "total_questions": self.total_questions,
            "correct_count": self.correct_count,
            "accuracy": self.accuracy,
            "average_hints": self.average_hints,
            "performance_level": self.performance_level,
            "recommended_difficulty": self.recommended_difficulty,
            "final_streak": self.final_streak,
            "best_streak": self.best_streak,
            "style_effectiveness": dict(self.style_effectiveness),
        }


class AssessmentSession:
    """
    Assessment session for one (subject, skill, style, difficulty) tuple.

    Features:
    - Generate a fixed-size question set tagged with style and difficulty
    - Track the current question, streak and per-question hint counts
    - Reject out-of-order answers and hints instead of ignoring them
    - Classify performance and recommend the next difficulty on completion
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        num_questions: Optional[int] = None,
        adjuster: Optional[DifficultyAdjuster] = None,
    ):
        """
        Initialize an idle session.

        Args:
            session_id: Session ID (auto-generated if None)
            num_questions: Questions per session (defaults to config)
            adjuster: Difficulty adjuster (defaults to the configured bound)
        """
        self.session_id = session_id or f"as-{uuid.uuid4()}"
        self.num_questions = (
            config.assessment.questions_per_session if num_questions is None else num_questions
        )
        if self.num_questions < 1:
            raise ValueError(f"Number of questions must be >= 1, got {self.num_questions}")
        self.adjuster = adjuster or DifficultyAdjuster.from_config()

        self.status = SessionStatus.IDLE
        self.subject: Optional[str] = None
        self.skill: Optional[str] = None
        self.style: Optional[Style] = None
        self.difficulty: Optional[int] = None

        self._reset()

    def _reset(self) -> None:
        self.questions: List[AssessmentQuestion] = []
        self.responses: List[QuestionResponse] = []
        self.current_index = 0
        self.streak = 0
        self.best_streak = 0
        self._summary: Optional[SessionSummary] = None

    # ==================== Lifecycle ====================

    def start(self, subject: str, skill: str, style: Style, difficulty: int) -> None:
        """
        Start (or restart) the session.

        Raises:
            ValueError: If the style is unknown or difficulty is out of range
        """
        validate_style(style)
        if not (1 <= difficulty <= self.adjuster.upper_bound):
            raise ValueError(
                f"Difficulty must be in [1, {self.adjuster.upper_bound}], got {difficulty}"
            )

        self.subject = subject
        self.skill = skill
        self.style = style
        self.difficulty = difficulty
        self._reset()
        self.questions = self._generate_questions(subject, skill, style, difficulty)
        self.status = SessionStatus.IN_PROGRESS

        logger.debug(
            "Started session %s: %s/%s style=%s difficulty=%d",
            self.session_id, subject, skill, style, difficulty,
        )

    def _generate_questions(
        self, subject: str, skill: str, style: Style, difficulty: int
    ) -> List[AssessmentQuestion]:
        components = STYLE_COMPONENTS[style]
        questions = []
        for index in range(self.num_questions):
            correct_id = OPTION_IDS[index % len(OPTION_IDS)]
            questions.append(
                AssessmentQuestion(
                    question_id=f"q-{index}",
                    content=f"Sample {style} question for {subject} - {skill} (Difficulty: {difficulty})",
                    style=style,
                    difficulty=difficulty,
                    content_type=f"{style}-{components[index % len(components)]}",
                    options=[
                        AnswerOption(
                            option_id=option_id,
                            text=f"Option {option_id.upper()}",
                            is_correct=option_id == correct_id,
                        )
                        for option_id in OPTION_IDS
                    ],
                )
            )
        return questions

    @property
    def current_question(self) -> Optional[AssessmentQuestion]:
        if self.status != SessionStatus.IN_PROGRESS:
            return None
        return self.questions[self.current_index]

    def _require_current(self, question_id: str, action: str) -> AssessmentQuestion:
        if self.status != SessionStatus.IN_PROGRESS:
            logger.warning(
                "Rejected %s on session %s in state %s", action, self.session_id, self.status.value
            )
            raise InvalidSessionStateError(
                f"Cannot {action}: session {self.session_id} is {self.status.value}"
            )

        question = self.questions[self.current_index]
        if question_id != question.question_id:
            logger.warning(
                "Rejected %s for %s on session %s (current question is %s)",
                action, question_id, self.session_id, question.question_id,
            )
            raise InvalidSessionStateError(
                f"Cannot {action} for question {question_id}: current question is {question.question_id}"
            )
        return question

    # ==================== Answers & Hints ====================

    def answer(
        self,
        question_id: str,
        option_id: str,
        time_spent: float = 0.0,
        engagement: float = 1.0,
    ) -> QuestionResponse:
        """
        Record the answer to the current question.

        Args:
            question_id: Must equal the current question's ID
            option_id: Selected option
            time_spent: Time spent on the question (>= 0)
            engagement: Engagement metric in [0, 1]

        Returns:
            QuestionResponse for the answered question

        Raises:
            InvalidSessionStateError: Session not in progress or wrong question
            ValueError: Unknown option or invalid time/engagement
        """
        question = self._require_current(question_id, "answer")

        option = question.find_option(option_id)
        if option is None:
            raise ValueError(f"Option {option_id!r} not found in question {question_id}")
        if time_spent < 0:
            raise ValueError(f"Time spent cannot be negative: {time_spent}")
        if not (0.0 <= engagement <= 1.0):
            raise ValueError(f"Engagement must be in [0, 1], got {engagement}")

        if option.is_correct:
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
        else:
            self.streak = 0

        response = QuestionResponse(
            question_id=question.question_id,
            content_type=question.content_type,
            difficulty=question.difficulty,
            selected_option=option_id,
            is_correct=option.is_correct,
            hints_used=question.hint_count,
            time_spent=time_spent,
            engagement=engagement,
            streak=self.streak,
        )
        self.responses.append(response)

        if self.current_index < len(self.questions) - 1:
            self.current_index += 1
        else:
            self._complete()

        return response

    def request_hint(self, question_id: str) -> str:
        """
        Request a hint for the current question.

        Hints do not affect correctness; they only count toward average hints.

        Raises:
            InvalidSessionStateError: Session not in progress or wrong question
        """
        question = self._require_current(question_id, "request hint")
        question.hint_count += 1
        return generate_hint(question.style)

    # ==================== Completion ====================

    def _complete(self) -> None:
        total = len(self.responses)
        correct = sum(1 for r in self.responses if r.is_correct)
        accuracy = correct / total
        average_hints = sum(r.hints_used for r in self.responses) / total
        level = classify_performance(accuracy, average_hints)

        self._summary = SessionSummary(
            session_id=self.session_id,
            subject=self.subject,
            skill=self.skill,
            style=self.style,
            difficulty=self.difficulty,
            total_questions=total,
            correct_count=correct,
            accuracy=accuracy,
            average_hints=average_hints,
            performance_level=level,
            recommended_difficulty=self.adjuster.adjust(self.difficulty, level),
            final_streak=self.streak,
            best_streak=self.best_streak,
            style_effectiveness=self._style_effectiveness(accuracy),
            observations=tuple(r.to_observation() for r in self.responses),
        )
        self.status = SessionStatus.COMPLETED

        logger.debug(
            "Completed session %s: accuracy=%.2f level=%s difficulty %d -> %d",
            self.session_id, accuracy, level, self.difficulty,
            self._summary.recommended_difficulty,
        )

    def _style_effectiveness(self, accuracy: float) -> Dict[str, Any]:
        effective = accuracy >= config.assessment.style_effective_accuracy
        return {
            "style": self.style,
            "rate": accuracy,
            "recommendation": "style_effective" if effective else "consider_alternative_style",
        }

    @property
    def summary(self) -> Optional[SessionSummary]:
        """Session summary (None until completed)."""
        return self._summary

    @property
    def observations(self) -> List[PerformanceObservation]:
        """Observations for the questions answered so far."""
        return [r.to_observation() for r in self.responses]

    def to_dict(self) -> Dict[str, Any]:
        """Convert session state to dictionary."""
        return {
            "session_id": self.session_id,
            "status": self.status.value,
            "subject": self.subject,
            "skill": self.skill,
            "style": self.style,
            "difficulty": self.difficulty,
            "current_index": self.current_index,
            "streak": self.streak,
            "best_streak": self.best_streak,
            "total_questions": len(self.questions),
            "hint_counts": {q.question_id: q.hint_count for q in self.questions},
            "responses": [r.to_dict() for r in self.responses],
            "summary": self._summary.to_dict() if self._summary else None,
        }
