"""
Tests for LearnerProfile skill levels, progress and achievements.
"""

import pytest
from jsonschema import ValidationError

from adaptlearn.engine.difficulty import DifficultyAdjuster
from adaptlearn.models.assessment_session import AssessmentSession
from adaptlearn.models.learner_profile import (
    PERFECT_SESSION,
    STREAK_FIVE,
    LearnerProfile,
    skill_key,
)

CORRECT = ["a", "b", "c", "a", "b"]
WRONG = ["b", "c", "a", "b", "c"]


def run_session(profile, options, subject="math", skill="fractions"):
    """Run a full visual session at the profile's level and return its summary."""
    session = AssessmentSession(adjuster=DifficultyAdjuster(5))
    session.start(subject, skill, "visual", profile.get_skill_level(subject, skill))
    for i, option in enumerate(options):
        session.answer(f"q-{i}", option)
    return session.summary


class TestLearnerProfileCreation:
    """Test profile initialization."""

    def test_create_profile(self):
        profile = LearnerProfile(name="Alice")

        assert profile.name == "Alice"
        assert profile.learner_id.startswith("learner-")
        assert profile.learning_style == "visual"
        assert profile.skill_levels == {}
        assert profile.achievements == []

    def test_create_with_style(self):
        profile = LearnerProfile(learning_style="kinesthetic")
        assert profile.learning_style == "kinesthetic"

    def test_invalid_style_fails_validation(self):
        with pytest.raises(ValidationError):
            LearnerProfile(learning_style="olfactory")

    def test_invalid_id_fails_validation(self):
        with pytest.raises(ValidationError):
            LearnerProfile(learner_id="bad id")

    def test_skip_validation(self):
        profile = LearnerProfile(learner_id="bad id", validate=False)
        assert profile.learner_id == "bad id"

    def test_repr(self):
        profile = LearnerProfile(learner_id="learner-abc", name="Bob")
        assert repr(profile) == "LearnerProfile(id=learner-abc, name='Bob', style=visual, skills=0)"


class TestSkillLevels:
    """Test per-skill difficulty state."""

    def test_skill_key(self):
        assert skill_key("math", "fractions") == "math-fractions"

    def test_level_created_lazily(self):
        profile = LearnerProfile()

        assert profile.get_skill_level("math", "fractions") == 1
        assert profile.skill_levels == {"math-fractions": 1}

    def test_skill_levels_is_a_copy(self):
        profile = LearnerProfile()
        profile.get_skill_level("math", "fractions")

        levels = profile.skill_levels
        levels["math-fractions"] = 99
        assert profile.get_skill_level("math", "fractions") == 1

    def test_excellent_session_raises_level(self):
        profile = LearnerProfile()

        new_level = profile.apply_session_summary(run_session(profile, CORRECT))

        assert new_level == 2
        assert profile.get_skill_level("math", "fractions") == 2

    def test_level_never_drops_below_one(self):
        profile = LearnerProfile()

        profile.apply_session_summary(run_session(profile, WRONG))

        assert profile.get_skill_level("math", "fractions") == 1

    def test_history_entry(self):
        profile = LearnerProfile()
        summary = run_session(profile, CORRECT[:3] + WRONG[3:])

        profile.apply_session_summary(summary)

        entry = profile.assessment_history[0]
        assert entry["session_id"] == summary.session_id
        assert entry["skill_key"] == "math-fractions"
        assert entry["performance_level"] == "good"
        assert entry["difficulty_before"] == 1
        assert entry["difficulty_after"] == 1
        assert profile.get_progress("math", "fractions") == 60.0

    def test_profile_stays_valid(self):
        profile = LearnerProfile()
        profile.apply_session_summary(run_session(profile, CORRECT))
        profile.validate()

    def test_skill_summary(self):
        profile = LearnerProfile()
        profile.apply_session_summary(run_session(profile, CORRECT, skill="fractions"))
        profile.get_skill_level("math", "addition")

        summary = profile.skill_summary()
        assert summary["count"] == 2
        assert summary["mean"] == 1.5
        assert summary["by_level"] == {1: 1, 2: 1}


class TestLearningStyle:
    """Test learning style updates."""

    def test_set_learning_style(self):
        profile = LearnerProfile()
        profile.set_learning_style("auditory")
        assert profile.learning_style == "auditory"

    def test_unknown_style_rejected(self):
        profile = LearnerProfile()
        with pytest.raises(ValueError):
            profile.set_learning_style("olfactory")
        assert profile.learning_style == "visual"


class TestProgressAndAchievements:
    """Test progress tracking and achievements."""

    def test_perfect_session_achievements(self):
        profile = LearnerProfile()
        profile.apply_session_summary(run_session(profile, CORRECT))

        assert profile.achievements == [PERFECT_SESSION, STREAK_FIVE]
        assert profile.get_progress("math", "fractions") == 100.0

    def test_achievements_not_duplicated(self):
        profile = LearnerProfile()
        profile.apply_session_summary(run_session(profile, CORRECT))
        profile.apply_session_summary(run_session(profile, CORRECT))

        assert profile.achievements == [PERFECT_SESSION, STREAK_FIVE]

    def test_add_achievement(self):
        profile = LearnerProfile()
        assert profile.add_achievement("first-login") is True
        assert profile.add_achievement("first-login") is False
        assert profile.add_achievement("") is False

    def test_progress_is_clamped(self):
        profile = LearnerProfile()
        profile.update_progress("math", "fractions", 150)
        assert profile.get_progress("math", "fractions") == 100.0
        profile.update_progress("math", "fractions", -5)
        assert profile.get_progress("math", "fractions") == 0.0

    def test_progress_defaults_to_zero(self):
        assert LearnerProfile().get_progress("art", "drawing") == 0.0

    def test_to_dict_is_a_copy(self):
        profile = LearnerProfile()
        data = profile.to_dict()
        data["achievements"].append("hacked")
        assert profile.achievements == []


class TestUpperBound:
    """Test profiles under a non-default difficulty bound."""

    def test_bound_ten_round_trip(self):
        profile = LearnerProfile(upper_bound=10)
        adjuster = DifficultyAdjuster(10)
        session = AssessmentSession(adjuster=adjuster)
        session.start("math", "fractions", "visual", 9)
        for i, option in enumerate(CORRECT):
            session.answer(f"q-{i}", option)

        assert profile.apply_session_summary(session.summary, adjuster) == 10
        assert profile.to_dict()["skill_levels"]["math-fractions"] == 10
        profile.validate()

    def test_validation_uses_profile_bound(self):
        profile = LearnerProfile(upper_bound=10, validate=False)
        profile._data["skill_levels"]["math-fractions"] = 7
        profile.validate()

        strict = LearnerProfile(upper_bound=5)
        strict._data["skill_levels"]["math-fractions"] = 7
        with pytest.raises(ValidationError, match="exceeds upper bound 5"):
            strict.validate()

    def test_mismatched_adjuster(self):
        profile = LearnerProfile(upper_bound=5)
        summary = run_session(profile, CORRECT)
        with pytest.raises(ValueError, match="does not match"):
            profile.apply_session_summary(summary, DifficultyAdjuster(10))
        assert profile.assessment_history == []
