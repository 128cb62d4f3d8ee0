"""
Tests for effectiveness analysis (sliding window, style attribution, scoring).
"""

import pytest

from adaptlearn.engine.effectiveness import (
    analyze,
    attribute_style,
    effectiveness_score,
    observation_effectiveness,
    style_rolling_effectiveness,
    style_scores,
)


class TestEffectivenessScore:
    """Test the weighted effectiveness formula."""

    def test_perfect_score(self):
        assert effectiveness_score(5, 5, 0.0, 5.0) == pytest.approx(1.0)

    def test_incorrect_without_engagement_keeps_time_term(self):
        # Only the time term contributes
        assert effectiveness_score(1, 0, 0.0, 0.0) == pytest.approx(0.3)

    def test_time_term_goes_negative(self):
        """Average time above 100 pushes the score below zero."""
        assert effectiveness_score(1, 0, 300.0, 0.0) == pytest.approx(-0.6)

    def test_observation_effectiveness(self, make_observation):
        obs = make_observation(correct=False, time_spent=50.0, engagement=0.5)
        assert observation_effectiveness(obs) == pytest.approx(0.15 + 0.15)


class TestAnalyze:
    """Test the sliding-window analysis."""

    @pytest.mark.parametrize("size", [0, 1, 2, 3, 4])
    def test_undersized_history_returns_none(self, make_observation, size):
        history = [make_observation() for _ in range(size)]
        assert analyze(history, window=5) is None

    def test_same_type_all_correct(self, make_observation):
        """5 correct answers, zero time, full engagement -> effectiveness 1.0."""
        history = [make_observation("visual-diagrams") for _ in range(5)]

        patterns = analyze(history, window=5)

        assert list(patterns) == ["visual-diagrams"]
        stats = patterns["visual-diagrams"]
        assert stats.attempts == 5
        assert stats.successes == 5
        assert stats.effectiveness == pytest.approx(1.0)

    def test_only_last_window_is_analyzed(self, make_observation):
        history = [make_observation("auditory-discussions", correct=False)]
        history += [make_observation("visual-charts") for _ in range(5)]

        patterns = analyze(history, window=5)

        assert "auditory-discussions" not in patterns
        assert patterns["visual-charts"].attempts == 5

    def test_grouping_by_content_type(self, make_observation):
        history = [
            make_observation("visual-diagrams"),
            make_observation("visual-diagrams", correct=False, engagement=0.0),
            make_observation("kinesthetic-drag-drop", time_spent=20.0),
        ]

        patterns = analyze(history, window=3)

        diagrams = patterns["visual-diagrams"]
        assert diagrams.attempts == 2
        assert diagrams.successes == 1
        assert diagrams.success_rate == 0.5
        assert diagrams.average_engagement == 0.5
        # 0.4 * 0.5 + 0.3 * 1 + 0.3 * 0.5
        assert diagrams.effectiveness == pytest.approx(0.65)

        drag = patterns["kinesthetic-drag-drop"]
        assert drag.average_time == 20.0
        assert drag.effectiveness == pytest.approx(0.4 + 0.3 * 0.8 + 0.3)

    def test_invalid_window(self, make_observation):
        with pytest.raises(ValueError, match="Window"):
            analyze([make_observation()], window=0)

    def test_history_is_not_mutated(self, make_observation):
        history = [make_observation() for _ in range(5)]
        snapshot = list(history)
        analyze(history, window=5)
        assert history == snapshot


class TestAttribution:
    """Test content type -> style attribution."""

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("visual-diagrams", "visual"),
            ("auditory-audio-clips", "auditory"),
            ("kinesthetic-drag-drop", "kinesthetic"),
            ("audio-clips", None),
            ("reading", None),
        ],
    )
    def test_attribute_style(self, content_type, expected):
        assert attribute_style(content_type) == expected

    def test_first_declared_style_wins(self):
        assert attribute_style("auditory-visual-mix") == "visual"


class TestStyleScores:
    """Test per-style aggregation."""

    def _patterns(self, make_observation):
        history = [make_observation("visual-diagrams") for _ in range(3)]
        history += [
            make_observation("visual-charts", correct=False, engagement=0.0) for _ in range(2)
        ]
        history.append(make_observation("reading"))
        return analyze(history, window=6)

    def test_none_passes_through(self):
        assert style_scores(None) is None

    def test_sums_content_type_effectiveness(self, make_observation):
        scores = style_scores(self._patterns(make_observation))

        assert scores["visual"] == pytest.approx(1.0 + 0.3)
        assert scores["auditory"] == 0.0
        assert scores["kinesthetic"] == 0.0

    def test_unattributed_types_are_ignored(self, make_observation):
        scores = style_scores(self._patterns(make_observation))
        assert set(scores) == {"visual", "auditory", "kinesthetic"}

    def test_rolling_effectiveness_is_attempt_weighted(self, make_observation):
        patterns = self._patterns(make_observation)

        # (3 * 1.0 + 2 * 0.3) / 5
        assert style_rolling_effectiveness(patterns, "visual") == pytest.approx(0.72)
        assert style_rolling_effectiveness(patterns, "auditory") is None

    def test_rolling_effectiveness_without_patterns(self):
        assert style_rolling_effectiveness(None, "visual") is None
