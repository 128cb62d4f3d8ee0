"""
Shared pytest fixtures and configuration for AdaptLearn tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Make the package importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent))

from adaptlearn.engine.difficulty import DifficultyAdjuster  # noqa: E402
from adaptlearn.models.observation import PerformanceObservation  # noqa: E402


@pytest.fixture
def make_observation():
    """
    Fixture providing a factory for PerformanceObservation.

    Defaults describe a correct answer with no time cost and full engagement
    (effectiveness 1.0).
    """

    def _make(content_type="visual-diagrams", correct=True, time_spent=0.0, engagement=1.0):
        return PerformanceObservation(
            content_type=content_type,
            correct=correct,
            time_spent=time_spent,
            engagement=engagement,
        )

    return _make


@pytest.fixture
def adjuster():
    """Difficulty adjuster with the default bound of 5 (independent of env)."""
    return DifficultyAdjuster(5)


@pytest.fixture
def valid_profile():
    """
    Fixture providing a valid learner profile dict.

    Returns:
        dict: A complete profile that passes all validation
    """
    now = datetime.now(timezone.utc).isoformat()
    return {
        "meta": {
            "schema_version": 1,
            "created_at": now,
            "last_updated": now,
        },
        "learner_id": "learner-test-001",
        "name": "Test Learner",
        "learning_style": "visual",
        "skill_levels": {"math-addition": 2, "math-fractions": 1},
        "progress": {"math-addition": 80.0},
        "achievements": ["perfect-session"],
        "assessment_history": [
            {
                "session_id": "as-001",
                "skill_key": "math-addition",
                "timestamp": now,
                "style": "visual",
                "accuracy": 1.0,
                "average_hints": 0.0,
                "performance_level": "excellent",
                "difficulty_before": 1,
                "difficulty_after": 2,
            }
        ],
    }


@pytest.fixture
def restore_config():
    """
    Snapshot mutable config sections and restore them after the test.

    Tests that tweak the singleton config must use this fixture.
    """
    from copy import copy

    from adaptlearn.config import config

    adaptation = copy(config.adaptation)
    assessment = copy(config.assessment)
    yield config
    config.adaptation = adaptation
    config.assessment = assessment


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
