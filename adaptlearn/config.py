"""
Configuration management for AdaptLearn.

This module centralizes all configuration settings:
- Tunables loaded from environment variables (and a local .env file)
- Sensible defaults for development
- Single source of truth for window sizes, thresholds and bounds
- Validation that reports every problem at once
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class AdaptationConfig:
    """Learning-style adaptation settings."""

    # Number of most recent observations analyzed (hard sliding window)
    window: int = field(
        default_factory=lambda: int(os.getenv("ADAPTLEARN_WINDOW", "5"))
    )
    # Current-style effectiveness below this forces a style switch
    style_effectiveness_threshold: float = field(
        default_factory=lambda: float(os.getenv("ADAPTLEARN_STYLE_THRESHOLD", "0.7"))
    )
    default_style: str = "visual"


@dataclass
class AssessmentConfig:
    """Assessment session and difficulty configuration."""

    questions_per_session: int = 5

    # Difficulty levels are integers in [1, difficulty_upper_bound]
    difficulty_upper_bound: int = field(
        default_factory=lambda: int(os.getenv("ADAPTLEARN_DIFFICULTY_UPPER_BOUND", "5"))
    )
    default_difficulty: int = 1

    # Performance classification
    excellent_accuracy: float = 0.8
    excellent_max_hints: float = 1.0
    good_accuracy: float = 0.6
    fair_accuracy: float = 0.4

    # Session-level style verdict
    style_effective_accuracy: float = 0.6


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)

    schemas_dir: Path = field(init=False)
    learner_profile_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.schemas_dir = self.project_root / "schemas"
        self.learner_profile_schema = self.schemas_dir / "learner_profile.schema.json"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("ADAPTLEARN_LOG_LEVEL", "INFO")
    )


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from adaptlearn.config import config

        window = config.adaptation.window
        upper = config.assessment.difficulty_upper_bound
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.adaptation = AdaptationConfig()
            cls._instance.assessment = AssessmentConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        # Adaptation validation
        if self.adaptation.window < 1:
            errors.append(f"Adaptation window must be >= 1, got {self.adaptation.window}")

        if not (0 <= self.adaptation.style_effectiveness_threshold <= 1):
            errors.append(
                "Adaptation style_effectiveness_threshold must be in [0, 1], "
                f"got {self.adaptation.style_effectiveness_threshold}"
            )

        if self.adaptation.default_style not in ("visual", "auditory", "kinesthetic"):
            errors.append(
                f"Adaptation default_style is not a known style: {self.adaptation.default_style!r}"
            )

        # Assessment validation
        if self.assessment.questions_per_session < 1:
            errors.append(
                f"Assessment questions_per_session must be >= 1, got {self.assessment.questions_per_session}"
            )

        if self.assessment.difficulty_upper_bound < 1:
            errors.append(
                f"Assessment difficulty_upper_bound must be >= 1, got {self.assessment.difficulty_upper_bound}"
            )

        if not (1 <= self.assessment.default_difficulty <= self.assessment.difficulty_upper_bound):
            errors.append(
                f"Assessment default_difficulty ({self.assessment.default_difficulty}) must be in "
                f"[1, {self.assessment.difficulty_upper_bound}]"
            )

        if not (
            0
            <= self.assessment.fair_accuracy
            <= self.assessment.good_accuracy
            <= self.assessment.excellent_accuracy
            <= 1
        ):
            errors.append(
                "Assessment accuracy thresholds must satisfy 0 <= fair <= good <= excellent <= 1"
            )

        # Path validation
        if not self.paths.learner_profile_schema.exists():
            errors.append(
                f"Learner profile schema not found: {self.paths.learner_profile_schema}"
            )

        return errors


# Global config instance
config = Config()
