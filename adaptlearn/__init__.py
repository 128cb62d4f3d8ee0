"""
AdaptLearn - adaptive scoring and learning-style selection.

Subpackages:
- models: observations, assessment sessions and learner profiles
- engine: effectiveness analysis, style selection, difficulty adjustment
  and the per-learner adaptation controller
- utils: schema validation and progress analytics
"""

import logging
from typing import Optional

from .config import config
from .orchestrator import AnswerResult, PersonalizationEngine, SessionHandle


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Set the package logger level (defaults to config.logging.log_level)."""
    logger = logging.getLogger(__name__)
    logger.setLevel((level or config.logging.log_level).upper())
    return logger


__all__ = [
    "AnswerResult",
    "PersonalizationEngine",
    "SessionHandle",
    "config",
    "configure_logging",
]
