"""
Alge-Bro Classroom - Runtime components for taking and tracking lessons.

This module provides:
- score / TimedAssessment: Score quizzes and practice problems under a countdown
- compute_stats: Lessons completed, average score and streaks
- ProgressStore: Persist lesson history and the API key
- LessonSession: Lesson lifecycle tying the above together
"""

from .scorer import (
    INDEX_MODE,
    TEXT_MODE,
    ScoringMode,
    mode_for,
    normalize_text,
    score,
    validate_answer,
)

from .timer import TimedAssessment

from .stats import (
    average_score,
    compute_stats,
    current_streak,
    distinct_days,
    longest_streak,
)

from .progress import ProgressStore

from .session import (
    EmptyTopicError,
    LessonSession,
    validate_topic,
)

__all__ = [
    # Scorer
    "INDEX_MODE",
    "TEXT_MODE",
    "ScoringMode",
    "mode_for",
    "normalize_text",
    "score",
    "validate_answer",
    # Timer
    "TimedAssessment",
    # Stats
    "average_score",
    "compute_stats",
    "current_streak",
    "distinct_days",
    "longest_streak",
    # Progress
    "ProgressStore",
    # Session
    "EmptyTopicError",
    "LessonSession",
    "validate_topic",
]
