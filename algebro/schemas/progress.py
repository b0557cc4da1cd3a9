"""
Progress tracking schemas for Alge-Bro.

Defines Pydantic models for student progress including:
- Completed lesson records (the persisted history)
- Derived progress statistics
"""

import datetime as dt

from pydantic import ConfigDict, Field

from .assessment import AssessmentResult, Mistake
from .base import WireModel


class LessonRecord(WireModel):
    """One completed lesson. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    date: dt.date  # calendar day, stored as YYYY-MM-DD
    topic: str
    quiz_score: int = Field(..., ge=0)
    quiz_total: int = Field(..., ge=0)
    quiz_time_taken: int = Field(..., ge=0)
    problems_score: int = Field(..., ge=0)
    problems_total: int = Field(..., ge=0)
    problems_time_taken: int = Field(..., ge=0)
    mistakes: list[Mistake] = []

    @classmethod
    def from_results(
        cls,
        topic: str,
        quiz: AssessmentResult,
        problems: AssessmentResult,
        day: dt.date,
    ) -> "LessonRecord":
        return cls(
            date=day,
            topic=topic,
            quiz_score=quiz.score,
            quiz_total=quiz.total,
            quiz_time_taken=quiz.time_taken,
            problems_score=problems.score,
            problems_total=problems.total,
            problems_time_taken=problems.time_taken,
            mistakes=[*quiz.mistakes, *problems.mistakes],
        )

    @property
    def score(self) -> int:
        return self.quiz_score + self.problems_score

    @property
    def total(self) -> int:
        return self.quiz_total + self.problems_total


class UserProgress(WireModel):
    records: list[LessonRecord] = []

    def with_record(self, record: LessonRecord) -> "UserProgress":
        """Return a new progress value with `record` appended."""
        return UserProgress(records=[*self.records, record])


class ProgressStats(WireModel):
    """Derived from UserProgress on every read; never stored."""
    current_streak: int = 0
    longest_streak: int = 0
    lessons_completed: int = 0
    average_score: int = 0  # percent
