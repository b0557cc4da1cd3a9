"""
Assessment result schemas.

A result is produced once per timed quiz or practice session and carries the
mistakes in original item order.
"""

from enum import Enum

from pydantic import Field, model_validator

from .base import WireModel


class AssessmentState(str, Enum):
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"


class Mistake(WireModel):
    question_text: str
    user_answer: str
    correct_answer: str


class AssessmentResult(WireModel):
    score: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    time_taken: int = Field(..., ge=0)  # seconds
    mistakes: list[Mistake] = []

    @model_validator(mode="after")
    def score_within_total(self):
        if self.score > self.total:
            raise ValueError(f"score {self.score} exceeds total {self.total}")
        return self

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return (200 * self.score + self.total) // (2 * self.total)
