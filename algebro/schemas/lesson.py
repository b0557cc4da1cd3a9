"""
Lesson content schemas for Alge-Bro.

Defines Pydantic models for generated lesson content including:
- Core concept with real-world examples
- Multiple-choice quiz questions
- Free-text practice problems
"""

from enum import Enum

from pydantic import Field, model_validator

from .base import WireModel


class Subject(str, Enum):
    MATH = "Math"
    SCIENCE = "Science"


class TopicSource(str, Enum):
    MANUAL = "manual"
    UPLOAD = "upload"
    KHAN = "khan"


class ActiveTab(str, Enum):
    LESSON = "lesson"
    QUIZ = "quiz"
    PROBLEMS = "problems"


# -----------------------------------------------------------------------------
# Core concept
# -----------------------------------------------------------------------------

class RealWorldExample(WireModel):
    example: str
    explanation: str


class CoreConcept(WireModel):
    title: str
    explanation: str
    real_world_examples: list[RealWorldExample] = []


# -----------------------------------------------------------------------------
# Assessment items
# -----------------------------------------------------------------------------

class QuizQuestion(WireModel):
    """Multiple-choice item. Answers are 0-based indexes into `options`."""
    question_text: str
    options: list[str] = Field(..., min_length=1)
    correct_answer_index: int = Field(..., ge=0)

    @model_validator(mode="after")
    def correct_index_in_range(self):
        if self.correct_answer_index >= len(self.options):
            raise ValueError(
                f"correct_answer_index {self.correct_answer_index} out of range "
                f"for {len(self.options)} options"
            )
        return self

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer_index]


class Quiz(WireModel):
    title: str
    questions: list[QuizQuestion]


class PracticeProblem(WireModel):
    """Free-text item with a single canonical answer."""
    problem_text: str
    answer: str


class PracticeProblems(WireModel):
    title: str
    problems: list[PracticeProblem]


# -----------------------------------------------------------------------------
# Main lesson schema
# -----------------------------------------------------------------------------

class Lesson(WireModel):
    topic: str
    introduction: str
    core_concept: CoreConcept
    quiz: Quiz
    practice_problems: PracticeProblems

    def with_more_examples(self, examples: list[RealWorldExample]) -> "Lesson":
        """Return a copy with `examples` appended to the core concept."""
        concept = self.core_concept.model_copy(update={
            "real_world_examples": [*self.core_concept.real_world_examples, *examples],
        })
        return self.model_copy(update={"core_concept": concept})
