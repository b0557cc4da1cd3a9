"""
Alge-Bro Schemas - Pydantic models for the lesson generator.

This module exports all schema classes for:
- Lesson: generated lessons, quiz questions, practice problems
- Assessment: scored results and mistakes
- Progress: lesson history and derived statistics
"""

from .base import WireModel

# Lesson schemas
from .lesson import (
    Subject,
    TopicSource,
    ActiveTab,
    RealWorldExample,
    CoreConcept,
    QuizQuestion,
    Quiz,
    PracticeProblem,
    PracticeProblems,
    Lesson,
)

# Assessment schemas
from .assessment import (
    AssessmentState,
    Mistake,
    AssessmentResult,
)

# Progress schemas
from .progress import (
    LessonRecord,
    UserProgress,
    ProgressStats,
)

__all__ = [
    'WireModel',
    # Lesson
    'Subject',
    'TopicSource',
    'ActiveTab',
    'RealWorldExample',
    'CoreConcept',
    'QuizQuestion',
    'Quiz',
    'PracticeProblem',
    'PracticeProblems',
    'Lesson',
    # Assessment
    'AssessmentState',
    'Mistake',
    'AssessmentResult',
    # Progress
    'LessonRecord',
    'UserProgress',
    'ProgressStats',
]
