"""
LessonSession - The lesson lifecycle for one student.

Combines the current lesson, its quiz and practice results, and the
ProgressStore. When both results exist the lesson is recorded once and the
stats are recomputed from the full history.
"""

import logging
from datetime import date
from typing import Callable, Optional

from algebro.schemas import (
    ActiveTab,
    AssessmentResult,
    Lesson,
    LessonRecord,
    ProgressStats,
    RealWorldExample,
    Subject,
    UserProgress,
)

from .progress import ProgressStore
from .stats import compute_stats


logger = logging.getLogger(__name__)


class EmptyTopicError(ValueError):
    """Raised before any request when the topic is blank."""

    def __init__(self):
        super().__init__("Please enter a topic.")


def validate_topic(topic: Optional[str]) -> str:
    """Return the stripped topic, or raise EmptyTopicError."""
    cleaned = (topic or "").strip()
    if not cleaned:
        raise EmptyTopicError()
    return cleaned


class LessonSession:
    """
    Track one lesson at a time plus the persisted history.

    The history is read from the store once at startup and written back as a
    full snapshot each time a lesson completes.
    """

    def __init__(
        self,
        store: ProgressStore,
        subject: Subject = Subject.MATH,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the session.

        Args:
            store: ProgressStore for history persistence
            subject: Initial subject
            today: Clock used for record dates and streaks
        """
        self.store = store
        self.subject = Subject(subject)
        self._today = today

        self.lesson: Optional[Lesson] = None
        self.active_tab = ActiveTab.LESSON
        self.quiz_result: Optional[AssessmentResult] = None
        self.problems_result: Optional[AssessmentResult] = None
        self.last_record: Optional[LessonRecord] = None

        self.progress: UserProgress = store.load_progress()
        self.stats: ProgressStats = compute_stats(self.progress.records, self._today())

    # -------------------------------------------------------------------------
    # Lesson selection
    # -------------------------------------------------------------------------

    def change_subject(self, subject: Subject):
        """Switch subject and drop the current lesson."""
        self.subject = Subject(subject)
        self.clear_lesson()

    def clear_lesson(self):
        self.lesson = None
        self.active_tab = ActiveTab.LESSON
        self.quiz_result = None
        self.problems_result = None
        self.last_record = None

    def start_lesson(self, lesson: Lesson):
        """Show a freshly generated lesson."""
        self.clear_lesson()
        self.lesson = lesson
        logger.info(f"Started lesson: {lesson.topic} ({self.subject.value})")

    def add_examples(self, examples: list[RealWorldExample]):
        """Append generated real-world examples to the current lesson."""
        if self.lesson is None:
            return
        self.lesson = self.lesson.with_more_examples(examples)

    @property
    def topic_label(self) -> str:
        return f"{self.lesson.topic} ({self.subject.value})" if self.lesson else ""

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    @property
    def problems_unlocked(self) -> bool:
        return self.quiz_result is not None

    @property
    def is_complete(self) -> bool:
        return self.quiz_result is not None and self.problems_result is not None

    def complete_quiz(self, result: AssessmentResult) -> Optional[LessonRecord]:
        self.quiz_result = result
        return self._record_if_complete()

    def complete_problems(self, result: AssessmentResult) -> Optional[LessonRecord]:
        self.problems_result = result
        return self._record_if_complete()

    def _record_if_complete(self) -> Optional[LessonRecord]:
        """Record the lesson once both results exist. Returns the new record, if any."""
        if self.lesson is None or not self.is_complete or self.last_record is not None:
            return None

        record = LessonRecord.from_results(
            topic=self.topic_label,
            quiz=self.quiz_result,
            problems=self.problems_result,
            day=self._today(),
        )
        self.last_record = record
        self.progress = self.store.append_record(record, self.progress)
        self.refresh_stats()
        logger.info(f"Lesson recorded: {record.topic} ({record.score}/{record.total})")
        return record

    def refresh_stats(self) -> ProgressStats:
        """Recompute stats from the full history."""
        self.stats = compute_stats(self.progress.records, self._today())
        return self.stats
