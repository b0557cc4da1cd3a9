"""
TimedAssessment - Countdown-driven quiz/practice session.

State machine:
    IN_PROGRESS --(set_answer | tick)--> IN_PROGRESS
    IN_PROGRESS --(submit | time_left == 0)--> SUBMITTED

SUBMITTED is terminal. The countdown reaching zero calls the same submit()
as the "Check Answers" button, so a session produces exactly one result.
"""

import logging
from typing import Callable, Optional, Sequence

from algebro.schemas import AssessmentResult, AssessmentState

from .scorer import Answer, Item, mode_for, score, validate_answer


logger = logging.getLogger(__name__)


class TimedAssessment:
    """A timed run through a fixed list of items."""

    def __init__(
        self,
        items: Sequence[Item],
        budget_seconds: int,
        on_submit: Optional[Callable[[AssessmentResult], None]] = None,
    ):
        """
        Initialize a timed assessment.

        Args:
            items: Quiz questions or practice problems
            budget_seconds: Countdown length (e.g. 300 for a quiz)
            on_submit: Called once with the result when the session ends
        """
        if budget_seconds <= 0:
            raise ValueError("budget_seconds must be positive")

        self.items = list(items)
        self.budget_seconds = budget_seconds
        self.time_left = budget_seconds
        self.answers: list[Answer] = [mode_for(item).blank_answer for item in self.items]
        self.state = AssessmentState.IN_PROGRESS
        self.result: Optional[AssessmentResult] = None
        self.cancelled = False
        self._on_submit = on_submit

    @property
    def submitted(self) -> bool:
        return self.state == AssessmentState.SUBMITTED

    @property
    def running(self) -> bool:
        """True while the countdown should keep ticking."""
        return not self.submitted and not self.cancelled

    def set_answer(self, index: int, answer: Answer) -> bool:
        """Record an answer. Returns False when the session no longer accepts edits."""
        if not self.running:
            return False
        validate_answer(self.items[index], answer)
        self.answers[index] = answer
        return True

    def tick(self):
        """Advance the countdown by one second, auto-submitting at zero."""
        if not self.running:
            return
        self.time_left = max(self.time_left - 1, 0)
        if self.time_left == 0:
            logger.info("Time is up, submitting automatically")
            self.submit()

    def advance(self, seconds: int):
        """Apply `seconds` whole ticks (used by the UI poll loop)."""
        for _ in range(max(int(seconds), 0)):
            if not self.running:
                break
            self.tick()

    def submit(self) -> Optional[AssessmentResult]:
        """
        Score the current answers.

        Only the first call does any work; later calls (and cancelled
        sessions) return the stored result unchanged.
        """
        if self.submitted or self.cancelled:
            return self.result

        self.state = AssessmentState.SUBMITTED
        self.result = score(
            self.items,
            self.answers,
            elapsed_seconds=self.budget_seconds - self.time_left,
            budget_seconds=self.budget_seconds,
        )
        logger.info(
            f"Assessment submitted: {self.result.score}/{self.result.total} "
            f"in {self.result.time_taken}s"
        )
        if self._on_submit:
            self._on_submit(self.result)
        return self.result

    def cancel(self):
        """Stop the countdown without producing a result (e.g. the lesson was replaced)."""
        if not self.submitted:
            self.cancelled = True
