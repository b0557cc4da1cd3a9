"""
Tests for the countdown-driven assessment.
"""

import pytest

from algebro.classroom import TimedAssessment
from algebro.config import NO_ANSWER, QUIZ_TIME_SECONDS
from algebro.schemas import AssessmentState, PracticeProblem, QuizQuestion


def make_questions():
    return [
        QuizQuestion(question_text="2 + 2 = ?", options=["3", "4"], correct_answer_index=1),
        QuizQuestion(question_text="1 + 1 = ?", options=["2", "3"], correct_answer_index=0),
    ]


class TestTimedAssessment:
    """Test the IN_PROGRESS -> SUBMITTED lifecycle."""

    def test_initial_state(self):
        assessment = TimedAssessment(make_questions(), QUIZ_TIME_SECONDS)
        assert assessment.state == AssessmentState.IN_PROGRESS
        assert assessment.time_left == QUIZ_TIME_SECONDS
        assert assessment.answers == [None, None]
        assert assessment.running
        assert assessment.result is None

    def test_blank_text_answers(self):
        problems = [PracticeProblem(problem_text="x?", answer="1")]
        assessment = TimedAssessment(problems, 600)
        assert assessment.answers == [""]

    def test_budget_must_be_positive(self):
        with pytest.raises(ValueError):
            TimedAssessment(make_questions(), 0)

    def test_manual_submit(self):
        assessment = TimedAssessment(make_questions(), 300)
        assessment.set_answer(0, 1)
        assessment.advance(45)
        result = assessment.submit()

        assert assessment.submitted
        assert result.score == 1
        assert result.time_taken == 45
        assert result.mistakes[0].user_answer == NO_ANSWER

    def test_timeout_auto_submits(self):
        calls = []
        assessment = TimedAssessment(make_questions(), 5, on_submit=calls.append)
        assessment.set_answer(1, 0)
        for _ in range(5):
            assessment.tick()

        assert assessment.submitted
        assert assessment.time_left == 0
        assert len(calls) == 1
        assert calls[0].time_taken == 5
        assert calls[0].score == 1

    def test_timeout_matches_manual_submit_at_budget(self):
        timed_out = TimedAssessment(make_questions(), 3)
        timed_out.set_answer(0, 0)
        timed_out.advance(10)

        manual = TimedAssessment(make_questions(), 3)
        manual.set_answer(0, 0)
        manual.time_left = 0
        manual.submit()

        assert timed_out.result == manual.result
        assert timed_out.result.time_taken == 3

    def test_submit_is_idempotent(self):
        calls = []
        assessment = TimedAssessment(make_questions(), 300, on_submit=calls.append)
        first = assessment.submit()
        second = assessment.submit()
        assessment.advance(400)

        assert first is second
        assert len(calls) == 1

    def test_tick_after_submit_is_noop(self):
        assessment = TimedAssessment(make_questions(), 300)
        assessment.advance(10)
        assessment.submit()
        assessment.tick()
        assert assessment.time_left == 290

    def test_answers_locked_after_submit(self):
        assessment = TimedAssessment(make_questions(), 300)
        assessment.submit()
        assert assessment.set_answer(0, 1) is False
        assert assessment.answers == [None, None]

    def test_set_answer_validates(self):
        assessment = TimedAssessment(make_questions(), 300)
        with pytest.raises(ValueError):
            assessment.set_answer(0, 5)

    def test_cancel_stops_without_result(self):
        calls = []
        assessment = TimedAssessment(make_questions(), 2, on_submit=calls.append)
        assessment.cancel()
        assessment.advance(5)

        assert not assessment.running
        assert assessment.submit() is None
        assert assessment.time_left == 2
        assert calls == []

    def test_cancel_after_submit_keeps_result(self):
        assessment = TimedAssessment(make_questions(), 300)
        result = assessment.submit()
        assessment.cancel()
        assert not assessment.cancelled
        assert assessment.result is result
