"""
Tests for progress statistics (streaks and average score).
"""

from datetime import date, timedelta

from algebro.classroom import (
    average_score,
    compute_stats,
    current_streak,
    distinct_days,
    longest_streak,
)
from algebro.schemas import LessonRecord


TODAY = date(2024, 5, 20)


def make_record(day: date, quiz=(5, 5), problems=(3, 3), topic="Ratios (Math)") -> LessonRecord:
    return LessonRecord(
        date=day,
        topic=topic,
        quiz_score=quiz[0],
        quiz_total=quiz[1],
        quiz_time_taken=60,
        problems_score=problems[0],
        problems_total=problems[1],
        problems_time_taken=120,
    )


def days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


class TestStreaks:
    """Test current and longest streak calculation."""

    def test_three_consecutive_days_ending_today(self):
        records = [make_record(days_ago(2)), make_record(days_ago(1)), make_record(TODAY)]
        stats = compute_stats(records, TODAY)
        assert stats.current_streak == 3
        assert stats.longest_streak == 3

    def test_broken_streak(self):
        records = [make_record(days_ago(10)), make_record(days_ago(9)), make_record(days_ago(5))]
        stats = compute_stats(records, TODAY)
        assert stats.current_streak == 0
        assert stats.longest_streak == 2

    def test_streak_alive_when_last_lesson_yesterday(self):
        records = [make_record(days_ago(2)), make_record(days_ago(1))]
        assert compute_stats(records, TODAY).current_streak == 2

    def test_single_record_today(self):
        stats = compute_stats([make_record(TODAY)], TODAY)
        assert stats.current_streak == 1
        assert stats.longest_streak == 1
        assert stats.lessons_completed == 1

    def test_same_day_counts_once(self):
        records = [make_record(days_ago(1)), make_record(TODAY), make_record(TODAY)]
        stats = compute_stats(records, TODAY)
        assert stats.current_streak == 2
        assert stats.longest_streak == 2
        assert stats.lessons_completed == 3

    def test_current_streak_stops_at_gap(self):
        records = [
            make_record(days_ago(6)),
            make_record(days_ago(5)),
            make_record(days_ago(4)),
            make_record(days_ago(1)),
            make_record(TODAY),
        ]
        stats = compute_stats(records, TODAY)
        assert stats.current_streak == 2
        assert stats.longest_streak == 3

    def test_unordered_records(self):
        records = [make_record(TODAY), make_record(days_ago(2)), make_record(days_ago(1))]
        assert compute_stats(records, TODAY).current_streak == 3

    def test_current_never_exceeds_longest(self):
        records = [make_record(days_ago(n)) for n in (0, 1, 3, 4, 5, 9)]
        stats = compute_stats(records, TODAY)
        assert stats.current_streak <= stats.longest_streak

    def test_future_day_breaks_current_streak(self):
        records = [make_record(TODAY), make_record(TODAY + timedelta(days=1))]
        stats = compute_stats(records, TODAY)
        assert stats.current_streak == 0
        assert stats.longest_streak == 2

    def test_helpers_on_empty(self):
        assert distinct_days([]) == []
        assert longest_streak([]) == 0
        assert current_streak([], TODAY) == 0


class TestAverageScore:
    """Test the overall percentage across quizzes and problems."""

    def test_two_records(self):
        records = [
            make_record(TODAY, quiz=(4, 5), problems=(3, 5)),
            make_record(TODAY, quiz=(0, 0), problems=(0, 0)),
        ]
        assert average_score(records) == 70

    def test_rounds_half_up(self):
        # 1 of 8 = 12.5%
        records = [make_record(TODAY, quiz=(1, 5), problems=(0, 3))]
        assert average_score(records) == 13

    def test_nothing_possible(self):
        assert average_score([make_record(TODAY, quiz=(0, 0), problems=(0, 0))]) == 0

    def test_empty_history(self):
        stats = compute_stats([], TODAY)
        assert stats.current_streak == 0
        assert stats.longest_streak == 0
        assert stats.lessons_completed == 0
        assert stats.average_score == 0
