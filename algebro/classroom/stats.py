"""
Progress statistics - Lessons completed, average score and day streaks.

Everything here is a pure function of the lesson history and "today", so the
dashboard recomputes stats from scratch on every read.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

from algebro.schemas import LessonRecord, ProgressStats


def distinct_days(records: Sequence[LessonRecord]) -> list[date]:
    """Distinct calendar days with at least one record, oldest first."""
    return sorted({record.date for record in records})


def average_score(records: Sequence[LessonRecord]) -> int:
    """
    Overall percentage across quizzes and problems, rounded half up.

    Returns 0 when there is nothing to average.
    """
    earned = sum(record.score for record in records)
    possible = sum(record.total for record in records)
    if possible == 0:
        return 0
    return (200 * earned + possible) // (2 * possible)


def longest_streak(days: Sequence[date]) -> int:
    """
    Length of the longest run of consecutive days.

    Args:
        days: Distinct days in ascending order
    """
    if not days:
        return 0

    longest = 1
    current = 1
    for previous, day in zip(days, days[1:]):
        if day == previous + timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1
    return longest


def current_streak(days: Sequence[date], today: date) -> int:
    """
    Consecutive days ending at the most recent day.

    The streak only counts while the most recent day is today or yesterday;
    otherwise it has been broken and is 0. A most recent day after `today`
    (clock skew) also gives 0.
    """
    if not days:
        return 0

    most_recent = days[-1]
    if most_recent not in (today, today - timedelta(days=1)):
        return 0

    streak = 1
    for i in range(len(days) - 1, 0, -1):
        if days[i] - days[i - 1] == timedelta(days=1):
            streak += 1
        else:
            break
    return streak


def compute_stats(
    records: Sequence[LessonRecord],
    today: Optional[date] = None,
) -> ProgressStats:
    """
    Compute progress statistics from the full lesson history.

    Args:
        records: Every completed lesson, in completion order
        today: Reference day for the current streak (default: date.today())

    Returns:
        ProgressStats
    """
    today = today or date.today()
    days = distinct_days(records)

    return ProgressStats(
        current_streak=current_streak(days, today),
        longest_streak=longest_streak(days),
        lessons_completed=len(records),
        average_score=average_score(records),
    )
