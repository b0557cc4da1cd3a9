"""
Alge-Bro Viewer - Rendering components for lessons and progress.

This module provides:
- Lesson rendering (introduction, core concept, examples)
- Quiz timer, answer highlighting and result display
- Dashboard cards and the exportable progress report
"""

from .lesson import (
    get_lesson_css,
    render_introduction,
    render_core_concept,
    render_real_world_example,
    render_real_world_examples,
    render_lesson,
)

from .quiz import (
    STATUS_NEUTRAL,
    STATUS_CORRECT,
    STATUS_INCORRECT,
    get_quiz_css,
    format_countdown,
    format_duration,
    option_status,
    problem_status,
    render_mistake,
    render_mistakes,
    render_result_summary,
    render_lesson_complete,
)

from .report import (
    EMPTY_HISTORY_MESSAGE,
    get_report_css,
    format_day,
    render_stat_cards,
    render_record,
    render_history,
    render_progress_report,
)

__all__ = [
    # Lesson rendering
    "get_lesson_css",
    "render_introduction",
    "render_core_concept",
    "render_real_world_example",
    "render_real_world_examples",
    "render_lesson",
    # Quiz
    "STATUS_NEUTRAL",
    "STATUS_CORRECT",
    "STATUS_INCORRECT",
    "get_quiz_css",
    "format_countdown",
    "format_duration",
    "option_status",
    "problem_status",
    "render_mistake",
    "render_mistakes",
    "render_result_summary",
    "render_lesson_complete",
    # Report
    "EMPTY_HISTORY_MESSAGE",
    "get_report_css",
    "format_day",
    "render_stat_cards",
    "render_record",
    "render_history",
    "render_progress_report",
]
