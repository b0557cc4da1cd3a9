"""
Progress report renderer - Dashboard cards and the printable HTML report.

The report is a self-contained HTML document built only from UserProgress and
ProgressStats. It never includes the API key.
"""

import html
from datetime import date
from typing import Optional

from algebro.schemas import LessonRecord, ProgressStats, UserProgress

from .quiz import format_duration


EMPTY_HISTORY_MESSAGE = "No lessons completed yet. Finish one to start tracking!"


def get_report_css() -> str:
    """Get CSS styles shared by the dashboard and the exported report."""
    return """
    <style>
    .stat-grid {
        display: grid;
        grid-template-columns: repeat(4, 1fr);
        gap: 1em;
        margin-bottom: 1.5em;
    }
    .stat-card {
        background: #f3f4f6;
        border-radius: 10px;
        padding: 1em;
        text-align: center;
    }
    .stat-icon {
        font-size: 2em;
    }
    .stat-label {
        color: #6b7280;
        font-size: 0.85em;
        font-weight: 500;
    }
    .stat-value {
        font-size: 1.5em;
        font-weight: 700;
    }
    .record {
        border: 1px solid #e5e7eb;
        border-radius: 8px;
        background: #f9fafb;
        padding: 0.8em 1em;
        margin-bottom: 0.8em;
    }
    .record-topic {
        font-weight: 700;
    }
    .record-date {
        color: #6b7280;
        font-size: 0.85em;
    }
    .record-scores {
        display: flex;
        gap: 1.5em;
        margin-top: 0.4em;
        font-size: 0.9em;
    }
    .record-mistakes {
        margin-top: 0.6em;
        padding-top: 0.6em;
        border-top: 1px solid #e5e7eb;
        font-size: 0.9em;
    }
    .record-mistake {
        background: #fef2f2;
        border-radius: 6px;
        padding: 0.4em 0.6em;
        margin: 0.3em 0;
    }
    .empty-history {
        text-align: center;
        color: #6b7280;
        padding: 2em 0;
    }
    @media print {
        body { -webkit-print-color-adjust: exact; print-color-adjust: exact; }
        .no-print { display: none; }
    }
    </style>
    """


def format_day(day: date) -> str:
    return day.strftime("%b %d, %Y")


def render_stat_cards(stats: ProgressStats) -> str:
    """Render the four summary cards."""
    cards = [
        ("🔥", "Winning Streak", f"{stats.current_streak} days"),
        ("🏆", "Longest Streak", f"{stats.longest_streak} days"),
        ("📚", "Lessons Done", str(stats.lessons_completed)),
        ("🎯", "Average Score", f"{stats.average_score}%"),
    ]
    parts = ['<div class="stat-grid">']
    for icon, label, value in cards:
        parts.append(
            '<div class="stat-card">'
            f'<div class="stat-icon">{icon}</div>'
            f'<div class="stat-label">{label}</div>'
            f'<div class="stat-value">{value}</div>'
            '</div>'
        )
    parts.append('</div>')
    return ''.join(parts)


def render_record(record: LessonRecord, include_mistakes: bool = True) -> str:
    """Render one completed lesson with optional mistake review."""
    parts = [
        '<div class="record">',
        f'<div class="record-topic">{html.escape(record.topic)}</div>',
        f'<div class="record-date">{format_day(record.date)}</div>',
        '<div class="record-scores">',
        f'<span>Quiz: <strong>{record.quiz_score}/{record.quiz_total}</strong></span>',
        f'<span>Time: {format_duration(record.quiz_time_taken)}</span>',
        f'<span>Problems: <strong>{record.problems_score}/{record.problems_total}</strong></span>',
        f'<span>Time: {format_duration(record.problems_time_taken)}</span>',
        '</div>',
    ]

    if include_mistakes and record.mistakes:
        parts.append('<div class="record-mistakes"><strong>Mistakes to Review:</strong>')
        for mistake in record.mistakes:
            parts.append(
                '<div class="record-mistake">'
                f'<div><strong>{html.escape(mistake.question_text)}</strong></div>'
                f'<div>Your Answer: <code>{html.escape(mistake.user_answer)}</code></div>'
                f'<div>Correct Answer: <code>{html.escape(mistake.correct_answer)}</code></div>'
                '</div>'
            )
        parts.append('</div>')

    parts.append('</div>')
    return ''.join(parts)


def render_history(progress: UserProgress, include_mistakes: bool = True) -> str:
    """Render all records, newest first."""
    if not progress.records:
        return f'<div class="empty-history">{EMPTY_HISTORY_MESSAGE}</div>'
    return ''.join(
        render_record(record, include_mistakes=include_mistakes)
        for record in reversed(progress.records)
    )


def render_progress_report(
    progress: UserProgress,
    stats: ProgressStats,
    generated_on: Optional[date] = None,
) -> str:
    """
    Render the shareable progress report.

    Args:
        progress: Full lesson history
        stats: Stats computed from the same history
        generated_on: Date printed in the header (default: today)

    Returns:
        Complete HTML document
    """
    generated_on = generated_on or date.today()
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Alge-Bro Progress Report</title>
{get_report_css()}
</head>
<body style="font-family: sans-serif; background: #f3f4f6; margin: 0;">
<div style="max-width: 900px; margin: 0 auto; padding: 2em;">
<header style="text-align: center; margin-bottom: 2em;">
<h1 style="color: #2563eb;">Alge-Bro Progress Report</h1>
<p style="color: #4b5563;">Generated on: {format_day(generated_on)}</p>
</header>
{render_stat_cards(stats)}
<section style="background: white; border-radius: 12px; padding: 1.5em;">
<h2>Recent Activity</h2>
{render_history(progress)}
</section>
<p class="no-print" style="text-align: center; color: #6b7280; font-size: 0.85em; margin-top: 2em;">
You can save this page as a PDF using File &gt; Print.
</p>
</div>
</body>
</html>
"""
