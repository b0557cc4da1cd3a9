"""
Quiz renderer - Countdown, answer highlighting and result display.

Provides:
- Countdown and duration formatting
- Post-submit status for quiz options and practice answers
- Score summary and mistake review rendering
"""

import html
from typing import Optional

from algebro.classroom.scorer import normalize_text
from algebro.schemas import AssessmentResult, Mistake, PracticeProblem, QuizQuestion


STATUS_NEUTRAL = "neutral"
STATUS_CORRECT = "correct"
STATUS_INCORRECT = "incorrect"


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-timer {
        font-family: monospace;
        font-size: 1.1em;
        background: #f0f0f0;
        border-radius: 6px;
        padding: 0.3em 0.8em;
        display: inline-block;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 1.6em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    .mistake-box {
        background: #fdecea;
        border-left: 4px solid #e57373;
        border-radius: 0 8px 8px 0;
        padding: 0.6em 1em;
        margin: 0.5em 0;
        font-size: 0.95em;
    }
    .mistake-question {
        font-weight: 600;
        margin-bottom: 0.3em;
    }
    .mistake-user {
        font-family: monospace;
        color: #c62828;
    }
    .mistake-correct {
        font-family: monospace;
        color: #2e7d32;
    }
    .lesson-complete {
        background: #e8f5e9;
        border: 1px solid #a5d6a7;
        border-radius: 8px;
        padding: 1em;
        margin-bottom: 1em;
    }
    </style>
    """


def format_countdown(seconds: int) -> str:
    """Format remaining time as MM:SS."""
    seconds = max(int(seconds), 0)
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes:02d}:{remaining:02d}"


def format_duration(seconds: int) -> str:
    """Format time taken as e.g. '4m 5s'."""
    minutes, remaining = divmod(max(int(seconds), 0), 60)
    return f"{minutes}m {remaining}s"


def option_status(
    question: QuizQuestion,
    option_index: int,
    answer: Optional[int],
    submitted: bool,
) -> str:
    """
    Highlight status for one quiz option.

    Before submission every option is neutral. Afterwards the correct option
    is marked correct and a wrongly chosen option incorrect.
    """
    if not submitted:
        return STATUS_NEUTRAL
    if option_index == question.correct_answer_index:
        return STATUS_CORRECT
    if answer == option_index:
        return STATUS_INCORRECT
    return STATUS_NEUTRAL


def problem_status(problem: PracticeProblem, answer: str, submitted: bool) -> str:
    """Highlight status for a practice answer box."""
    if not submitted:
        return STATUS_NEUTRAL
    if normalize_text(answer) == normalize_text(problem.answer):
        return STATUS_CORRECT
    return STATUS_INCORRECT


def render_mistake(mistake: Mistake) -> str:
    return (
        '<div class="mistake-box">'
        f'<div class="mistake-question">{html.escape(mistake.question_text)}</div>'
        f'<div>Your Answer: <span class="mistake-user">{html.escape(mistake.user_answer)}</span></div>'
        f'<div>Correct Answer: <span class="mistake-correct">{html.escape(mistake.correct_answer)}</span></div>'
        '</div>'
    )


def render_mistakes(mistakes: list[Mistake]) -> str:
    return ''.join(render_mistake(m) for m in mistakes)


def render_result_summary(label: str, result: AssessmentResult) -> str:
    """Render the score box shown after submission."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{html.escape(label)} Score: {result.score} / {result.total}</div>
        <div class="quiz-score-label">{result.percent}% correct in {format_duration(result.time_taken)}</div>
    </div>
    """


def render_lesson_complete(quiz: AssessmentResult, problems: AssessmentResult) -> str:
    """Render the banner shown once both parts of a lesson are done."""
    return (
        '<div class="lesson-complete">'
        '<strong>🎉 Lesson Complete!</strong><br>'
        f'Quiz: <strong>{quiz.score}/{quiz.total}</strong> &nbsp; '
        f'Problems: <strong>{problems.score}/{problems.total}</strong>'
        '</div>'
    )
