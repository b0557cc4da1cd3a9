"""
Scorer - Score a set of quiz questions or practice problems.

One algorithm serves both item kinds. Each kind supplies a ScoringMode that
knows how to compare an answer and how to display it:
- Quiz questions compare option indexes exactly
- Practice problems compare text, ignoring case and surrounding whitespace
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from algebro.config import NO_ANSWER
from algebro.schemas import AssessmentResult, Mistake, PracticeProblem, QuizQuestion


Item = Union[QuizQuestion, PracticeProblem]
Answer = Union[Optional[int], str]


@dataclass(frozen=True)
class ScoringMode:
    """How one item kind is compared and displayed."""
    name: str
    is_correct: Callable[[Any, Any], bool]
    display_answer: Callable[[Any, Any], str]
    display_correct: Callable[[Any], str]
    question_text: Callable[[Any], str]
    blank_answer: Any


def _display_option(question: QuizQuestion, answer: Optional[int]) -> str:
    if answer is None:
        return NO_ANSWER
    return question.options[answer]


def normalize_text(value: str) -> str:
    return value.strip().lower()


INDEX_MODE = ScoringMode(
    name="index",
    is_correct=lambda q, a: a is not None and a == q.correct_answer_index,
    display_answer=_display_option,
    display_correct=lambda q: q.correct_option,
    question_text=lambda q: q.question_text,
    blank_answer=None,
)

TEXT_MODE = ScoringMode(
    name="text",
    is_correct=lambda p, a: normalize_text(a) == normalize_text(p.answer),
    # Only the literal empty string gets the sentinel; whitespace passes through.
    display_answer=lambda p, a: a or NO_ANSWER,
    display_correct=lambda p: p.answer,
    question_text=lambda p: p.problem_text,
    blank_answer="",
)


def mode_for(item: Item) -> ScoringMode:
    """Pick the scoring mode for an item."""
    if isinstance(item, QuizQuestion):
        return INDEX_MODE
    if isinstance(item, PracticeProblem):
        return TEXT_MODE
    raise TypeError(f"Unsupported assessment item: {type(item).__name__}")


def validate_answer(item: Item, answer: Answer):
    """Raise ValueError if `answer` cannot be recorded for `item`."""
    if isinstance(item, QuizQuestion):
        if answer is None:
            return
        if isinstance(answer, bool) or not isinstance(answer, int):
            raise ValueError(f"Quiz answers must be option indexes, got {answer!r}")
        if not 0 <= answer < len(item.options):
            raise ValueError(
                f"Option index {answer} out of range for {len(item.options)} options"
            )
    elif not isinstance(answer, str):
        raise ValueError(f"Practice answers must be text, got {answer!r}")


def score(
    items: Sequence[Item],
    answers: Sequence[Answer],
    elapsed_seconds: int,
    budget_seconds: int,
) -> AssessmentResult:
    """
    Score answers against items.

    Args:
        items: Quiz questions or practice problems
        answers: Parallel list of answers (None/"" when unanswered)
        elapsed_seconds: Seconds used since the assessment started
        budget_seconds: Allotted time; time taken never exceeds it

    Returns:
        AssessmentResult with one Mistake per incorrect or unanswered item
    """
    if len(items) != len(answers):
        raise ValueError(
            f"Got {len(answers)} answers for {len(items)} items"
        )

    correct = 0
    mistakes = []
    for item, answer in zip(items, answers):
        mode = mode_for(item)
        validate_answer(item, answer)
        if mode.is_correct(item, answer):
            correct += 1
        else:
            mistakes.append(Mistake(
                question_text=mode.question_text(item),
                user_answer=mode.display_answer(item, answer),
                correct_answer=mode.display_correct(item),
            ))

    return AssessmentResult(
        score=correct,
        total=len(items),
        time_taken=min(max(elapsed_seconds, 0), budget_seconds),
        mistakes=mistakes,
    )
