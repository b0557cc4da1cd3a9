"""
Schema validation tests for Alge-Bro.

Tests the Pydantic models to ensure they validate and serialize correctly.
"""

import json
import pytest
from datetime import date

from pydantic import ValidationError

from algebro.schemas import (
    # Lesson
    Subject,
    RealWorldExample,
    CoreConcept,
    QuizQuestion,
    Quiz,
    PracticeProblem,
    PracticeProblems,
    Lesson,
    # Assessment
    Mistake,
    AssessmentResult,
    # Progress
    LessonRecord,
    UserProgress,
    ProgressStats,
)


def make_lesson(examples=None) -> Lesson:
    return Lesson(
        topic="Ratios",
        introduction="Ratios compare two quantities.",
        core_concept=CoreConcept(
            title="What is a ratio?",
            explanation="A ratio a:b compares a to b.",
            real_world_examples=examples or [
                RealWorldExample(example="Recipes", explanation="2 cups flour to 1 cup sugar."),
            ],
        ),
        quiz=Quiz(
            title="Test Your Knowledge",
            questions=[
                QuizQuestion(
                    question_text="Simplify 4:8",
                    options=["1:2", "2:1", "4:8", "8:4"],
                    correct_answer_index=0,
                ),
            ],
        ),
        practice_problems=PracticeProblems(
            title="Practice Makes Perfect",
            problems=[PracticeProblem(problem_text="Simplify 6:9", answer="2:3")],
        ),
    )


class TestLessonSchemas:
    """Test generated lesson content schemas."""

    def test_subject_values(self):
        assert Subject.MATH.value == "Math"
        assert Subject.SCIENCE.value == "Science"
        assert Subject("Science") is Subject.SCIENCE

    def test_quiz_question_valid(self):
        q = QuizQuestion(
            question_text="2 + 2 = ?",
            options=["3", "4", "5"],
            correct_answer_index=1,
        )
        assert q.correct_option == "4"

    def test_quiz_question_index_out_of_range(self):
        with pytest.raises(ValidationError):
            QuizQuestion(question_text="?", options=["a", "b"], correct_answer_index=2)

    def test_quiz_question_negative_index(self):
        with pytest.raises(ValidationError):
            QuizQuestion(question_text="?", options=["a", "b"], correct_answer_index=-1)

    def test_quiz_question_requires_options(self):
        with pytest.raises(ValidationError):
            QuizQuestion(question_text="?", options=[], correct_answer_index=0)

    def test_lesson_parses_camel_case_response(self):
        data = {
            "topic": "Photosynthesis",
            "introduction": "Plants make food.",
            "coreConcept": {
                "title": "Light to sugar",
                "explanation": "Chlorophyll captures light.",
                "realWorldExamples": [
                    {"example": "Houseplants", "explanation": "They grow toward windows."},
                ],
            },
            "quiz": {
                "title": "Test Your Knowledge",
                "questions": [
                    {
                        "questionText": "What gas do plants absorb?",
                        "options": ["Oxygen", "Carbon dioxide"],
                        "correctAnswerIndex": 1,
                    },
                ],
            },
            "practiceProblems": {
                "title": "Practice Makes Perfect",
                "problems": [{"problemText": "Name the green pigment.", "answer": "Chlorophyll"}],
            },
        }
        lesson = Lesson.model_validate(data)
        assert lesson.core_concept.real_world_examples[0].example == "Houseplants"
        assert lesson.quiz.questions[0].correct_option == "Carbon dioxide"
        assert lesson.practice_problems.problems[0].answer == "Chlorophyll"

    def test_lesson_dumps_camel_case(self):
        data = make_lesson().model_dump(by_alias=True)
        assert "coreConcept" in data
        assert "practiceProblems" in data
        assert "correctAnswerIndex" in data["quiz"]["questions"][0]

    def test_with_more_examples_appends(self):
        lesson = make_lesson()
        extra = [RealWorldExample(example="Maps", explanation="1 cm to 1 km.")]
        updated = lesson.with_more_examples(extra)

        assert [e.example for e in updated.core_concept.real_world_examples] == ["Recipes", "Maps"]
        # Original unchanged
        assert len(lesson.core_concept.real_world_examples) == 1
        assert updated.quiz == lesson.quiz


class TestAssessmentSchemas:
    """Test assessment result schemas."""

    def test_result_valid(self):
        result = AssessmentResult(
            score=3,
            total=5,
            time_taken=120,
            mistakes=[Mistake(question_text="q", user_answer="a", correct_answer="b")],
        )
        assert result.percent == 60

    def test_result_score_exceeds_total(self):
        with pytest.raises(ValidationError):
            AssessmentResult(score=6, total=5, time_taken=0)

    def test_result_negative_time(self):
        with pytest.raises(ValidationError):
            AssessmentResult(score=0, total=1, time_taken=-1)

    def test_percent_rounds_half_up(self):
        assert AssessmentResult(score=1, total=8, time_taken=0).percent == 13  # 12.5
        assert AssessmentResult(score=2, total=3, time_taken=0).percent == 67

    def test_percent_empty(self):
        assert AssessmentResult(score=0, total=0, time_taken=0).percent == 0


class TestProgressSchemas:
    """Test progress tracking schemas."""

    def test_record_from_results(self):
        quiz = AssessmentResult(
            score=4, total=5, time_taken=100,
            mistakes=[Mistake(question_text="q1", user_answer="No answer", correct_answer="x")],
        )
        problems = AssessmentResult(
            score=2, total=3, time_taken=300,
            mistakes=[Mistake(question_text="p1", user_answer="7", correct_answer="8")],
        )
        record = LessonRecord.from_results("Ratios (Math)", quiz, problems, date(2024, 3, 1))

        assert record.quiz_score == 4
        assert record.problems_time_taken == 300
        assert record.score == 6
        assert record.total == 8
        assert [m.question_text for m in record.mistakes] == ["q1", "p1"]

    def test_record_is_frozen(self):
        record = LessonRecord(
            date=date(2024, 3, 1), topic="t",
            quiz_score=0, quiz_total=0, quiz_time_taken=0,
            problems_score=0, problems_total=0, problems_time_taken=0,
        )
        with pytest.raises(ValidationError):
            record.topic = "other"

    def test_record_wire_format(self):
        record = LessonRecord(
            date=date(2024, 3, 1), topic="Ratios (Math)",
            quiz_score=5, quiz_total=5, quiz_time_taken=90,
            problems_score=3, problems_total=3, problems_time_taken=200,
        )
        data = json.loads(UserProgress(records=[record]).model_dump_json(by_alias=True))
        stored = data["records"][0]
        assert stored["date"] == "2024-03-01"
        assert stored["quizScore"] == 5
        assert stored["problemsTimeTaken"] == 200
        assert stored["mistakes"] == []

    def test_user_progress_with_record(self):
        record = LessonRecord(
            date=date(2024, 3, 1), topic="t",
            quiz_score=1, quiz_total=1, quiz_time_taken=1,
            problems_score=1, problems_total=1, problems_time_taken=1,
        )
        empty = UserProgress()
        progress = empty.with_record(record)
        assert empty.records == []
        assert progress.records == [record]

    def test_progress_stats_defaults(self):
        stats = ProgressStats()
        assert stats.current_streak == 0
        assert stats.longest_streak == 0
        assert stats.lessons_completed == 0
        assert stats.average_score == 0
