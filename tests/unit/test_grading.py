"""
Unit tests for quiz auto-grading
"""
import pytest

from app.models.models import QuizAnswer, QuizQuestion
from app.services.quiz.grading import grade_quiz, is_correct, round_half_up


def mcq(question_id, correct, points=1):
    return QuizQuestion(id=question_id, type="MCQ", text=f"Question {question_id}",
                        options=["A", "B", "C"], correct_answer=correct, points=points)


def short(question_id, correct, points=1):
    return QuizQuestion(id=question_id, type="ShortAnswer", text=f"Question {question_id}",
                        correct_answer=correct, points=points)


def answers(**by_id):
    return [QuizAnswer(question_id=question_id, answer=answer) for question_id, answer in by_id.items()]


class TestIsCorrect:

    def test_mcq_requires_exact_match(self):
        question = mcq("q1", "B")
        assert is_correct(question, "B")
        assert not is_correct(question, "b")
        assert not is_correct(question, " B")

    def test_short_answer_ignores_case_and_whitespace(self):
        question = short("q1", "Paris")
        assert is_correct(question, "  paris ")
        assert is_correct(question, "PARIS")
        assert not is_correct(question, "Lyon")

    def test_short_answer_without_answer_is_wrong(self):
        assert not is_correct(short("q1", "Paris"), None)


class TestRoundHalfUp:

    @pytest.mark.parametrize("value,expected", [(66.5, 67), (66.49, 66), (62.5, 63), (0.5, 1), (100.0, 100)])
    def test_rounds_halves_up(self, value, expected):
        assert round_half_up(value) == expected


class TestGradeQuiz:

    def test_mixed_quiz_below_passing_score(self):
        """Two of three one-point questions right is 67%, short of 70"""
        questions = [mcq("q1", "A"), mcq("q2", "C"), short("q3", "Photosynthesis")]
        grade = grade_quiz(questions, answers(q1="A", q2="B", q3=" photosynthesis"), passing_score=70)

        assert grade.score == 2
        assert grade.total == 3
        assert grade.percentage == 67
        assert grade.passed is False
        assert [r.correct for r in grade.results] == [True, False, True]

    def test_percentage_equal_to_passing_score_passes(self):
        questions = [mcq(f"q{i}", "A") for i in range(10)]
        submitted = answers(**{f"q{i}": "A" if i < 7 else "B" for i in range(10)})

        grade = grade_quiz(questions, submitted, passing_score=70)

        assert grade.percentage == 70
        assert grade.passed is True

    def test_weighted_points(self):
        questions = [mcq("q1", "A", points=3), mcq("q2", "B", points=1)]
        grade = grade_quiz(questions, answers(q1="A"), passing_score=70)

        assert grade.score == 3
        assert grade.total == 4
        assert grade.percentage == 75
        assert grade.results[1].points_awarded == 0
        assert grade.results[1].points_possible == 1

    def test_zero_points_counts_as_one(self):
        grade = grade_quiz([mcq("q1", "A", points=0)], answers(q1="A"), passing_score=70)

        assert grade.total == 1
        assert grade.score == 1

    def test_unanswered_questions_score_zero(self):
        grade = grade_quiz([mcq("q1", "A"), mcq("q2", "B")], [], passing_score=50)

        assert grade.score == 0
        assert grade.percentage == 0
        assert grade.passed is False

    def test_answers_to_unknown_questions_are_ignored(self):
        grade = grade_quiz([mcq("q1", "A")], answers(q1="A", q99="A"), passing_score=70)

        assert grade.score == 1
        assert grade.total == 1

    def test_empty_quiz_scores_zero_percent(self):
        grade = grade_quiz([], [], passing_score=0)

        assert grade.total == 0
        assert grade.percentage == 0
        assert grade.passed is True

    def test_first_answer_for_a_question_counts(self):
        submitted = [QuizAnswer(question_id="q1", answer="B"), QuizAnswer(question_id="q1", answer="A")]
        grade = grade_quiz([mcq("q1", "A")], submitted, passing_score=70)

        assert grade.score == 0
