"""
Quiz auto-grading
"""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from app.models.models import QuestionResult, QuestionType, QuizAnswer, QuizQuestion


@dataclass
class GradeResult:
    score: int
    total: int
    percentage: int
    passed: bool
    results: List[QuestionResult] = field(default_factory=list)


def _normalize(value: Any) -> Any:
    if value is None:
        return None
    return str(value).strip().lower()


def is_correct(question: QuizQuestion, answer: Any) -> bool:
    """MCQ answers must match exactly; short answers ignore case and surrounding whitespace"""
    if question.type == QuestionType.MCQ:
        return answer == question.correct_answer
    if question.type == QuestionType.SHORT_ANSWER:
        return answer is not None and _normalize(answer) == _normalize(question.correct_answer)
    return False


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def grade_quiz(questions: Iterable[QuizQuestion], answers: Iterable[QuizAnswer], passing_score: int) -> GradeResult:
    """Grade submitted answers against the quiz questions.

    A question without points is worth 1. Unanswered questions score 0.
    When the same question is answered twice the first answer counts.
    """
    submitted: Dict[str, Any] = {}
    for answer in answers:
        submitted.setdefault(answer.question_id, answer.answer)

    score = 0
    total = 0
    results = []
    for question in questions:
        points = question.points or 1
        total += points
        correct = question.id in submitted and is_correct(question, submitted[question.id])
        awarded = points if correct else 0
        score += awarded
        results.append(QuestionResult(
            question_id=question.id,
            correct=correct,
            points_awarded=awarded,
            points_possible=points,
        ))

    percentage = round_half_up(score / total * 100) if total > 0 else 0
    return GradeResult(
        score=score,
        total=total,
        percentage=percentage,
        passed=percentage >= passing_score,
        results=results,
    )
