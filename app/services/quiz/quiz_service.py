"""
Quiz Service for quiz management and graded submissions
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from supabase import Client

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.models.models import (
    QuizAnswer, QuizCreate, QuizGradeResponse, QuizPublicResponse, QuizQuestion,
    QuizResponse, QuizResultResponse, QuizUpdate
)
from app.services.quiz.grading import grade_quiz

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class QuizService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def create_quiz(self, quiz_data: QuizCreate, created_by: str) -> QuizResponse:
        now = _utcnow()
        quiz_dict = quiz_data.model_dump(mode="json")
        if quiz_dict["passing_score"] is None:
            quiz_dict["passing_score"] = settings.default_passing_score
        quiz_dict.update({"created_by": created_by, "created_at": now, "updated_at": now})

        result = self.supabase.table("quizzes").insert(quiz_dict).execute()
        if not result.data:
            raise Exception("Failed to create quiz")
        logger.info(f"Quiz created with ID: {result.data[0]['id']} ({len(quiz_data.questions)} questions)")
        return QuizResponse.model_validate(result.data[0])

    async def get_quiz(self, quiz_id: str) -> QuizResponse:
        return QuizResponse.model_validate(self._get_quiz_row(quiz_id))

    async def get_public_quiz(self, quiz_id: str) -> QuizPublicResponse:
        """The quiz as shown to the person taking it, without answers"""
        return QuizPublicResponse.model_validate(self._get_quiz_row(quiz_id))

    async def update_quiz(self, quiz_id: str, update_data: QuizUpdate) -> QuizResponse:
        self._get_quiz_row(quiz_id)
        changes = update_data.model_dump(mode="json", exclude_unset=True)
        if not changes:
            raise ValidationError("No fields to update")
        changes["updated_at"] = _utcnow()

        result = self.supabase.table("quizzes").update(changes).eq("id", quiz_id).execute()
        if not result.data:
            raise NotFoundError("Quiz not found")
        return QuizResponse.model_validate(result.data[0])

    async def delete_quiz(self, quiz_id: str) -> None:
        self._get_quiz_row(quiz_id)
        self.supabase.table("quizzes").delete().eq("id", quiz_id).execute()
        logger.info(f"Quiz {quiz_id} deleted")

    async def submit_quiz(self, user_id: str, quiz_id: str, answers: List[QuizAnswer]) -> QuizGradeResponse:
        """Grade a submission and store it as the user's only result for this quiz.

        attempts_allowed is not checked: a resubmission replaces the earlier result.
        """
        quiz = self._get_quiz_row(quiz_id)
        questions = [QuizQuestion.model_validate(q) for q in quiz.get("questions") or []]
        passing_score = quiz.get("passing_score")
        if passing_score is None:
            passing_score = settings.default_passing_score

        grade = grade_quiz(questions, answers, passing_score)
        logger.info(f"User {user_id} scored {grade.score}/{grade.total} on quiz {quiz_id}")

        self.supabase.table("quiz_results").upsert({
            "user_id": user_id,
            "quiz_id": quiz_id,
            "score": grade.score,
            "total": grade.total,
            "percentage": grade.percentage,
            "passed": grade.passed,
            "submitted_at": _utcnow(),
        }, on_conflict="user_id,quiz_id").execute()

        return QuizGradeResponse(
            quiz_id=quiz_id,
            score=grade.score,
            total=grade.total,
            percentage=grade.percentage,
            passed=grade.passed,
            results=grade.results,
        )

    async def get_quiz_result(self, user_id: str, quiz_id: str) -> QuizResultResponse:
        result = self.supabase.table("quiz_results").select("*").eq("user_id", user_id).eq("quiz_id", quiz_id).execute()
        if not result.data:
            raise NotFoundError("Quiz result not found")
        return QuizResultResponse.model_validate(result.data[0])

    async def get_user_quiz_results(self, user_id: str) -> List[QuizResultResponse]:
        result = self.supabase.table("quiz_results").select("*").eq("user_id", user_id).order("submitted_at", desc=True).execute()
        return [QuizResultResponse.model_validate(row) for row in result.data or []]

    def _get_quiz_row(self, quiz_id: str) -> Dict[str, Any]:
        result = self.supabase.table("quizzes").select("*").eq("id", quiz_id).execute()
        if not result.data:
            raise NotFoundError("Quiz not found")
        return result.data[0]
