"""
Quiz API routes: quiz management and auto-graded submissions
"""
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_quiz_service
from app.core.security.auth_dependencies import get_current_user, get_current_admin_user
from app.models.models import (
    QuizCreate, QuizGradeResponse, QuizPublicResponse, QuizResponse, QuizResultResponse,
    QuizSubmission, QuizUpdate, SuccessResponse, TokenData
)
from app.services.quiz.quiz_service import QuizService

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])

@router.post("", response_model=QuizResponse, status_code=status.HTTP_201_CREATED)
async def create_quiz(
    quiz_data: QuizCreate,
    current_user: TokenData = Depends(get_current_admin_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    return await quiz_service.create_quiz(quiz_data, current_user.user_id)

@router.get("/results", response_model=List[QuizResultResponse])
async def get_user_quiz_results(
    current_user: TokenData = Depends(get_current_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    """Get the current user's latest result for every quiz they submitted"""
    return await quiz_service.get_user_quiz_results(current_user.user_id)

@router.get("/{quiz_id}", response_model=QuizPublicResponse)
async def get_quiz(
    quiz_id: str,
    current_user: TokenData = Depends(get_current_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    """Get a quiz to take, without correct answers"""
    return await quiz_service.get_public_quiz(quiz_id)

@router.get("/{quiz_id}/full", response_model=QuizResponse)
async def get_quiz_with_answers(
    quiz_id: str,
    current_user: TokenData = Depends(get_current_admin_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    return await quiz_service.get_quiz(quiz_id)

@router.put("/{quiz_id}", response_model=QuizResponse)
async def update_quiz(
    quiz_id: str,
    update_data: QuizUpdate,
    current_user: TokenData = Depends(get_current_admin_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    return await quiz_service.update_quiz(quiz_id, update_data)

@router.delete("/{quiz_id}", response_model=SuccessResponse)
async def delete_quiz(
    quiz_id: str,
    current_user: TokenData = Depends(get_current_admin_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    await quiz_service.delete_quiz(quiz_id)
    return SuccessResponse(message="Quiz deleted successfully", data={"id": quiz_id})

@router.post("/{quiz_id}/submit", response_model=QuizGradeResponse)
async def submit_quiz(
    quiz_id: str,
    submission: QuizSubmission,
    current_user: TokenData = Depends(get_current_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    """Submit answers for auto-grading. Replaces any earlier result for this quiz."""
    return await quiz_service.submit_quiz(current_user.user_id, quiz_id, submission.answers)

@router.get("/{quiz_id}/results", response_model=QuizResultResponse)
async def get_quiz_result(
    quiz_id: str,
    current_user: TokenData = Depends(get_current_user),
    quiz_service: QuizService = Depends(get_quiz_service)
):
    return await quiz_service.get_quiz_result(current_user.user_id, quiz_id)
