"""
Assignment API routes: admin-authored assignments, student submissions and grading
"""
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_assignment_service
from app.core.security.auth_dependencies import get_current_user, get_current_admin_user
from app.models.models import (
    AssignmentCreate, AssignmentGrade, AssignmentResponse, AssignmentSubmissionCreate,
    AssignmentSubmissionResponse, SuccessResponse, TokenData
)
from app.services.assignment.assignment_service import AssignmentService

router = APIRouter(prefix="/api/assignments", tags=["assignments"])

@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    assignment_data: AssignmentCreate,
    current_user: TokenData = Depends(get_current_admin_user),
    assignment_service: AssignmentService = Depends(get_assignment_service)
):
    return await assignment_service.create_assignment(assignment_data, current_user.user_id)

@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(
    assignment_id: str,
    current_user: TokenData = Depends(get_current_user),
    assignment_service: AssignmentService = Depends(get_assignment_service)
):
    return await assignment_service.get_assignment(assignment_id)

@router.post("/{assignment_id}/submit", response_model=SuccessResponse)
async def submit_assignment(
    assignment_id: str,
    submission: AssignmentSubmissionCreate,
    current_user: TokenData = Depends(get_current_user),
    assignment_service: AssignmentService = Depends(get_assignment_service)
):
    """Hand in a file link and/or text answer"""
    stored = await assignment_service.submit_assignment(assignment_id, current_user.user_id, submission)
    return SuccessResponse(message="Assignment submitted", data={"submission_id": stored.id})

@router.post("/{assignment_id}/grade", response_model=SuccessResponse)
async def grade_assignment(
    assignment_id: str,
    grading: AssignmentGrade,
    current_user: TokenData = Depends(get_current_admin_user),
    assignment_service: AssignmentService = Depends(get_assignment_service)
):
    graded = await assignment_service.grade_submission(assignment_id, grading)
    return SuccessResponse(message="Assignment graded", data=graded.model_dump(mode="json"))

@router.get("/{assignment_id}/submissions", response_model=List[AssignmentSubmissionResponse])
async def get_assignment_submissions(
    assignment_id: str,
    current_user: TokenData = Depends(get_current_admin_user),
    assignment_service: AssignmentService = Depends(get_assignment_service)
):
    return await assignment_service.get_submissions(assignment_id)
