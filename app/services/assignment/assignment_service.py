"""
Assignment Service: course assignments, student submissions and manual grading
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from supabase import Client

from app.core.exceptions import NotFoundError, ValidationError
from app.models.models import (
    AssignmentCreate, AssignmentGrade, AssignmentResponse,
    AssignmentSubmissionCreate, AssignmentSubmissionResponse
)

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class AssignmentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    async def create_assignment(self, assignment_data: AssignmentCreate, created_by: str) -> AssignmentResponse:
        now = _utcnow()
        assignment_dict = assignment_data.model_dump(mode="json")
        assignment_dict.update({"created_by": created_by, "created_at": now, "updated_at": now})

        result = self.supabase.table("assignments").insert(assignment_dict).execute()
        if not result.data:
            raise Exception("Failed to create assignment")
        logger.info(f"Assignment created with ID: {result.data[0]['id']}")
        return AssignmentResponse.model_validate(result.data[0])

    async def get_assignment(self, assignment_id: str) -> AssignmentResponse:
        return AssignmentResponse.model_validate(self._get_assignment_row(assignment_id))

    async def submit_assignment(
        self, assignment_id: str, student_id: str, submission: AssignmentSubmissionCreate
    ) -> AssignmentSubmissionResponse:
        """Record a student's work. Every call adds a new submission; earlier ones are kept."""
        self._get_assignment_row(assignment_id)
        if not submission.file_url and not submission.text:
            raise ValidationError("A file URL or text is required")

        result = self.supabase.table("assignment_submissions").insert({
            "assignment_id": assignment_id,
            "student_id": student_id,
            "file_url": submission.file_url,
            "text": submission.text,
            "submitted_at": _utcnow(),
            "grade": None,
            "feedback": None,
            "graded_at": None,
        }).execute()
        if not result.data:
            raise Exception("Failed to submit assignment")
        logger.info(f"Student {student_id} submitted assignment {assignment_id}")
        return AssignmentSubmissionResponse.model_validate(result.data[0])

    async def grade_submission(self, assignment_id: str, grading: AssignmentGrade) -> AssignmentSubmissionResponse:
        self._get_assignment_row(assignment_id)
        result = self.supabase.table("assignment_submissions").update({
            "grade": grading.grade,
            "feedback": grading.feedback,
            "graded_at": _utcnow(),
        }).eq("id", grading.submission_id).eq("assignment_id", assignment_id).execute()
        if not result.data:
            raise NotFoundError("Submission not found")
        logger.info(f"Submission {grading.submission_id} on assignment {assignment_id} graded {grading.grade}")
        return AssignmentSubmissionResponse.model_validate(result.data[0])

    async def get_submissions(self, assignment_id: str) -> List[AssignmentSubmissionResponse]:
        self._get_assignment_row(assignment_id)
        result = self.supabase.table("assignment_submissions").select("*").eq("assignment_id", assignment_id).order("submitted_at").execute()
        return [AssignmentSubmissionResponse.model_validate(row) for row in result.data or []]

    def _get_assignment_row(self, assignment_id: str) -> Dict[str, Any]:
        result = self.supabase.table("assignments").select("*").eq("id", assignment_id).execute()
        if not result.data:
            raise NotFoundError("Assignment not found")
        return result.data[0]
