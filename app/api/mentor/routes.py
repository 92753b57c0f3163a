"""
Mentor API routes for mentees, meetings and mentorship tracking
"""
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_mentorship_service
from app.core.security.auth_dependencies import get_current_mentor_user
from app.models.models import (
    MeetingCreate, MeetingResponse, MeetingUpdate, MenteeSummary, MentorshipDetailResponse,
    MentorshipFeedback, MentorshipGoal, MentorshipResponse, MentorStatsResponse,
    ProgressUpdate, SuccessResponse, TokenData, UpcomingMeetingResponse, UserSummary
)
from app.services.mentorship.mentorship_service import MentorshipService

router = APIRouter(prefix="/api/mentors", tags=["mentors"])

@router.get("/available", response_model=List[UserSummary])
async def get_available_mentors(
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """List mentors a mentee can book (public)"""
    return await mentorship_service.list_available_mentors()

@router.get("/mentees", response_model=List[MenteeSummary])
async def get_mentees(
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """Get the current mentor's mentees"""
    return await mentorship_service.get_mentees(current_user.user_id)

@router.get("/mentees/{mentee_id}", response_model=MentorshipDetailResponse)
async def get_mentee_details(
    mentee_id: str,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """Get the mentorship with one mentee, including its meetings"""
    return await mentorship_service.get_mentee_details(current_user.user_id, mentee_id)

@router.post("/mentorships/{mentorship_id}/goals", response_model=MentorshipResponse, status_code=status.HTTP_201_CREATED)
async def add_mentorship_goal(
    mentorship_id: str,
    goal: MentorshipGoal,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    return await mentorship_service.add_goal(current_user.user_id, mentorship_id, goal)

@router.put("/mentorships/{mentorship_id}/progress", response_model=MentorshipResponse)
async def update_mentorship_progress(
    mentorship_id: str,
    update: ProgressUpdate,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    return await mentorship_service.update_progress(current_user.user_id, mentorship_id, update.progress)

@router.post("/mentorships/{mentorship_id}/feedback", response_model=MentorshipResponse, status_code=status.HTTP_201_CREATED)
async def add_mentorship_feedback(
    mentorship_id: str,
    feedback: MentorshipFeedback,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    return await mentorship_service.add_feedback(current_user.user_id, mentorship_id, feedback)

@router.get("/meetings", response_model=List[UpcomingMeetingResponse])
async def get_upcoming_meetings(
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """Get the current mentor's upcoming meetings, soonest first"""
    return await mentorship_service.get_upcoming_meetings(current_user.user_id)

@router.post("/meetings", response_model=MeetingResponse, status_code=status.HTTP_201_CREATED)
async def schedule_meeting(
    meeting_data: MeetingCreate,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    """Schedule a new meeting with an existing mentee"""
    return await mentorship_service.schedule_meeting(current_user.user_id, meeting_data)

@router.get("/meetings/{meeting_id}", response_model=MeetingResponse)
async def get_meeting_details(
    meeting_id: str,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    return await mentorship_service.get_meeting(current_user.user_id, meeting_id)

@router.put("/meetings/{meeting_id}", response_model=MeetingResponse)
async def update_meeting(
    meeting_id: str,
    update_data: MeetingUpdate,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    return await mentorship_service.update_meeting(current_user.user_id, meeting_id, update_data)

@router.delete("/meetings/{meeting_id}", response_model=SuccessResponse)
async def cancel_meeting(
    meeting_id: str,
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    meeting = await mentorship_service.cancel_meeting(current_user.user_id, meeting_id)
    return SuccessResponse(message="Meeting cancelled successfully", data={"id": meeting.id})

@router.get("/stats", response_model=MentorStatsResponse)
async def get_mentor_stats(
    current_user: TokenData = Depends(get_current_mentor_user),
    mentorship_service: MentorshipService = Depends(get_mentorship_service)
):
    return await mentorship_service.get_mentor_stats(current_user.user_id)
