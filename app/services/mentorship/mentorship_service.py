"""
Mentorship Service for a mentor's mentees, meetings and progress tracking
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from supabase import Client

from app.core.exceptions import NotFoundError
from app.models.models import (
    MeetingCreate, MeetingResponse, MeetingStatus, MeetingUpdate, MenteeSummary,
    MentorshipDetailResponse, MentorshipFeedback, MentorshipGoal, MentorshipResponse,
    MentorshipStatus, MentorStatsResponse, UpcomingMeetingResponse, UserRole, UserSummary
)
from app.services.mentorship.status_rules import transition_meeting
from app.services.user.services import UserService

logger = logging.getLogger(__name__)

NO_MEETINGS_YET = "No meetings yet"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class MentorshipService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.user_service = UserService(supabase)

    async def list_available_mentors(self) -> List[UserSummary]:
        return await self.user_service.get_users_by_role(UserRole.MENTOR)

    async def get_mentees(self, mentor_id: str) -> List[MenteeSummary]:
        """One entry per mentorship of this mentor, with the date of the latest meeting"""
        mentorships = self.supabase.table("mentorships").select("*").eq("mentor_id", mentor_id).execute().data or []
        logger.info(f"Found {len(mentorships)} mentorships for mentor {mentor_id}")

        users = self._get_users([m["mentee_id"] for m in mentorships])
        last_meeting_ids = [m["meetings"][-1] for m in mentorships if m.get("meetings")]
        meetings: Dict[str, Dict[str, Any]] = {}
        if last_meeting_ids:
            rows = self.supabase.table("meetings").select("id, date").in_("id", last_meeting_ids).execute().data or []
            meetings = {row["id"]: row for row in rows}

        mentees = []
        for mentorship in mentorships:
            user = users.get(mentorship["mentee_id"], {})
            last_meeting = NO_MEETINGS_YET
            if mentorship.get("meetings"):
                last = meetings.get(mentorship["meetings"][-1])
                if last:
                    last_meeting = last["date"]
            mentees.append(MenteeSummary(
                id=mentorship["mentee_id"],
                mentorship_id=mentorship["id"],
                name=user.get("full_name", ""),
                email=user.get("email", ""),
                progress=mentorship.get("progress") or 0,
                status=MentorshipStatus(mentorship["status"]),
                last_meeting=last_meeting,
            ))
        return mentees

    async def get_mentee_details(self, mentor_id: str, mentee_id: str) -> MentorshipDetailResponse:
        result = self.supabase.table("mentorships").select("*").eq("mentor_id", mentor_id).eq("mentee_id", mentee_id).execute()
        if not result.data:
            raise NotFoundError("Mentee not found")
        mentorship = result.data[0]

        details = MentorshipDetailResponse.model_validate(mentorship)
        mentee = await self.user_service.get_user_by_id(mentee_id)
        details.mentee = mentee

        meeting_ids = mentorship.get("meetings") or []
        if meeting_ids:
            rows = self.supabase.table("meetings").select("*").in_("id", meeting_ids).execute().data or []
            by_id = {row["id"]: row for row in rows}
            # Keep the order of the mentorship's meeting list
            details.meeting_details = [
                self._to_meeting_response(by_id[meeting_id], mentee)
                for meeting_id in meeting_ids if meeting_id in by_id
            ]
        return details

    async def get_upcoming_meetings(self, mentor_id: str) -> List[UpcomingMeetingResponse]:
        result = self.supabase.table("meetings").select("*").eq("mentor_id", mentor_id).gte("date", _utcnow()).order("date").execute()
        rows = result.data or []
        users = self._get_users([row["mentee_id"] for row in rows])
        return [
            UpcomingMeetingResponse(
                id=row["id"],
                mentee_name=users.get(row["mentee_id"], {}).get("full_name"),
                date=row["date"],
                status=MeetingStatus(row["status"]),
                notes=row.get("notes"),
            )
            for row in rows
        ]

    async def get_meeting(self, mentor_id: str, meeting_id: str) -> MeetingResponse:
        meeting = self._get_meeting_row(mentor_id, meeting_id)
        mentee = await self.user_service.get_user_by_id(meeting["mentee_id"])
        return self._to_meeting_response(meeting, mentee)

    async def update_meeting(self, mentor_id: str, meeting_id: str, update_data: MeetingUpdate) -> MeetingResponse:
        """Apply the fields present in the request. Empty notes or meeting_link clear them."""
        meeting = self._get_meeting_row(mentor_id, meeting_id)
        requested = update_data.model_dump(mode="json", exclude_unset=True)

        changes: Dict[str, Any] = {}
        # date and status are required columns, so null means "leave as is"
        if requested.get("date") is not None:
            changes["date"] = requested["date"]
        if update_data.status is not None and update_data.status.value != meeting["status"]:
            changes["status"] = transition_meeting(meeting["status"], update_data.status).value
        for field in ("notes", "meeting_link"):
            if field in requested and (requested[field] or None) != meeting.get(field):
                changes[field] = requested[field] or None

        mentee = await self.user_service.get_user_by_id(meeting["mentee_id"])
        if not changes:
            return self._to_meeting_response(meeting, mentee)

        changes["updated_at"] = _utcnow()
        result = self.supabase.table("meetings").update(changes).eq("id", meeting_id).execute()
        if not result.data:
            raise NotFoundError("Meeting not found")
        logger.info(f"Meeting {meeting_id} updated: {sorted(changes)}")
        return self._to_meeting_response(result.data[0], mentee)

    async def schedule_meeting(self, mentor_id: str, meeting_data: MeetingCreate) -> MeetingResponse:
        """Schedule a meeting inside an existing mentorship and append it to the mentorship"""
        mentorship = self._get_mentorship_by_pair(mentor_id, meeting_data.mentee_id)

        now = _utcnow()
        result = self.supabase.table("meetings").insert({
            "mentor_id": mentor_id,
            "mentee_id": meeting_data.mentee_id,
            "date": meeting_data.date.isoformat(),
            "status": MeetingStatus.SCHEDULED.value,
            "notes": meeting_data.notes,
            "duration": meeting_data.duration,
            "meeting_type": meeting_data.meeting_type.value,
            "meeting_link": meeting_data.meeting_link,
            "created_at": now,
            "updated_at": now,
        }).execute()
        if not result.data:
            raise Exception("Failed to create meeting")
        meeting = result.data[0]

        meetings = list(mentorship.get("meetings") or []) + [meeting["id"]]
        self.supabase.table("mentorships").update({"meetings": meetings, "updated_at": now}).eq("id", mentorship["id"]).execute()

        logger.info(f"Meeting {meeting['id']} scheduled in mentorship {mentorship['id']}")
        return self._to_meeting_response(meeting)

    async def cancel_meeting(self, mentor_id: str, meeting_id: str) -> MeetingResponse:
        meeting = self._get_meeting_row(mentor_id, meeting_id)
        new_status = transition_meeting(meeting["status"], MeetingStatus.CANCELLED)

        result = self.supabase.table("meetings").update({
            "status": new_status.value,
            "updated_at": _utcnow(),
        }).eq("id", meeting_id).execute()
        if not result.data:
            raise NotFoundError("Meeting not found")
        logger.info(f"Meeting {meeting_id} cancelled")
        return self._to_meeting_response(result.data[0])

    async def get_mentor_stats(self, mentor_id: str) -> MentorStatsResponse:
        mentorships = self.supabase.table("mentorships").select("id, status").eq("mentor_id", mentor_id).execute().data or []
        meetings = self.supabase.table("meetings").select("id, status").eq("mentor_id", mentor_id).execute().data or []

        return MentorStatsResponse(
            total_mentees=len(mentorships),
            active_mentees=sum(1 for m in mentorships if m["status"] == MentorshipStatus.ACTIVE.value),
            completed_meetings=sum(1 for m in meetings if m["status"] == MeetingStatus.COMPLETED.value),
            pending_meetings=sum(1 for m in meetings if m["status"] == MeetingStatus.SCHEDULED.value),
        )

    async def add_goal(self, mentor_id: str, mentorship_id: str, goal: MentorshipGoal) -> MentorshipResponse:
        mentorship = self._get_mentorship_row(mentor_id, mentorship_id)
        goals = list(mentorship.get("goals") or []) + [goal.model_dump(mode="json")]
        return self._update_mentorship(mentorship_id, {"goals": goals})

    async def update_progress(self, mentor_id: str, mentorship_id: str, progress: int) -> MentorshipResponse:
        self._get_mentorship_row(mentor_id, mentorship_id)
        return self._update_mentorship(mentorship_id, {"progress": progress})

    async def add_feedback(self, mentor_id: str, mentorship_id: str, feedback: MentorshipFeedback) -> MentorshipResponse:
        mentorship = self._get_mentorship_row(mentor_id, mentorship_id)
        entry = feedback.model_dump(mode="json")
        entry["date"] = entry.get("date") or _utcnow()
        entries = list(mentorship.get("feedback") or []) + [entry]
        return self._update_mentorship(mentorship_id, {"feedback": entries})

    def _get_users(self, user_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        unique_ids = list(set(user_ids))
        if not unique_ids:
            return {}
        rows = self.supabase.table("users").select("user_id, full_name, email").in_("user_id", unique_ids).execute().data or []
        return {row["user_id"]: row for row in rows}

    def _get_meeting_row(self, mentor_id: str, meeting_id: str) -> Dict[str, Any]:
        result = self.supabase.table("meetings").select("*").eq("id", meeting_id).eq("mentor_id", mentor_id).execute()
        if not result.data:
            raise NotFoundError("Meeting not found")
        return result.data[0]

    def _get_mentorship_row(self, mentor_id: str, mentorship_id: str) -> Dict[str, Any]:
        result = self.supabase.table("mentorships").select("*").eq("id", mentorship_id).eq("mentor_id", mentor_id).execute()
        if not result.data:
            raise NotFoundError("Mentorship not found")
        return result.data[0]

    def _get_mentorship_by_pair(self, mentor_id: str, mentee_id: str) -> Dict[str, Any]:
        result = self.supabase.table("mentorships").select("*").eq("mentor_id", mentor_id).eq("mentee_id", mentee_id).execute()
        if not result.data:
            raise NotFoundError("Mentorship not found")
        return result.data[0]

    def _update_mentorship(self, mentorship_id: str, changes: Dict[str, Any]) -> MentorshipResponse:
        result = self.supabase.table("mentorships").update({**changes, "updated_at": _utcnow()}).eq("id", mentorship_id).execute()
        if not result.data:
            raise NotFoundError("Mentorship not found")
        return MentorshipResponse.model_validate(result.data[0])

    def _to_meeting_response(self, meeting: Dict[str, Any], mentee: UserSummary = None) -> MeetingResponse:
        response = MeetingResponse.model_validate(meeting)
        if mentee:
            response.mentee_name = mentee.full_name
            response.mentee_email = mentee.email
        return response
