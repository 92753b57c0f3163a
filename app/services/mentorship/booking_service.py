"""
Booking Service: mentee booking requests and the mentor accept / reject flow
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

from app.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from app.models.models import (
    BookingAcceptResponse, BookingCreate, BookingFeedback, BookingResponse, BookingStatus,
    MeetingStatus, MeetingType, MentorshipStatus, TokenData, UserSummary
)
from app.services.email.booking_notifier import BookingNotifier
from app.services.mentorship.status_rules import (
    BOOKING_NOT_PENDING, MENTORSHIP_EXISTS, MentorshipAction,
    resolve_existing_mentorship, transition_booking
)
from app.services.user.services import UserService
from app.utils.compensation import Compensations

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "Initial Mentorship Session"
DEFAULT_DURATION = 60
DEFAULT_TIME = "To be scheduled"

# Postgres unique_violation, surfaced by PostgREST as the error code
UNIQUE_VIOLATION = "23505"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class BookingService:
    def __init__(self, supabase: Client, notifier: BookingNotifier):
        self.supabase = supabase
        self.notifier = notifier
        self.user_service = UserService(supabase)

    async def create_booking(self, booking_data: BookingCreate) -> BookingResponse:
        """Submit a new booking request. It stays unassigned until a mentor accepts it."""
        mentee = await self.user_service.get_user_by_id(booking_data.mentee)
        if not mentee:
            raise NotFoundError("Mentee not found")

        now = _utcnow()
        booking_dict = {
            "mentee_id": booking_data.mentee,
            "mentee_name": booking_data.name,
            "mentee_email": booking_data.email,
            "mentor_id": None,
            "topic": booking_data.topic or DEFAULT_TOPIC,
            "duration": booking_data.duration or DEFAULT_DURATION,
            "date": booking_data.date.isoformat() if booking_data.date else now,
            "time": booking_data.time or DEFAULT_TIME,
            "notes": booking_data.notes,
            "status": BookingStatus.PENDING.value,
            "created_at": now,
            "updated_at": now,
        }

        logger.info(f"Creating booking request for mentee {booking_data.mentee}")
        result = self.supabase.table("bookings").insert(booking_dict).execute()
        if not result.data:
            raise Exception("Failed to create booking")

        logger.info(f"Booking created with ID: {result.data[0]['id']}")
        return BookingResponse.model_validate(result.data[0])

    async def get_pending_bookings(self) -> List[BookingResponse]:
        """All pending bookings system-wide, oldest first, with the live mentee record"""
        result = self.supabase.table("bookings").select("*").eq("status", BookingStatus.PENDING.value).order("created_at").execute()
        rows = result.data or []
        logger.info(f"Found {len(rows)} pending bookings")

        mentee_ids = list({row["mentee_id"] for row in rows})
        mentees: Dict[str, Dict[str, Any]] = {}
        if mentee_ids:
            users = self.supabase.table("users").select("user_id, full_name, email").in_("user_id", mentee_ids).execute()
            mentees = {user["user_id"]: user for user in users.data or []}

        bookings = []
        for row in rows:
            booking = BookingResponse.model_validate(row)
            if row["mentee_id"] in mentees:
                booking.mentee = UserSummary.model_validate(mentees[row["mentee_id"]])
            bookings.append(booking)
        return bookings

    async def get_booking(self, booking_id: str) -> BookingResponse:
        return BookingResponse.model_validate(self._get_booking_row(booking_id))

    async def accept_booking(self, booking_id: str, mentor: TokenData) -> BookingAcceptResponse:
        """Accept a pending booking on behalf of a mentor.

        All checks run before the first write. The writes (booking, mentorship,
        meeting) are undone in reverse order if any of them fails, and the
        acceptance email is only sent once all of them have landed.
        """
        booking = self._get_booking_row(booking_id)
        transition_booking(booking["status"], BookingStatus.CONFIRMED)

        mentee_id = booking["mentee_id"]
        existing = self._find_mentorship(mentor.user_id, mentee_id)
        action = resolve_existing_mentorship(existing["status"] if existing else None)

        logger.info(f"Mentor {mentor.user_id} accepting booking {booking_id} ({action.value} mentorship)")
        confirmed = self._update_if_pending(booking_id, {
            "status": BookingStatus.CONFIRMED.value,
            "mentor_id": mentor.user_id,
        })
        compensations = Compensations(f"accept booking {booking_id}")
        compensations.add(
            f"booking {booking_id} back to pending",
            lambda: self.supabase.table("bookings").update({
                "status": BookingStatus.PENDING.value,
                "mentor_id": None,
                "updated_at": _utcnow(),
            }).eq("id", booking_id).execute()
        )
        try:
            if action == MentorshipAction.REACTIVATE:
                mentorship = self._reactivate_mentorship(existing)
                # Only undo our own reactivation, never a later accept of the same pair
                compensations.add(
                    f"mentorship {existing['id']} back to cancelled",
                    lambda: self.supabase.table("mentorships").update({
                        "status": existing["status"],
                        "start_date": existing.get("start_date"),
                        "updated_at": _utcnow(),
                    }).eq("id", existing["id"])
                    .eq("status", MentorshipStatus.ACTIVE.value)
                    .eq("start_date", mentorship["start_date"]).execute()
                )
            else:
                mentorship = self._create_mentorship(mentor.user_id, mentee_id)
                compensations.add(
                    f"delete mentorship {mentorship['id']}",
                    lambda: self.supabase.table("mentorships").delete().eq("id", mentorship["id"]).execute()
                )

            meeting = self._create_meeting_for_booking(confirmed, mentor.user_id)
            compensations.add(
                f"delete meeting {meeting['id']}",
                lambda: self.supabase.table("meetings").delete().eq("id", meeting["id"]).execute()
            )

            meetings = list(mentorship.get("meetings") or []) + [meeting["id"]]
            self.supabase.table("mentorships").update({
                "meetings": meetings,
                "updated_at": _utcnow(),
            }).eq("id", mentorship["id"]).execute()

        except Exception as e:
            compensations.rollback()
            if getattr(e, "code", None) == UNIQUE_VIOLATION:
                # Another request created the mentorship for this pair first
                raise InvalidStateError(MENTORSHIP_EXISTS) from e
            logger.error(f"Error accepting booking {booking_id}: {e}")
            raise

        mentor_name = await self._get_mentor_name(mentor)
        await self.notifier.send_booking_accepted(confirmed, mentor_name)

        logger.info(f"Booking {booking_id} confirmed, mentorship {mentorship['id']}, meeting {meeting['id']}")
        return BookingAcceptResponse.model_validate({
            **confirmed,
            "mentorship_id": mentorship["id"],
            "meeting_id": meeting["id"],
        })

    async def reject_booking(self, booking_id: str, mentor: TokenData) -> BookingResponse:
        """Cancel a pending booking and let the mentee know"""
        booking = self._get_booking_row(booking_id)
        transition_booking(booking["status"], BookingStatus.CANCELLED)

        logger.info(f"Mentor {mentor.user_id} rejecting booking {booking_id}")
        cancelled = self._update_if_pending(booking_id, {"status": BookingStatus.CANCELLED.value})

        await self.notifier.send_booking_rejected(cancelled)
        return BookingResponse.model_validate(cancelled)

    async def add_feedback(self, booking_id: str, user_id: str, feedback: BookingFeedback) -> BookingResponse:
        """Let the mentee rate a session once it has been confirmed"""
        booking = self._get_booking_row(booking_id)
        if booking["mentee_id"] != user_id:
            raise ForbiddenError("Only the mentee of this booking can leave feedback")
        if booking["status"] not in (BookingStatus.CONFIRMED.value, BookingStatus.COMPLETED.value):
            raise InvalidStateError("Feedback can only be left on a confirmed booking")

        result = self.supabase.table("bookings").update({
            "feedback": feedback.model_dump(),
            "updated_at": _utcnow(),
        }).eq("id", booking_id).execute()
        if not result.data:
            raise NotFoundError("Booking not found")
        return BookingResponse.model_validate(result.data[0])

    def _get_booking_row(self, booking_id: str) -> Dict[str, Any]:
        result = self.supabase.table("bookings").select("*").eq("id", booking_id).execute()
        if not result.data:
            raise NotFoundError("Booking not found")
        return result.data[0]

    def _update_if_pending(self, booking_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Write booking changes only while the row is still pending.

        An empty result means another request moved the booking first.
        """
        payload = {**changes, "updated_at": _utcnow()}
        result = self.supabase.table("bookings").update(payload).eq("id", booking_id).eq("status", BookingStatus.PENDING.value).execute()
        if not result.data:
            logger.warning(f"Booking {booking_id} changed state before it could be updated")
            raise InvalidStateError(BOOKING_NOT_PENDING)
        return result.data[0]

    def _find_mentorship(self, mentor_id: str, mentee_id: str) -> Optional[Dict[str, Any]]:
        result = self.supabase.table("mentorships").select("*").eq("mentor_id", mentor_id).eq("mentee_id", mentee_id).execute()
        return result.data[0] if result.data else None

    def _create_mentorship(self, mentor_id: str, mentee_id: str) -> Dict[str, Any]:
        now = _utcnow()
        result = self.supabase.table("mentorships").insert({
            "mentor_id": mentor_id,
            "mentee_id": mentee_id,
            "status": MentorshipStatus.ACTIVE.value,
            "start_date": now,
            "progress": 0,
            "goals": [],
            "meetings": [],
            "feedback": [],
            "created_at": now,
            "updated_at": now,
        }).execute()
        if not result.data:
            raise Exception("Failed to create mentorship")
        logger.info(f"Mentorship created with ID: {result.data[0]['id']}")
        return result.data[0]

    def _reactivate_mentorship(self, existing: Dict[str, Any]) -> Dict[str, Any]:
        now = _utcnow()
        result = self.supabase.table("mentorships").update({
            "status": MentorshipStatus.ACTIVE.value,
            "start_date": now,
            "updated_at": now,
        }).eq("id", existing["id"]).eq("status", MentorshipStatus.CANCELLED.value).execute()
        if not result.data:
            logger.warning(f"Mentorship {existing['id']} changed state before it could be reactivated")
            raise InvalidStateError(MENTORSHIP_EXISTS)
        logger.info(f"Mentorship {existing['id']} reactivated")
        return result.data[0]

    def _create_meeting_for_booking(self, booking: Dict[str, Any], mentor_id: str) -> Dict[str, Any]:
        now = _utcnow()
        result = self.supabase.table("meetings").insert({
            "mentor_id": mentor_id,
            "mentee_id": booking["mentee_id"],
            "date": booking["date"],
            "status": MeetingStatus.SCHEDULED.value,
            "notes": booking.get("topic"),
            "duration": booking.get("duration") or DEFAULT_DURATION,
            "meeting_type": MeetingType.VIDEO.value,
            "meeting_link": booking.get("meeting_link"),
            "created_at": now,
            "updated_at": now,
        }).execute()
        if not result.data:
            raise Exception("Failed to create meeting")
        return result.data[0]

    async def _get_mentor_name(self, mentor: TokenData) -> Optional[str]:
        try:
            user = await self.user_service.get_user_by_id(mentor.user_id)
        except Exception as e:
            logger.error(f"Could not load mentor {mentor.user_id} for the acceptance email: {e}")
            return mentor.name
        return user.full_name if user else mentor.name
