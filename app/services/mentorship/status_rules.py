"""
Status transition rules for bookings, mentorships and meetings.

Every status change in the services goes through one of the transition
functions below so that legality is decided in a single place.
"""
from enum import Enum
from typing import Dict, FrozenSet, Optional, Type, TypeVar

from app.core.exceptions import InvalidStateError
from app.models.models import BookingStatus, MentorshipStatus, MeetingStatus

S = TypeVar("S", bound=Enum)

BOOKING_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}

# Nothing moves a mentorship to completed yet
MENTORSHIP_TRANSITIONS: Dict[MentorshipStatus, FrozenSet[MentorshipStatus]] = {
    MentorshipStatus.PENDING: frozenset({MentorshipStatus.ACTIVE, MentorshipStatus.CANCELLED}),
    MentorshipStatus.ACTIVE: frozenset({MentorshipStatus.CANCELLED}),
    MentorshipStatus.CANCELLED: frozenset({MentorshipStatus.ACTIVE}),
    MentorshipStatus.COMPLETED: frozenset(),
}

MEETING_TRANSITIONS: Dict[MeetingStatus, FrozenSet[MeetingStatus]] = {
    MeetingStatus.SCHEDULED: frozenset({MeetingStatus.COMPLETED, MeetingStatus.CANCELLED}),
    MeetingStatus.COMPLETED: frozenset(),
    MeetingStatus.CANCELLED: frozenset(),
}

BOOKING_NOT_PENDING = "Booking is no longer pending"
MENTORSHIP_EXISTS = "A mentorship already exists with this mentee"


def _transition(table: Dict[S, FrozenSet[S]], enum_cls: Type[S], current, target, message: str) -> S:
    current = enum_cls(current)
    target = enum_cls(target)
    if target not in table[current]:
        raise InvalidStateError(message.format(current=current.value, target=target.value))
    return target


def transition_booking(current, target) -> BookingStatus:
    """Return the new booking status or raise if the move is illegal.

    Only pending bookings can move, so every illegal move is reported as the
    booking no longer being pending.
    """
    current = BookingStatus(current)
    if current != BookingStatus.PENDING:
        raise InvalidStateError(BOOKING_NOT_PENDING)
    return _transition(
        BOOKING_TRANSITIONS, BookingStatus, current, target,
        "Cannot move booking from {current} to {target}",
    )


def transition_mentorship(current, target) -> MentorshipStatus:
    """Return the new mentorship status or raise if the move is illegal."""
    return _transition(
        MENTORSHIP_TRANSITIONS, MentorshipStatus, current, target,
        "Cannot move mentorship from {current} to {target}",
    )


def transition_meeting(current, target) -> MeetingStatus:
    """Return the new meeting status or raise if the move is illegal."""
    return _transition(
        MEETING_TRANSITIONS, MeetingStatus, current, target,
        "Cannot move meeting from {current} to {target}",
    )


class MentorshipAction(str, Enum):
    CREATE = "create"
    REACTIVATE = "reactivate"


def resolve_existing_mentorship(existing_status: Optional[str]) -> MentorshipAction:
    """Decide what accepting a booking does with the (mentor, mentee) mentorship.

    No mentorship yet means a new one is created, a cancelled one is
    reactivated, and any other status blocks the acceptance.
    """
    if existing_status is None:
        return MentorshipAction.CREATE
    status = MentorshipStatus(existing_status)
    if status != MentorshipStatus.CANCELLED:
        raise InvalidStateError(MENTORSHIP_EXISTS)
    transition_mentorship(status, MentorshipStatus.ACTIVE)
    return MentorshipAction.REACTIVATE
