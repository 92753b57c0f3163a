"""
Booking API routes: mentee booking requests and the mentor accept / reject flow
"""
from typing import List
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_booking_service
from app.core.security.auth_dependencies import get_current_user, get_current_mentor_user
from app.models.models import (
    BookingAcceptResponse, BookingCreate, BookingFeedback, BookingResponse, TokenData
)
from app.services.mentorship.booking_service import BookingService

router = APIRouter(prefix="/api/mentors/bookings", tags=["bookings"])

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking_request(
    booking_data: BookingCreate,
    booking_service: BookingService = Depends(get_booking_service)
):
    """Submit a booking request (public)"""
    return await booking_service.create_booking(booking_data)

@router.get("/pending", response_model=List[BookingResponse])
async def get_pending_bookings(
    current_user: TokenData = Depends(get_current_mentor_user),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Get every pending booking request, visible to all mentors"""
    return await booking_service.get_pending_bookings()

@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    current_user: TokenData = Depends(get_current_mentor_user),
    booking_service: BookingService = Depends(get_booking_service)
):
    return await booking_service.get_booking(booking_id)

@router.put("/{booking_id}/accept", response_model=BookingAcceptResponse)
async def accept_booking(
    booking_id: str,
    current_user: TokenData = Depends(get_current_mentor_user),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Accept a pending booking, starting (or reactivating) the mentorship"""
    return await booking_service.accept_booking(booking_id, current_user)

@router.put("/{booking_id}/reject", response_model=BookingResponse)
async def reject_booking(
    booking_id: str,
    current_user: TokenData = Depends(get_current_mentor_user),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Reject a pending booking"""
    return await booking_service.reject_booking(booking_id, current_user)

@router.post("/{booking_id}/feedback", response_model=BookingResponse)
async def add_booking_feedback(
    booking_id: str,
    feedback: BookingFeedback,
    current_user: TokenData = Depends(get_current_user),
    booking_service: BookingService = Depends(get_booking_service)
):
    """Rate a confirmed session (mentee of the booking only)"""
    return await booking_service.add_feedback(booking_id, current_user.user_id, feedback)
