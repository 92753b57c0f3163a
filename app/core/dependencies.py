"""
FastAPI dependency providers wiring services to their collaborators
"""
from fastapi import Depends
from supabase import Client

from app.core.database import get_supabase
from app.services.assignment.assignment_service import AssignmentService
from app.services.email.booking_notifier import BookingNotifier
from app.services.email.email_service import EmailService, get_email_service
from app.services.mentorship.booking_service import BookingService
from app.services.mentorship.mentorship_service import MentorshipService
from app.services.quiz.quiz_service import QuizService


def get_booking_notifier(email_service: EmailService = Depends(get_email_service)) -> BookingNotifier:
    return BookingNotifier(email_service)


def get_booking_service(
    supabase: Client = Depends(get_supabase),
    notifier: BookingNotifier = Depends(get_booking_notifier),
) -> BookingService:
    return BookingService(supabase, notifier)


def get_mentorship_service(supabase: Client = Depends(get_supabase)) -> MentorshipService:
    return MentorshipService(supabase)


def get_quiz_service(supabase: Client = Depends(get_supabase)) -> QuizService:
    return QuizService(supabase)


def get_assignment_service(supabase: Client = Depends(get_supabase)) -> AssignmentService:
    return AssignmentService(supabase)
