"""
EmpowerHerEd backend - test configuration and fixtures
"""
import os
from datetime import datetime, timezone
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

# Set testing environment
os.environ['SUPABASE_URL'] = 'http://localhost:54321'
os.environ['SUPABASE_KEY'] = 'test-supabase-key'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['ENVIRONMENT'] = 'test'

from app.main import app
from app.core.database import get_supabase
from app.services.email.booking_notifier import BookingNotifier
from app.services.email.email_service import get_email_service
from app.services.mentorship.booking_service import BookingService
from app.services.mentorship.mentorship_service import MentorshipService
from app.services.quiz.quiz_service import QuizService
from tests.mocks.fake_email import FakeEmailService
from tests.mocks.fake_supabase import FakeSupabase
from tests.factories import auth_headers_for, iso, make_user, utc_in


@pytest.fixture
def supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def email_service() -> FakeEmailService:
    return FakeEmailService()


@pytest.fixture
def booking_service(supabase, email_service) -> BookingService:
    return BookingService(supabase, BookingNotifier(email_service))


@pytest.fixture
def mentorship_service(supabase) -> MentorshipService:
    return MentorshipService(supabase)


@pytest.fixture
def quiz_service(supabase) -> QuizService:
    return QuizService(supabase)


@pytest.fixture
async def client(supabase, email_service) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the database and email dependencies overridden"""
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_email_service] = lambda: email_service

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def mentee(supabase) -> dict:
    return make_user(supabase, "student")


@pytest.fixture
def mentor(supabase) -> dict:
    return make_user(supabase, "mentor")


@pytest.fixture
def admin(supabase) -> dict:
    return make_user(supabase, "admin")


@pytest.fixture
def mentee_headers(mentee) -> dict:
    return auth_headers_for(mentee)


@pytest.fixture
def mentor_headers(mentor) -> dict:
    return auth_headers_for(mentor)


@pytest.fixture
def admin_headers(admin) -> dict:
    return auth_headers_for(admin)


@pytest.fixture
def seed_booking(supabase):
    """Insert a booking row directly, defaulting to a pending request"""
    def _seed(mentee: dict, **overrides) -> dict:
        now = iso(datetime.now(timezone.utc))
        row = {
            "mentee_id": mentee["user_id"],
            "mentee_name": mentee["full_name"],
            "mentee_email": mentee["email"],
            "mentor_id": None,
            "topic": "Career planning",
            "duration": 45,
            "date": iso(utc_in(days=3)),
            "time": "10:00",
            "notes": None,
            "meeting_link": None,
            "feedback": None,
            "status": "pending",
            "created_at": now,
            "updated_at": now,
        }
        row.update(overrides)
        return supabase.seed("bookings", row)
    return _seed


@pytest.fixture
def seed_mentorship(supabase):
    def _seed(mentor: dict, mentee: dict, **overrides) -> dict:
        now = iso(datetime.now(timezone.utc))
        row = {
            "mentor_id": mentor["user_id"],
            "mentee_id": mentee["user_id"],
            "status": "active",
            "start_date": now,
            "progress": 0,
            "goals": [],
            "meetings": [],
            "feedback": [],
            "created_at": now,
            "updated_at": now,
        }
        row.update(overrides)
        return supabase.seed("mentorships", row)
    return _seed


@pytest.fixture
def seed_meeting(supabase):
    def _seed(mentor: dict, mentee: dict, **overrides) -> dict:
        now = iso(datetime.now(timezone.utc))
        row = {
            "mentor_id": mentor["user_id"],
            "mentee_id": mentee["user_id"],
            "date": iso(utc_in(days=1)),
            "status": "scheduled",
            "notes": "Check-in",
            "duration": 60,
            "meeting_type": "video",
            "meeting_link": None,
            "created_at": now,
            "updated_at": now,
        }
        row.update(overrides)
        return supabase.seed("meetings", row)
    return _seed
