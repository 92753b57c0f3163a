import pytest
from httpx import AsyncClient

from tests.factories import auth_headers_for, iso, make_user, utc_in


@pytest.mark.asyncio
async def test_available_mentors_is_public(client: AsyncClient, supabase, mentor, mentee):
    response = await client.get("/api/mentors/available")

    assert response.status_code == 200
    data = response.json()
    assert [m["user_id"] for m in data] == [mentor["user_id"]]


@pytest.mark.asyncio
async def test_get_mentees(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_mentorship, seed_meeting):
    """Test mentee list shows the latest meeting, or a placeholder when there is none"""
    quiet_mentee = make_user(supabase, "student")
    older = seed_meeting(mentor, mentee, date=iso(utc_in(days=-7)))
    latest = seed_meeting(mentor, mentee, date=iso(utc_in(days=-1)))
    seed_mentorship(mentor, mentee, progress=40, meetings=[older["id"], latest["id"]])
    seed_mentorship(mentor, quiet_mentee)

    response = await client.get("/api/mentors/mentees", headers=mentor_headers)

    assert response.status_code == 200
    by_id = {m["id"]: m for m in response.json()}
    assert by_id[mentee["user_id"]]["name"] == mentee["full_name"]
    assert by_id[mentee["user_id"]]["progress"] == 40
    assert by_id[mentee["user_id"]]["last_meeting"] == latest["date"]
    assert by_id[quiet_mentee["user_id"]]["last_meeting"] == "No meetings yet"


@pytest.mark.asyncio
async def test_mentees_of_other_mentors_are_hidden(client: AsyncClient, supabase, mentor_headers, mentee, seed_mentorship):
    other_mentor = make_user(supabase, "mentor")
    seed_mentorship(other_mentor, mentee)

    response = await client.get("/api/mentors/mentees", headers=mentor_headers)

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_get_mentee_details(client: AsyncClient, mentor, mentor_headers, mentee, seed_mentorship, seed_meeting):
    second = seed_meeting(mentor, mentee, date=iso(utc_in(days=2)))
    first = seed_meeting(mentor, mentee, date=iso(utc_in(days=-2)), status="completed")
    seed_mentorship(mentor, mentee, meetings=[first["id"], second["id"]])

    response = await client.get(f"/api/mentors/mentees/{mentee['user_id']}", headers=mentor_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["mentee"]["email"] == mentee["email"]
    assert [m["id"] for m in data["meeting_details"]] == [first["id"], second["id"]]


@pytest.mark.asyncio
async def test_get_mentee_details_not_found(client: AsyncClient, mentor_headers, mentee):
    response = await client.get(f"/api/mentors/mentees/{mentee['user_id']}", headers=mentor_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Mentee not found"


@pytest.mark.asyncio
async def test_upcoming_meetings(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_meeting):
    """Test only future meetings of this mentor are listed, soonest first"""
    other_mentor = make_user(supabase, "mentor")
    later = seed_meeting(mentor, mentee, date=iso(utc_in(days=5)))
    sooner = seed_meeting(mentor, mentee, date=iso(utc_in(hours=2)))
    seed_meeting(mentor, mentee, date=iso(utc_in(days=-1)))
    seed_meeting(other_mentor, mentee, date=iso(utc_in(days=1)))

    response = await client.get("/api/mentors/meetings", headers=mentor_headers)

    assert response.status_code == 200
    data = response.json()
    assert [m["id"] for m in data] == [sooner["id"], later["id"]]
    assert data[0]["mentee_name"] == mentee["full_name"]


@pytest.mark.asyncio
async def test_schedule_meeting(client: AsyncClient, supabase, mentor_headers, mentor, mentee, seed_mentorship):
    mentorship = seed_mentorship(mentor, mentee)

    response = await client.post("/api/mentors/meetings", headers=mentor_headers, json={
        "mentee_id": mentee["user_id"],
        "date": iso(utc_in(days=4)),
        "notes": "Resume review",
        "meeting_type": "audio",
    })

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "scheduled"
    assert data["duration"] == 60
    assert data["meeting_type"] == "audio"
    stored = next(m for m in supabase.rows("mentorships") if m["id"] == mentorship["id"])
    assert stored["meetings"] == [data["id"]]


@pytest.mark.asyncio
async def test_schedule_meeting_without_mentorship(client: AsyncClient, supabase, mentor_headers, mentee):
    response = await client.post("/api/mentors/meetings", headers=mentor_headers, json={
        "mentee_id": mentee["user_id"],
        "date": iso(utc_in(days=4)),
    })

    assert response.status_code == 404
    assert response.json()["message"] == "Mentorship not found"
    assert supabase.rows("meetings") == []


@pytest.mark.asyncio
async def test_meeting_of_another_mentor_is_not_found(client: AsyncClient, supabase, mentor_headers, mentee, seed_meeting):
    other_mentor = make_user(supabase, "mentor")
    meeting = seed_meeting(other_mentor, mentee)

    response = await client.get(f"/api/mentors/meetings/{meeting['id']}", headers=mentor_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Meeting not found"


@pytest.mark.asyncio
async def test_get_meeting(client: AsyncClient, mentor, mentor_headers, mentee, seed_meeting):
    meeting = seed_meeting(mentor, mentee)

    response = await client.get(f"/api/mentors/meetings/{meeting['id']}", headers=mentor_headers)

    assert response.status_code == 200
    assert response.json()["mentee_email"] == mentee["email"]


@pytest.mark.asyncio
async def test_complete_then_cancel_meeting(client: AsyncClient, mentor, mentor_headers, mentee, seed_meeting):
    meeting = seed_meeting(mentor, mentee)

    completed = await client.put(
        f"/api/mentors/meetings/{meeting['id']}",
        headers=mentor_headers,
        json={"status": "completed", "notes": "Went well"},
    )
    cancelled = await client.delete(f"/api/mentors/meetings/{meeting['id']}", headers=mentor_headers)

    assert completed.status_code == 200
    assert completed.json()["status"] == "completed"
    assert completed.json()["notes"] == "Went well"
    assert cancelled.status_code == 400


@pytest.mark.asyncio
async def test_update_meeting_clears_notes_and_link(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_meeting):
    meeting = seed_meeting(mentor, mentee, notes="Bring CV", meeting_link="https://meet.example.com/x")

    response = await client.put(
        f"/api/mentors/meetings/{meeting['id']}",
        headers=mentor_headers,
        json={"notes": "", "meeting_link": ""},
    )

    assert response.status_code == 200
    assert response.json()["notes"] is None
    assert response.json()["meeting_link"] is None
    stored = supabase.rows("meetings")[0]
    assert stored["notes"] is None
    assert stored["meeting_link"] is None
    assert stored["status"] == "scheduled"


@pytest.mark.asyncio
async def test_update_meeting_keeps_fields_not_sent(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_meeting):
    meeting = seed_meeting(mentor, mentee, notes="Bring CV", meeting_link="https://meet.example.com/x")

    response = await client.put(
        f"/api/mentors/meetings/{meeting['id']}",
        headers=mentor_headers,
        json={"notes": "Bring CV and portfolio"},
    )

    assert response.status_code == 200
    assert response.json()["meeting_link"] == "https://meet.example.com/x"
    assert response.json()["mentee_name"] == mentee["full_name"]
    assert supabase.rows("meetings")[0]["notes"] == "Bring CV and portfolio"


@pytest.mark.asyncio
async def test_update_meeting_without_changes_includes_mentee(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_meeting):
    meeting = seed_meeting(mentor, mentee)

    response = await client.put(
        f"/api/mentors/meetings/{meeting['id']}",
        headers=mentor_headers,
        json={"status": "scheduled", "notes": meeting["notes"]},
    )

    assert response.status_code == 200
    assert response.json()["mentee_name"] == mentee["full_name"]
    assert response.json()["mentee_email"] == mentee["email"]
    assert supabase.rows("meetings")[0]["updated_at"] == meeting["updated_at"]


@pytest.mark.asyncio
async def test_cancel_meeting(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_meeting):
    meeting = seed_meeting(mentor, mentee)

    response = await client.delete(f"/api/mentors/meetings/{meeting['id']}", headers=mentor_headers)

    assert response.status_code == 200
    assert response.json()["message"] == "Meeting cancelled successfully"
    assert supabase.rows("meetings")[0]["status"] == "cancelled"


@pytest.mark.asyncio
async def test_mentor_stats(client: AsyncClient, supabase, mentor, mentor_headers, mentee, seed_mentorship, seed_meeting):
    seed_mentorship(mentor, mentee)
    seed_mentorship(mentor, make_user(supabase, "student"), status="cancelled")
    seed_meeting(mentor, mentee, status="completed")
    seed_meeting(mentor, mentee, status="completed")
    seed_meeting(mentor, mentee)

    response = await client.get("/api/mentors/stats", headers=mentor_headers)

    assert response.status_code == 200
    assert response.json() == {
        "total_mentees": 2,
        "active_mentees": 1,
        "completed_meetings": 2,
        "pending_meetings": 1,
    }


@pytest.mark.asyncio
async def test_goals_progress_and_feedback(client: AsyncClient, mentor, mentor_headers, mentee, seed_mentorship):
    mentorship = seed_mentorship(mentor, mentee)
    base = f"/api/mentors/mentorships/{mentorship['id']}"

    goal = await client.post(f"{base}/goals", headers=mentor_headers, json={"description": "Ship a portfolio site"})
    progress = await client.put(f"{base}/progress", headers=mentor_headers, json={"progress": 55})
    feedback = await client.post(f"{base}/feedback", headers=mentor_headers, json={"rating": 5, "comment": "Great focus"})

    assert goal.status_code == 201
    assert goal.json()["goals"][0]["description"] == "Ship a portfolio site"
    assert progress.status_code == 200
    assert progress.json()["progress"] == 55
    assert feedback.status_code == 201
    assert feedback.json()["feedback"][0]["rating"] == 5
    assert feedback.json()["feedback"][0]["date"] is not None


@pytest.mark.asyncio
async def test_progress_out_of_range(client: AsyncClient, mentor, mentor_headers, mentee, seed_mentorship):
    mentorship = seed_mentorship(mentor, mentee)

    response = await client.put(
        f"/api/mentors/mentorships/{mentorship['id']}/progress", headers=mentor_headers, json={"progress": 101}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_mentorship_of_another_mentor(client: AsyncClient, supabase, mentee, seed_mentorship):
    owner = make_user(supabase, "mentor")
    intruder = make_user(supabase, "mentor")
    mentorship = seed_mentorship(owner, mentee)

    response = await client.put(
        f"/api/mentors/mentorships/{mentorship['id']}/progress",
        headers=auth_headers_for(intruder),
        json={"progress": 10},
    )

    assert response.status_code == 404
