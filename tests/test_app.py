import pytest
from httpx import AsyncClient

from app.core.security import create_access_token


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["success"] is True


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.get("/api/mentors/stats", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "Could not validate credentials",
        "error_code": "UNAUTHORIZED",
    }
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_wrong_role_uses_error_body(client: AsyncClient, mentee_headers):
    response = await client.get("/api/mentors/stats", headers=mentee_headers)

    assert response.status_code == 403
    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Access denied. Mentor role required."
    assert data["error_code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(client: AsyncClient):
    response = await client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_token_without_email(client: AsyncClient):
    token = create_access_token({"user_id": "abc", "role": "mentor"})

    response = await client.get("/api/mentors/stats", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_validation_error_shape(client: AsyncClient, mentor_headers):
    response = await client.post("/api/mentors/meetings", headers=mentor_headers, json={"date": "not a date"})

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error_code"] == "VALIDATION_ERROR"
    assert {tuple(d["loc"]) for d in data["details"]} >= {("body", "mentee_id"), ("body", "date")}


def test_settings_parse_mentor_allowlist():
    from app.core.config import Settings

    settings = Settings(
        supabase_url="http://localhost",
        supabase_key="key",
        jwt_secret_key="secret",
        mentor_email_allowlist="Mentor@Example.com, second@example.com",
    )

    assert settings.mentor_email_allowlist == ["mentor@example.com", "second@example.com"]
    assert settings.is_production is False
