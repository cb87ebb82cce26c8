import pytest
from httpx import AsyncClient

from src.domain.entities import UserRole

NEW_USER = {
    "email": "jane.doe@acmepharma.com",
    "password": "SecurePass123!",
    "first_name": "Jane",
    "last_name": "Doe",
    "role": "OPERATOR",
    "reason": "New operator for line A",
}


@pytest.mark.asyncio
async def test_admin_creates_user_without_exposing_password(client: AsyncClient, auth_headers):
    response = await client.post("/api/users", json=NEW_USER, headers=auth_headers(UserRole.ADMIN))

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "jane.doe@acmepharma.com"
    assert "password" not in data
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_duplicate_email_is_conflict(client: AsyncClient, auth_headers):
    headers = auth_headers(UserRole.ADMIN)
    await client.post("/api/users", json=NEW_USER, headers=headers)

    response = await client.post("/api/users", json=NEW_USER, headers=headers)

    assert response.status_code == 409
    assert response.json()["error"]["message"] == "User with this email already exists"


@pytest.mark.asyncio
async def test_short_password_is_validation_error(client: AsyncClient, auth_headers):
    payload = dict(NEW_USER, password="short")

    response = await client.post("/api/users", json=payload, headers=auth_headers(UserRole.ADMIN))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_manager_cannot_change_role(client: AsyncClient, auth_headers):
    created = await client.post("/api/users", json=NEW_USER, headers=auth_headers(UserRole.ADMIN))
    user_id = created.json()["id"]

    response = await client.patch(
        f"/api/users/{user_id}",
        json={"role": "ADMIN", "reason": "Promotion"},
        headers=auth_headers(UserRole.MANAGER),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_manager_resubmitting_profile_with_same_role(client: AsyncClient, auth_headers):
    created = await client.post("/api/users", json=NEW_USER, headers=auth_headers(UserRole.ADMIN))
    user_id = created.json()["id"]

    response = await client.patch(
        f"/api/users/{user_id}",
        json={"first_name": "Janet", "last_name": None, "role": "OPERATOR", "reason": "Typo fix"},
        headers=auth_headers(UserRole.MANAGER),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["first_name"] == "Janet"
    assert data["last_name"] is None
    assert data["role"] == "OPERATOR"


@pytest.mark.asyncio
async def test_deactivation_anonymizes_user(client: AsyncClient, auth_headers):
    headers = auth_headers(UserRole.ADMIN)
    user_id = (await client.post("/api/users", json=NEW_USER, headers=headers)).json()["id"]

    response = await client.post(
        f"/api/users/{user_id}/deactivate", json={"reason": "Left the company"}, headers=headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["is_active"] is False
    assert data["email"] == f"anonymized_{user_id[:8]}@deleted.local"
    assert data["first_name"] == f"DELETED_USER_{user_id[:8]}"
    assert data["last_name"] == "ANONYMIZED"

    # The original email can be registered again
    again = await client.post("/api/users", json=NEW_USER, headers=headers)
    assert again.status_code == 201


@pytest.mark.asyncio
async def test_user_changes_own_password(client: AsyncClient, auth_headers):
    created = await client.post("/api/users", json=NEW_USER, headers=auth_headers(UserRole.ADMIN))
    user_id = created.json()["id"]

    response = await client.post(
        f"/api/users/{user_id}/password",
        json={"new_password": "AnotherPass456!", "reason": "Periodic rotation"},
        headers=auth_headers(UserRole.OPERATOR, user_id=user_id),
    )

    assert response.status_code == 200
    assert response.json()["version"] == 2
