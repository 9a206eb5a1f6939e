"""Tests for auth endpoints."""
import pytest
from httpx import AsyncClient

CREDENTIALS = {"email": "fan@example.com", "password": "secret123"}


@pytest.mark.asyncio
async def test_sign_up_sign_in_and_me(client: AsyncClient):
    response = await client.post("/api/auth/sign-up", json=CREDENTIALS)
    assert response.status_code == 201
    user_id = response.json()["userId"]

    response = await client.post("/api/auth/sign-in", json=CREDENTIALS)
    assert response.status_code == 200
    token = response.json()
    assert token["token_type"] == "bearer"

    response = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {token['access_token']}"}
    )
    assert response.status_code == 200
    assert response.json() == {"id": user_id, "email": "fan@example.com"}


@pytest.mark.asyncio
async def test_duplicate_sign_up_is_friendly(client: AsyncClient):
    await client.post("/api/auth/sign-up", json=CREDENTIALS)
    response = await client.post("/api/auth/sign-up", json=CREDENTIALS)
    assert response.status_code == 400
    assert response.json()["error"] == "This record already exists."


@pytest.mark.asyncio
async def test_bad_credentials(client: AsyncClient):
    response = await client.post("/api/auth/sign-in", json=CREDENTIALS)
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_token_form_login(client: AsyncClient):
    await client.post("/api/auth/sign-up", json=CREDENTIALS)
    response = await client.post(
        "/api/auth/token",
        data={"username": CREDENTIALS["email"], "password": CREDENTIALS["password"]},
    )
    assert response.status_code == 200
    assert response.json()["access_token"]


@pytest.mark.asyncio
async def test_sign_out_ends_session(client: AsyncClient, auth_headers):
    assert (await client.get("/api/auth/me", headers=auth_headers)).status_code == 200

    response = await client.post("/api/auth/sign-out", headers=auth_headers)
    assert response.status_code == 200

    assert (await client.get("/api/auth/me", headers=auth_headers)).status_code == 401


@pytest.mark.asyncio
async def test_me_requires_login(client: AsyncClient):
    assert (await client.get("/api/auth/me")).status_code == 401
    assert (await client.post("/api/auth/sign-out")).status_code == 401


@pytest.mark.asyncio
async def test_reset_password_never_reveals_accounts(client: AsyncClient):
    response = await client.post("/api/auth/reset-password", json={"email": "nobody@example.com"})
    assert response.status_code == 202
    assert response.json() == {"success": True}


@pytest.mark.asyncio
async def test_update_password(client: AsyncClient, auth_headers):
    response = await client.post(
        "/api/auth/update-password", json={"password": "brand-new"}, headers=auth_headers
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/auth/sign-in", json={"email": "owner@example.com", "password": "brand-new"}
    )
    assert response.status_code == 200

    # The session that changed the password has ended
    assert (await client.get("/api/auth/me", headers=auth_headers)).status_code == 401

    response = await client.post("/api/auth/update-password", json={"password": "brand-new"})
    assert response.status_code == 401
