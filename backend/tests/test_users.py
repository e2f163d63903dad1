"""Registration, login and the current-user profile."""

import pytest
from sqlalchemy import func, select

from impacts.auth import decode_token
from impacts.models import User
from tests.conftest import TEST_PASSWORD, bearer

REGISTRATION = {
    "email": "new.pecc@countygeneral.org",
    "password": "hunter22",
    "firstName": "Jordan",
    "lastName": "Lee",
    "hospitalName": "Valley Medical",
}


@pytest.mark.asyncio
async def test_register_returns_token_and_user(client):
    r = await client.post("/api/users/register", json=REGISTRATION)
    assert r.status_code == 201
    data = r.json()
    assert data["user"]["email"] == "new.pecc@countygeneral.org"
    assert data["user"]["first_name"] == "Jordan"
    assert data["user"]["hospital_name"] == "Valley Medical"
    assert data["user"]["role"] == "normal"
    assert "password_hash" not in data["user"]

    principal = decode_token(data["token"])
    assert principal.id == data["user"]["id"]
    assert principal.role == "normal"


@pytest.mark.asyncio
async def test_register_hashes_password(client, session_factory):
    await client.post("/api/users/register", json=REGISTRATION)
    async with session_factory() as session:
        stored = await session.scalar(select(User.password_hash).where(User.email == REGISTRATION["email"]))
    assert stored and stored != REGISTRATION["password"]


@pytest.mark.asyncio
async def test_register_duplicate_email_rejected(client, session_factory):
    first = await client.post("/api/users/register", json=REGISTRATION)
    assert first.status_code == 201

    again = await client.post("/api/users/register", json={**REGISTRATION, "firstName": "Other"})
    assert again.status_code == 400
    assert again.json() == {"error": "User already exists"}

    async with session_factory() as session:
        count = await session.scalar(select(func.count(User.id)))
    assert count == 1


@pytest.mark.asyncio
async def test_register_validates_fields(client):
    r = await client.post(
        "/api/users/register",
        json={"email": "not-an-email", "password": "12345", "firstName": "", "lastName": "Lee"},
    )
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert {"email", "password", "firstName"} <= fields


@pytest.mark.asyncio
async def test_login_succeeds_with_correct_password(client, user):
    r = await client.post("/api/users/login", json={"email": user.email, "password": TEST_PASSWORD})
    assert r.status_code == 200
    data = r.json()
    assert data["user"]["id"] == user.id
    assert decode_token(data["token"]).id == user.id


@pytest.mark.asyncio
async def test_login_failures_share_one_message(client, user):
    wrong_password = await client.post("/api/users/login", json={"email": user.email, "password": "nope-nope"})
    unknown_email = await client.post("/api/users/login", json={"email": "ghost@countygeneral.org", "password": "nope-nope"})

    assert wrong_password.status_code == unknown_email.status_code == 400
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


@pytest.mark.asyncio
async def test_me_returns_profile(client, user):
    r = await client.get("/api/users/me", headers=bearer(user))
    assert r.status_code == 200
    assert r.json() == {
        "id": user.id,
        "email": "coordinator@countygeneral.org",
        "first_name": "Casey",
        "last_name": "Morgan",
        "hospital_name": "County General",
        "role": "normal",
    }


@pytest.mark.asyncio
async def test_me_requires_token(client):
    r = await client.get("/api/users/me")
    assert r.status_code == 401
    assert r.json() == {"error": "No token, authorization denied"}


@pytest.mark.asyncio
async def test_me_rejects_bad_token(client):
    r = await client.get("/api/users/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert r.status_code == 401
    assert r.json() == {"error": "Token is not valid"}


@pytest.mark.asyncio
async def test_me_for_deleted_user_is_not_found(client, user, session_factory):
    headers = bearer(user)
    async with session_factory() as session:
        await session.delete(await session.get(User, user.id))
        await session.commit()

    r = await client.get("/api/users/me", headers=headers)
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}
