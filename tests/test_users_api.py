"""User directory API tests."""

import pytest

from tests.conftest import profile_for


async def _token(client, username: str) -> dict:
    r = await client.post(
        "/api/v1/auth/register",
        json={"username": username, "password": "s3cret", **profile_for(username)},
    )
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.mark.asyncio
async def test_list_users(client):
    bob = await _token(client, "bob")
    await _token(client, "alice")

    r = await client.get("/api/v1/users", headers=bob)
    assert r.status_code == 200
    users = r.json()["users"]
    assert [u["username"] for u in users] == ["alice", "bob"]
    assert all("password_hash" not in u for u in users)


@pytest.mark.asyncio
async def test_list_users_requires_token(client):
    r = await client.get("/api/v1/users")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_user_detail_self_only(client):
    alice = await _token(client, "alice")
    bob = await _token(client, "bob")

    r = await client.get("/api/v1/users/alice", headers=alice)
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["username"] == "alice"
    assert user["join_at"]
    assert user["last_login_at"]
    assert "password_hash" not in user

    r = await client.get("/api/v1/users/alice", headers=bob)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_inbox_and_outbox(client):
    alice = await _token(client, "alice")
    bob = await _token(client, "bob")
    await client.post(
        "/api/v1/messages", json={"to_username": "bob", "body": "hi"}, headers=alice
    )

    r = await client.get("/api/v1/users/bob/to", headers=bob)
    assert r.status_code == 200
    [received] = r.json()["messages"]
    assert received["from_user"]["username"] == "alice"
    assert received["body"] == "hi"

    r = await client.get("/api/v1/users/alice/from", headers=alice)
    [sent] = r.json()["messages"]
    assert sent["to_user"]["username"] == "bob"

    r = await client.get("/api/v1/users/bob/to", headers=alice)
    assert r.status_code == 403
