"""User directory tests."""

import pytest

from messagely.errors import ForbiddenError, NotFoundError, UnauthenticatedError


@pytest.mark.asyncio
async def test_list_users_sorted_without_hashes(register, user_service):
    for name in ("carol", "alice", "bob"):
        await register(name)

    users = await user_service.list_users("alice")
    assert [u.username for u in users] == ["alice", "bob", "carol"]
    for u in users:
        assert set(u.model_dump()) == {"username", "first_name", "last_name", "phone"}


@pytest.mark.asyncio
async def test_list_users_requires_login(user_service):
    with pytest.raises(UnauthenticatedError):
        await user_service.list_users(None)


@pytest.mark.asyncio
async def test_get_user_is_self_only(register, user_service):
    await register("alice")
    await register("bob")

    detail = await user_service.get_user("alice", "alice")
    assert detail.username == "alice"
    assert detail.join_at is not None
    assert "password_hash" not in detail.model_dump()

    with pytest.raises(ForbiddenError):
        await user_service.get_user("bob", "alice")


@pytest.mark.asyncio
async def test_get_user_gone(user_service):
    with pytest.raises(NotFoundError):
        await user_service.get_user("ghost", "ghost")


@pytest.mark.asyncio
async def test_inbox_and_outbox(register, user_service, message_service):
    await register("alice")
    await register("bob")
    await message_service.send("alice", "bob", "hi bob")
    await message_service.send("bob", "alice", "hi alice")

    sent = await user_service.messages_from("alice", "alice")
    assert [(m.to_user.username, m.body) for m in sent] == [("bob", "hi bob")]

    received = await user_service.messages_to("alice", "alice")
    assert [(m.from_user.username, m.body) for m in received] == [("bob", "hi alice")]

    with pytest.raises(ForbiddenError):
        await user_service.messages_to("bob", "alice")
