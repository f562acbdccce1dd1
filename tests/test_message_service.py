"""Messaging tests, run through the guard."""

import pytest

from messagely.errors import (
    ForbiddenError,
    MissingFieldError,
    NotFoundError,
    UnauthenticatedError,
)


async def _alice_and_bob(register):
    await register("alice")
    await register("bob")
    await register("carol")


@pytest.mark.asyncio
async def test_send_and_read_scenario(register, message_service):
    """alice → bob "hi"; bob reads it and marks it read twice."""
    await _alice_and_bob(register)

    sent = await message_service.send("alice", "bob", "hi")
    assert sent.from_username == "alice"
    assert sent.to_username == "bob"
    assert sent.sent_at is not None

    message = await message_service.get("bob", sent.id)
    assert message.read_at is None

    detail = await message_service.get_detail("bob", sent.id)
    assert detail.body == "hi"
    assert detail.from_user.username == "alice"
    assert detail.to_user.first_name == "Bob"

    first = await message_service.mark_read("bob", sent.id)
    assert first.read_at is not None

    # Second mark is a no-op that keeps the original timestamp
    second = await message_service.mark_read("bob", sent.id)
    assert second.read_at == first.read_at


@pytest.mark.asyncio
async def test_sender_can_view_but_not_mark_read(register, message_service):
    await _alice_and_bob(register)
    sent = await message_service.send("alice", "bob", "hi")

    assert (await message_service.get_detail("alice", sent.id)).id == sent.id
    with pytest.raises(ForbiddenError):
        await message_service.mark_read("alice", sent.id)
    assert (await message_service.get("bob", sent.id)).read_at is None


@pytest.mark.asyncio
async def test_stranger_is_forbidden(register, message_service):
    await _alice_and_bob(register)
    sent = await message_service.send("alice", "bob", "hi")

    with pytest.raises(ForbiddenError):
        await message_service.get_detail("carol", sent.id)
    with pytest.raises(ForbiddenError):
        await message_service.mark_read("carol", sent.id)


@pytest.mark.asyncio
async def test_unauthenticated_send_creates_nothing(register, message_service, messages):
    await _alice_and_bob(register)
    with pytest.raises(UnauthenticatedError):
        await message_service.send(None, "bob", "hi")
    assert len(messages) == 0


@pytest.mark.asyncio
async def test_send_from_unknown_sender(register, message_service, messages):
    """A validly signed token for a user that does not exist."""
    await register("bob")
    with pytest.raises(UnauthenticatedError):
        await message_service.send("ghost", "bob", "hi")
    assert len(messages) == 0


@pytest.mark.asyncio
async def test_send_to_unknown_recipient(register, message_service, messages):
    await register("alice")
    with pytest.raises(NotFoundError):
        await message_service.send("alice", "nobody", "hi")
    assert len(messages) == 0


@pytest.mark.asyncio
async def test_send_requires_recipient_and_body(register, message_service):
    await register("alice")
    with pytest.raises(MissingFieldError) as exc_info:
        await message_service.send("alice", "", None)
    assert exc_info.value.fields == ["to_username", "body"]


@pytest.mark.asyncio
async def test_missing_message(register, message_service):
    await register("alice")
    with pytest.raises(NotFoundError):
        await message_service.get_detail("alice", 42)
    with pytest.raises(NotFoundError):
        await message_service.mark_read("alice", 42)
