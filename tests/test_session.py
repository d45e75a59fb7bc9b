"""Tests for the streaming ChatSession over AsyncOpenAI."""
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from content_curator.agent.session import ChatSession, SessionClosed, create_session, make_client
from content_curator.config import Settings

pytestmark = pytest.mark.asyncio


class FakeStream:
    def __init__(self, deltas):
        self._chunks = [
            SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=d))]) for d in deltas
        ] + [SimpleNamespace(choices=[])]  # trailing usage chunk
        self.closed = False

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for chunk in self._chunks:
            yield chunk

    async def close(self):
        self.closed = True


def _client(*streams):
    client = MagicMock()
    client.chat.completions.create = AsyncMock(side_effect=list(streams))
    client.models.retrieve = AsyncMock()
    return client


async def _collect(session, prompt):
    return [d async for d in session.send(prompt)]


async def test_send_yields_deltas_and_closes_stream():
    stream = FakeStream(["## He", "llo", None, "!"])
    session = ChatSession(_client(stream), "gpt-4o", "system")

    assert await _collect(session, "hi") == ["## He", "llo", "!"]
    assert stream.closed


async def test_history_carries_completed_turns():
    client = _client(FakeStream(["first"]), FakeStream(["second"]))
    session = ChatSession(client, "gpt-4o", "be brief")

    await _collect(session, "one")
    await _collect(session, "two")

    messages = client.chat.completions.create.await_args_list[1].kwargs["messages"]
    assert messages == [
        {"role": "system", "content": "be brief"},
        {"role": "user", "content": "one"},
        {"role": "assistant", "content": "first"},
        {"role": "user", "content": "two"},
    ]
    assert client.chat.completions.create.await_args.kwargs["stream"] is True


async def test_abandoned_stream_is_not_added_to_history():
    client = _client(FakeStream(["a", "b"]), FakeStream(["c"]))
    session = ChatSession(client, "gpt-4o", "sys")

    gen = session.send("one")
    await gen.__anext__()
    await gen.aclose()
    await _collect(session, "two")

    messages = client.chat.completions.create.await_args.kwargs["messages"]
    assert [m["content"] for m in messages] == ["sys", "two"]


async def test_destroyed_session_refuses_to_send():
    session = ChatSession(_client(), "gpt-4o", "sys")
    await session.destroy()
    with pytest.raises(SessionClosed):
        await _collect(session, "hi")


async def test_create_session_checks_model():
    client = _client()
    session = await create_session(client, "gpt-4.1", "sys")
    client.models.retrieve.assert_awaited_once_with("gpt-4.1")
    assert session.model == "gpt-4.1"
    assert not session.closed


async def test_make_client_uses_settings():
    client = make_client(Settings(openai_api_key="sk-test", openai_base_url="http://localhost:9999/v1"))
    assert client.api_key == "sk-test"
    assert str(client.base_url).startswith("http://localhost:9999/v1")


async def test_turn_cancelled_at_stream_end_is_not_added_to_history():
    client = _client(FakeStream(["done"]), FakeStream(["next"]))
    session = ChatSession(client, "gpt-4o", "sys")

    assert [d async for d in session.send("one", cancelled=lambda: True)] == ["done"]
    await _collect(session, "two")

    messages = client.chat.completions.create.await_args.kwargs["messages"]
    assert [m["content"] for m in messages] == ["sys", "two"]
