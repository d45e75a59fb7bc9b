"""Streaming chat session over the OpenAI chat completions API.

A session pins one model and system prompt and keeps the history of completed
turns, so follow-up prompts (refinements, variations) see earlier output.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Callable, Optional

from openai import AsyncOpenAI

from content_curator.config import Settings
from content_curator.utils.retry import llm_call_with_retry

_log = logging.getLogger(__name__)

# Completed user/assistant pairs kept in the prompt context
MAX_HISTORY_TURNS = 10


class SessionClosed(RuntimeError):
    pass


def make_client(settings: Settings) -> AsyncOpenAI:
    kwargs: dict[str, Any] = {"api_key": settings.openai_api_key}
    if settings.openai_base_url:
        kwargs["base_url"] = settings.openai_base_url
    return AsyncOpenAI(**kwargs)


class ChatSession:
    def __init__(self, client: AsyncOpenAI, model: str, system_prompt: str) -> None:
        self._client = client
        self.model = model
        self._system = {"role": "system", "content": system_prompt}
        self._history: list[dict[str, str]] = []
        self.closed = False

    async def send(self, prompt: str, cancelled: Optional[Callable[[], bool]] = None) -> AsyncIterator[str]:
        """Stream the reply to prompt as text deltas.

        The turn is added to history only once the stream completes and
        cancelled() (when given) is still false; a consumer that stops early
        leaves history untouched.
        """
        if self.closed:
            raise SessionClosed(f"session for {self.model} is closed")

        user_msg = {"role": "user", "content": prompt}
        stream = await llm_call_with_retry(
            self._client.chat.completions.create,
            model=self.model,
            messages=[self._system, *self._history, user_msg],
            stream=True,
        )
        parts: list[str] = []
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    parts.append(delta)
                    yield delta
        finally:
            await stream.close()

        if cancelled is not None and cancelled():
            _log.debug("turn cancelled after last chunk; not kept in history")
            return
        self._history += [user_msg, {"role": "assistant", "content": "".join(parts)}]
        self._history = self._history[-2 * MAX_HISTORY_TURNS:]

    async def destroy(self) -> None:
        self.closed = True
        self._history.clear()
        _log.debug("destroyed session for %s", self.model)


async def create_session(client: AsyncOpenAI, model: str, system_prompt: str) -> ChatSession:
    """Open a session after checking the model exists for this API key."""
    await llm_call_with_retry(client.models.retrieve, model)
    _log.info("created chat session for %s", model)
    return ChatSession(client, model, system_prompt)
