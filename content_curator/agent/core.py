"""Generation orchestrator: cache lookup, search, prompt assembly and the AI round trip.

Flow for one generate() call:
  cache hit (unless regenerate) -> return at once, no network.
  otherwise search (mode chosen by content type, failures degrade to a note),
  build the prompt, stream the reply into one string, clean it, cache it.

Every AI failure comes back as GenerationResult.fail; nothing raises past here
except connect(), whose failure is fatal to the CLI.
"""

from __future__ import annotations

import asyncio
import logging
import re
from contextlib import aclosing

from openai import AsyncOpenAI, OpenAIError

from content_curator.agent.context import SessionContext
from content_curator.agent.prompts import SYSTEM_PROMPT, content_prompt, refinement_prompt, variations_prompt
from content_curator.agent.session import ChatSession, SessionClosed, create_session
from content_curator.fetchers.search import SearchClient, SearchError, SearchUnavailable, format_results_for_llm
from content_curator.models import DEFAULT_MODEL, ContentType, GenerationResult, ModelInfo, Platform, find_model

_log = logging.getLogger(__name__)

NO_SEARCH_NOTE = "Note: Using general knowledge. For better results, set TAVILY_API_KEY in your .env file."

_HEADING = re.compile(r"^(?:#{2,6}|#[ \t])", re.MULTILINE)
_BLANK_RUN = re.compile(r"\n(?:[ \t]*\n){2,}")


def clean_content(text: str) -> str:
    """Drop any preamble before the first heading, squeeze blank-line runs, trim."""
    match = _HEADING.search(text)
    if match:
        text = text[match.start():]
    text = _BLANK_RUN.sub("\n\n", text)
    return text.strip()


class GenerationCancelled(Exception):
    pass


class CancelToken:
    """Set from outside (e.g. a SIGINT handler); checked between streamed chunks."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ContentOrchestrator:
    def __init__(
        self,
        context: SessionContext,
        client: AsyncOpenAI,
        search: SearchClient,
        model: str = DEFAULT_MODEL,
        timeout: float = 120.0,
    ) -> None:
        self.context = context
        self._client = client
        self._search = search
        self._model = model
        self._timeout = timeout
        self._session: ChatSession | None = None
        self._cancel = CancelToken()

    # ── Accessors ────────────────────────────────────────────────────────────

    @property
    def topic(self) -> str:
        return self.context.topic

    @property
    def platform(self) -> Platform:
        return self.context.platform

    @property
    def model(self) -> str:
        return self._model

    @property
    def model_info(self) -> ModelInfo:
        return find_model(self._model) or ModelInfo(id=self._model, name=self._model)

    @property
    def search_configured(self) -> bool:
        return self._search.is_configured()

    def last_content(self, content_type: ContentType) -> str | None:
        return self.context.cache.get(content_type)

    def all_content(self) -> dict[ContentType, str]:
        return dict(self.context.cache.items())

    # ── State setters ────────────────────────────────────────────────────────

    def set_topic(self, topic: str) -> None:
        topic = topic.strip()
        if not topic:
            raise ValueError("topic must not be empty")
        if topic == self.context.topic:
            return
        self.context.topic = topic
        self.context.cache.clear()
        self.context.search_results = []
        _log.debug("topic set to %r; cache cleared", topic)

    def set_platform(self, platform: Platform) -> None:
        self.context.platform = platform

    # ── Session lifecycle ────────────────────────────────────────────────────

    async def connect(self) -> None:
        self._session = await create_session(self._client, self._model, SYSTEM_PROMPT)

    async def switch_model(self, model_id: str) -> GenerationResult:
        """Replace the session with one for model_id; on failure the old session stays."""
        if model_id == self._model and self._session is not None:
            return GenerationResult.ok(f"Already using {self.model_info.name}")
        try:
            new_session = await create_session(self._client, model_id, SYSTEM_PROMPT)
        except OpenAIError as exc:
            _log.error("model switch to %s failed: %s", model_id, exc)
            return GenerationResult.fail(f"Failed to switch to {model_id}: {exc}")

        old, self._session, self._model = self._session, new_session, model_id
        if old is not None:
            await old.destroy()
        _log.info("switched model to %s", model_id)
        return GenerationResult.ok(f"Switched to {self.model_info.name}")

    def cancel(self) -> None:
        self._cancel.cancel()

    async def close(self) -> None:
        if self._session is not None:
            await self._session.destroy()
            self._session = None
        try:
            await self._client.close()
        except Exception as exc:
            _log.debug("error closing OpenAI client: %s", exc)

    # ── Generation ───────────────────────────────────────────────────────────

    async def generate(self, content_type: ContentType, regenerate: bool = False) -> GenerationResult:
        cached = self.context.cache.get(content_type)
        if cached is not None and not regenerate:
            _log.debug("cache hit for %s", content_type.value)
            return GenerationResult.ok(cached)

        search_context = await self._search_context(content_type)
        prompt = content_prompt(content_type, self.context.topic, self.context.platform, search_context)
        result = await self._send(prompt)
        if result.success:
            self.context.cache.put(content_type, result.content)
        return result

    async def refine(self, content_type: ContentType, feedback: str) -> GenerationResult:
        existing = self.context.cache.get(content_type)
        if existing is None:
            return GenerationResult.fail("Nothing to refine. Generate content first.")

        result = await self._send(refinement_prompt(existing, feedback))
        if result.success:
            self.context.cache.put(content_type, result.content)
        return result

    async def more_variations(self, content_type: ContentType) -> GenerationResult:
        """Ask for extra variations; the cache is left alone (see accept_variations)."""
        existing = self.context.cache.get(content_type)
        if existing is None:
            return GenerationResult.fail("No existing content. Generate content first.")
        return await self._send(variations_prompt(content_type, existing, self.context.topic))

    def accept_variations(self, content_type: ContentType, text: str) -> None:
        self.context.cache.put(content_type, text)

    # ── Internals ────────────────────────────────────────────────────────────

    async def _search_context(self, content_type: ContentType) -> str:
        topic = self.context.topic
        try:
            if content_type is ContentType.TRENDING:
                results = await self._search.search_trending(topic)
            elif content_type is ContentType.IDEAS:
                results = await self._search.search_content_ideas(topic)
            else:
                results = await self._search.search(topic, result_count=5)
        except SearchUnavailable:
            return NO_SEARCH_NOTE
        except SearchError as exc:
            _log.warning("search degraded for %r: %s", topic, exc)
            return f'Using general knowledge about "{topic}".'

        self.context.search_results = results
        return format_results_for_llm(results)

    async def _collect(self, session: ChatSession, prompt: str) -> str:
        parts: list[str] = []
        async with aclosing(session.send(prompt, cancelled=lambda: self._cancel.cancelled)) as stream:
            async for delta in stream:
                if self._cancel.cancelled:
                    raise GenerationCancelled()
                parts.append(delta)
        if self._cancel.cancelled:
            raise GenerationCancelled()
        return "".join(parts)

    async def _send(self, prompt: str) -> GenerationResult:
        if self._session is None:
            return GenerationResult.fail("Session not connected")

        self._cancel.reset()
        try:
            text = await asyncio.wait_for(self._collect(self._session, prompt), timeout=self._timeout)
        except asyncio.TimeoutError:
            _log.error("request timed out after %ss", self._timeout)
            return GenerationResult.fail(f"Request timed out after {self._timeout:g}s")
        except GenerationCancelled:
            return GenerationResult.fail("Generation cancelled")
        except (OpenAIError, SessionClosed) as exc:
            _log.error("generation failed: %s", exc)
            return GenerationResult.fail(str(exc) or "Generation failed")

        content = clean_content(text)
        if not content:
            return GenerationResult.fail("Model returned an empty response.")
        return GenerationResult.ok(content)
