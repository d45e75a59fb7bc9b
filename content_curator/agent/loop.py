"""Interactive loop: read a line, parse it, route it to the orchestrator, render the result."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Awaitable, Optional, TypeVar

from openai import OpenAIError
from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML

from content_curator.agent import formatter as fmt
from content_curator.agent.commands import ChatCommand, Command, ContentCommand, parse_command
from content_curator.agent.context import SessionContext
from content_curator.agent.core import ContentOrchestrator
from content_curator.agent.session import make_client
from content_curator.config import Settings
from content_curator.fetchers.search import SearchClient
from content_curator.models import AVAILABLE_MODELS, ContentType, GenerationResult, Platform
from content_curator.utils.clipboard import copy_to_clipboard, strip_markdown

_log = logging.getLogger(__name__)

T = TypeVar("T")


async def _select(prompt_session: PromptSession, title: str, options: list[tuple[T, str]], current: Optional[T] = None) -> T:
    """Numbered menu; Enter keeps the current value when there is one."""
    fmt.console.print(f"\n[bold]{title}[/]")
    for i, (value, label) in enumerate(options, 1):
        marker = " [green](current)[/]" if value == current else ""
        fmt.console.print(f"  [cyan][{i}][/] {label}{marker}")
    while True:
        answer = (await prompt_session.prompt_async(HTML("<ansicyan>Choose</ansicyan>: "))).strip()
        if not answer and current is not None:
            return current
        if answer.isdecimal() and 1 <= int(answer) <= len(options):
            return options[int(answer) - 1][0]
        fmt.print_warning(f"Enter a number between 1 and {len(options)}")


async def ask_platform(prompt_session: PromptSession, current: Optional[Platform] = None) -> Platform:
    options = [(p, fmt.PLATFORM_LABELS[p]) for p in Platform]
    return await _select(prompt_session, "Select target platform", options, current)


async def ask_model(prompt_session: PromptSession, current: Optional[str] = None) -> str:
    options = [(m.id, f"{m.name}{' ⚡' if m.premium else ''}") for m in AVAILABLE_MODELS]
    return await _select(prompt_session, "Select AI model", options, current)


async def ask_topic(prompt_session: PromptSession, current: str = "") -> str:
    while True:
        topic = await prompt_session.prompt_async(HTML("<ansimagenta>🔍 Topic to research</ansimagenta>: "), default=current)
        if topic.strip():
            return topic.strip()
        fmt.print_warning("Topic is required")


class CuratorLoop:
    def __init__(self, orchestrator: ContentOrchestrator, prompt_session: PromptSession, plain_copy: bool = False) -> None:
        self.orchestrator = orchestrator
        self.prompt_session = prompt_session
        self.plain_copy = plain_copy
        self.last_type: Optional[ContentType] = None

    @property
    def last_content(self) -> Optional[str]:
        if self.last_type is None:
            return None
        return self.orchestrator.last_content(self.last_type)

    async def _run_cancellable(self, coro: Awaitable[GenerationResult]) -> GenerationResult:
        """Await one generation; Ctrl-C cancels it without leaving the loop."""
        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(coro)
        interrupted = False

        def _interrupt() -> None:
            nonlocal interrupted
            interrupted = True
            self.orchestrator.cancel()
            task.cancel()

        try:
            loop.add_signal_handler(signal.SIGINT, _interrupt)
            installed = True
        except (NotImplementedError, RuntimeError):
            # No loop signal handlers on Windows or outside the main thread
            installed = False

        try:
            with fmt.console.status("[bold green]Generating content..."):
                return await task
        except asyncio.CancelledError:
            if not interrupted:
                raise
            return GenerationResult.fail("Generation cancelled")
        finally:
            if installed:
                loop.remove_signal_handler(signal.SIGINT)

    def _show(self, result: GenerationResult, content_type: ContentType) -> bool:
        if result.success:
            fmt.print_content(result.content, content_type)
            return True
        fmt.print_error(result.error or "Failed to generate content")
        return False

    async def handle_content(self, content_type: ContentType, regenerate: bool = True) -> None:
        result = await self._run_cancellable(self.orchestrator.generate(content_type, regenerate=regenerate))
        if self._show(result, content_type):
            self.last_type = content_type

    async def handle_chat(self, message: str) -> None:
        """Refine the last result if there is one, otherwise treat the message as a new topic."""
        if not message:
            return
        if self.last_type is not None and self.last_content:
            result = await self._run_cancellable(self.orchestrator.refine(self.last_type, message))
            self._show(result, self.last_type)
            return
        self.orchestrator.set_topic(message)
        await self.handle_content(ContentType.SEARCH)

    async def handle_more(self) -> None:
        if self.last_type is None:
            fmt.print_error("No content generated yet.")
            return
        content_type = self.last_type
        result = await self._run_cancellable(self.orchestrator.more_variations(content_type))
        if not self._show(result, content_type):
            return
        answer = await self.prompt_session.prompt_async("Replace saved content with these variations? [y/N] ")
        if answer.strip().lower() in ("y", "yes"):
            self.orchestrator.accept_variations(content_type, result.content)
            fmt.print_success("Saved variations")

    async def handle_copy(self) -> None:
        content = self.last_content
        if not content:
            fmt.print_error("Nothing to copy yet. Generate some content first.")
            return
        if copy_to_clipboard(strip_markdown(content) if self.plain_copy else content):
            fmt.print_success("Copied to clipboard!")
        else:
            fmt.print_error("Failed to copy to clipboard")

    def refresh_screen(self) -> None:
        fmt.console.clear()
        fmt.print_header()
        fmt.print_session_panel(self.orchestrator.topic, self.orchestrator.platform)

    async def dispatch(self, command: Command) -> bool:
        """Run one command. Returns False when the loop should stop.

        Ctrl-C or Ctrl-D inside a menu or confirmation backs out and keeps the
        current settings.
        """
        try:
            return await self._dispatch(command)
        except (EOFError, KeyboardInterrupt):
            fmt.print_warning("Cancelled, nothing changed")
            return True

    async def _dispatch(self, command: Command) -> bool:
        if isinstance(command, ContentCommand):
            await self.handle_content(command.content_type)
        elif isinstance(command, ChatCommand):
            await self.handle_chat(command.message)
        elif command.kind == "quit":
            fmt.print_goodbye()
            return False
        elif command.kind == "help":
            fmt.print_help()
        elif command.kind == "clear":
            self.refresh_screen()
        elif command.kind == "more":
            await self.handle_more()
        elif command.kind == "copy":
            await self.handle_copy()
        elif command.kind == "last":
            if self.last_content and self.last_type is not None:
                fmt.print_content(self.last_content, self.last_type)
            else:
                fmt.print_error("No content generated yet.")
        elif command.kind == "platform":
            platform = await ask_platform(self.prompt_session, self.orchestrator.platform)
            if platform != self.orchestrator.platform:
                self.orchestrator.set_platform(platform)
                fmt.print_success(f"Switched to {platform.value}")
        elif command.kind == "topic":
            topic = await ask_topic(self.prompt_session, self.orchestrator.topic)
            if topic != self.orchestrator.topic:
                self.orchestrator.set_topic(topic)
                self.last_type = None
                fmt.print_success(f"Topic changed to: {topic}")
        elif command.kind == "model":
            model_id = await ask_model(self.prompt_session, self.orchestrator.model)
            with fmt.console.status(f"Switching to {model_id}..."):
                result = await self.orchestrator.switch_model(model_id)
            if result.success:
                fmt.print_success(result.content)
            else:
                fmt.print_error(result.error)
        return True

    async def run(self) -> None:
        while True:
            fmt.print_inline_status(self.orchestrator.model_info, self.orchestrator.topic, self.orchestrator.platform)
            try:
                line = await self.prompt_session.prompt_async(HTML("<ansimagenta><b>❯</b></ansimagenta> "))
            except (EOFError, KeyboardInterrupt):
                fmt.print_goodbye()
                return
            if not await self.dispatch(parse_command(line)):
                return


async def _run_loop(
    settings: Settings,
    topic: Optional[str] = None,
    platform: Optional[Platform] = None,
    plain_copy: bool = False,
) -> int:
    prompt_session: PromptSession = PromptSession()
    search = SearchClient(settings.tavily_api_key)

    fmt.console.clear()
    fmt.print_header()
    fmt.print_search_status(search.is_configured())

    try:
        topic = topic or await ask_topic(prompt_session)
        platform = platform or await ask_platform(prompt_session)
    except (EOFError, KeyboardInterrupt):
        fmt.print_goodbye()
        return 0

    try:
        client = make_client(settings)
    except OpenAIError as exc:
        fmt.print_error(str(exc))
        return 1

    context = SessionContext(topic=topic, platform=platform)
    orchestrator = ContentOrchestrator(
        context, client, search, model=settings.model, timeout=settings.request_timeout
    )
    try:
        with fmt.console.status("[bold green]Connecting to OpenAI..."):
            try:
                await orchestrator.connect()
            except OpenAIError as exc:
                _log.error("initial connection failed: %s", exc)
                fmt.print_error(f"Failed to connect: {exc}")
                return 1
        fmt.print_success(f"Connected ({orchestrator.model_info.name})")

        target = "multi-platform" if platform is Platform.ALL else platform.value.upper()
        fmt.print_success(f'🎬 Generating {target} reel for: "{topic}"')
        loop = CuratorLoop(orchestrator, prompt_session, plain_copy=plain_copy)
        await loop.handle_content(ContentType.SCRIPT)
        if loop.last_content:
            fmt.print_success("✨ Done! You can refine or generate more content.")

        fmt.print_session_panel(orchestrator.topic, orchestrator.platform)
        fmt.print_help()
        await loop.run()
        return 0
    finally:
        await orchestrator.close()


def run_interactive_loop(
    settings: Settings,
    topic: Optional[str] = None,
    platform: Optional[Platform] = None,
    plain_copy: bool = False,
) -> int:
    """Start the interactive curator; returns the process exit code."""
    return asyncio.run(_run_loop(settings, topic, platform, plain_copy))
