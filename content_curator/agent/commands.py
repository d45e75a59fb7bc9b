"""Slash-command parsing for the interactive loop. Pure: no I/O, no state."""
from dataclasses import dataclass
from typing import Literal, Union

from content_curator.models import ContentType


@dataclass(frozen=True)
class ContentCommand:
    content_type: ContentType
    kind: Literal["content"] = "content"


@dataclass(frozen=True)
class ChatCommand:
    message: str
    kind: Literal["chat"] = "chat"


@dataclass(frozen=True)
class SimpleCommand:
    kind: Literal["more", "platform", "topic", "model", "copy", "last", "clear", "help", "quit"]


Command = Union[ContentCommand, ChatCommand, SimpleCommand]

COMMANDS: dict[str, Command] = {
    "/search": ContentCommand(ContentType.SEARCH),
    "/research": ContentCommand(ContentType.SEARCH),
    "/ideas": ContentCommand(ContentType.IDEAS),
    "/idea": ContentCommand(ContentType.IDEAS),
    "/script": ContentCommand(ContentType.SCRIPT),
    "/scripts": ContentCommand(ContentType.SCRIPT),
    "/trending": ContentCommand(ContentType.TRENDING),
    "/trends": ContentCommand(ContentType.TRENDING),
    "/hooks": ContentCommand(ContentType.HOOKS),
    "/hook": ContentCommand(ContentType.HOOKS),
    "/full": ContentCommand(ContentType.FULL),
    "/all": ContentCommand(ContentType.FULL),
    "/package": ContentCommand(ContentType.FULL),
    "/more": SimpleCommand("more"),
    "/variations": SimpleCommand("more"),
    "/platform": SimpleCommand("platform"),
    "/p": SimpleCommand("platform"),
    "/topic": SimpleCommand("topic"),
    "/t": SimpleCommand("topic"),
    "/model": SimpleCommand("model"),
    "/m": SimpleCommand("model"),
    "/copy": SimpleCommand("copy"),
    "/c": SimpleCommand("copy"),
    "/last": SimpleCommand("last"),
    "/back": SimpleCommand("last"),
    "/clear": SimpleCommand("clear"),
    "/cls": SimpleCommand("clear"),
    "/help": SimpleCommand("help"),
    "/h": SimpleCommand("help"),
    "/?": SimpleCommand("help"),
    "/quit": SimpleCommand("quit"),
    "/exit": SimpleCommand("quit"),
    "/q": SimpleCommand("quit"),
}


def parse_command(text: str) -> Command:
    """Map one input line to exactly one command.

    Unknown slash commands and plain text both become ChatCommand; an empty
    line is ChatCommand("") which callers treat as a no-op.
    """
    trimmed = text.strip()
    command = COMMANDS.get(trimmed.lower())
    if command is not None:
        return command
    return ChatCommand(trimmed)
