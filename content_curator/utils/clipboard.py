import logging
import re

import pyperclip

_log = logging.getLogger(__name__)

_NUMBERED_ITEM = re.compile(r"^\s*(\d+)\.\s+(.+)")


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard. Returns False when no clipboard is available."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        _log.warning("clipboard copy failed: %s", exc)
        return False
    return True


def strip_markdown(text: str) -> str:
    """Drop markdown syntax so copied text pastes cleanly into captions."""
    text = re.sub(r"#{1,6}\s", "", text)
    text = re.sub(r"\*\*(.*?)\*\*", r"\1", text)
    text = re.sub(r"\*(.*?)\*", r"\1", text)
    text = re.sub(r"`(.*?)`", r"\1", text)
    text = re.sub(r"\[(.*?)\]\(.*?\)", r"\1", text)
    text = re.sub(r"^\s*[-*+]\s", "• ", text, flags=re.MULTILINE)
    text = re.sub(r"^\s*\d+\.\s", "", text, flags=re.MULTILINE)
    return text.strip()


def extract_numbered_items(content: str) -> list[str]:
    items = []
    for line in content.split("\n"):
        match = _NUMBERED_ITEM.match(line)
        if match:
            items.append(match.group(2).strip())
    return items
