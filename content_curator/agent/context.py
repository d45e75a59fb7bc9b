"""Session state shared by the orchestrator and the interactive loop."""
from dataclasses import dataclass, field
from typing import Iterator, Optional

from content_curator.models import ContentType, Platform, SearchResult


class ContentCache:
    """One slot per content type, holding the last generated text for the active topic."""

    def __init__(self) -> None:
        self._slots: dict[ContentType, Optional[str]] = {t: None for t in ContentType}

    def get(self, content_type: ContentType) -> Optional[str]:
        return self._slots[content_type]

    def put(self, content_type: ContentType, text: str) -> None:
        if not text:
            raise ValueError("refusing to cache empty content")
        self._slots[content_type] = text

    def clear(self) -> None:
        for t in self._slots:
            self._slots[t] = None

    def items(self) -> Iterator[tuple[ContentType, str]]:
        for t, text in self._slots.items():
            if text is not None:
                yield t, text

    def __contains__(self, content_type: ContentType) -> bool:
        return self._slots[content_type] is not None

    def __len__(self) -> int:
        return sum(1 for _ in self.items())


@dataclass
class SessionContext:
    topic: str
    platform: Platform = Platform.ALL
    cache: ContentCache = field(default_factory=ContentCache)
    # Results of the most recent search for the current topic
    search_results: list[SearchResult] = field(default_factory=list)
