"""Tavily web search: general, recency-biased and multi-query inspiration searches.

The client is safe to construct without credentials; every search then raises
SearchUnavailable so callers can degrade instead of crashing.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any

from tavily import AsyncTavilyClient

from content_curator.models import SearchResult

_log = logging.getLogger(__name__)

SNIPPET_CHARS = 500
TRENDING_WINDOW_DAYS = 7


class SearchError(RuntimeError):
    """The provider was reachable but the search failed."""


class SearchUnavailable(SearchError):
    """No search credentials are configured."""


def _to_result(raw: dict[str, Any]) -> SearchResult:
    return SearchResult(
        title=raw.get("title") or "Untitled",
        url=raw.get("url", ""),
        snippet=(raw.get("content") or "")[:SNIPPET_CHARS],
        published_date=raw.get("published_date"),
        author=raw.get("author"),
        score=raw.get("score"),
    )


class SearchClient:
    def __init__(self, api_key: str | None = None) -> None:
        self._client: AsyncTavilyClient | None = None
        if api_key:
            self._client = AsyncTavilyClient(api_key=api_key)

    def is_configured(self) -> bool:
        return self._client is not None

    async def search(
        self,
        query: str,
        result_count: int = 10,
        date_from: date | None = None,
        date_to: date | None = None,
        domains: list[str] | None = None,
    ) -> list[SearchResult]:
        """Run one search and return results in provider rank order."""
        if self._client is None:
            raise SearchUnavailable("Search is not configured. Set TAVILY_API_KEY in your .env file.")

        kwargs: dict[str, Any] = {"max_results": result_count}
        if date_from:
            kwargs["start_date"] = date_from.isoformat()
        if date_to:
            kwargs["end_date"] = date_to.isoformat()
        if domains:
            kwargs["include_domains"] = domains

        try:
            response = await self._client.search(query, **kwargs)
        except Exception as exc:
            raise SearchError(f"Search failed: {exc}") from exc

        results = [_to_result(r) for r in response.get("results", [])]
        _log.debug("search %r returned %d results", query, len(results))
        return results

    async def search_trending(self, topic: str, result_count: int = 15) -> list[SearchResult]:
        """Search restricted to the last week of published content."""
        week_ago = date.today() - timedelta(days=TRENDING_WINDOW_DAYS)
        return await self.search(topic, result_count=result_count, date_from=week_ago)

    async def search_content_ideas(self, topic: str) -> list[SearchResult]:
        """Fan out over inspiration queries, skip failed ones, dedupe by URL."""
        if self._client is None:
            raise SearchUnavailable("Search is not configured. Set TAVILY_API_KEY in your .env file.")

        queries = [
            f"viral {topic} content",
            f"{topic} trending tips",
            f"best {topic} content ideas",
        ]
        seen: set[str] = set()
        unique: list[SearchResult] = []
        for query in queries:
            try:
                results = await self.search(query, result_count=5)
            except SearchError as exc:
                _log.warning("inspiration query %r failed: %s", query, exc)
                continue
            for r in results:
                if r.url in seen:
                    continue
                seen.add(r.url)
                unique.append(r)
        return unique


def _format_date(value: str) -> str:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date().isoformat()
    except ValueError:
        return value


def format_results_for_llm(results: list[SearchResult]) -> str:
    """Render results as numbered context blocks for the prompt."""
    if not results:
        return "No search results found."

    blocks = []
    for i, r in enumerate(results, 1):
        when = f" ({_format_date(r.published_date)})" if r.published_date else ""
        by = f" by {r.author}" if r.author else ""
        blocks.append(f"[{i}] {r.title}{when}{by}\nURL: {r.url}\n{r.snippet}\n")
    return "\n---\n".join(blocks)
