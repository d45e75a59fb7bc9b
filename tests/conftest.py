from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio

from content_curator.agent.context import SessionContext
from content_curator.agent.core import ContentOrchestrator
from content_curator.models import Platform, SearchResult
from fakes import FakeSession


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def search():
    s = MagicMock()
    s.is_configured.return_value = True
    s.search = AsyncMock(return_value=[SearchResult(title="AI tools in 2025", url="https://example.com/a", snippet="Agents everywhere")])
    s.search_trending = AsyncMock(return_value=[])
    s.search_content_ideas = AsyncMock(return_value=[])
    return s


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.close = AsyncMock()
    return client


@pytest_asyncio.fixture
async def orchestrator(fake_session, search, openai_client):
    context = SessionContext(topic="ai tools", platform=Platform.TIKTOK)
    orch = ContentOrchestrator(context, openai_client, search)
    with patch("content_curator.agent.core.create_session", AsyncMock(return_value=fake_session)):
        await orch.connect()
    return orch
