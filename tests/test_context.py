import pytest
from pydantic import ValidationError

from content_curator.agent.context import ContentCache, SessionContext
from content_curator.config import Settings
from content_curator.models import ContentType, GenerationResult, Platform, find_model


def test_cache_starts_empty():
    cache = ContentCache()
    assert len(cache) == 0
    assert all(cache.get(t) is None for t in ContentType)


def test_cache_put_get_and_items_in_enum_order():
    cache = ContentCache()
    cache.put(ContentType.HOOKS, "hooks")
    cache.put(ContentType.SEARCH, "research")
    assert cache.get(ContentType.HOOKS) == "hooks"
    assert ContentType.SEARCH in cache
    assert ContentType.FULL not in cache
    assert list(cache.items()) == [(ContentType.SEARCH, "research"), (ContentType.HOOKS, "hooks")]


def test_cache_rejects_empty_text():
    with pytest.raises(ValueError):
        ContentCache().put(ContentType.SCRIPT, "")


def test_cache_clear_empties_every_slot():
    cache = ContentCache()
    for t in ContentType:
        cache.put(t, t.value)
    assert len(cache) == 6
    cache.clear()
    assert len(cache) == 0


def test_session_context_defaults():
    ctx = SessionContext(topic="coffee")
    assert ctx.platform is Platform.ALL
    assert ctx.search_results == []
    assert len(ctx.cache) == 0


# ── GenerationResult ──────────────────────────────────────────────────────────

def test_generation_result_ok_and_fail():
    assert GenerationResult.ok("text").success
    failed = GenerationResult.fail("nope")
    assert not failed.success
    assert failed.content == ""


def test_generation_result_never_both():
    with pytest.raises(ValidationError):
        GenerationResult(success=True, content="x", error="y")
    with pytest.raises(ValidationError):
        GenerationResult(success=False, content="x", error="y")
    with pytest.raises(ValidationError):
        GenerationResult(success=True, content="")


def test_find_model():
    assert find_model("o3").premium
    assert find_model("not-a-model") is None


# ── Settings ──────────────────────────────────────────────────────────────────

def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("TAVILY_API_KEY", "")
    monkeypatch.setenv("CONTENT_CURATOR_MODEL", "gpt-4.1")
    monkeypatch.setenv("CONTENT_CURATOR_TIMEOUT", "30")
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)

    settings = Settings.from_env()

    assert settings.openai_api_key == "sk-test"
    assert settings.tavily_api_key is None
    assert settings.model == "gpt-4.1"
    assert settings.request_timeout == 30.0


def test_settings_defaults(monkeypatch):
    for var in ("CONTENT_CURATOR_MODEL", "CONTENT_CURATOR_TIMEOUT"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings.from_env()
    assert settings.model == "gpt-4o"
    assert settings.request_timeout == 120.0


def test_settings_rejects_bad_timeout(monkeypatch):
    monkeypatch.setenv("CONTENT_CURATOR_TIMEOUT", "0")
    with pytest.raises(ValidationError):
        Settings.from_env()
