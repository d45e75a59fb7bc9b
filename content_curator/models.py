from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


class Platform(str, Enum):
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    ALL = "all"


class ContentType(str, Enum):
    SEARCH = "search"
    IDEAS = "ideas"
    SCRIPT = "script"
    TRENDING = "trending"
    HOOKS = "hooks"
    FULL = "full"


class SearchResult(BaseModel):
    title: str
    url: str
    snippet: str = ""
    published_date: Optional[str] = None  # ISO date as returned by the provider
    author: Optional[str] = None
    score: Optional[float] = None


class GenerationResult(BaseModel):
    """Outcome of one generation call: content on success, error message on failure."""
    success: bool
    content: str = ""
    error: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "GenerationResult":
        if self.success and (not self.content or self.error):
            raise ValueError("successful result needs content and no error")
        if not self.success and (self.content or not self.error):
            raise ValueError("failed result needs an error and no content")
        return self

    @classmethod
    def ok(cls, content: str) -> "GenerationResult":
        return cls(success=True, content=content)

    @classmethod
    def fail(cls, error: str) -> "GenerationResult":
        return cls(success=False, error=error)


class ModelInfo(BaseModel):
    id: str
    name: str
    premium: bool = False


AVAILABLE_MODELS: list[ModelInfo] = [
    ModelInfo(id="gpt-4o", name="GPT-4o"),
    ModelInfo(id="gpt-4.1", name="GPT-4.1"),
    ModelInfo(id="gpt-4o-mini", name="GPT-4o mini"),
    ModelInfo(id="gpt-5", name="GPT-5", premium=True),
    ModelInfo(id="o3", name="o3 (Reasoning)", premium=True),
    ModelInfo(id="o4-mini", name="o4-mini (Fast)", premium=True),
]

DEFAULT_MODEL = "gpt-4o"


def find_model(model_id: str) -> Optional[ModelInfo]:
    return next((m for m in AVAILABLE_MODELS if m.id == model_id), None)
