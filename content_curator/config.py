"""Runtime settings read from the environment (.env is loaded by the CLI)."""
import os
from typing import Optional

from pydantic import BaseModel, Field

from content_curator.models import DEFAULT_MODEL


class Settings(BaseModel):
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None  # None = api.openai.com
    tavily_api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    request_timeout: float = Field(120.0, gt=0)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables; empty strings count as unset."""
        values: dict = {
            "openai_api_key": os.getenv("OPENAI_API_KEY") or None,
            "openai_base_url": os.getenv("OPENAI_BASE_URL") or None,
            "tavily_api_key": os.getenv("TAVILY_API_KEY") or None,
        }
        model = os.getenv("CONTENT_CURATOR_MODEL")
        if model:
            values["model"] = model
        timeout = os.getenv("CONTENT_CURATOR_TIMEOUT")
        if timeout:
            values["request_timeout"] = timeout
        return cls.model_validate(values)
