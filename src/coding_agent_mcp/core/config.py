"""Process-wide configuration read once from the environment."""

import os
from typing import Dict

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BACKEND_URL = "http://localhost:3000"


class Settings(BaseModel):
    """Immutable server configuration.

    Attributes:
        backend_url: Host of the backend all route groups live under.
        api_key: Bearer credential. Empty means calls are sent unauthenticated.
        timeout: Ceiling in seconds for every backend call.
        search_timeout: Ceiling in seconds for the search proxy.
        log_level: Level name passed to ``setup_logging``.
    """

    model_config = ConfigDict(frozen=True)

    backend_url: str = DEFAULT_BACKEND_URL
    api_key: str = ""
    timeout: float = Field(default=30.0, gt=0)
    search_timeout: float = Field(default=15.0, gt=0)
    log_level: str = "INFO"

    @field_validator("backend_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or DEFAULT_BACKEND_URL

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment, honouring a ``.env`` file in or above the working directory."""
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            backend_url=os.getenv("BACKEND_URL") or DEFAULT_BACKEND_URL,
            api_key=os.getenv("CODING_AGENT_API_KEY", ""),
            log_level=os.getenv("CODING_AGENT_LOG_LEVEL", "INFO"),
        )

    def auth_headers(self) -> Dict[str, str]:
        """Headers attached to every outbound call."""
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers
