"""Static configuration for request building.

A settings object is an immutable snapshot. Every pipeline entry point takes
it as an explicit argument; ``get_settings()`` only provides the process-wide
default read once from the environment.
"""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from api_request_builder import __version__

DEFAULT_USER_AGENT = f"api-request-builder/{__version__}"


class BuilderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="API_REQUEST_BUILDER_",
        case_sensitive=False,
        frozen=True,
    )

    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    default_content_type: str = Field(default="application/json")
    default_headers: dict[str, str] = Field(default_factory=dict)
    base_url: str = Field(default="")
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_yaml(cls, path: Path) -> "BuilderSettings":
        """Load settings from a YAML mapping; keys override environment values."""
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return cls(**data)


@lru_cache(maxsize=1)
def get_settings() -> BuilderSettings:
    return BuilderSettings()
