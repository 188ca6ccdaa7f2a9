"""Client configuration using Pydantic-settings."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings, read from ``POKEXPLORER_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POKEXPLORER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(default="http://localhost:5000", description="Backend base URL")
    storage_path: Path = Field(
        default=Path.home() / ".pokexplorer" / "session.json",
        description="Where the token and user are persisted"
    )
    request_timeout: float = Field(default=10.0, description="HTTP timeout in seconds")
