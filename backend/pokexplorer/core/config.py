"""Application configuration using Pydantic-settings."""

from typing import Optional, List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Settings
    api_title: str = Field(default="Poké-Explorer API", description="API title")
    api_description: str = Field(
        default="Authenticated Pokémon search backed by PokéAPI",
        description="API description"
    )
    api_version: str = Field(default="0.1.0", description="API version")
    debug: bool = Field(default=False, description="Debug mode")

    # Server Settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=5000, description="Server port")

    # CORS Settings
    cors_origins: List[str] = Field(
        default=["*"],
        description="CORS allowed origins"
    )
    cors_allow_credentials: bool = Field(default=False, description="Allow credentials")
    cors_allow_methods: List[str] = Field(default=["*"], description="Allowed methods")
    cors_allow_headers: List[str] = Field(default=["*"], description="Allowed headers")

    # Database Settings
    database_url: str = Field(
        default="sqlite:///./pokexplorer.db",
        description="Database connection URL"
    )
    database_echo: bool = Field(default=False, description="SQLAlchemy echo SQL")

    # Security Settings
    secret_key: str = Field(
        default="your-secret-key-change-this-in-production",
        description="Secret key for JWT"
    )
    algorithm: str = Field(default="HS256", description="JWT algorithm")
    access_token_expire_days: int = Field(default=30, description="Token expiry in days")

    # PokéAPI Settings
    pokeapi_base_url: str = Field(
        default="https://pokeapi.co/api/v2",
        description="PokéAPI base URL"
    )
    pokeapi_timeout: float = Field(
        default=10.0,
        description="PokéAPI request timeout in seconds"
    )

    # Search history
    history_limit: int = Field(default=20, description="Maximum history entries returned")

    # Logging Settings
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="json",
        description="Log format (json or standard)"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (None for stdout)"
    )
    log_rotation: str = Field(
        default="1 day",
        description="Log rotation interval"
    )
    log_retention: str = Field(
        default="30 days",
        description="Log retention period"
    )


# Global settings instance
settings = Settings()
