"""Configuration management for the task service."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_path: Path = Field(default=BASE_DIR / "tasks.db", description="SQLite database file")

    # HTTP
    api_prefix: str = Field(default="/api", description="Prefix for all API routes")
    cors_allow_origins: list[str] = Field(default=["*"], description="Origins allowed by CORS")
    static_dir: Path = Field(default=BASE_DIR / "static", description="Bundled client build to serve at /")

    # Server
    host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    port: int = Field(default=8000, description="Bind port for uvicorn")
    reload: bool = Field(default=False, description="Enable uvicorn auto-reload")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    # Client
    client_base_url: str = Field(
        default="http://localhost:8000/api",
        description="Base URL used by TaskApiClient when none is given",
    )


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
