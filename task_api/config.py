"""Configuration settings using Pydantic BaseSettings."""

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application Configuration
    app_name: str = Field(default="Task Tracker API", description="Application name reported by the API")
    app_version: str = Field(default="1.0.0", description="Application version")
    host: str = Field(default="0.0.0.0", description="Host the server binds to")
    port: int = Field(default=5000, description="Port the server listens on")
    environment: str = Field(default="development", description="Deployment environment name")
    debug: bool = Field(default=False, description="Enable debug mode")

    # CORS Configuration
    cors_origins: List[str] = Field(default=["*"], description="Origins allowed to call the API")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path, console only if unset")

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
