"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Exposes 500 error messages to clients,
            so it must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_format: "text" for the pipe-separated format, "json" for one
            JSON object per line.
        host: Interface uvicorn binds to.
        port: Port uvicorn binds to.
        api_prefix: URL prefix shared by all routers.
        rate_limit_default: Default rate limit for rate-limited endpoints.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Plaid API Server"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    host: str = "0.0.0.0"
    port: int = 8000
    api_prefix: str = "/api/v1"
    rate_limit_default: str = "60/minute"


settings = Settings()
