from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env if present
load_dotenv()


class JiraSettings(BaseModel):
    """Upstream Jira Cloud (Atlassian platform) settings."""

    JIRA_API_BASE_URL: str = Field(default="https://api.atlassian.com", description="Atlassian platform API base URL")
    JIRA_HTTP_TIMEOUT: float = Field(default=20.0, gt=0, description="Timeout in seconds for each upstream call")


class APISettings(BaseModel):
    """FastAPI application settings."""

    API_TITLE: str = Field(default="Notifier Backend", description="API title for OpenAPI")
    API_DESCRIPTION: str = Field(
        default="Notification provider API (Jira issue creation and configuration discovery).",
        description="API description",
    )
    API_VERSION: str = Field(default="0.1.0", description="API version")
    HOST: str = Field(default="0.0.0.0", description="Bind host for the runner")
    PORT: int = Field(default=3001, description="Bind port for the runner")
    ENV: str = Field(default="development", description="Environment name")
    REQUEST_ID_HEADER: str = Field(default="X-Request-ID", description="Header used to propagate request ids")


class LoggingSettings(BaseModel):
    LOG_LEVEL: str = Field(default="INFO", description="Root log level")
    LOG_FORMAT: str = Field(default="json", description="'json' or 'plain'")


class Settings(BaseModel):
    """Application configuration bundle."""

    jira: JiraSettings
    api: APISettings
    logging: LoggingSettings

    @staticmethod
    def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
        return os.getenv(name, default)

    # PUBLIC_INTERFACE
    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        jira = JiraSettings(
            JIRA_API_BASE_URL=(cls._get_env("JIRA_API_BASE_URL", "https://api.atlassian.com") or "").rstrip("/"),
            JIRA_HTTP_TIMEOUT=float(cls._get_env("JIRA_HTTP_TIMEOUT", "20") or "20"),
        )
        api = APISettings(
            API_TITLE=cls._get_env("API_TITLE", "Notifier Backend"),
            API_DESCRIPTION=cls._get_env(
                "API_DESCRIPTION",
                "Notification provider API (Jira issue creation and configuration discovery).",
            ),
            API_VERSION=cls._get_env("API_VERSION", "0.1.0"),
            HOST=cls._get_env("HOST", "0.0.0.0"),
            PORT=int(cls._get_env("PORT", "3001") or "3001"),
            ENV=cls._get_env("ENV", "development"),
            REQUEST_ID_HEADER=cls._get_env("REQUEST_ID_HEADER", "X-Request-ID"),
        )
        logging = LoggingSettings(
            LOG_LEVEL=(cls._get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
            LOG_FORMAT=(cls._get_env("LOG_FORMAT", "json") or "json").lower(),
        )
        return cls(jira=jira, api=api, logging=logging)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton access to application settings loaded from environment."""
    return Settings.from_env()
