from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class NotifierSecret(BaseModel):
    token: str = Field(default="", description="Bearer token used against the upstream service")
    refresh_token: Optional[str] = Field(default=None, description="Optional refresh token, never sent upstream by providers")


class NotifierConfiguration(BaseModel):
    """Generic provider configuration: free-form opts plus a secret."""
    opts: Optional[Any] = Field(default=None, description="Provider specific options, decoded by each provider")
    secret: Optional[NotifierSecret] = Field(default=None, description="Credential attached to the notifier")


class Notifier(BaseModel):
    id: Optional[str] = Field(default=None, description="Notifier id")
    type: str = Field(..., description="Provider type (e.g., 'jira')")
    config: Optional[NotifierConfiguration] = Field(default=None, description="Notifier configuration")


class Message(BaseModel):
    """Result of a successful send. Never mutated after creation."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique message id")
    ok: bool = Field(..., description="True when the provider accepted the notification")
    payload: Any = Field(..., description="Validated provider payload echoed back")
    provider_response: Optional[Any] = Field(default=None, description="Raw upstream response")
