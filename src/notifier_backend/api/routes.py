from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from notifier_backend.core.logging import get_logger
from notifier_backend.core.models import Notifier, NotifierSecret
from notifier_backend.core.observability import mask_secret_value
from notifier_backend.core.response import ok
from notifier_backend.providers.registry import ProviderRegistry

logger = get_logger(__name__)


class SendRequest(BaseModel):
    """Send a notification through a provider."""
    notifier: Notifier = Field(..., description="Notifier whose configuration drives the provider")
    body: Any = Field(default=None, description="Provider payload; a string is used as raw bytes, anything else is JSON encoded")


def _raw_body(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return json.dumps(value).encode("utf-8")


def _registry(request: Request) -> ProviderRegistry:
    return request.app.state.registry


# PUBLIC_INTERFACE
def make_providers_router() -> APIRouter:
    """Provider endpoints: listing, send and option discovery."""
    router = APIRouter(prefix="/providers", tags=["Providers"])

    @router.get(
        "",
        summary="List providers",
        description="List registered notification providers.",
        responses={200: {"content": {"application/json": {"example": {"status": "ok", "data": [{"id": "jira", "name": "Jira"}], "meta": {}}}}}},
    )
    async def list_providers(request: Request):
        return ok([p.model_dump() for p in _registry(request).list_public()])

    @router.post(
        "/{provider_type}/send",
        summary="Send notification",
        description="Validate the payload and notifier configuration and deliver through the provider.",
        responses={
            200: {"description": "Notification delivered"},
            400: {"description": "Parse, decode or validation error"},
            404: {"description": "Unknown provider"},
            502: {"description": "Upstream error"},
        },
    )
    async def send(provider_type: str, payload: SendRequest, request: Request):
        provider = _registry(request).get(provider_type)
        message = await provider.send(payload.notifier, _raw_body(payload.body))
        logger.info("notification sent", extra={"provider": provider_type, "message_id": message.id})
        return ok(message.model_dump(mode="json"))

    @router.post(
        "/{provider_type}/opt-values",
        summary="Discover option values",
        description="Enumerate the dynamic configuration values available to the given credential.",
        responses={
            200: {"description": "Option values"},
            404: {"description": "Unknown provider"},
            502: {"description": "Upstream error"},
        },
    )
    async def opt_values(provider_type: str, secret: NotifierSecret, request: Request):
        provider = _registry(request).get(provider_type)
        values = await provider.get_opt_values(secret)
        logger.info("option values discovered", extra={"provider": provider_type, "token": mask_secret_value(secret.token), "sites": len(values.get("cloud_id", []))})
        return ok(values, meta={"source": provider_type})

    return router
