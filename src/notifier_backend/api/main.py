from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notifier_backend.core.errors import ProviderError
from notifier_backend.core.logging import get_logger
from notifier_backend.core.observability import RequestContextMiddleware
from notifier_backend.core.response import ok
from notifier_backend.core.settings import get_settings
from notifier_backend.providers.jira import PROVIDER_TYPE as JIRA, factory as jira_factory
from notifier_backend.providers.registry import ProviderRegistry

from .routes import make_providers_router

logger = get_logger(__name__)

openapi_tags = [
    {"name": "Health", "description": "Service health"},
    {"name": "Providers", "description": "Notification providers: send and option discovery"},
]


# PUBLIC_INTERFACE
def build_default_registry() -> ProviderRegistry:
    """Registry with every provider shipped by this package."""
    registry = ProviderRegistry()
    registry.register(JIRA, "Jira", factory=jira_factory)
    return registry


async def _provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    logger.warning(
        "provider call failed",
        extra={"code": exc.code, "error_type": type(exc).__name__, "error": exc.message},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


# PUBLIC_INTERFACE
def create_app(registry: Optional[ProviderRegistry] = None) -> FastAPI:
    """Build the FastAPI application around a provider registry."""
    settings = get_settings()
    app = FastAPI(
        title=settings.api.API_TITLE,
        description=settings.api.API_DESCRIPTION,
        version=settings.api.API_VERSION,
        openapi_tags=openapi_tags,
    )
    app.state.registry = registry if registry is not None else build_default_registry()

    # Correlation ID / request context middleware
    app.add_middleware(RequestContextMiddleware, request_id_header=settings.api.REQUEST_ID_HEADER, logger=logger)
    app.add_exception_handler(ProviderError, _provider_error_handler)

    @app.get(
        "/",
        summary="Health Check",
        description="Health check endpoint that returns service status and environment.",
        tags=["Health"],
        responses={200: {"content": {"application/json": {"example": {"status": "ok", "data": {"message": "Healthy", "env": "development"}, "meta": {}}}}}},
    )
    def health_check():
        return ok({"message": "Healthy", "env": settings.api.ENV})

    app.include_router(make_providers_router())
    return app


app = create_app()
