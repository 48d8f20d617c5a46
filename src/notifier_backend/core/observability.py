from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

# Context variables to carry across the request lifecycle
request_id_ctx: ContextVar[str] = ContextVar("request_id", default="-")
route_ctx: ContextVar[str] = ContextVar("route", default="-")


def mask_secret_value(value: Optional[str], keep: int = 4) -> Optional[str]:
    """Mask a secret for safe logging. Keep last N chars."""
    if value is None:
        return None
    v = str(value)
    if len(v) <= keep:
        return "*" * len(v)
    return "*" * (len(v) - keep) + v[-keep:]


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to attach a correlation/request ID and emit structured request logs."""

    def __init__(self, app, request_id_header: str = "X-Request-ID", logger: Optional[logging.Logger] = None):
        super().__init__(app)
        self.request_id_header = request_id_header
        self.logger = logger or logging.getLogger(__name__)

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        rid = request.headers.get(self.request_id_header) or str(uuid.uuid4())
        request_id_ctx.set(rid)
        route_ctx.set(request.url.path)

        self.logger.info(
            "request_start",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )
        try:
            response: Response = await call_next(request)
            response.headers[self.request_id_header] = rid
            return response
        except Exception as ex:
            # Log exception without leaking potential secrets
            self.logger.exception("request_error", extra={"error": str(ex)})
            raise
        finally:
            dur_ms = (time.perf_counter() - start) * 1000.0
            self.logger.info("request_end", extra={"duration_ms": round(dur_ms, 2)})


# PUBLIC_INTERFACE
def get_structured_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a structured logger that adds correlation attributes through logging Filters."""
    logger = logging.getLogger(name or __name__)
    if not any(isinstance(f, _ContextFilter) for f in logger.filters):
        logger.addFilter(_ContextFilter())
    return logger


class _ContextFilter(logging.Filter):
    """Inject request context (request_id, route) into records."""
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        record.route = route_ctx.get()
        return True
