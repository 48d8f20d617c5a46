from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Union


# PUBLIC_INTERFACE
def ok(data: Dict[str, Any] | List[Any] | Any, meta: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Produce a standardized success payload.
    Use "status": "ok" and include a top-level "data" wrapper to align with a unified interface.
    """
    return {
        "status": "ok",
        "data": data,
        "meta": meta or {},
    }


# PUBLIC_INTERFACE
def error_payload(
    code: str,
    message: str,
    retry_after: Optional[Union[int, float]] = None,
    details: Optional[Dict[str, Any]] = None,
    http_status: Optional[int] = None,
) -> Dict[str, Any]:
    """Produce a standardized error payload.

    - status: always "error"
    - code: machine-readable error code (e.g., PARSE_ERROR, DECODE_ERROR, RATE_LIMITED, UPSTREAM_ERROR)
    - message: human-readable message
    - retry_after: optional seconds to wait (if rate limited)
    - details: optional structured extra info (safe; should not include secrets)
    - http_status: optional http status observed from upstream (for debugging/observability)
    """
    payload: Dict[str, Any] = {
        "status": "error",
        "code": code,
        "message": message,
    }
    if retry_after is not None:
        payload["retry_after"] = retry_after
    if details:
        payload["details"] = details
    if http_status is not None:
        payload["http_status"] = http_status
    return payload


# PUBLIC_INTERFACE
def parse_rate_limit(status_code: Optional[int], headers: Dict[str, Any] | None = None) -> Tuple[bool, Optional[float]]:
    """Return (is_rate_limited, retry_after_seconds) for an upstream response."""
    if status_code == 429:
        retry_after_header = None
        if headers:
            # Handle common header keys
            for k in ("retry-after", "Retry-After", "x-rate-limit-reset", "X-Rate-Limit-Reset"):
                if k in headers:
                    retry_after_header = headers[k]
                    break
        if retry_after_header is None:
            return True, None
        try:
            # May be seconds or an HTTP date; only seconds are honoured
            return True, float(retry_after_header)
        except (TypeError, ValueError):
            return True, None
    return False, None
