# PUBLIC_INTERFACE
"""
Error taxonomy shared by notification providers.

Every failure a provider reports is one of a closed set of variants:

- ParseError: the inbound body is not well-formed for the provider payload.
- ValidationError: a mandatory field is missing or empty
  (PayloadValidationError / OptionsValidationError).
- DecodeError: the generic notifier configuration is absent or mis-shaped.
- RemoteError: the upstream service failed; passed through untouched.

All variants expose the same reporting interface (code, message, status_code,
details, to_payload()) so the HTTP layer can render them uniformly.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Union

from fastapi import status

from .response import error_payload, parse_rate_limit


class ErrorCode:
    PARSE = "PARSE_ERROR"
    PAYLOAD_VALIDATION = "PAYLOAD_VALIDATION_ERROR"
    OPTIONS_VALIDATION = "OPTIONS_VALIDATION_ERROR"
    DECODE = "DECODE_ERROR"
    AUTH_FAILED = "AUTH_FAILED"
    RATE_LIMITED = "RATE_LIMITED"
    UPSTREAM = "UPSTREAM_ERROR"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    NOT_FOUND = "NOT_FOUND"


# PUBLIC_INTERFACE
class ProviderError(Exception):
    """Base class for every error a provider raises."""

    code: str = ErrorCode.UPSTREAM
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    # PUBLIC_INTERFACE
    def to_payload(self) -> Dict[str, Any]:
        """Render the error with the standard error envelope."""
        return error_payload(code=self.code, message=self.message, details=self.details)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ParseError(ProviderError):
    code = ErrorCode.PARSE
    status_code = status.HTTP_400_BAD_REQUEST


class ValidationError(ProviderError):
    status_code = status.HTTP_400_BAD_REQUEST


class PayloadValidationError(ValidationError):
    code = ErrorCode.PAYLOAD_VALIDATION


class OptionsValidationError(ValidationError):
    code = ErrorCode.OPTIONS_VALIDATION


class DecodeError(ProviderError):
    code = ErrorCode.DECODE
    status_code = status.HTTP_400_BAD_REQUEST


class ProviderNotFoundError(ProviderError):
    code = ErrorCode.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, provider_type: str):
        super().__init__(f"Provider '{provider_type}' not registered")


# PUBLIC_INTERFACE
class RemoteError(ProviderError):
    """Failure reported by (or while talking to) the upstream service."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.UPSTREAM,
        upstream_status: Optional[int] = None,
        retry_after: Optional[Union[int, float]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)
        self.code = code
        self.upstream_status = upstream_status
        self.retry_after = retry_after
        if code == ErrorCode.AUTH_FAILED:
            self.status_code = status.HTTP_401_UNAUTHORIZED
        elif code == ErrorCode.RATE_LIMITED:
            self.status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def to_payload(self) -> Dict[str, Any]:
        return error_payload(
            code=self.code,
            message=self.message,
            retry_after=self.retry_after,
            details=self.details,
            http_status=self.upstream_status,
        )

    # PUBLIC_INTERFACE
    @classmethod
    def from_upstream(
        cls,
        upstream_status: Optional[int],
        upstream_text: Optional[str],
        headers: Optional[Dict[str, Any]] = None,
        default_message: str = "Upstream service error",
    ) -> "RemoteError":
        """Classify an upstream HTTP failure into a RemoteError."""
        # Handle token/authorization errors
        if upstream_status in (401, 403):
            return cls(
                "Authorization with upstream service failed.",
                code=ErrorCode.AUTH_FAILED,
                upstream_status=upstream_status,
            )
        limited, retry_after = parse_rate_limit(upstream_status, headers)
        if limited:
            return cls(
                "Rate limit reached. Please retry later.",
                code=ErrorCode.RATE_LIMITED,
                upstream_status=upstream_status,
                retry_after=retry_after,
            )
        return cls(
            default_message,
            code=ErrorCode.UPSTREAM,
            upstream_status=upstream_status,
            details={"upstream": upstream_text or ""},
        )
