from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from notifier_backend.core.errors import ErrorCode, RemoteError
from notifier_backend.core.logging import get_logger
from notifier_backend.core.settings import get_settings

from .models import AccessibleResource, CreateIssueRequest, IssueType, ProjectPage

logger = get_logger(__name__)

_resources_adapter = TypeAdapter(List[AccessibleResource])
_issue_types_adapter = TypeAdapter(List[IssueType])


class JiraRemoteClient(Protocol):
    """Operations the Jira provider needs from the upstream service."""

    async def create_issue(self, request: CreateIssueRequest) -> Dict[str, Any]: ...

    async def get_accessible_resources(self, token: str) -> List[AccessibleResource]: ...

    async def get_issue_types(self, token: str, cloud_id: str) -> List[IssueType]: ...

    async def get_projects(self, token: str, cloud_id: str) -> ProjectPage: ...


class JiraClient:
    """Jira Cloud REST API client using Atlassian platform with Bearer access token.

    Notes:
    - Uses https://api.atlassian.com/ex/jira/{cloudid}/rest/api/3 endpoints.
    - Site discovery goes through /oauth/token/accessible-resources.
    - An injected httpx.AsyncClient is reused and left open; otherwise a client
      is opened per call.
    - Failures raise RemoteError; nothing is retried here.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.jira.JIRA_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.jira.JIRA_HTTP_TIMEOUT
        self._http_client = http_client

    def _headers(self, token: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    def _url(self, cloud_id: str, path: str) -> str:
        # Jira REST v3 base for cloud
        return f"{self.base_url}/ex/jira/{cloud_id}{path}"

    async def _send(self, client: httpx.AsyncClient, method: str, url: str, token: str, body: Optional[Dict[str, Any]]) -> httpx.Response:
        return await client.request(method, url, headers=self._headers(token), json=body, timeout=self.timeout)

    async def _request(
        self,
        method: str,
        url: str,
        token: str,
        default_message: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            if self._http_client is not None:
                resp = await self._send(self._http_client, method, url, token, body)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await self._send(client, method, url, token, body)
        except httpx.RequestError as exc:
            logger.warning("Jira request failed before a response", extra={"method": method, "error": type(exc).__name__})
            raise RemoteError(
                f"{default_message}: {type(exc).__name__}",
                code=ErrorCode.UPSTREAM_UNAVAILABLE,
            ) from exc
        if resp.status_code >= 400:
            logger.warning("Jira upstream error", extra={"method": method, "upstream_status": resp.status_code})
            raise RemoteError.from_upstream(resp.status_code, resp.text, headers=resp.headers, default_message=default_message)
        try:
            return resp.json()
        except ValueError as exc:
            raise RemoteError(
                f"{default_message}: response is not valid JSON",
                upstream_status=resp.status_code,
                details={"upstream": resp.text},
            ) from exc

    @staticmethod
    def _parse(adapter_or_model: Any, data: Any, default_message: str) -> Any:
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_python(data)
            return adapter_or_model.model_validate(data)
        except ValidationError as exc:
            raise RemoteError(
                f"{default_message}: unexpected response shape",
                details={"errors": exc.errors(include_input=False)},
            ) from exc

    # PUBLIC_INTERFACE
    async def create_issue(self, request: CreateIssueRequest) -> Dict[str, Any]:
        """Create a Jira issue; returns the raw upstream JSON (id, key, self)."""
        url = self._url(request.cloud_id, "/rest/api/3/issue")
        return await self._request(
            "POST",
            url,
            request.bearer_token,
            "Jira create issue failed",
            body=request.model_dump(mode="json"),
        )

    # PUBLIC_INTERFACE
    async def get_accessible_resources(self, token: str) -> List[AccessibleResource]:
        """List the Atlassian sites the token can reach."""
        msg = "Atlassian accessible resources listing failed"
        data = await self._request("GET", f"{self.base_url}/oauth/token/accessible-resources", token, msg)
        return self._parse(_resources_adapter, data, msg)

    # PUBLIC_INTERFACE
    async def get_issue_types(self, token: str, cloud_id: str) -> List[IssueType]:
        """List issue types visible on a site."""
        msg = "Jira issue types listing failed"
        data = await self._request("GET", self._url(cloud_id, "/rest/api/3/issuetype"), token, msg)
        return self._parse(_issue_types_adapter, data, msg)

    # PUBLIC_INTERFACE
    async def get_projects(self, token: str, cloud_id: str) -> ProjectPage:
        """List projects visible on a site (first page as returned by Jira)."""
        msg = "Jira projects listing failed"
        data = await self._request("GET", self._url(cloud_id, "/rest/api/3/project/search"), token, msg)
        return self._parse(ProjectPage, data, msg)
