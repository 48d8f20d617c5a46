from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional

import httpx

from notifier_backend.core.errors import OptionsValidationError
from notifier_backend.core.models import Message, Notifier, NotifierSecret
from notifier_backend.providers.base import Provider

from .client import JiraClient, JiraRemoteClient
from .models import CreateIssueRequest, Fields, IssueTypeRef, ProjectRef
from .options import Opts
from .payload import Payload

PROVIDER_TYPE = "jira"


def _new_message_id() -> str:
    return str(uuid.uuid4())


class JiraProvider(Provider):
    """Creates Jira issues from notifications and discovers sites/projects/issue types."""

    type = PROVIDER_TYPE
    name = "Jira"

    def __init__(self, client: Optional[JiraRemoteClient] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.client = client if client is not None else JiraClient(http_client=http_client)

    # PUBLIC_INTERFACE
    async def send(self, notifier: Notifier, body: bytes) -> Message:
        """Validate body and options, then create one issue upstream."""
        payload = Payload.extract(body)
        payload.validate_mandatory()

        opts = Opts.extract(notifier.config)
        opts.validate_mandatory()

        request = CreateIssueRequest(
            fields=Fields(
                project=ProjectRef(key=opts.project_key),
                issuetype=IssueTypeRef(name=opts.issue_type),
                summary=payload.summary,
                description=payload.description,
            ),
            cloud_id=opts.cloud_id,
            bearer_token=opts.secret.token,
        )
        response = await self.client.create_issue(request)

        return Message(
            id=_new_message_id(),
            ok=True,
            payload=payload,
            provider_response=response,
        )

    # PUBLIC_INTERFACE
    async def get_opt_values(self, secret: NotifierSecret) -> Dict[str, Any]:
        """Walk sites, then each site's issue types and projects.

        Result shape:
        {"cloud_id": [{id, name}, ...],
         "_rel": {"cloud_id": {<site id>: {"project_key": [...], "issue_type": [...]}}}}

        The first failing call aborts the whole walk; nothing partial is returned.
        """
        if secret is None or not secret.token:
            raise OptionsValidationError("secret not defined in configuration")
        token = secret.token

        resources = await self.client.get_accessible_resources(token)

        sites: List[Dict[str, str]] = []
        site_opt_values: Dict[str, Dict[str, List[Dict[str, str]]]] = {}
        for site in resources:
            sites.append({"id": site.id, "name": site.name})

            issue_types = await self.client.get_issue_types(token, site.id)
            projects = await self.client.get_projects(token, site.id)

            # Project options are keyed by project key, which is what Opts.project_key expects
            site_opt_values[site.id] = {
                "project_key": [{"id": p.key, "name": p.name} for p in projects.values],
                "issue_type": [{"id": it.id, "name": it.name} for it in issue_types],
            }

        return {
            "cloud_id": sites,
            "_rel": {
                "cloud_id": site_opt_values,
            },
        }


def factory() -> JiraProvider:
    return JiraProvider()
