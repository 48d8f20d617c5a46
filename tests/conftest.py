from typing import Any, Dict, List, Optional

import pytest

from notifier_backend.core.models import Notifier, NotifierConfiguration, NotifierSecret
from notifier_backend.providers.jira.models import AccessibleResource, CreateIssueRequest, IssueType, Project, ProjectPage


class FakeJiraClient:
    """In-memory stand-in for JiraClient that records every call."""

    def __init__(
        self,
        sites: Optional[List[AccessibleResource]] = None,
        issue_types: Optional[Dict[str, List[IssueType]]] = None,
        projects: Optional[Dict[str, List[Project]]] = None,
        create_response: Optional[Dict[str, Any]] = None,
        failures: Optional[Dict[tuple, Exception]] = None,
    ):
        self.sites = sites or []
        self.issue_types = issue_types or {}
        self.projects = projects or {}
        self.create_response = create_response or {"id": "10001", "key": "OPS-1", "self": "https://example/rest/api/3/issue/10001"}
        # keys: ("create_issue",), ("sites",), ("issue_types", cloud_id), ("projects", cloud_id)
        self.failures = failures or {}
        self.calls: List[tuple] = []

    def _maybe_fail(self, key: tuple) -> None:
        self.calls.append(key)
        if key in self.failures:
            raise self.failures[key]

    async def create_issue(self, request: CreateIssueRequest) -> Dict[str, Any]:
        self.last_request = request
        self._maybe_fail(("create_issue",))
        return self.create_response

    async def get_accessible_resources(self, token: str) -> List[AccessibleResource]:
        self._maybe_fail(("sites",))
        return self.sites

    async def get_issue_types(self, token: str, cloud_id: str) -> List[IssueType]:
        self._maybe_fail(("issue_types", cloud_id))
        return self.issue_types.get(cloud_id, [])

    async def get_projects(self, token: str, cloud_id: str) -> ProjectPage:
        self._maybe_fail(("projects", cloud_id))
        return ProjectPage(values=self.projects.get(cloud_id, []))


@pytest.fixture
def fake_client() -> FakeJiraClient:
    return FakeJiraClient()


@pytest.fixture
def notifier() -> Notifier:
    return Notifier(
        id="n-1",
        type="jira",
        config=NotifierConfiguration(
            opts={"project_key": "OPS", "issue_type": "Bug", "cloud_id": "site1"},
            secret=NotifierSecret(token="tok-123"),
        ),
    )
