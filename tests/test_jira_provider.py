"""
Unit tests for the Jira provider: send pipeline and option discovery.
"""
import pytest

from conftest import FakeJiraClient
from notifier_backend.core.errors import (
    DecodeError,
    ErrorCode,
    OptionsValidationError,
    ParseError,
    PayloadValidationError,
    RemoteError,
)
from notifier_backend.core.models import Notifier, NotifierConfiguration, NotifierSecret
from notifier_backend.providers.jira import JiraProvider
from notifier_backend.providers.jira.models import AccessibleResource, IssueType, Project


@pytest.mark.asyncio
async def test_send_creates_issue_and_returns_message(fake_client, notifier):
    provider = JiraProvider(client=fake_client)
    msg = await provider.send(notifier, b'{"summary":"Bug","description":{"type":"doc"}}')

    assert msg.ok is True
    assert msg.payload.summary == "Bug"
    assert msg.provider_response == fake_client.create_response
    assert msg.id

    req = fake_client.last_request
    assert req.fields.project.key == "OPS"
    assert req.fields.issuetype.name == "Bug"
    assert req.fields.description == {"type": "doc"}
    assert req.cloud_id == "site1"
    assert req.bearer_token == "tok-123"
    assert fake_client.calls == [("create_issue",)]


@pytest.mark.asyncio
async def test_send_generates_fresh_ids(fake_client, notifier):
    provider = JiraProvider(client=fake_client)
    body = b'{"summary":"Bug","description":{}}'
    first = await provider.send(notifier, body)
    second = await provider.send(notifier, body)
    assert first.id != second.id


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, exc",
    [
        (b'{"description":{"type":"doc"}}', PayloadValidationError),
        (b'{"summary":"","description":{}}', PayloadValidationError),
        (b'{"summary":"Bug"}', PayloadValidationError),
        (b"{oops", ParseError),
    ],
)
async def test_send_invalid_payload_makes_no_remote_call(fake_client, notifier, body, exc):
    provider = JiraProvider(client=fake_client)
    with pytest.raises(exc):
        await provider.send(notifier, body)
    assert fake_client.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "config, exc",
    [
        (None, DecodeError),
        (NotifierConfiguration(opts={"project_key": 7}, secret=NotifierSecret(token="t")), DecodeError),
        (NotifierConfiguration(opts={"issue_type": "Bug"}, secret=NotifierSecret(token="t")), OptionsValidationError),
        (NotifierConfiguration(opts={"project_key": "OPS"}, secret=NotifierSecret(token="t")), OptionsValidationError),
        (NotifierConfiguration(opts={"project_key": "OPS", "issue_type": "Bug"}), OptionsValidationError),
        (NotifierConfiguration(opts={"project_key": "OPS", "issue_type": "Bug"}, secret=NotifierSecret()), OptionsValidationError),
    ],
)
async def test_send_invalid_options_makes_no_remote_call(fake_client, config, exc):
    provider = JiraProvider(client=fake_client)
    with pytest.raises(exc):
        await provider.send(Notifier(type="jira", config=config), b'{"summary":"Bug","description":{}}')
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_send_payload_checked_before_options(fake_client):
    provider = JiraProvider(client=fake_client)
    with pytest.raises(PayloadValidationError):
        await provider.send(Notifier(type="jira", config=None), b'{"description":{}}')


@pytest.mark.asyncio
async def test_send_passes_remote_error_through_unchanged(notifier):
    err = RemoteError("boom", code=ErrorCode.UPSTREAM, upstream_status=500)
    client = FakeJiraClient(failures={("create_issue",): err})
    provider = JiraProvider(client=client)
    with pytest.raises(RemoteError) as ei:
        await provider.send(notifier, b'{"summary":"Bug","description":{}}')
    assert ei.value is err


def _two_sites_client(**kwargs) -> FakeJiraClient:
    return FakeJiraClient(
        sites=[AccessibleResource(id="s1", name="Site One"), AccessibleResource(id="s2", name="Site Two")],
        issue_types={
            "s1": [IssueType(id="1", name="Bug"), IssueType(id="2", name="Task")],
            "s2": [IssueType(id="3", name="Story")],
        },
        projects={
            "s1": [Project(id="100", key="OPS", name="Operations")],
            "s2": [Project(id="200", key="WEB", name="Website"), Project(id="201", key="API", name="Api")],
        },
        **kwargs,
    )


@pytest.mark.asyncio
async def test_get_opt_values_builds_nested_result():
    client = _two_sites_client()
    result = await JiraProvider(client=client).get_opt_values(NotifierSecret(token="tok"))

    assert result == {
        "cloud_id": [{"id": "s1", "name": "Site One"}, {"id": "s2", "name": "Site Two"}],
        "_rel": {
            "cloud_id": {
                "s1": {
                    "project_key": [{"id": "OPS", "name": "Operations"}],
                    "issue_type": [{"id": "1", "name": "Bug"}, {"id": "2", "name": "Task"}],
                },
                "s2": {
                    "project_key": [{"id": "WEB", "name": "Website"}, {"id": "API", "name": "Api"}],
                    "issue_type": [{"id": "3", "name": "Story"}],
                },
            }
        },
    }
    assert client.calls == [
        ("sites",),
        ("issue_types", "s1"),
        ("projects", "s1"),
        ("issue_types", "s2"),
        ("projects", "s2"),
    ]


@pytest.mark.asyncio
async def test_get_opt_values_no_sites(fake_client):
    result = await JiraProvider(client=fake_client).get_opt_values(NotifierSecret(token="tok"))
    assert result == {"cloud_id": [], "_rel": {"cloud_id": {}}}
    assert fake_client.calls == [("sites",)]


@pytest.mark.asyncio
async def test_get_opt_values_fails_fast_on_second_site_projects():
    err = RemoteError("projects down", upstream_status=503)
    client = _two_sites_client(failures={("projects", "s2"): err})
    with pytest.raises(RemoteError) as ei:
        await JiraProvider(client=client).get_opt_values(NotifierSecret(token="tok"))
    assert ei.value is err
    assert client.calls[-1] == ("projects", "s2")


@pytest.mark.asyncio
async def test_get_opt_values_sites_failure_aborts_immediately():
    err = RemoteError("auth", code=ErrorCode.AUTH_FAILED, upstream_status=401)
    client = _two_sites_client(failures={("sites",): err})
    with pytest.raises(RemoteError):
        await JiraProvider(client=client).get_opt_values(NotifierSecret(token="tok"))
    assert client.calls == [("sites",)]


@pytest.mark.asyncio
async def test_get_opt_values_issue_types_failure_skips_projects():
    client = _two_sites_client(failures={("issue_types", "s1"): RemoteError("nope")})
    with pytest.raises(RemoteError):
        await JiraProvider(client=client).get_opt_values(NotifierSecret(token="tok"))
    assert client.calls == [("sites",), ("issue_types", "s1")]


@pytest.mark.asyncio
@pytest.mark.parametrize("secret", [None, NotifierSecret(token="")])
async def test_get_opt_values_requires_token(fake_client, secret):
    with pytest.raises(OptionsValidationError):
        await JiraProvider(client=fake_client).get_opt_values(secret)
    assert fake_client.calls == []
