from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProjectRef(BaseModel):
    key: str


class IssueTypeRef(BaseModel):
    name: str


class Fields(BaseModel):
    project: ProjectRef
    issuetype: IssueTypeRef
    summary: str
    description: Dict[str, Any]


class CreateIssueRequest(BaseModel):
    """Create-issue call: the JSON body is `{"fields": ...}`; routing and auth travel beside it."""
    model_config = ConfigDict(frozen=True)

    fields: Fields
    cloud_id: str = Field(..., exclude=True)
    bearer_token: str = Field(..., exclude=True, repr=False)


class AccessibleResource(BaseModel):
    """An Atlassian site (cloud id) reachable with a token."""
    id: str
    name: str
    url: Optional[str] = None
    scopes: List[str] = Field(default_factory=list)


class IssueType(BaseModel):
    id: str
    name: str


class Project(BaseModel):
    id: str
    key: str
    name: str


class ProjectPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    values: List[Project] = Field(default_factory=list)
    total: Optional[int] = None
    start_at: Optional[int] = Field(default=None, alias="startAt")
    max_results: Optional[int] = Field(default=None, alias="maxResults")
    is_last: Optional[bool] = Field(default=None, alias="isLast")
