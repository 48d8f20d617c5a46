from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from notifier_backend.core.errors import DecodeError, OptionsValidationError
from notifier_backend.core.models import NotifierConfiguration, NotifierSecret

OPT_FIELDS = ("project_key", "issue_type", "cloud_id")


class Opts(BaseModel):
    """Jira specific options decoded from a generic notifier configuration."""
    model_config = ConfigDict(frozen=True)

    project_key: str = Field(default="", description="Key of the project issues are created in")
    issue_type: str = Field(default="", description="Issue type name")
    cloud_id: str = Field(default="", description="Atlassian site id")
    secret: Optional[NotifierSecret] = Field(default=None, repr=False)

    # PUBLIC_INTERFACE
    @classmethod
    def extract(cls, config: Optional[NotifierConfiguration]) -> "Opts":
        """Decode `config.opts` field by field; the secret is carried over as is.

        Missing fields decode to "" and are left for validate_mandatory();
        fields of the wrong type are all reported in one DecodeError.
        """
        if config is None:
            raise DecodeError("notifier config empty")
        raw = config.opts if config.opts is not None else {}
        if not isinstance(raw, Mapping):
            raise DecodeError("failed to decode configuration: opts is not a mapping", details={"fields": ["opts"]})

        values: Dict[str, str] = {}
        mismatched: List[str] = []
        for name in OPT_FIELDS:
            value = raw.get(name)
            if value is None:
                values[name] = ""
            elif isinstance(value, str):
                values[name] = value
            else:
                mismatched.append(name)
        if mismatched:
            raise DecodeError(
                f"failed to decode configuration: expected text for {', '.join(mismatched)}",
                details={"fields": mismatched},
            )
        return cls(secret=config.secret, **values)

    # PUBLIC_INTERFACE
    def validate_mandatory(self) -> None:
        """Ensure issue type, project key and a usable secret are present."""
        if not self.issue_type or not self.project_key:
            raise OptionsValidationError("issue_type or project_key is empty")
        if self.secret is None or not self.secret.token:
            raise OptionsValidationError("secret not defined in configuration")
