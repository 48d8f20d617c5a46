from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from notifier_backend.core.errors import ParseError, PayloadValidationError


class Payload(BaseModel):
    """Primary content of a Jira notification.

    `description` is an Atlassian Document Format value; only its presence is
    checked here.
    """
    model_config = ConfigDict(frozen=True)

    summary: str = Field(default="", description="Issue summary")
    description: Optional[Dict[str, Any]] = Field(default=None, description="Issue description document")

    @field_validator("summary", mode="before")
    @classmethod
    def _null_summary(cls, value: Any) -> Any:
        return "" if value is None else value

    # PUBLIC_INTERFACE
    @classmethod
    def extract(cls, body: bytes) -> "Payload":
        """Parse the raw request body into a Payload."""
        try:
            return cls.model_validate_json(body)
        except ValidationError as exc:
            fields = [".".join(str(p) for p in err["loc"]) or "body" for err in exc.errors(include_input=False)]
            raise ParseError("failed to parse payload", details={"fields": fields}) from exc

    # PUBLIC_INTERFACE
    def validate_mandatory(self) -> None:
        """Ensure all mandatory properties are set."""
        if not self.summary:
            raise PayloadValidationError("payload does not contain mandatory param summary")
        if self.description is None:
            raise PayloadValidationError("payload does not contain mandatory param description")
