"""Errors surfaced by remote entity tag calls.

Remote services report failures with a standard envelope:

    {
        "error": {
            "code": "CmsKit:Tag:0002",
            "message": "Tag not found",
            "details": null,
            "data": {},
            "validationErrors": [
                {"message": "The TagId field is required.", "members": ["tagId"]}
            ]
        }
    }
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class RemoteValidationError(BaseModel):
    """A single field validation failure reported by the remote service."""
    message: Optional[str] = None
    members: list[str] = Field(default_factory=list)

    @field_validator("members", mode="before")
    @classmethod
    def _null_members(cls, value: Any) -> Any:
        return [] if value is None else value


class RemoteServiceErrorInfo(BaseModel):
    """Parsed body of the remote error envelope.

    Services send ``null`` for ``data`` and ``validationErrors`` when there
    is nothing to report; those are read as empty.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: Optional[str] = None
    message: Optional[str] = None
    details: Optional[str] = None
    data: dict[str, Any] = Field(default_factory=dict)
    validation_errors: list[RemoteValidationError] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_data(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("validation_errors", mode="before")
    @classmethod
    def _null_validation_errors(cls, value: Any) -> Any:
        return [] if value is None else value


class RemoteCallError(Exception):
    """A remote operation failed.

    Attributes:
        message: Human-readable failure description
        status_code: HTTP status of the response, None for transport failures
        error: Error envelope returned by the service, if it sent one
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        error: Optional[RemoteServiceErrorInfo] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error = error

    def __repr__(self) -> str:
        return f"RemoteCallError({self.message!r}, status_code={self.status_code!r})"


class UnknownOperationError(ValueError):
    """The dispatcher has no route for the requested operation name."""
