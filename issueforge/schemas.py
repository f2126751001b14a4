from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class IssueStatus(str, Enum):
    NEW = "New"
    IN_PROGRESS = "In Progress"
    FIXED = "Fixed"
    CLOSED = "Closed"


class CamelModel(BaseModel):
    """Base model exposing snake_case fields under camelCase JSON names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class IssueCreate(CamelModel):
    title: str = Field(min_length=1)
    owner: str = Field(min_length=1)
    status: IssueStatus = IssueStatus.NEW
    effort: int = Field(0, ge=0)
    due_date: Optional[date] = None

    @field_validator("status", mode="before")
    @classmethod
    def default_blank_status(cls, value):
        return IssueStatus.NEW if value in (None, "") else value

    @field_validator("effort", mode="before")
    @classmethod
    def default_blank_effort(cls, value):
        return 0 if value in (None, "") else value

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value):
        return None if value == "" else value


class IssueUpdate(CamelModel):
    """Partial update. Only fields present in the request body are replaced."""

    title: Optional[str] = Field(None, min_length=1)
    owner: Optional[str] = Field(None, min_length=1)
    status: Optional[IssueStatus] = None
    effort: Optional[int] = Field(None, ge=0)
    due_date: Optional[date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def blank_due_date(cls, value):
        return None if value == "" else value

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in ("title", "owner", "status", "effort"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Mutable fields supplied by the client, keyed by model attribute name."""
        return self.model_dump(exclude_unset=True)


class IssueResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    owner: str
    status: IssueStatus
    created: datetime
    effort: int
    due_date: Optional[date] = None
    updated: Optional[datetime] = None


class DeleteResponse(CamelModel):
    message: str
    deleted_issue: IssueResponse
