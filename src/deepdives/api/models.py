"""Pydantic models for REST API."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from deepdives.deep_dives.models import DeepDiveReport

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""

    data: T | None = None
    error: str | None = None


class MissingFieldsResponse(BaseModel):
    """Unfilled volunteer roles."""

    model_config = ConfigDict(from_attributes=True)

    leader: bool
    notetaker: bool


class MissingUpdatesResponse(BaseModel):
    """Past-due state and missing follow-up artifacts."""

    model_config = ConfigDict(from_attributes=True)

    past_due: bool
    needs_recording: bool | None = None
    needs_notes: bool | None = None


class IssueUpdateResponse(BaseModel):
    """Response model for one deep-dive issue."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str
    due_date: datetime
    high_priority: bool
    missing_fields: MissingFieldsResponse
    missing_updates: MissingUpdatesResponse


class IssueFailureResponse(BaseModel):
    """Response model for an issue that could not be checked."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    title: str
    error: str


class DeepDiveReportResponse(BaseModel):
    """Response model for all open deep dives in a repository."""

    updates: list[IssueUpdateResponse]
    failures: list[IssueFailureResponse]


class DigestResponse(BaseModel):
    """Response model for the rendered digest fragment."""

    digest: str
    count: int
    failures: int


def report_to_response(report: DeepDiveReport) -> DeepDiveReportResponse:
    """Convert a DeepDiveReport to DeepDiveReportResponse."""
    return DeepDiveReportResponse(
        updates=[IssueUpdateResponse.model_validate(u) for u in report.updates],
        failures=[IssueFailureResponse.model_validate(f) for f in report.failures],
    )
