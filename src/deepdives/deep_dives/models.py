"""Data models for deep-dive status updates."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class MissingFields:
    """Which volunteer roles are still unfilled.

    Attributes:
        leader: True when nobody has signed up to lead.
        notetaker: True when nobody has signed up to take notes.
    """

    leader: bool = False
    notetaker: bool = False

    @property
    def has_unfilled_role(self) -> bool:
        """True when at least one role is unfilled."""
        return self.leader or self.notetaker


@dataclass
class MissingUpdates:
    """Follow-up artifacts still owed by a past-due session.

    The needs_* fields stay None unless past_due is True, because comments
    are only fetched for past-due sessions.
    """

    past_due: bool = False
    needs_recording: bool | None = None
    needs_notes: bool | None = None


@dataclass
class IssueUpdate:
    """Status of one open deep-dive issue.

    Attributes:
        id: Issue number.
        url: Browser URL of the issue.
        title: Issue title.
        due_date: When the session is scheduled (timezone-aware).
        high_priority: Due within a day with a role still unfilled.
        missing_fields: Unfilled volunteer roles.
        missing_updates: Past-due state and missing artifacts.
    """

    id: int
    url: str
    title: str
    due_date: datetime
    high_priority: bool = False
    missing_fields: MissingFields = field(default_factory=MissingFields)
    missing_updates: MissingUpdates = field(default_factory=MissingUpdates)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain types with an ISO-8601 due date."""
        data = asdict(self)
        data["due_date"] = self.due_date.isoformat()
        return data


@dataclass
class IssueFailure:
    """An issue that could not be evaluated."""

    id: int
    url: str
    title: str
    error: str


@dataclass
class DeepDiveReport:
    """Result of a run that isolates per-issue failures.

    Attributes:
        updates: Successfully evaluated issues, in API order.
        failures: Issues that raised while being evaluated.
    """

    updates: list[IssueUpdate] = field(default_factory=list)
    failures: list[IssueFailure] = field(default_factory=list)
