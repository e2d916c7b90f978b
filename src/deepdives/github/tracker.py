"""IssueTracker - the two issue-tracker capabilities the digest needs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from deepdives.github.models import Comment, Issue


class IssueTracker(Protocol):
    """Interface for a paginated issue-tracking service.

    Implementations return every page; callers never see pagination.
    """

    def list_issues(
        self, owner: str, repo: str, *, labels: str, state: str = "open"
    ) -> list[Issue]:
        """List all issues carrying the given label(s) in the given state."""
        ...

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[Comment]:
        """List all comments on an issue."""
        ...
