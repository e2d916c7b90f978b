"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from deepdives.github import Comment, Issue


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")
    config.addinivalue_line("markers", "real: calls the live GitHub API (local only)")


EVENT_URL = "https://calendar.google.com/event?eid=abc"


class FakeTracker:
    """In-memory IssueTracker that records every call.

    Comment entries may be an exception instance, which is raised instead.
    """

    def __init__(
        self,
        issues: list[Issue] | None = None,
        comments: dict[int, list[Comment] | Exception] | None = None,
    ) -> None:
        self.issues = list(issues or [])
        self.comments = dict(comments or {})
        self.issue_calls: list[tuple[str, str, str, str]] = []
        self.comment_calls: list[tuple[str, str, int]] = []

    def list_issues(
        self, owner: str, repo: str, *, labels: str, state: str = "open"
    ) -> list[Issue]:
        self.issue_calls.append((owner, repo, labels, state))
        return list(self.issues)

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[Comment]:
        self.comment_calls.append((owner, repo, issue_number))
        result = self.comments.get(issue_number, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


def build_body(
    timing: str | None = "2024-03-15T17:00:00Z",
    leader: str | None = "@octocat",
    notetaker: str | None = "@hubot",
) -> str:
    """Render an issue body in the shape of the deep-dive issue template."""
    parts = ["## Summary", "How our release train works.", ""]
    if timing is not None:
        parts += ["## Timing", timing, f"[Google Event]({EVENT_URL})", ""]
    parts.append("## Volunteers")
    if leader is not None:
        parts.append(f"Leader: {leader}")
    if notetaker is not None:
        parts.append(f"Notetaker: {notetaker}")
    return "\n".join(parts)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for date comparisons."""
    return datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def tracker() -> FakeTracker:
    """Empty fake issue tracker."""
    return FakeTracker()


@pytest.fixture
def make_body() -> Callable[..., str]:
    """Factory for deep-dive issue bodies."""
    return build_body


@pytest.fixture
def make_issue() -> Callable[..., Issue]:
    """Factory for Issue objects."""

    def _make(number: int, body: str, title: str | None = None) -> Issue:
        return Issue(
            number=number,
            title=title or f"Deep dive #{number}",
            body=body,
            url=f"https://api.github.com/repos/octo/handbook/issues/{number}",
            html_url=f"https://github.com/octo/handbook/issues/{number}",
            labels=["Deep-dive"],
        )

    return _make


@pytest.fixture(autouse=True)
def reset_deepdives_logger():
    """Undo configure_logging() side effects between tests."""
    yield
    logger = logging.getLogger("deepdives")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
