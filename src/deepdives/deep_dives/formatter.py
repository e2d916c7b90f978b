"""Render deep-dive updates as digest lines."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from deepdives.deep_dives.collector import get_deep_dive_issues

if TYPE_CHECKING:
    from deepdives.config import DeepDiveSettings
    from deepdives.deep_dives.models import IssueFailure, IssueUpdate
    from deepdives.github import IssueTracker

HIGH_PRIORITY_PREFIX = ":warning: Tomorrow's "


def get_reason(update: IssueUpdate) -> str | None:
    """Pick the single most urgent thing the session still needs."""
    fields = update.missing_fields
    updates = update.missing_updates

    if update.high_priority:
        if fields.leader:
            if fields.notetaker:
                return "Needs a leader and a notetaker to volunteer"
            return "Needs a leader to volunteer"
        if fields.notetaker:
            return "Needs a notetaker to volunteer"

    if updates.past_due:
        if updates.needs_notes:
            return "Needs notes"
        if updates.needs_recording:
            return "Needs a rewatch recording"

    return None


def format_update(update: IssueUpdate) -> str:
    """Render one update as a markdown line."""
    prefix = HIGH_PRIORITY_PREFIX if update.high_priority else ""
    line = f"{prefix}[{update.title}]({update.url})"
    reason = get_reason(update)
    return f"{line}: {reason}" if reason else line


def format_failure(failure: IssueFailure) -> str:
    """Render an issue that could not be checked."""
    return f"[{failure.title}]({failure.url}): Could not be checked ({failure.error})"


def format_digest(lines: list[str]) -> str:
    """Wrap each line in <li> tags; empty string when there are no lines."""
    return "\n".join(f"<li>{line}</li>" for line in lines)


def get_and_format_deep_dive_updates(
    tracker: IssueTracker,
    owner: str,
    repo: str,
    *,
    now: datetime | None = None,
    settings: DeepDiveSettings | None = None,
) -> str:
    """Collect every open deep dive and render the digest fragment.

    Raises:
        DeepDiveError: If an issue body has no usable due date.
        GitHubError: If the tracker fails.
    """
    updates = get_deep_dive_issues(tracker, owner, repo, now=now, settings=settings)
    return format_digest([format_update(update) for update in updates])
