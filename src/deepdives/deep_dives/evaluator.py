"""Decide whether a deep dive is due soon, past due, or missing artifacts."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from deepdives.config import DeepDiveSettings
from deepdives.deep_dives.models import MissingFields, MissingUpdates

if TYPE_CHECKING:
    from deepdives.github import IssueTracker

logger = logging.getLogger("deepdives.deep_dives.evaluator")

ONE_DAY = timedelta(days=1)


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def is_past_due(due_date: datetime, now: datetime | None = None) -> bool:
    """True once the session date plus a one-day grace window has elapsed."""
    return due_date - _now(now) <= -ONE_DAY


def is_due_soon(due_date: datetime, now: datetime | None = None) -> bool:
    """True when the session is still ahead and at most one day away."""
    remaining = due_date - _now(now)
    return timedelta(0) < remaining <= ONE_DAY


def is_high_priority(
    due_date: datetime, missing_fields: MissingFields, now: datetime | None = None
) -> bool:
    """True when the session is due soon and a volunteer role is unfilled."""
    return is_due_soon(due_date, now) and missing_fields.has_unfilled_role


def get_missing_updates(
    tracker: IssueTracker,
    owner: str,
    repo: str,
    due_date: datetime,
    issue_number: int,
    *,
    now: datetime | None = None,
    settings: DeepDiveSettings | None = None,
) -> MissingUpdates:
    """Check a past-due session's comments for a recording and notes.

    Sessions that are not past due return immediately without calling the
    tracker.

    Args:
        tracker: Issue tracker to read comments from
        owner: Repository owner
        repo: Repository name
        due_date: Scheduled session date
        issue_number: Issue number of the session
        now: Reference time (defaults to the current UTC time)
        settings: Supplies the recording and notes markers

    Returns:
        MissingUpdates; needs_* are None unless past_due.

    Raises:
        GitHubError: If the comments cannot be fetched.
    """
    if not is_past_due(due_date, now):
        return MissingUpdates(past_due=False)

    settings = settings or DeepDiveSettings()
    comments = tracker.list_comments(owner, repo, issue_number)

    needs_recording = True
    needs_notes = True
    for comment in comments:
        if settings.recording_marker in comment.body:
            needs_recording = False
        if settings.notes_marker in comment.body:
            needs_notes = False

    logger.debug(
        "Issue #%d past due: %d comment(s), needs_recording=%s, needs_notes=%s",
        issue_number,
        len(comments),
        needs_recording,
        needs_notes,
    )
    return MissingUpdates(past_due=True, needs_recording=needs_recording, needs_notes=needs_notes)
