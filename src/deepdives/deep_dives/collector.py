"""Collect the status of every open deep-dive issue in a repository."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from deepdives.config import DeepDiveSettings
from deepdives.deep_dives.evaluator import get_missing_updates, is_high_priority
from deepdives.deep_dives.exceptions import DeepDiveError
from deepdives.deep_dives.extractors import get_due_date, get_missing_fields
from deepdives.deep_dives.models import DeepDiveReport, IssueFailure, IssueUpdate
from deepdives.github.exceptions import GitHubError

if TYPE_CHECKING:
    from deepdives.github import Issue, IssueTracker

logger = logging.getLogger("deepdives.deep_dives.collector")


def build_issue_update(
    tracker: IssueTracker,
    owner: str,
    repo: str,
    issue: Issue,
    *,
    now: datetime,
    settings: DeepDiveSettings,
) -> IssueUpdate:
    """Evaluate a single deep-dive issue.

    Raises:
        DeepDiveError: If the body has no usable due date.
        GitHubError: If the issue's comments cannot be fetched.
    """
    due_date = get_due_date(issue.body)
    missing_updates = get_missing_updates(
        tracker, owner, repo, due_date, issue.number, now=now, settings=settings
    )
    missing_fields = get_missing_fields(issue.body)

    return IssueUpdate(
        id=issue.number,
        url=issue.web_url,
        title=issue.title,
        due_date=due_date,
        high_priority=is_high_priority(due_date, missing_fields, now),
        missing_fields=missing_fields,
        missing_updates=missing_updates,
    )


def _list_deep_dives(
    tracker: IssueTracker, owner: str, repo: str, settings: DeepDiveSettings
) -> list[Issue]:
    issues = tracker.list_issues(owner, repo, labels=settings.label, state="open")
    logger.info("Found %d open %r issue(s) in %s/%s", len(issues), settings.label, owner, repo)
    return issues


def get_deep_dive_issues(
    tracker: IssueTracker,
    owner: str,
    repo: str,
    *,
    now: datetime | None = None,
    settings: DeepDiveSettings | None = None,
) -> list[IssueUpdate]:
    """Build an IssueUpdate for every open deep-dive issue.

    The first issue that fails aborts the whole batch.

    Args:
        tracker: Issue tracker to read from
        owner: Repository owner
        repo: Repository name
        now: Reference time shared by every issue (defaults to current UTC time)
        settings: Label and comment markers

    Returns:
        One update per issue, in the tracker's order.

    Raises:
        DeepDiveError: If an issue body has no usable due date.
        GitHubError: If listing issues or comments fails.
    """
    settings = settings or DeepDiveSettings()
    now = now or datetime.now(timezone.utc)

    updates = []
    for issue in _list_deep_dives(tracker, owner, repo, settings):
        try:
            updates.append(
                build_issue_update(tracker, owner, repo, issue, now=now, settings=settings)
            )
        except (DeepDiveError, GitHubError) as e:
            logger.error("Failed to process deep dive #%d (%s): %s", issue.number, issue.title, e)
            raise
    return updates


def collect_deep_dive_report(
    tracker: IssueTracker,
    owner: str,
    repo: str,
    *,
    now: datetime | None = None,
    settings: DeepDiveSettings | None = None,
) -> DeepDiveReport:
    """Like get_deep_dive_issues, but record per-issue failures instead of raising.

    Failing to list the issues themselves still raises GitHubError.
    """
    settings = settings or DeepDiveSettings()
    now = now or datetime.now(timezone.utc)

    report = DeepDiveReport()
    for issue in _list_deep_dives(tracker, owner, repo, settings):
        try:
            report.updates.append(
                build_issue_update(tracker, owner, repo, issue, now=now, settings=settings)
            )
        except (DeepDiveError, GitHubError) as e:
            logger.warning("Skipping deep dive #%d (%s): %s", issue.number, issue.title, e)
            report.failures.append(
                IssueFailure(id=issue.number, url=issue.web_url, title=issue.title, error=str(e))
            )

    logger.info(
        "Collected %d update(s) and %d failure(s) for %s/%s",
        len(report.updates),
        len(report.failures),
        owner,
        repo,
    )
    return report
