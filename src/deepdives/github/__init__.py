"""GitHub client - Reads deep-dive issues and their comments."""

from deepdives.github.client import GitHubClient
from deepdives.github.exceptions import (
    GitHubAuthError,
    GitHubError,
    GitHubRequestError,
    RepositoryNotFoundError,
)
from deepdives.github.models import Comment, Issue
from deepdives.github.tracker import IssueTracker

__all__ = [
    "Comment",
    "GitHubAuthError",
    "GitHubClient",
    "GitHubError",
    "GitHubRequestError",
    "Issue",
    "IssueTracker",
    "RepositoryNotFoundError",
]
