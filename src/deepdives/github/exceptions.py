"""Custom exceptions for the GitHub client."""


class GitHubError(Exception):
    """Base exception for GitHub client errors."""


class RepositoryNotFoundError(GitHubError):
    """Repository (or issue) does not exist or is not visible to the token."""


class GitHubAuthError(GitHubError):
    """Token missing, invalid, or lacking permission for the request."""


class GitHubRequestError(GitHubError):
    """Request failed with an unexpected status or a transport error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
