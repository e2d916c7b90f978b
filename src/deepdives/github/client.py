"""GitHubClient - Reads issues and comments from the GitHub REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from deepdives.github.exceptions import (
    GitHubAuthError,
    GitHubRequestError,
    RepositoryNotFoundError,
)
from deepdives.github.models import Comment, Issue
from deepdives.logging import response_excerpt

logger = logging.getLogger("deepdives.github")

PER_PAGE = 100


class GitHubClient:
    """Read-only GitHub REST client implementing IssueTracker.

    Every list call follows the ``Link: rel="next"`` header until the last
    page, so callers always receive the complete result.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ) -> None:
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token (may be empty for public repos)
            base_url: GitHub API base URL (for testing/enterprise)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the GitHub API."""
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.Client(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, url: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Issue a GET request and map failures to GitHubError subclasses.

        Args:
            url: Path relative to base_url, or an absolute next-page URL
            params: Query parameters

        Returns:
            The successful response

        Raises:
            GitHubAuthError: On 401/403
            RepositoryNotFoundError: On 404
            GitHubRequestError: On any other failure
        """
        try:
            response = self.client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error("GET %s failed: %s", url, e)
            raise GitHubRequestError(f"GET {url} failed: {e}") from e

        if response.status_code == 200:
            return response

        detail = response_excerpt(response.text)
        logger.error("GET %s returned %d: %s", url, response.status_code, detail)
        if response.status_code in (401, 403):
            raise GitHubAuthError(f"GitHub denied access to {url}: {response.status_code}")
        if response.status_code == 404:
            raise RepositoryNotFoundError(f"Not found: {url}")
        raise GitHubRequestError(
            f"GET {url} failed: {response.status_code} - {detail}",
            status_code=response.status_code,
        )

    def _paginate(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Fetch every page of a list endpoint.

        Args:
            path: Endpoint path
            params: Query parameters for the first page

        Returns:
            Concatenated items from all pages
        """
        items: list[dict[str, Any]] = []
        url: str | None = path
        page_params: dict[str, Any] | None = {**params, "per_page": PER_PAGE}
        pages = 0

        while url:
            response = self._get(url, params=page_params)
            payload = response.json()
            if not isinstance(payload, list):
                raise GitHubRequestError(
                    f"Expected a list from {url}, got {type(payload).__name__}"
                )
            items.extend(payload)
            pages += 1

            # Next-page URLs already carry the query string
            url = response.links.get("next", {}).get("url")
            page_params = None

        logger.debug("Fetched %d item(s) from %s in %d page(s)", len(items), path, pages)
        return items

    def list_issues(
        self, owner: str, repo: str, *, labels: str, state: str = "open"
    ) -> list[Issue]:
        """List all issues with the given label(s).

        Pull requests, which the issues endpoint also returns, are skipped.

        Args:
            owner: Repository owner
            repo: Repository name
            labels: Comma-separated label names
            state: Issue state filter ("open", "closed" or "all")

        Returns:
            Issues in API order
        """
        logger.info("Listing %s issues labeled %r in %s/%s", state, labels, owner, repo)
        data = self._paginate(
            f"/repos/{owner}/{repo}/issues",
            {"labels": labels, "state": state},
        )
        issues = [Issue.from_api(item) for item in data if "pull_request" not in item]
        logger.info("Found %d issue(s) in %s/%s", len(issues), owner, repo)
        return issues

    def list_comments(self, owner: str, repo: str, issue_number: int) -> list[Comment]:
        """List all comments on an issue.

        Args:
            owner: Repository owner
            repo: Repository name
            issue_number: Issue number (not the global issue id)

        Returns:
            Comments in creation order
        """
        logger.debug("Listing comments on %s/%s#%d", owner, repo, issue_number)
        data = self._paginate(f"/repos/{owner}/{repo}/issues/{issue_number}/comments", {})
        return [Comment.from_api(item) for item in data]
