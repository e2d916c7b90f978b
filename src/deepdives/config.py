"""Settings for the deep-dive digest."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_LABEL = "Deep-dive"
DEFAULT_RECORDING_MARKER = "github.rewatch.com"
DEFAULT_NOTES_MARKER = "/accessibility/blob/main/docs/deep-dive-notes/"
DEFAULT_TIMEOUT = 30.0


class ConfigError(Exception):
    """Raised when a setting has an invalid value."""


@dataclass(frozen=True)
class DeepDiveSettings:
    """Settings shared by the collector, the evaluator and the API.

    Attributes:
        token: GitHub token. Empty means unauthenticated requests.
        api_url: GitHub REST API base URL.
        label: Label that marks an issue as a deep dive.
        recording_marker: Substring of a comment that proves a recording exists.
        notes_marker: Substring of a comment that proves notes were published.
        timeout: Per-request timeout in seconds.
    """

    token: str = ""
    api_url: str = DEFAULT_API_URL
    label: str = DEFAULT_LABEL
    recording_marker: str = DEFAULT_RECORDING_MARKER
    notes_marker: str = DEFAULT_NOTES_MARKER
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> DeepDiveSettings:
        """Build settings from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Returns:
            Settings with unset variables left at their defaults.

        Raises:
            ConfigError: If DEEPDIVES_TIMEOUT is not a positive number.
        """
        if env is None:
            env = os.environ

        raw_timeout = env.get("DEEPDIVES_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(f"DEEPDIVES_TIMEOUT must be a number, got {raw_timeout!r}") from e
            if timeout <= 0:
                raise ConfigError(f"DEEPDIVES_TIMEOUT must be positive, got {raw_timeout!r}")

        return cls(
            token=get_github_token(env),
            api_url=env.get("DEEPDIVES_API_URL") or DEFAULT_API_URL,
            label=env.get("DEEPDIVES_LABEL") or DEFAULT_LABEL,
            recording_marker=env.get("DEEPDIVES_RECORDING_MARKER") or DEFAULT_RECORDING_MARKER,
            notes_marker=env.get("DEEPDIVES_NOTES_MARKER") or DEFAULT_NOTES_MARKER,
            timeout=timeout,
        )


def get_github_token(env: Mapping[str, str] | None = None) -> str:
    """Get GitHub token from environment or gh CLI."""
    if env is None:
        env = os.environ
    token = env.get("GITHUB_TOKEN")
    if token:
        return token
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""
