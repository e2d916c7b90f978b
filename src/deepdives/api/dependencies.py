"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from deepdives.config import DeepDiveSettings
from deepdives.github import IssueTracker

# Global IssueTracker instance (initialized on app startup)
_tracker: IssueTracker | None = None


def init_tracker(tracker: IssueTracker) -> None:
    """Initialize the global IssueTracker instance."""
    global _tracker  # noqa: PLW0603
    _tracker = tracker


def close_tracker() -> None:
    """Close the global IssueTracker instance."""
    global _tracker  # noqa: PLW0603
    close = getattr(_tracker, "close", None)
    if close is not None:
        close()
    _tracker = None


def get_tracker() -> Generator[IssueTracker, None, None]:
    """Dependency that provides the IssueTracker instance."""
    if _tracker is None:
        raise RuntimeError("IssueTracker not initialized. Call init_tracker() first.")
    yield _tracker


# Type alias for dependency injection
TrackerDep = Annotated[IssueTracker, Depends(get_tracker)]

# Global settings (initialized on app startup)
_settings: DeepDiveSettings | None = None


def init_settings(settings: DeepDiveSettings) -> None:
    """Initialize the global settings."""
    global _settings  # noqa: PLW0603
    _settings = settings


def close_settings() -> None:
    """Clear the global settings."""
    global _settings  # noqa: PLW0603
    _settings = None


def get_settings() -> Generator[DeepDiveSettings, None, None]:
    """Dependency that provides the settings."""
    if _settings is None:
        raise RuntimeError("Settings not initialized. Call init_settings() first.")
    yield _settings


SettingsDep = Annotated[DeepDiveSettings, Depends(get_settings)]
