"""Data models for the GitHub client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Issue:
    """An issue as returned by the GitHub REST API."""

    number: int
    title: str
    body: str
    url: str  # API URL
    html_url: str = ""
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Issue:
        """Build an Issue from a REST API payload."""
        label_names = [
            label["name"] if isinstance(label, dict) else str(label)
            for label in data.get("labels") or []
        ]
        return cls(
            number=int(data["number"]),
            title=data.get("title") or "",
            body=data.get("body") or "",
            url=data.get("url") or "",
            html_url=data.get("html_url") or "",
            labels=label_names,
        )

    @property
    def web_url(self) -> str:
        """Browser URL, falling back to the API URL."""
        return self.html_url or self.url


@dataclass
class Comment:
    """An issue comment."""

    id: int
    body: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Comment:
        """Build a Comment from a REST API payload."""
        return cls(id=int(data.get("id", 0)), body=data.get("body") or "")
