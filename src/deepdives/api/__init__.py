"""REST API for deepdives."""

from deepdives.api.app import app, create_app
from deepdives.api.models import (
    APIResponse,
    DeepDiveReportResponse,
    DigestResponse,
    IssueUpdateResponse,
)

__all__ = [
    "APIResponse",
    "DeepDiveReportResponse",
    "DigestResponse",
    "IssueUpdateResponse",
    "app",
    "create_app",
]
