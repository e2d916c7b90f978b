"""Deep dives - Status digest for open deep-dive sessions."""

from deepdives.deep_dives.collector import (
    build_issue_update,
    collect_deep_dive_report,
    get_deep_dive_issues,
)
from deepdives.deep_dives.evaluator import (
    get_missing_updates,
    is_due_soon,
    is_high_priority,
    is_past_due,
)
from deepdives.deep_dives.exceptions import (
    DeepDiveError,
    DueDateNotFoundError,
    DueDateParseError,
)
from deepdives.deep_dives.extractors import get_due_date, get_missing_fields, parse_due_date
from deepdives.deep_dives.formatter import (
    format_digest,
    format_failure,
    format_update,
    get_and_format_deep_dive_updates,
    get_reason,
)
from deepdives.deep_dives.models import (
    DeepDiveReport,
    IssueFailure,
    IssueUpdate,
    MissingFields,
    MissingUpdates,
)

__all__ = [
    "DeepDiveError",
    "DeepDiveReport",
    "DueDateNotFoundError",
    "DueDateParseError",
    "IssueFailure",
    "IssueUpdate",
    "MissingFields",
    "MissingUpdates",
    "build_issue_update",
    "collect_deep_dive_report",
    "format_digest",
    "format_failure",
    "format_update",
    "get_and_format_deep_dive_updates",
    "get_deep_dive_issues",
    "get_due_date",
    "get_missing_fields",
    "get_missing_updates",
    "get_reason",
    "is_due_soon",
    "is_high_priority",
    "is_past_due",
    "parse_due_date",
]
