"""Deep-dive status endpoints."""

import logging

from fastapi import APIRouter

from deepdives.api.dependencies import SettingsDep, TrackerDep
from deepdives.api.models import (
    APIResponse,
    DeepDiveReportResponse,
    DigestResponse,
    report_to_response,
)
from deepdives.deep_dives import (
    collect_deep_dive_report,
    format_digest,
    format_failure,
    format_update,
)

logger = logging.getLogger("deepdives.api.deep_dives")

router = APIRouter(tags=["deep-dives"])


@router.get(
    "/repos/{owner}/{repo}/deep-dives",
    response_model=APIResponse[DeepDiveReportResponse],
)
def list_deep_dives(
    owner: str, repo: str, tracker: TrackerDep, settings: SettingsDep
) -> APIResponse[DeepDiveReportResponse]:
    """Status of every open deep dive, with issues that could not be checked."""
    report = collect_deep_dive_report(tracker, owner, repo, settings=settings)
    return APIResponse(data=report_to_response(report))


@router.get(
    "/repos/{owner}/{repo}/deep-dives/digest",
    response_model=APIResponse[DigestResponse],
)
def get_digest(
    owner: str, repo: str, tracker: TrackerDep, settings: SettingsDep
) -> APIResponse[DigestResponse]:
    """Rendered digest fragment; unchecked issues are listed after the rest."""
    report = collect_deep_dive_report(tracker, owner, repo, settings=settings)
    lines = [format_update(u) for u in report.updates]
    lines += [format_failure(f) for f in report.failures]
    logger.info(
        "Digest for %s/%s: %d issues, %d failures",
        owner,
        repo,
        len(report.updates),
        len(report.failures),
    )
    return APIResponse(
        data=DigestResponse(
            digest=format_digest(lines),
            count=len(report.updates),
            failures=len(report.failures),
        )
    )
