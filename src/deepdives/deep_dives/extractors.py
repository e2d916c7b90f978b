"""Extract the schedule and volunteer roles from a deep-dive issue body.

Deep-dive issues are opened from a template that looks like::

    ## Timing
    Thursday, March 3rd, 2022 at 1:00 PM ET
    [Google Event](https://calendar.google.com/...)

    ## Volunteers
    Leader: @octocat
    Notetaker:

Everything here is a pure function of the body text.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from deepdives.deep_dives.exceptions import DueDateNotFoundError, DueDateParseError
from deepdives.deep_dives.models import MissingFields

logger = logging.getLogger("deepdives.deep_dives.extractors")

EVENT_MARKER = "[Google Event"

# "## Timing", "## Timing:", "## Timing (ET)"; a zone in the heading is not applied
_TIMING_HEADING_RE = re.compile(
    r"^[ \t]*#{1,6}[ \t]*Timing[ \t]*(?:[:(\[-][^\n]*)?#*[ \t]*$", re.IGNORECASE | re.MULTILINE
)
_ANY_HEADING_RE = re.compile(r"^[ \t]*#{1,6}[ \t]+\S", re.MULTILINE)
_HTML_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)

# Zone abbreviations seen in deep-dive invites. Generic names follow DST.
_FIXED_ZONES: dict[str, tzinfo] = {
    "UTC": timezone.utc,
    "GMT": timezone.utc,
    "EST": timezone(timedelta(hours=-5)),
    "EDT": timezone(timedelta(hours=-4)),
    "CST": timezone(timedelta(hours=-6)),
    "CDT": timezone(timedelta(hours=-5)),
    "MST": timezone(timedelta(hours=-7)),
    "MDT": timezone(timedelta(hours=-6)),
    "PST": timezone(timedelta(hours=-8)),
    "PDT": timezone(timedelta(hours=-7)),
}
_GENERIC_ZONES = {
    "ET": "America/New_York",
    "CT": "America/Chicago",
    "MT": "America/Denver",
    "PT": "America/Los_Angeles",
}
_ZONE_SUFFIX_RE = re.compile(
    r"\s*\(?\b(" + "|".join([*_FIXED_ZONES, *_GENERIC_ZONES]) + r")\)?$"
)
_OFFSET_SUFFIX_RE = re.compile(r"\s*(?:UTC|GMT)?([+-])(\d{1,2}):?(\d{2})?$")

_WEEKDAY_RE = re.compile(r"^(?:mon|tue|wed|thu|fri|sat|sun)[a-z]*\.?,?\s+", re.IGNORECASE)
_ORDINAL_RE = re.compile(r"\b(\d{1,2})(?:st|nd|rd|th)\b", re.IGNORECASE)
_AT_RE = re.compile(r"\s+(?:at|@)\s+", re.IGNORECASE)
_TIME_12H_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?\s*([ap])\.?m\.?(?=\s|$)", re.IGNORECASE)

_DATE_FORMATS = (
    "%B %d %Y %I:%M %p",
    "%b %d %Y %I:%M %p",
    "%B %d %Y %H:%M",
    "%b %d %Y %H:%M",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y %I:%M %p",
    "%d %B %Y %H:%M",
    "%d %B %Y",
    "%d %b %Y",
    "%Y-%m-%d %I:%M %p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%Y/%m/%d",
)

_ROLE_LINE_RE = re.compile(
    r"^[ \t]*(?:[-*+][ \t]+)?(?:\*\*|__)?(leader|notetaker)(?:\*\*|__)?[ \t]*:(.*)$",
    re.IGNORECASE | re.MULTILINE,
)
_ROLE_MARKER_RE = re.compile(
    r"(?:\*\*|__)?\b(leader|notetaker)(?:\*\*|__)?[ \t]*:", re.IGNORECASE
)
_PLACEHOLDERS = frozenset({"", "tbd", "tba", "?", "-", "_", "n/a", "na", "none", "todo"})


def get_timing_section(body: str) -> str:
    """Return the first non-empty line of the Timing section.

    The section runs from the ``Timing`` heading to the calendar-event link,
    or to the next heading when the link is missing.

    Raises:
        DueDateNotFoundError: If there is no Timing heading or it is empty.
    """
    body = _HTML_COMMENT_RE.sub("", body or "")
    heading = _TIMING_HEADING_RE.search(body)
    if heading is None:
        raise DueDateNotFoundError("No date found for Deep Dive: missing Timing section")

    rest = body[heading.end() :]
    marker_at = rest.find(EVENT_MARKER)
    if marker_at >= 0:
        section = rest[:marker_at]
    else:
        next_heading = _ANY_HEADING_RE.search(rest)
        section = rest[: next_heading.start()] if next_heading else rest

    for line in section.splitlines():
        text = line.strip().lstrip("-*+> ").strip("*_ \t")
        if text:
            return text

    raise DueDateNotFoundError("No date found for Deep Dive: Timing section is empty")


def _resolve_zone(text: str) -> tuple[str, tzinfo | None]:
    """Split a trailing zone abbreviation or UTC offset off the date text."""
    match = _ZONE_SUFFIX_RE.search(text)
    if match:
        name = match.group(1)
        if name in _FIXED_ZONES:
            return text[: match.start()], _FIXED_ZONES[name]
        try:
            return text[: match.start()], ZoneInfo(_GENERIC_ZONES[name])
        except ZoneInfoNotFoundError as e:
            raise DueDateParseError(f"No time zone data for {name}") from e

    match = _OFFSET_SUFFIX_RE.search(text)
    if match and not re.fullmatch(r"[\d-]+", text):
        sign = -1 if match.group(1) == "-" else 1
        offset = timedelta(hours=int(match.group(2)), minutes=int(match.group(3) or 0))
        return text[: match.start()], timezone(sign * offset)

    return text, None


def _normalize(text: str) -> str:
    """Reduce written dates to a shape the strptime formats accept."""
    text = _WEEKDAY_RE.sub("", text)
    text = _ORDINAL_RE.sub(r"\1", text)
    text = _AT_RE.sub(" ", text)
    text = _TIME_12H_RE.sub(
        lambda m: f"{m.group(1)}:{m.group(2) or '00'} {m.group(3).upper()}M", text
    )
    text = text.replace(",", " ")
    return " ".join(text.split())


def parse_due_date(text: str) -> datetime:
    """Parse a human-written session date.

    ISO-8601 is tried first, then a fixed list of written formats. Values
    without a zone are taken as UTC.

    Returns:
        Timezone-aware datetime in UTC.

    Raises:
        DueDateParseError: If the text matches no known format.
    """
    cleaned = text.strip().rstrip(".")
    try:
        parsed = datetime.fromisoformat(cleaned.replace("Z", "+00:00"))
    except ValueError:
        parsed = None

    if parsed is None:
        remainder, zone = _resolve_zone(cleaned)
        normalized = _normalize(remainder)
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(normalized, fmt)
            except ValueError:
                continue
            if zone is not None:
                parsed = parsed.replace(tzinfo=zone)
            break
        else:
            raise DueDateParseError(f"Unrecognised date in Timing section: {text!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def get_due_date(body: str) -> datetime:
    """Extract the session date from an issue body.

    Raises:
        DueDateNotFoundError: If the body has no usable Timing section.
        DueDateParseError: If the Timing text is not a date.
    """
    due_date = parse_due_date(get_timing_section(body))
    logger.debug("Parsed due date %s", due_date.isoformat())
    return due_date


def _is_filled(value: str) -> bool:
    value = value.strip().strip("*_").strip()
    return value.casefold() not in _PLACEHOLDERS


def _next_line_value(lines: list[str], index: int) -> str:
    """Value written on the line after an empty role label, if any."""
    if index + 1 >= len(lines):
        return ""
    line = lines[index + 1]
    if not line.strip() or _ANY_HEADING_RE.match(line) or _ROLE_LINE_RE.match(line):
        return ""
    return line.strip().lstrip("-*+> ")


def get_missing_fields(body: str) -> MissingFields:
    """Report which volunteer roles are unfilled.

    A role is filled when a line starting with ``Leader:`` or ``Notetaker:``
    has a value before the end of the line or the next role marker. When the
    label ends its line, the following line is read as the value unless it is
    blank, a heading or another role. A missing line, an empty value or a
    placeholder such as ``TBD`` leaves it unfilled. The first line for each
    role wins.
    """
    lines = _HTML_COMMENT_RE.sub("", body or "").splitlines()
    found: dict[str, bool] = {}

    for index, line in enumerate(lines):
        line_match = _ROLE_LINE_RE.match(line)
        if line_match is None:
            continue
        rest = line_match.group(2)
        # A second role may share the line: "Leader: @a Notetaker: @b"
        markers = list(_ROLE_MARKER_RE.finditer(rest))
        starts = [m.start() for m in markers] + [len(rest)]
        segments = [(line_match.group(1), rest[: starts[0]])]
        segments += [
            (marker.group(1), rest[marker.end() : starts[i + 1]])
            for i, marker in enumerate(markers)
        ]

        role, value = segments[-1]
        if not value.strip().strip("*_"):
            segments[-1] = (role, _next_line_value(lines, index))
        for role, value in segments:
            found.setdefault(role.lower(), _is_filled(value))

    return MissingFields(
        leader=not found.get("leader", False),
        notetaker=not found.get("notetaker", False),
    )
