"""Unit tests for deep-dive body extractors."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from deepdives.deep_dives import (
    DeepDiveError,
    DueDateNotFoundError,
    DueDateParseError,
    MissingFields,
    extractors,
    get_due_date,
    get_missing_fields,
    parse_due_date,
)
from deepdives.deep_dives.extractors import get_timing_section


@pytest.mark.unit
class TestGetDueDate:
    """Tests for get_due_date."""

    def test_iso_timestamp(self, make_body) -> None:
        """ISO timestamps in the Timing section are parsed exactly."""
        due = get_due_date(make_body(timing="2024-03-15T17:00:00Z"))

        assert due == datetime(2024, 3, 15, 17, 0, tzinfo=timezone.utc)
        assert due.isoformat() == "2024-03-15T17:00:00+00:00"

    def test_returns_utc(self, make_body) -> None:
        """Offsets are converted to UTC."""
        due = get_due_date(make_body(timing="2024-03-15T10:00:00-07:00"))

        assert due.tzinfo == timezone.utc
        assert due.hour == 17

    def test_missing_timing_section_raises(self, make_body) -> None:
        """A body without a Timing heading raises DueDateNotFoundError."""
        with pytest.raises(DueDateNotFoundError):
            get_due_date(make_body(timing=None))

    def test_empty_timing_section_raises(self) -> None:
        """A Timing heading with no text before the event link raises."""
        body = "## Timing\n\n[Google Event](https://calendar.google.com/x)\n"

        with pytest.raises(DueDateNotFoundError):
            get_due_date(body)

    def test_empty_body_raises(self) -> None:
        """Empty bodies have no due date."""
        with pytest.raises(DueDateNotFoundError):
            get_due_date("")

    def test_unparseable_date_raises(self, make_body) -> None:
        """Text that is not a date raises DueDateParseError."""
        with pytest.raises(DueDateParseError) as exc_info:
            get_due_date(make_body(timing="sometime next week"))

        assert "sometime next week" in str(exc_info.value)

    def test_errors_share_base_class(self, make_body) -> None:
        """Both failures are DeepDiveErrors."""
        with pytest.raises(DeepDiveError):
            get_due_date(make_body(timing=None))
        with pytest.raises(DeepDiveError):
            get_due_date(make_body(timing="soon"))


@pytest.mark.unit
class TestGetTimingSection:
    """Tests for locating the Timing section."""

    def test_stops_at_event_marker(self) -> None:
        """Only the text before the calendar link is used."""
        body = "## Timing\nMarch 3, 2022 [Google Event](https://calendar.google.com/x)"

        assert get_timing_section(body) == "March 3, 2022"

    def test_stops_at_next_heading_without_marker(self) -> None:
        """Without the event link the section ends at the next heading."""
        body = "## Timing\n\nMarch 3, 2022\n\n## Volunteers\nLeader: @a\n"

        assert get_timing_section(body) == "March 3, 2022"

    def test_heading_level_and_case_ignored(self) -> None:
        """Any heading level and letter case is accepted."""
        body = "### timing\n2022-03-03\n[Google Event](x)"

        assert get_timing_section(body) == "2022-03-03"

    @pytest.mark.parametrize(
        "heading", ["## Timing:", "## Timing (ET)", "### Timing - all times Pacific", "# Timing ##"]
    )
    def test_heading_with_trailing_note(self, heading: str) -> None:
        """Punctuation or a note after the word Timing still marks the section."""
        body = f"{heading}\nMarch 3, 2022\n[Google Event](x)"

        assert get_timing_section(body) == "March 3, 2022"
        assert get_due_date(body) == datetime(2022, 3, 3, tzinfo=timezone.utc)

    def test_longer_word_is_not_timing(self) -> None:
        """A heading such as Timings is a different section."""
        with pytest.raises(DueDateNotFoundError):
            get_timing_section("## Timings\nMarch 3, 2022\n[Google Event](x)")

    def test_html_comments_ignored(self) -> None:
        """Template hints in HTML comments are skipped."""
        body = "## Timing\n<!-- add the date below -->\n**March 3, 2022**\n[Google Event](x)"

        assert get_timing_section(body) == "March 3, 2022"

    def test_timing_in_prose_is_not_a_heading(self) -> None:
        """The word Timing outside a heading does not start a section."""
        body = "Timing\nMarch 3, 2022\n[Google Event](x)"

        with pytest.raises(DueDateNotFoundError):
            get_timing_section(body)


@pytest.mark.unit
class TestParseDueDate:
    """Tests for parse_due_date."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("2022-03-03", datetime(2022, 3, 3, 0, 0, tzinfo=timezone.utc)),
            ("03/03/2022", datetime(2022, 3, 3, 0, 0, tzinfo=timezone.utc)),
            ("March 3, 2022", datetime(2022, 3, 3, 0, 0, tzinfo=timezone.utc)),
            ("Mar 3 2022 13:30", datetime(2022, 3, 3, 13, 30, tzinfo=timezone.utc)),
            ("2022-03-03 13:00 UTC", datetime(2022, 3, 3, 13, 0, tzinfo=timezone.utc)),
            ("March 3, 2022 1pm PST", datetime(2022, 3, 3, 21, 0, tzinfo=timezone.utc)),
            ("March 3, 2022 1:00 p.m. EST", datetime(2022, 3, 3, 18, 0, tzinfo=timezone.utc)),
            ("March 3, 2022 13:00 +02:00", datetime(2022, 3, 3, 11, 0, tzinfo=timezone.utc)),
            ("3 March 2022 09:00 GMT", datetime(2022, 3, 3, 9, 0, tzinfo=timezone.utc)),
        ],
    )
    def test_supported_formats(self, text: str, expected: datetime) -> None:
        """Common written date forms parse to the right UTC instant."""
        assert parse_due_date(text) == expected

    def test_weekday_ordinal_and_at(self) -> None:
        """Weekday prefix, ordinal suffix and 'at' are tolerated."""
        due = parse_due_date("Thursday, March 3rd, 2022 at 1:00 PM EST")

        assert due == datetime(2022, 3, 3, 18, 0, tzinfo=timezone.utc)

    def test_generic_zone_follows_dst(self) -> None:
        """ET resolves to EDT after the March DST change."""
        due = parse_due_date("March 14, 2024 1:00 PM ET")

        assert due == datetime(2024, 3, 14, 17, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        ("zone", "utc_hour"), [("ET", 18), ("CT", 19), ("MT", 20), ("PT", 21)]
    )
    def test_every_generic_zone_resolves(self, zone: str, utc_hour: int) -> None:
        """All four US generic zones resolve in winter."""
        due = parse_due_date(f"January 9, 2025 1:00 PM {zone}")

        assert due == datetime(2025, 1, 9, utc_hour, 0, tzinfo=timezone.utc)

    def test_missing_zone_data_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without zone data a generic zone is a parse error, not a crash."""

        def no_zone(key: str) -> ZoneInfo:
            raise ZoneInfoNotFoundError(key)

        monkeypatch.setattr(extractors, "ZoneInfo", no_zone)

        with pytest.raises(DueDateParseError, match="No time zone data for PT"):
            parse_due_date("March 14, 2024 1:00 PM PT")

    def test_naive_values_are_utc(self) -> None:
        """Values without a zone are taken as UTC."""
        assert parse_due_date("2022-03-03T13:00:00").tzinfo == timezone.utc

    def test_garbage_raises(self) -> None:
        """Unknown formats raise DueDateParseError."""
        with pytest.raises(DueDateParseError):
            parse_due_date("the third of march")


@pytest.mark.unit
class TestGetMissingFields:
    """Tests for get_missing_fields."""

    def test_both_roles_filled(self, make_body) -> None:
        """Named volunteers mean nothing is missing."""
        assert get_missing_fields(make_body()) == MissingFields(leader=False, notetaker=False)

    def test_both_roles_empty(self, make_body) -> None:
        """Empty role lines are unfilled."""
        fields = get_missing_fields(make_body(leader="", notetaker=""))

        assert fields == MissingFields(leader=True, notetaker=True)

    def test_role_lines_absent(self, make_body) -> None:
        """A role with no line at all is unfilled."""
        fields = get_missing_fields(make_body(leader=None, notetaker="@hubot"))

        assert fields.leader is True
        assert fields.notetaker is False

    @pytest.mark.parametrize("placeholder", ["TBD", "tba", "?", "-", "N/A", "_none_"])
    def test_placeholders_are_unfilled(self, make_body, placeholder: str) -> None:
        """Placeholder values do not count as a volunteer."""
        fields = get_missing_fields(make_body(leader=placeholder))

        assert fields.leader is True
        assert fields.notetaker is False

    def test_markdown_bullets_and_bold(self) -> None:
        """Bulleted, bolded labels are recognised."""
        body = "- **Leader:** @octocat\n- **Notetaker:**\n"

        assert get_missing_fields(body) == MissingFields(leader=False, notetaker=True)

    def test_roles_on_one_line(self) -> None:
        """The leader value stops at the Notetaker marker."""
        assert get_missing_fields("Leader: @a Notetaker: @b") == MissingFields(
            leader=False, notetaker=False
        )
        assert get_missing_fields("Leader: Notetaker: @b") == MissingFields(
            leader=True, notetaker=False
        )

    def test_html_comment_value_is_unfilled(self) -> None:
        """A template hint alone is not a volunteer."""
        body = "Leader: <!-- your handle here -->\nNotetaker: @hubot"

        assert get_missing_fields(body).leader is True

    def test_case_insensitive_labels(self) -> None:
        """Label case does not matter."""
        assert get_missing_fields("leader: @a\nNOTETAKER: @b") == MissingFields()

    def test_value_on_next_line(self) -> None:
        """A handle written under an empty label fills the role."""
        body = "Leader:\n@octocat\nNotetaker: @a"

        assert get_missing_fields(body) == MissingFields(leader=False, notetaker=False)

    def test_next_line_bullet_and_bold_label(self) -> None:
        """The next-line value may be a nested bullet under a bold label."""
        body = "- **Notetaker:**\n  - @hubot\n- **Leader:** @octocat"

        assert get_missing_fields(body) == MissingFields(leader=False, notetaker=False)

    @pytest.mark.parametrize(
        "following",
        ["", "## Agenda", "Notetaker: @hubot", "TBD"],
    )
    def test_next_line_that_is_not_a_value(self, following: str) -> None:
        """Blank lines, headings, other roles and placeholders leave the role open."""
        body = f"Leader:\n{following}\n"

        assert get_missing_fields(body).leader is True

    def test_same_line_placeholder_ignores_next_line(self) -> None:
        """An explicit placeholder is not overridden by the following line."""
        body = "Leader: TBD\n@octocat\n"

        assert get_missing_fields(body).leader is True

    def test_first_line_wins(self) -> None:
        """Later duplicate lines do not override the first."""
        body = "Leader: @a\nNotetaker: @b\n\nLeader:\n"

        assert get_missing_fields(body).leader is False
