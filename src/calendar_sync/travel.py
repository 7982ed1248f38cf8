"""Travel-day padding around a conference's calendar event.

The travel summary lives at the top of the calendar event's description:

    ✈️ Travel: Jun 9
    📍 Conference: Jun 10 - Jun 12
    ✈️ Return: Jun 13 - Jun 14

    <original description>

It is always rebuilt from the conference itself, after stripping any
previous summary, so repeated edits never stack stale blocks.
"""

import re
from dataclasses import dataclass

from src.config import TRAVEL_GLYPH, CONFERENCE_GLYPH
from src.utils import shift_date, format_short_date

# Leading run of lines starting with ✈ (with or without the emoji
# variation selector) or 📍, plus any blank lines that follow it.
TRAVEL_BLOCK_PATTERN = re.compile(r"\A(?:(?:\u2708\ufe0f?|\U0001F4CD)[^\n]*(?:\n|\Z))+\n*")


@dataclass(frozen=True)
class TravelDays:
    before: int = 0
    after: int = 0

    def __post_init__(self):
        if self.before < 0 or self.after < 0:
            raise ValueError("Travel days cannot be negative")

    @property
    def any(self) -> bool:
        return self.before > 0 or self.after > 0

    @classmethod
    def from_form(cls, enabled: bool, before, after) -> "TravelDays | None":
        """Build from dialog inputs; non-numeric values count as 0."""
        if not enabled:
            return None
        return cls(before=_to_days(before), after=_to_days(after))


def _to_days(value) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


def travel_date_range(start_date: str, end_date: str, travel_days: TravelDays = None) -> tuple:
    """Calendar (start, end) widened by the travel days."""
    if not travel_days:
        return start_date, end_date
    if travel_days.before > 0:
        start_date = shift_date(start_date, -travel_days.before)
    if travel_days.after > 0:
        end_date = shift_date(end_date, travel_days.after)
    return start_date, end_date


def build_travel_summary(start_date: str, end_date: str, travel_days: TravelDays) -> str:
    """Travel/conference/return lines for the description header."""
    lines = []
    if travel_days.before > 0:
        lines.append(f"{TRAVEL_GLYPH} Travel: {format_short_date(shift_date(start_date, -travel_days.before))}")
    lines.append(
        f"{CONFERENCE_GLYPH} Conference: {format_short_date(start_date)} - {format_short_date(end_date)}"
    )
    if travel_days.after > 0:
        lines.append(
            f"{TRAVEL_GLYPH} Return: {format_short_date(shift_date(end_date, 1))}"
            f" - {format_short_date(shift_date(end_date, travel_days.after))}"
        )
    return "\n".join(lines)


def strip_travel_summary(description: str | None) -> str:
    """Remove a leading travel summary block, if present."""
    if not description:
        return ""
    return TRAVEL_BLOCK_PATTERN.sub("", description, count=1).strip()


def compose_description(conference: dict, travel_days: TravelDays = None) -> str:
    """Calendar description for a conference, with travel header when padded."""
    description = strip_travel_summary(conference.get("description"))
    if not travel_days or not travel_days.any:
        return description
    summary = build_travel_summary(conference["start_date"], conference["end_date"], travel_days)
    return summary + ("\n\n" + description if description else "")
