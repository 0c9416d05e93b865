"""Statement date normalization.

Statements write dates as ``DD/MM/YYYY`` with an optional ``HH:MM:SS``
suffix. This module turns them into sortable keys:

- ``parse_calendar_day`` -> ``CalendarDay("YYYY-MM-DD")`` or ``Unparsed``
- ``to_calendar_day``    -> the key, or the original text when unparseable
- ``parse_instant``      -> ``datetime`` (midnight when no time is given)

Unrecognized input never raises. Callers decide what to do with ``Unparsed``;
the aggregator and reconciler leave those rows out of date buckets.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional, Tuple, Union

from trade_ledger_engine.constants import MONTH_KEY_LENGTH


_TIME_OF_DAY = re.compile(r"(\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.\d+)?)?")


@dataclass(frozen=True)
class CalendarDay:
    """A normalized ``YYYY-MM-DD`` key."""

    value: str

    @property
    def month(self) -> str:
        return month_key(self.value)


@dataclass(frozen=True)
class Unparsed:
    """Input that did not match the statement date shape, kept verbatim."""

    original: str


ParsedDay = Union[CalendarDay, Unparsed]


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _split(value: Any) -> Tuple[str, Optional[str]]:
    parts = _as_text(value).split()
    if not parts:
        return "", None
    return parts[0], (parts[1] if len(parts) > 1 else None)


def _parse_date_part(date_part: str) -> Optional[date]:
    pieces = date_part.split("/")
    if len(pieces) != 3 or not all(p.isdigit() for p in pieces):
        return None
    day, month, year = pieces
    if len(year) != 4:
        return None
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def _parse_time_part(time_part: Optional[str]) -> Optional[time]:
    if time_part is None:
        return time(0, 0, 0)
    # fractional seconds are dropped
    match = _TIME_OF_DAY.fullmatch(time_part)
    if match is None:
        return None
    hours, minutes, seconds = match.groups()
    try:
        return time(int(hours), int(minutes), int(seconds or 0))
    except ValueError:
        return None


def parse_calendar_day(value: Any) -> ParsedDay:
    """Normalize a statement date to ``CalendarDay`` or report it ``Unparsed``."""
    if isinstance(value, datetime):
        return CalendarDay(value.date().isoformat())
    if isinstance(value, date):
        return CalendarDay(value.isoformat())

    date_part, _ = _split(value)
    parsed = _parse_date_part(date_part)
    if parsed is None:
        return Unparsed(_as_text(value))
    return CalendarDay(parsed.isoformat())


def to_calendar_day(value: Any) -> str:
    """Return ``YYYY-MM-DD`` for a statement date, or the input text unchanged."""
    parsed = parse_calendar_day(value)
    if isinstance(parsed, CalendarDay):
        return parsed.value
    return parsed.original


def parse_instant(value: Any) -> Optional[datetime]:
    """Full timestamp for ordering snapshots; ``None`` when unparseable."""
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time(0, 0, 0))

    date_part, time_part = _split(value)
    parsed_date = _parse_date_part(date_part)
    if parsed_date is None:
        return None
    parsed_time = _parse_time_part(time_part)
    if parsed_time is None:
        return None
    return datetime.combine(parsed_date, parsed_time)


to_instant = parse_instant


def month_key(day: str) -> str:
    return day[:MONTH_KEY_LENGTH]
