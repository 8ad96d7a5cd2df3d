"""
iCalendar (.ics) feed parsing.

Content lines, folding and TEXT escapes are decoded by icalendar; this module
maps each VEVENT onto a CalendarEvent and tolerates broken events.
"""
import logging
import re
import uuid
from datetime import date, datetime
from typing import Any, Optional, Union, get_args

from icalendar import Calendar

from holiday_calendar.errors import MalformedFeed, MalformedFeedBlock
from holiday_calendar.models import CalendarEvent, Category

logger = logging.getLogger(__name__)

SPECIAL_DAY_PROPERTY = "X-APPLE-SPECIAL-DAY"
DAY_OFF_MARKER = "WORK-HOLIDAY"
MAKEUP_WORKDAY_MARKER = "ALTERNATE-WORKDAY"
DAY_OFF_TEXT = "（休）"
MAKEUP_WORKDAY_TEXT = "（班）"

CATEGORIES = set(get_args(Category))

DATE_PATTERN = re.compile(r"^(\d{4})-?(\d{2})-?(\d{2})(?:T[\dZ]*)?$")


def normalize_date(value: Union[str, date, datetime]) -> date:
    """
    Normalize a feed date to a date.

    Accepts compact 'YYYYMMDD', date-times such as '20240101T000000Z',
    'YYYY-MM-DD', or date/datetime objects.

    Raises:
        ValueError: value is not a recognizable calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    match = DATE_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Unrecognized date value: {value!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def _first(component, name: str) -> Optional[Any]:
    # Repeated properties come back as a list; the first occurrence wins
    value = component.get(name)
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _text(component, name: str) -> Optional[str]:
    value = _first(component, name)
    return None if value is None else str(value)


def _date(component, name: str) -> Optional[date]:
    prop = _first(component, name)
    if prop is None:
        return None
    value = getattr(prop, "dt", prop)
    return normalize_date(value if isinstance(value, date) else str(value))


def _category(component) -> Optional[str]:
    prop = _first(component, "CATEGORIES")
    if prop is None:
        return None
    names = getattr(prop, "cats", None) or str(prop).split(",")
    first = str(names[0]).strip().lower() if names else ""
    return first if first in CATEGORIES else None


def _parse_event(component) -> CalendarEvent:
    summary = _text(component, "SUMMARY") or ""

    try:
        start = _date(component, "DTSTART")
        end = _date(component, "DTEND")
    except ValueError as e:
        raise MalformedFeedBlock(f"VEVENT '{summary}' has a bad date: {e}") from e

    if start is None:
        errors = "; ".join(f"{name}: {message}" for name, message in component.errors)
        raise MalformedFeedBlock(f"VEVENT '{summary}' without DTSTART {errors}".rstrip())

    uid = (_text(component, "UID") or "").strip() or str(uuid.uuid4())
    special_day = (_text(component, SPECIAL_DAY_PROPERTY) or "").strip().upper()

    return CalendarEvent(
        id=uid,
        title=summary,
        date=start,
        end_date=end,
        description=_text(component, "DESCRIPTION"),
        is_day_off=special_day == DAY_OFF_MARKER or DAY_OFF_TEXT in summary,
        is_makeup_workday=special_day == MAKEUP_WORKDAY_MARKER or MAKEUP_WORKDAY_TEXT in summary,
        category=_category(component),
        origin="upstream",
    )


def parse_ics(raw: str) -> list[CalendarEvent]:
    """
    Parse iCalendar text into events.

    Events that cannot be turned into a CalendarEvent (no DTSTART, bad dates)
    are logged and skipped.

    Raises:
        MalformedFeed: the text is not an iCalendar object at all.
    """
    try:
        calendar = Calendar.from_ical(raw)
    except ValueError as e:
        raise MalformedFeed(f"Feed is not a valid iCalendar object: {e}") from e

    events = []
    for component in calendar.walk("VEVENT"):
        try:
            events.append(_parse_event(component))
        except MalformedFeedBlock as e:
            logger.warning(f"Skipping feed block: {e}")
            continue

    logger.info(f"Parsed {len(events)} events from feed")
    return events
