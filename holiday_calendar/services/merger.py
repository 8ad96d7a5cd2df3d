"""Combine upstream feed events with supplementary holidays."""
import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Iterable

from holiday_calendar.holidays import all_holidays_for_range
from holiday_calendar.models import CalendarEvent, HolidayDefinition

logger = logging.getLogger(__name__)


def holiday_to_event(holiday: HolidayDefinition) -> CalendarEvent:
    return CalendarEvent(
        id=f"extra-{holiday.name}-{holiday.date.isoformat()}",
        title=holiday.name,
        date=holiday.date,
        description=holiday.description,
        category=holiday.category,
        origin="supplementary",
    )


def split_event(event: CalendarEvent) -> list[CalendarEvent]:
    """
    Split a multi-day event into one event per day.

    end_date is exclusive, so an event on 10-01 ending 10-04 covers
    10-01, 10-02 and 10-03. Split ids get a '-day{n}' suffix. An end_date
    before date is an empty span and yields no events.
    """
    if event.end_date is None or event.end_date == event.date:
        return [event.model_copy(update={"end_date": None})]

    days = (event.end_date - event.date).days
    return [
        event.model_copy(update={
            "id": f"{event.id}-day{index}",
            "date": event.date + timedelta(days=index),
            "end_date": None,
        })
        for index in range(days)
    ]


def merge_events(
    upstream_events: list[CalendarEvent],
    start_year: int,
    end_year: int,
) -> list[CalendarEvent]:
    """
    Merge upstream events with the supplementary holidays of [start_year, end_year].

    Events are deduplicated on (date, title). Supplementary events go in
    first and upstream events are written over them, so the upstream
    version of a shared entry is kept.
    """
    supplementary = [holiday_to_event(h) for h in all_holidays_for_range(start_year, end_year)]
    upstream = [
        day.model_copy(update={"origin": "upstream"})
        for event in upstream_events
        for day in split_event(event)
    ]

    merged: dict[tuple[date, str], CalendarEvent] = {}

    # Phase 1: supplementary holidays
    for event in supplementary:
        merged[(event.date, event.title)] = event

    # Phase 2: upstream events replace same-day, same-title entries
    overridden = 0
    for event in upstream:
        key = (event.date, event.title)
        if key in merged and merged[key].origin == "supplementary":
            overridden += 1
        merged[key] = event

    logger.info(
        f"Merged {len(upstream)} upstream and {len(supplementary)} supplementary events "
        f"into {len(merged)} ({overridden} supplementary replaced by upstream)"
    )

    return sorted(merged.values(), key=lambda e: e.date)


def filter_by_years(events: list[CalendarEvent], years: Iterable[int]) -> list[CalendarEvent]:
    """Keep only events dated in one of the given years."""
    year_set = set(years)
    return [e for e in events if e.date.year in year_set]


def group_by_year(events: list[CalendarEvent]) -> dict[int, list[CalendarEvent]]:
    grouped: dict[int, list[CalendarEvent]] = defaultdict(list)
    for event in events:
        grouped[event.date.year].append(event)
    return dict(grouped)


def group_by_month(events: list[CalendarEvent]) -> dict[str, list[CalendarEvent]]:
    """Group events under 'YYYY-MM' keys."""
    grouped: dict[str, list[CalendarEvent]] = defaultdict(list)
    for event in events:
        grouped[event.date.strftime("%Y-%m")].append(event)
    return dict(grouped)
