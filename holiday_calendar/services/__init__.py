from .calendar_service import CalendarService
from .merger import (
    filter_by_years,
    group_by_month,
    group_by_year,
    holiday_to_event,
    merge_events,
    split_event,
)

__all__ = [
    "CalendarService",
    "filter_by_years",
    "group_by_month",
    "group_by_year",
    "holiday_to_event",
    "merge_events",
    "split_event",
]
