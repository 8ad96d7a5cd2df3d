from .event import CalendarEvent, CalendarPage, Category, HolidayDefinition, Origin

__all__ = [
    "CalendarEvent",
    "CalendarPage",
    "Category",
    "HolidayDefinition",
    "Origin",
]
