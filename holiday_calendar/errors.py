from typing import Optional


class CalendarError(Exception):
    """Base class for all holiday calendar errors."""


class InvalidLunarDate(CalendarError):
    """Raised when a lunar year/month/day triple does not exist."""

    def __init__(self, lunar_year: int, lunar_month: int, lunar_day: int):
        self.lunar_year = lunar_year
        self.lunar_month = lunar_month
        self.lunar_day = lunar_day
        super().__init__(f"Invalid lunar date: {lunar_year}-{lunar_month}-{lunar_day}")


class UpstreamError(CalendarError):
    """Base class for failures talking to the upstream feed."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class UpstreamUnavailable(UpstreamError):
    """Upstream answered with a non-success status or the transport failed."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(url, message)


class UpstreamTimeout(UpstreamError):
    """No response from upstream within the fetch timeout."""


class MalformedFeedBlock(CalendarError):
    """A VEVENT block that cannot be turned into an event."""


class MalformedFeed(CalendarError):
    """The feed text is not an iCalendar object at all."""
