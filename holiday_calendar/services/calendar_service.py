import logging
from datetime import date
from typing import Callable, Optional

from holiday_calendar.config import DEFAULT_CALENDAR_NAME, DEFAULT_UPSTREAM_URL
from holiday_calendar.feeds import FeedFetcher, generate_ics, parse_ics
from holiday_calendar.holidays import CATEGORY_NAMES
from holiday_calendar.models import CalendarEvent, CalendarPage
from .merger import filter_by_years, group_by_month, group_by_year, merge_events

logger = logging.getLogger(__name__)


class CalendarService:
    """Builds the merged holiday calendar from the upstream feed."""

    def __init__(
        self,
        fetcher: FeedFetcher,
        upstream_url: str = DEFAULT_UPSTREAM_URL,
        today: Callable[[], date] = date.today,
    ):
        self.fetcher = fetcher
        self.upstream_url = upstream_url
        self._today = today

    def get_year_range(self) -> tuple[int, int, list[int]]:
        """The previous, current and next year: (start_year, end_year, years)."""
        current_year = self._today().year
        start_year = current_year - 1
        end_year = current_year + 1
        return start_year, end_year, list(range(start_year, end_year + 1))

    async def compute_calendar(self, url: Optional[str] = None) -> list[CalendarEvent]:
        """
        Fetch, parse and merge the calendar for the previous, current and next year.

        Args:
            url: Upstream feed URL. Defaults to the configured upstream.

        Returns:
            Date-sorted, deduplicated single-day events.

        Raises:
            UpstreamUnavailable, UpstreamTimeout: the feed could not be fetched.
            MalformedFeed: the upstream body is not an iCalendar object.
        """
        content = await self.fetcher.fetch(url or self.upstream_url)
        upstream_events = parse_ics(content)

        start_year, end_year, years = self.get_year_range()
        events = merge_events(upstream_events, start_year, end_year)

        return filter_by_years(events, years)

    async def render_ics(self, calendar_name: str = DEFAULT_CALENDAR_NAME) -> str:
        """The merged calendar as iCalendar text."""
        events = await self.compute_calendar()
        return generate_ics(events, calendar_name)

    async def get_calendar_page(self) -> CalendarPage:
        """
        Display data for the listing page.

        A pipeline failure yields an empty page carrying the error message
        instead of raising.
        """
        try:
            events = await self.compute_calendar()
        except Exception as e:
            logger.error(
                f"Failed to load calendar data: {e}",
                exc_info=True,
                extra={"error_type": type(e).__name__},
            )
            return CalendarPage(
                events=[],
                events_by_year={},
                events_by_month={},
                total_count=0,
                category_names=dict(CATEGORY_NAMES),
                error=str(e) or "Failed to load calendar data",
            )

        return CalendarPage(
            events=events,
            events_by_year=group_by_year(events),
            events_by_month=group_by_month(events),
            total_count=len(events),
            category_names=dict(CATEGORY_NAMES),
        )

    def clear_cache(self) -> None:
        """Drop cached feed content so the next request refetches it."""
        self.fetcher.cache.clear()
