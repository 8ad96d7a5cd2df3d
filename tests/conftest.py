"""Shared fixtures for the holiday calendar tests."""
from datetime import date

import httpx
import pytest

from holiday_calendar.cache import FeedCache
from holiday_calendar.feeds import FeedFetcher
from holiday_calendar.services import CalendarService

UPSTREAM_URL = "https://calendars.example.com/holidays/cn_zh.ics"

SAMPLE_ICS = "\r\n".join([
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    "PRODID:-//Apple Inc.//iCloud Holidays//CN",
    "X-WR-CALNAME:中国大陆节假日",
    "BEGIN:VEVENT",
    "UID:holiday-2024-national-day",
    "DTSTAMP:20240101T000000Z",
    "DTSTART;VALUE=DATE:20241001",
    "DTEND;VALUE=DATE:20241004",
    "SUMMARY;LANGUAGE=zh_CN:国庆节（休）",
    "X-APPLE-SPECIAL-DAY:WORK-HOLIDAY",
    "END:VEVENT",
    "BEGIN:VEVENT",
    "UID:holiday-2024-workday",
    "DTSTAMP:20240101T000000Z",
    "DTSTART;VALUE=DATE:20240929",
    "SUMMARY;LANGUAGE=zh_CN:国庆节调休（班）",
    "X-APPLE-SPECIAL-DAY:ALTERNATE-WORKDAY",
    "END:VEVENT",
    "BEGIN:VEVENT",
    "UID:holiday-2024-valentine",
    "DTSTART;VALUE=DATE:20240214",
    "SUMMARY:情人节",
    "END:VEVENT",
    "END:VCALENDAR",
    "",
])


class FakeClock:
    """Controllable monotonic clock for cache expiry tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return FeedCache(maxsize=10, timer=clock)


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def upstream_requests():
    """Requests seen by the mock upstream."""
    return []


@pytest.fixture
def ok_client(upstream_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        upstream_requests.append(request)
        return httpx.Response(200, text=SAMPLE_ICS)

    return make_client(handler)


@pytest.fixture
def service(cache, ok_client):
    fetcher = FeedFetcher(cache, client=ok_client)
    return CalendarService(fetcher, upstream_url=UPSTREAM_URL, today=lambda: date(2024, 6, 1))
