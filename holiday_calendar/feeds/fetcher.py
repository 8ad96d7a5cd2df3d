import logging
from typing import Optional

import httpx

from holiday_calendar.errors import UpstreamTimeout, UpstreamUnavailable
from holiday_calendar.cache import DEFAULT_FEED_TTL, FeedCache

logger = logging.getLogger(__name__)


class FeedFetcher:
    """Downloads raw iCalendar feeds, serving repeat requests from the cache."""

    USER_AGENT = "Mozilla/5.0 (compatible; CalendarBot/1.0)"

    def __init__(
        self,
        cache: FeedCache,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        ttl: float = DEFAULT_FEED_TTL,
    ):
        self.cache = cache
        self.ttl = ttl
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": self.USER_AGENT,
                "Accept": "text/calendar,text/plain;q=0.9,*/*;q=0.8",
            },
        )

    @staticmethod
    def cache_key(url: str) -> str:
        return f"ics:{url}"

    async def fetch(self, url: str) -> str:
        """
        Get the raw feed content for a URL.

        Args:
            url: Feed URL.

        Returns:
            The feed body as text.

        Raises:
            UpstreamTimeout: no response within the client timeout.
            UpstreamUnavailable: non-success status or transport failure.
        """
        key = self.cache_key(url)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info(f"[Cache] Hit for {url}")
            return cached

        logger.info(f"[Cache] Miss for {url}, fetching from server...")

        try:
            response = await self.client.get(url, headers={"User-Agent": self.USER_AGENT})
            response.raise_for_status()
        except httpx.TimeoutException as e:
            logger.error(f"Timed out fetching {url}: {e}", extra={"url": url})
            raise UpstreamTimeout(url, f"Timed out fetching ICS from {url}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"Error fetching {url}: HTTP {status}", extra={"url": url, "status_code": status})
            raise UpstreamUnavailable(
                url,
                f"Failed to fetch ICS: {status} {e.response.reason_phrase}",
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error fetching {url}: {e}", extra={"url": url})
            raise UpstreamUnavailable(url, f"Failed to fetch ICS: {e}") from e

        content = response.text
        self.cache.set(key, content, self.ttl)
        logger.info(f"[Cache] Stored for {url}, TTL: {self.ttl / 3600:g} hours")

        return content

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
