import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from datetime import datetime
from typing import Optional
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from holiday_calendar import __version__
from holiday_calendar.cache import FeedCache, run_periodic_sweep
from holiday_calendar.config import Settings
from holiday_calendar.feeds import FeedFetcher
from holiday_calendar.logging_config import setup_logging
from holiday_calendar.models import CalendarPage
from holiday_calendar.services import CalendarService

logger = logging.getLogger(__name__)

DESCRIPTION = """
Chinese public holiday calendar, republished from the iCloud holiday feed and
enriched with supplementary observances.

## Features

- **Statutory holidays**: days off (休) and makeup workdays (班) from the upstream feed
- **Supplementary holidays**: western, internet, professional and lunar traditional festivals
- **Three-year window**: previous, current and next year
- **Caching**: the upstream feed is cached for 12 hours
"""


def create_app(
    service: Optional[CalendarService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API application.

    Without a service, the lifespan creates the cache, fetcher and service
    from settings and owns the periodic cache sweep.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        fetcher = None
        if service is None:
            setup_logging(settings.log_level)
            cache = FeedCache(maxsize=settings.cache_maxsize)
            fetcher = FeedFetcher(
                cache,
                timeout=settings.fetch_timeout_seconds,
                ttl=settings.cache_ttl_seconds,
            )
            app.state.calendar_service = CalendarService(fetcher, upstream_url=settings.upstream_url)
        else:
            app.state.calendar_service = service

        sweep_task = None
        if settings.cache_sweep_interval_seconds > 0:
            sweep_task = asyncio.create_task(
                run_periodic_sweep(
                    app.state.calendar_service.fetcher.cache,
                    settings.cache_sweep_interval_seconds,
                )
            )

        try:
            yield
        finally:
            if sweep_task is not None:
                sweep_task.cancel()
                with suppress(asyncio.CancelledError):
                    await sweep_task
            if fetcher is not None:
                await fetcher.aclose()

    app = FastAPI(
        title="Holiday Calendar API",
        description=DESCRIPTION,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_calendar_service(request: Request) -> CalendarService:
        return request.app.state.calendar_service

    @app.get("/", tags=["Root"])
    async def root():
        """API root - provides basic info and links."""
        return {
            "name": "Holiday Calendar API",
            "version": __version__,
            "description": "Chinese holiday calendar enriched with supplementary observances",
            "endpoints": {
                "calendar": "/calendar",
                "ics": "/calendars.ics",
                "documentation": "/docs",
            },
            "current_year": datetime.now().year,
        }

    @app.get("/calendars.ics", tags=["Calendar"])
    async def download_calendar(svc: CalendarService = Depends(get_calendar_service)):
        """
        Download the merged calendar as an iCalendar file.

        Subscribe to this URL from any calendar client.
        """
        try:
            content = await svc.render_ics(settings.calendar_name)
        except Exception as e:
            logger.error(
                f"Failed to generate ICS: {e}",
                exc_info=True,
                extra={"error_type": type(e).__name__},
            )
            return PlainTextResponse("Failed to generate calendar", status_code=500)

        return Response(
            content=content,
            media_type="text/calendar; charset=utf-8",
            headers={
                "Content-Disposition": 'attachment; filename="calendars.ics"',
                "Cache-Control": "public, max-age=3600",
            },
        )

    @app.get("/calendar", response_model=CalendarPage, tags=["Calendar"])
    async def get_calendar(svc: CalendarService = Depends(get_calendar_service)):
        """
        Get the merged events grouped by year and by month.

        Upstream failures are reported in the `error` field with an empty event list.
        """
        return await svc.get_calendar_page()

    @app.post("/cache/clear", tags=["Admin"])
    async def clear_cache(svc: CalendarService = Depends(get_calendar_service)):
        """Clear the cache to force a fresh upstream fetch on next request."""
        svc.clear_cache()
        return {"message": "Cache cleared successfully"}

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
