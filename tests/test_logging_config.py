"""Unit tests for the JSON log formatter."""
import io
import json
import logging

import pytest

from holiday_calendar.logging_config import SERVICE_NAME, JsonFormatter, setup_logging


@pytest.fixture
def capture():
    """A logger writing JSON lines into a buffer."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter())

    logger = logging.getLogger("holiday_calendar.tests.logging")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    def lines():
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    yield logger, lines

    logger.removeHandler(handler)


class TestJsonFormatter:
    """Test cases for JsonFormatter."""

    def test_base_fields(self, capture):
        logger, lines = capture

        logger.info("[Cache] Hit for https://example.com/a.ics")

        entry = lines()[0]
        assert entry["level"] == "INFO"
        assert entry["service"] == SERVICE_NAME
        assert entry["logger"] == "holiday_calendar.tests.logging"
        assert entry["message"] == "[Cache] Hit for https://example.com/a.ics"
        assert "timestamp" in entry
        assert "exception" not in entry

    def test_extra_fields_are_top_level(self, capture):
        logger, lines = capture

        logger.error("Error fetching feed: HTTP 503", extra={"url": "https://example.com/a.ics", "status_code": 503})

        entry = lines()[0]
        assert entry["url"] == "https://example.com/a.ics"
        assert entry["status_code"] == 503
        assert "args" not in entry
        assert "lineno" not in entry

    def test_exception_and_non_ascii(self, capture):
        logger, lines = capture

        try:
            raise ValueError("腊八 failed")
        except ValueError:
            logger.error("计算失败", exc_info=True, extra={"error_type": "ValueError"})

        entry = lines()[0]
        assert entry["message"] == "计算失败"
        assert entry["error_type"] == "ValueError"
        assert "ValueError: 腊八 failed" in entry["exception"]

    def test_custom_service_name(self):
        record = logging.LogRecord("x", logging.WARNING, __file__, 1, "hello", None, None)

        entry = json.loads(JsonFormatter(service="calendar-worker").format(record))

        assert entry["service"] == "calendar-worker"
        assert entry["level"] == "WARNING"


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_replaces_root_handlers(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging("debug")

            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, JsonFormatter)
            assert root.level == logging.DEBUG
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
