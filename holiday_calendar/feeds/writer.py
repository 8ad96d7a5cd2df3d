"""iCalendar (.ics) generation for the merged holiday calendar."""
from datetime import date, datetime, timezone

from holiday_calendar.models import CalendarEvent
from .parser import DAY_OFF_MARKER, MAKEUP_WORKDAY_MARKER, SPECIAL_DAY_PROPERTY

PRODID = "-//Holiday Calendar//CN"
DEFAULT_CALENDAR_NAME = "中国节假日"
MAX_LINE_OCTETS = 75


def dtstamp_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def format_date_ics(d: date) -> str:
    return d.strftime("%Y%m%d")


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\r", "\\n")
        .replace("\n", "\\n")
    )


def fold_line(line: str, limit: int = MAX_LINE_OCTETS) -> str:
    """Fold a content line at `limit` UTF-8 octets without splitting characters."""
    if len(line.encode("utf-8")) <= limit:
        return line

    parts = []
    current = ""
    current_len = 0
    max_len = limit
    for ch in line:
        ch_len = len(ch.encode("utf-8"))
        if current_len + ch_len > max_len:
            parts.append(current)
            current, current_len = ch, ch_len
            # continuation lines carry a leading space
            max_len = limit - 1
        else:
            current += ch
            current_len += ch_len
    parts.append(current)
    return "\r\n ".join(parts)


def generate_ics(events: list[CalendarEvent], calendar_name: str = DEFAULT_CALENDAR_NAME) -> str:
    """
    Render events as iCalendar text, one VEVENT per event in the given order.

    All events share a single DTSTAMP taken when this is called.
    """
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        "CALSCALE:GREGORIAN",
        f"X-WR-CALNAME:{escape_text(calendar_name)}",
        "X-APPLE-LANGUAGE:zh",
        "X-APPLE-REGION:CN",
    ]

    stamp = dtstamp_utc()

    for event in events:
        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{event.id}")
        lines.append(f"DTSTAMP:{stamp}")
        lines.append(f"DTSTART;VALUE=DATE:{format_date_ics(event.date)}")

        if event.end_date:
            lines.append(f"DTEND;VALUE=DATE:{format_date_ics(event.end_date)}")

        lines.append(f"SUMMARY;LANGUAGE=zh_CN:{escape_text(event.title)}")

        if event.description:
            lines.append(f"DESCRIPTION:{escape_text(event.description)}")
        if event.category:
            lines.append(f"CATEGORIES:{event.category}")

        lines.append("CLASS:PUBLIC")
        lines.append("TRANSP:TRANSPARENT")

        if event.is_day_off:
            lines.append(f"{SPECIAL_DAY_PROPERTY}:{DAY_OFF_MARKER}")
        elif event.is_makeup_workday:
            lines.append(f"{SPECIAL_DAY_PROPERTY}:{MAKEUP_WORKDAY_MARKER}")

        lines.append("END:VEVENT")

    lines.append("END:VCALENDAR")

    return "\r\n".join(fold_line(line) for line in lines) + "\r\n"
