from datetime import date
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Category = Literal["western", "internet", "professional", "traditional"]
Origin = Literal["upstream", "supplementary"]


class HolidayDefinition(BaseModel):
    """A supplementary holiday resolved to a solar date."""
    model_config = ConfigDict(frozen=True)

    name: str
    date: date
    category: Category
    description: Optional[str] = None


class CalendarEvent(BaseModel):
    """A single calendar entry, either from the upstream feed or supplementary."""
    id: str
    title: str
    date: date
    end_date: Optional[date] = Field(
        default=None,
        description="Exclusive end of a multi-day span; cleared once the event is split",
    )
    description: Optional[str] = None
    is_day_off: bool = Field(default=False, description="Statutory rest day (休)")
    is_makeup_workday: bool = Field(default=False, description="Compensatory working day (班)")
    category: Optional[Category] = None
    origin: Origin = "upstream"


class CalendarPage(BaseModel):
    """Display data for the calendar listing page."""
    events: list[CalendarEvent]
    events_by_year: dict[int, list[CalendarEvent]]
    events_by_month: dict[str, list[CalendarEvent]]
    total_count: int
    category_names: dict[str, str] = Field(default_factory=dict, description="Category key to display name")
    error: Optional[str] = None
