"""
Lunar (农历) to solar date conversion and floating-date holiday rules.

Conversion is delegated to zhdate, whose tables cover lunar years 1900-2100.
"""
import logging
from datetime import date
from typing import Optional

from zhdate import ZhDate

from holiday_calendar.errors import InvalidLunarDate

logger = logging.getLogger(__name__)

# Festival key -> (lunar month, lunar day)
LUNAR_FESTIVALS: dict[str, tuple[int, int]] = {
    "qixi": (7, 7),              # 七夕 - 农历七月初七
    "laba": (12, 8),             # 腊八 - 农历腊月初八
    "xiaonian_north": (12, 23),  # 小年（北方）- 腊月二十三
    "xiaonian_south": (12, 24),  # 小年（南方）- 腊月二十四
    "longtaitou": (2, 2),        # 龙抬头 - 农历二月初二
}


def lunar_to_solar(lunar_year: int, lunar_month: int, lunar_day: int) -> date:
    """
    Convert a lunar calendar date to its solar (Gregorian) date.

    Raises:
        InvalidLunarDate: the date does not exist in that lunar year, e.g.
            day 30 of a 29-day month, or the year is outside the 1900-2100 tables.
    """
    if not ZhDate.validate(lunar_year, lunar_month, lunar_day, False):
        raise InvalidLunarDate(lunar_year, lunar_month, lunar_day)

    try:
        return ZhDate(lunar_year, lunar_month, lunar_day).to_datetime().date()
    except (TypeError, ValueError, IndexError) as e:
        raise InvalidLunarDate(lunar_year, lunar_month, lunar_day) from e


def resolve_festival(festival_key: str, solar_year: int) -> Optional[date]:
    """
    Get the solar date of a named lunar festival for a solar year.

    Twelfth-month festivals (腊月) belong to the previous lunar year: 腊八 of
    solar 2024 is the eighth day of the twelfth month of lunar 2023.

    Returns None for an unknown festival or a date that does not convert.
    """
    config = LUNAR_FESTIVALS.get(festival_key)
    if config is None:
        return None

    month, day = config
    lunar_year = solar_year - 1 if month == 12 else solar_year

    try:
        return lunar_to_solar(lunar_year, month, day)
    except InvalidLunarDate as e:
        logger.warning(f"Could not resolve festival {festival_key} for {solar_year}: {e}")
        return None


def thanksgiving_date(year: int) -> date:
    """Fourth Thursday of November."""
    # 0 = Sunday ... 6 = Saturday
    weekday = date(year, 11, 1).isoweekday() % 7
    first_thursday = 1 + (4 - weekday) % 7
    return date(year, 11, first_thursday + 21)
