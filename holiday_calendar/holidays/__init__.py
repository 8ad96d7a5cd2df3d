from .lunar import LUNAR_FESTIVALS, lunar_to_solar, resolve_festival, thanksgiving_date
from .catalog import (
    CATEGORY_NAMES,
    all_holidays,
    all_holidays_for_range,
    fixed_holidays,
    floating_holidays,
    lunar_holidays,
)

__all__ = [
    "LUNAR_FESTIVALS",
    "lunar_to_solar",
    "resolve_festival",
    "thanksgiving_date",
    "CATEGORY_NAMES",
    "all_holidays",
    "all_holidays_for_range",
    "fixed_holidays",
    "floating_holidays",
    "lunar_holidays",
]
