"""
Supplementary holidays (额外节假日) not carried by the upstream feed:
western, internet, professional and traditional lunar observances.
"""
from datetime import date

from holiday_calendar.models import Category, HolidayDefinition
from .lunar import resolve_festival, thanksgiving_date

CATEGORY_NAMES: dict[str, str] = {
    "western": "西方节日",
    "internet": "网络节日",
    "professional": "职业节日",
    "traditional": "传统节日",
}

# (name, month, day, category, description)
FIXED_HOLIDAYS: list[tuple[str, int, int, Category, str]] = [
    # 西方节日
    ("情人节", 2, 14, "western", "西方情人节"),
    ("白色情人节", 3, 14, "western", "日韩传统回礼日"),
    ("愚人节", 4, 1, "western", "整蛊玩笑日"),
    ("万圣节", 10, 31, "western", "西方鬼节"),
    ("平安夜", 12, 24, "western", "圣诞节前夕"),
    ("圣诞节", 12, 25, "western", "西方圣诞节"),
    # 网络节日
    ("520", 5, 20, "internet", "\"我爱你\"谐音日"),
    ("双11购物节", 11, 11, "internet", "光棍节/购物狂欢节"),
    ("双12购物节", 12, 12, "internet", "年终购物节"),
    # 职业/群体节日
    ("妇女节", 3, 8, "professional", "国际妇女节"),
    ("青年节", 5, 4, "professional", "五四青年节"),
    ("儿童节", 6, 1, "professional", "国际儿童节"),
    ("教师节", 9, 10, "professional", "中国教师节"),
]

# (festival key, name, description)
LUNAR_HOLIDAYS: list[tuple[str, str, str]] = [
    ("qixi", "七夕节", "中国情人节"),
    ("laba", "腊八节", "农历腊月初八"),
    ("xiaonian_north", "小年（北方）", "农历腊月二十三"),
    ("xiaonian_south", "小年（南方）", "农历腊月二十四"),
    ("longtaitou", "龙抬头", "农历二月初二"),
]


def fixed_holidays(year: int) -> list[HolidayDefinition]:
    """Holidays anchored to the same month/day every year."""
    return [
        HolidayDefinition(
            name=name,
            date=date(year, month, day),
            category=category,
            description=description,
        )
        for name, month, day, category, description in FIXED_HOLIDAYS
    ]


def floating_holidays(year: int) -> list[HolidayDefinition]:
    """Holidays computed by a weekday rule, such as Thanksgiving."""
    return [
        HolidayDefinition(
            name="感恩节",
            date=thanksgiving_date(year),
            category="western",
            description="美国感恩节",
        ),
    ]


def lunar_holidays(year: int) -> list[HolidayDefinition]:
    """Traditional lunar festivals falling in the given solar year.

    A festival that cannot be resolved is left out; the others are kept.
    """
    holidays = []
    for key, name, description in LUNAR_HOLIDAYS:
        resolved = resolve_festival(key, year)
        if resolved is None:
            continue
        holidays.append(HolidayDefinition(
            name=name,
            date=resolved,
            category="traditional",
            description=description,
        ))
    return holidays


def all_holidays(year: int) -> list[HolidayDefinition]:
    """Fixed, floating and lunar holidays for one year."""
    return [
        *fixed_holidays(year),
        *floating_holidays(year),
        *lunar_holidays(year),
    ]


def all_holidays_for_range(start_year: int, end_year: int) -> list[HolidayDefinition]:
    """All holidays for every year in [start_year, end_year], ascending."""
    holidays: list[HolidayDefinition] = []
    for year in range(start_year, end_year + 1):
        holidays.extend(all_holidays(year))
    return holidays
