from .fetcher import FeedFetcher
from .parser import normalize_date, parse_ics
from .writer import generate_ics

__all__ = [
    "FeedFetcher",
    "normalize_date",
    "parse_ics",
    "generate_ics",
]
