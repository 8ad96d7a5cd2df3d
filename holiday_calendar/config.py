import os
from dataclasses import dataclass

DEFAULT_UPSTREAM_URL = "https://calendars.icloud.com/holidays/cn_zh.ics"
DEFAULT_CALENDAR_NAME = "中国节假日（增强版）"


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    return int(raw) if raw else default


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    return float(raw) if raw else default


@dataclass
class Settings:
    """Runtime settings, read from environment variables."""
    upstream_url: str = DEFAULT_UPSTREAM_URL
    calendar_name: str = DEFAULT_CALENDAR_NAME
    cache_ttl_seconds: int = 12 * 3600
    cache_maxsize: int = 100
    # 0 disables the periodic sweep; expired entries are then only evicted on read
    cache_sweep_interval_seconds: int = 3600
    fetch_timeout_seconds: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            upstream_url=os.getenv("UPSTREAM_URL") or DEFAULT_UPSTREAM_URL,
            calendar_name=os.getenv("CALENDAR_NAME") or DEFAULT_CALENDAR_NAME,
            cache_ttl_seconds=_env_int("CACHE_TTL_SECONDS", 12 * 3600),
            cache_maxsize=_env_int("CACHE_MAXSIZE", 100),
            cache_sweep_interval_seconds=_env_int("CACHE_SWEEP_INTERVAL_SECONDS", 3600),
            fetch_timeout_seconds=_env_float("FETCH_TIMEOUT_SECONDS", 30.0),
            log_level=os.getenv("LOG_LEVEL") or "INFO",
        )
