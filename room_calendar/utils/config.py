"""Environment-backed application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    default_window_months: int
    date_format: str
    csv_encoding: str
    server_host: str
    server_port: int
    api_base_url: str


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process; use ``cache_clear`` to reload."""
    host = os.getenv("ROOM_CALENDAR_HOST", "127.0.0.1")
    port = _env_int("ROOM_CALENDAR_PORT", 8000)
    return Settings(
        app_name=os.getenv("ROOM_CALENDAR_APP_NAME", "Room Availability Calendar"),
        app_version=os.getenv("ROOM_CALENDAR_APP_VERSION", "1.0.0"),
        log_level=os.getenv("ROOM_CALENDAR_LOG_LEVEL", "INFO"),
        default_window_months=_env_int("ROOM_CALENDAR_DEFAULT_WINDOW_MONTHS", 3),
        date_format="%Y-%m-%d",
        csv_encoding=os.getenv("ROOM_CALENDAR_CSV_ENCODING", "utf-8"),
        server_host=host,
        server_port=port,
        api_base_url=os.getenv("ROOM_CALENDAR_API_URL", f"http://{host}:{port}"),
    )
