# backend/coachplan/config.py
import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "postgresql+psycopg://coachplan:devpass@db:5432/coachplan",
)

FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:5173")

# Used only to decide what "today" is for override listings
APP_TZ = os.getenv("APP_TZ", "UTC")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Default display window of the day timeline (hours, end exclusive)
TIMELINE_START_HOUR = _int_env("TIMELINE_START_HOUR", 6)
TIMELINE_END_HOUR = _int_env("TIMELINE_END_HOUR", 22)
