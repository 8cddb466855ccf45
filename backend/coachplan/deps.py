# backend/coachplan/deps.py
from datetime import date

from coachplan.scheduling.calendar import today


# FastAPI dependency; tests pin the date through app.dependency_overrides
def get_today() -> date:
    return today()
