"""
Shared fixtures.

The engine in coachplan.db is built at import time from DATABASE_URL, so the
variable is pointed at a throwaway SQLite file before anything from the
package is imported.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="coachplan-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'coachplan.db')}"

from datetime import date, time  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from coachplan import models  # noqa: E402
from coachplan.db import Base, SessionLocal, engine  # noqa: E402
from coachplan.deps import get_today  # noqa: E402
from coachplan.scheduling import Slot, SlotAssignment  # noqa: E402

# Wednesday of ISO week 2, 2025
TODAY = date(2025, 1, 8)


def make_slot(slot_id, day_of_week, start, end, location="Piscine A", coaches=(1,), groups=None, active=True):
    """Pure-core slot; one assignment per coach, groups default to 1..n."""
    groups = groups or tuple(range(1, len(coaches) + 1))
    return Slot(
        id=slot_id,
        day_of_week=day_of_week,
        start_time=start,
        end_time=end,
        location=location,
        assignments=[SlotAssignment(group_id=g, coach_id=c) for g, c in zip(groups, coaches)],
        active=active,
    )


def hm(hour, minute=0):
    return time(hour, minute)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db_session):
    """Two groups, two coaches and one swimmer (who must never count as a coach)."""
    g1 = models.Group(name="Benjamins")
    g2 = models.Group(name="Minimes")
    c1 = models.User(display_name="Claire", role=models.COACH_ROLE)
    c2 = models.User(display_name="Marc", role=models.COACH_ROLE)
    swimmer = models.User(display_name="Lucas", role="swimmer")
    db_session.add_all([g1, g2, c1, c2, swimmer])
    db_session.commit()
    return SimpleNamespace(g1=g1.id, g2=g2.id, c1=c1.id, c2=c2.id, swimmer=swimmer.id)


@pytest.fixture
def client(seeded):
    from coachplan.main import app

    app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
