# backend/coachplan/stores/directory.py
"""Read-only group / coach lookups owned by the rest of the club app."""
from __future__ import annotations

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from coachplan.models.group import Group
from coachplan.models.user import COACH_ROLE, User


class GroupDirectory:
    def __init__(self, session: Session) -> None:
        self._s = session

    def list_groups(self) -> list[Group]:
        return list(self._s.execute(select(Group).order_by(Group.name, Group.id)).scalars().all())

    def existing_ids(self, ids: Iterable[int]) -> set[int]:
        wanted = set(ids)
        if not wanted:
            return set()
        rows = self._s.execute(select(Group.id).where(Group.id.in_(wanted))).scalars().all()
        return set(rows)


class CoachDirectory:
    """Users with the coach role."""

    def __init__(self, session: Session) -> None:
        self._s = session

    def list_coaches(self) -> list[User]:
        q = select(User).where(User.role == COACH_ROLE).order_by(User.display_name, User.id)
        return list(self._s.execute(q).scalars().all())

    def existing_ids(self, ids: Iterable[int]) -> set[int]:
        wanted = set(ids)
        if not wanted:
            return set()
        q = select(User.id).where(User.id.in_(wanted), User.role == COACH_ROLE)
        return set(self._s.execute(q).scalars().all())
