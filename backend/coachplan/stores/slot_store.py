# backend/coachplan/stores/slot_store.py
from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from coachplan.errors import SlotNotFoundError
from coachplan.models.training_slot import TrainingSlot, TrainingSlotAssignment
from coachplan.scheduling.models import Slot, SlotAssignment


def to_snapshot(row: TrainingSlot) -> Slot:
    """ORM row -> frozen Slot used by the pure scheduling functions."""
    return Slot(
        id=row.id,
        day_of_week=row.day_of_week,
        start_time=row.start_time,
        end_time=row.end_time,
        location=row.location,
        active=row.is_active,
        assignments=tuple(
            SlotAssignment(
                group_id=a.group_id,
                coach_id=a.coach_id,
                lane_count=a.lane_count,
                group_name=a.group.name if a.group else "?",
                coach_name=a.coach.display_name if a.coach else "?",
            )
            for a in row.assignments
        ),
    )


class SlotStore:
    """
    Persisted training slots.

    Reads return ORM rows; writes only stage changes on the session; the
    editor owns commit / rollback.
    """

    def __init__(self, session: Session) -> None:
        self._s = session

    def list_slots(
        self,
        active_only: bool = True,
        group_id: Optional[int] = None,
        coach_id: Optional[int] = None,
    ) -> list[TrainingSlot]:
        q = select(TrainingSlot).order_by(
            TrainingSlot.day_of_week, TrainingSlot.start_time, TrainingSlot.id
        )
        if active_only:
            q = q.where(TrainingSlot.is_active.is_(True))
        if group_id is not None:
            q = q.where(TrainingSlot.assignments.any(TrainingSlotAssignment.group_id == group_id))
        if coach_id is not None:
            q = q.where(TrainingSlot.assignments.any(TrainingSlotAssignment.coach_id == coach_id))
        return list(self._s.execute(q).scalars().all())

    def get(self, slot_id: int) -> TrainingSlot:
        slot = self._s.get(TrainingSlot, slot_id)
        if slot is None:
            raise SlotNotFoundError(f"Training slot {slot_id} not found")
        return slot

    def snapshot(self, include_inactive: bool = False) -> list[Slot]:
        return [to_snapshot(r) for r in self.list_slots(active_only=not include_inactive)]

    # -- writes (staged, not committed) --------------------------------------

    def add(self, values: dict, assignments: list[dict], created_by: Optional[int] = None) -> TrainingSlot:
        slot = TrainingSlot(created_by=created_by, is_active=True, **values)
        slot.assignments = self._build_assignments(assignments)
        self._s.add(slot)
        self._s.flush()
        return slot

    def replace(self, slot: TrainingSlot, values: dict, assignments: list[dict]) -> TrainingSlot:
        """Overwrite the slot fields and swap the whole assignments list."""
        for key, value in values.items():
            setattr(slot, key, value)
        # replace-all semantics: delete-orphan cascade drops the old rows
        slot.assignments = self._build_assignments(assignments)
        self._s.flush()
        return slot

    def deactivate(self, slot: TrainingSlot) -> None:
        slot.is_active = False
        self._s.flush()

    @staticmethod
    def _build_assignments(assignments: list[dict]) -> list[TrainingSlotAssignment]:
        return [
            TrainingSlotAssignment(
                position=pos,
                group_id=a["group_id"],
                coach_id=a["coach_id"],
                lane_count=a.get("lane_count"),
            )
            for pos, a in enumerate(assignments)
        ]
