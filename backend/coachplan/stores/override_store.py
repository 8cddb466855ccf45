# backend/coachplan/stores/override_store.py
from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import Session

from coachplan.errors import OverrideNotFoundError
from coachplan.models.training_slot_override import TrainingSlotOverride
from coachplan.scheduling.models import OverrideStatus, SlotOverride


def to_snapshot(row: TrainingSlotOverride) -> SlotOverride:
    return SlotOverride(
        id=row.id,
        slot_id=row.slot_id,
        override_date=row.override_date,
        status=OverrideStatus(row.status),
        new_start_time=row.new_start_time,
        new_end_time=row.new_end_time,
        new_location=row.new_location,
        reason=row.reason,
    )


class OverrideStore:
    def __init__(self, session: Session) -> None:
        self._s = session

    def list_overrides(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        slot_id: Optional[int] = None,
    ) -> list[TrainingSlotOverride]:
        q = select(TrainingSlotOverride).order_by(
            TrainingSlotOverride.override_date, TrainingSlotOverride.id
        )
        if from_date is not None:
            q = q.where(TrainingSlotOverride.override_date >= from_date)
        if to_date is not None:
            q = q.where(TrainingSlotOverride.override_date <= to_date)
        if slot_id is not None:
            q = q.where(TrainingSlotOverride.slot_id == slot_id)
        return list(self._s.execute(q).scalars().all())

    def get(self, override_id: int) -> TrainingSlotOverride:
        row = self._s.get(TrainingSlotOverride, override_id)
        if row is None:
            raise OverrideNotFoundError(f"Slot override {override_id} not found")
        return row

    def find(self, slot_id: int, override_date: date) -> Optional[TrainingSlotOverride]:
        return self._s.execute(
            select(TrainingSlotOverride).where(
                and_(
                    TrainingSlotOverride.slot_id == slot_id,
                    TrainingSlotOverride.override_date == override_date,
                )
            )
        ).scalar_one_or_none()

    def snapshot(self, from_date: Optional[date] = None, to_date: Optional[date] = None) -> list[SlotOverride]:
        return [to_snapshot(r) for r in self.list_overrides(from_date=from_date, to_date=to_date)]

    # -- writes (staged, not committed) --------------------------------------

    def add(self, values: dict, created_by: Optional[int] = None) -> TrainingSlotOverride:
        row = TrainingSlotOverride(created_by=created_by, **values)
        self._s.add(row)
        self._s.flush()
        return row

    def delete(self, row: TrainingSlotOverride) -> None:
        self._s.delete(row)
        self._s.flush()
