# backend/coachplan/serializers.py
"""ORM rows / scheduling values -> response schemas."""
from __future__ import annotations

from typing import Iterable, Optional

from coachplan.models.training_slot import TrainingSlot
from coachplan.models.training_slot_override import TrainingSlotOverride
from coachplan.scheduling.calendar import day_name, session_kind
from coachplan.scheduling.models import Conflict, Occurrence, SlotAssignment
from coachplan.schemas.calendar import ConflictOut, OccurrenceOut
from coachplan.schemas.override import OverrideOut
from coachplan.schemas.training_slot import AssignmentOut, SlotOut


def slot_out(row: TrainingSlot) -> SlotOut:
    return SlotOut(
        id=row.id,
        day_of_week=row.day_of_week,
        day_name=day_name(row.day_of_week),
        start_time=row.start_time,
        end_time=row.end_time,
        location=row.location,
        session_kind=session_kind(row.location),
        active=row.is_active,
        created_by=row.created_by,
        created_at=row.created_at,
        assignments=[
            AssignmentOut(
                group_id=a.group_id,
                group_name=a.group.name if a.group else "?",
                coach_id=a.coach_id,
                coach_name=a.coach.display_name if a.coach else "?",
                lane_count=a.lane_count,
            )
            for a in row.assignments
        ],
    )


def override_out(row: TrainingSlotOverride) -> OverrideOut:
    return OverrideOut.model_validate(row)


def _assignment_out(a: SlotAssignment) -> AssignmentOut:
    return AssignmentOut(
        group_id=a.group_id,
        group_name=a.group_name or "?",
        coach_id=a.coach_id,
        coach_name=a.coach_name or "?",
        lane_count=a.lane_count,
    )


def occurrence_out(o: Occurrence, conflict_ids: Optional[set] = None) -> OccurrenceOut:
    return OccurrenceOut(
        occurrence_id=o.occurrence_id,
        slot_id=o.slot_id,
        date=o.date,
        start_time=o.effective_start,
        end_time=o.effective_end,
        location=o.effective_location,
        status=o.status.value,
        session_kind=session_kind(o.effective_location),
        assignments=[_assignment_out(a) for a in o.assignments],
        override_id=o.override_id,
        reason=o.reason,
        has_conflict=bool(conflict_ids) and o.occurrence_id in conflict_ids,
    )


def conflict_out(c: Conflict) -> ConflictOut:
    return ConflictOut(
        kind=c.kind.value,
        date=c.date,
        occurrence_ids=list(c.occurrence_ids),
        overlap_start=c.overlap_start,
        overlap_end=c.overlap_end,
        coach_id=c.coach_id,
        location=c.location,
    )


def conflicts_out(conflicts: Iterable[Conflict]) -> list[ConflictOut]:
    return [conflict_out(c) for c in conflicts]
