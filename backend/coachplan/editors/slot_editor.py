# backend/coachplan/editors/slot_editor.py
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coachplan.errors import PersistenceError, SlotValidationError
from coachplan.models.training_slot import TrainingSlot
from coachplan.schemas.training_slot import SlotIn
from coachplan.stores.directory import CoachDirectory, GroupDirectory
from coachplan.stores.slot_store import SlotStore

logger = logging.getLogger(__name__)


def validate_slot(payload: SlotIn, groups: GroupDirectory, coaches: CoachDirectory) -> list[dict]:
    """Every problem with a slot form, empty when it can be saved."""
    errors: list[dict] = []

    if not 1 <= payload.day_of_week <= 7:
        errors.append({"field": "day_of_week", "message": "day_of_week must be between 1 (Monday) and 7 (Sunday)"})
    if payload.start_time >= payload.end_time:
        errors.append({"field": "end_time", "message": "end_time must be after start_time"})
    if not payload.location.strip():
        errors.append({"field": "location", "message": "location is required"})

    known_groups = groups.existing_ids(a.group_id for a in payload.assignments)
    known_coaches = coaches.existing_ids(a.coach_id for a in payload.assignments)
    for i, a in enumerate(payload.assignments):
        if a.group_id not in known_groups:
            errors.append({"field": f"assignments[{i}].group_id", "message": f"Unknown group_id {a.group_id}"})
        if a.coach_id not in known_coaches:
            errors.append({"field": f"assignments[{i}].coach_id", "message": f"Unknown coach_id {a.coach_id}"})
        if a.lane_count is not None and a.lane_count < 0:
            errors.append({"field": f"assignments[{i}].lane_count", "message": "lane_count must be >= 0"})

    return errors


class SlotEditor:
    """
    Validates and persists slot mutations.

    Each call is one transaction: commit on success, rollback on any database
    error (lookups included) so a failed update never leaves a half-replaced
    assignments list. Not-found and validation errors pass through untouched.
    """

    def __init__(self, session: Session) -> None:
        self._s = session
        self.slots = SlotStore(session)
        self.groups = GroupDirectory(session)
        self.coaches = CoachDirectory(session)

    def _check(self, payload: SlotIn) -> None:
        errors = validate_slot(payload, self.groups, self.coaches)
        if errors:
            logger.warning("Rejected training slot: %s", errors)
            raise SlotValidationError(errors)

    def _failed(self, message: str, *args) -> None:
        self._s.rollback()
        logger.exception(message, *args)

    @staticmethod
    def _values(payload: SlotIn) -> dict:
        return {
            "day_of_week": payload.day_of_week,
            "start_time": payload.start_time,
            "end_time": payload.end_time,
            "location": payload.location.strip(),
        }

    @staticmethod
    def _assignments(payload: SlotIn) -> list[dict]:
        return [a.model_dump() for a in payload.assignments]

    def create_slot(self, payload: SlotIn) -> TrainingSlot:
        try:
            self._check(payload)
            slot = self.slots.add(self._values(payload), self._assignments(payload), created_by=payload.created_by)
            self._s.commit()
            saved = self.slots.get(slot.id)
        except SQLAlchemyError as e:
            self._failed("Failed to create training slot")
            raise PersistenceError("Could not save the training slot") from e
        logger.info("Created training slot %s (day %s %s-%s)", saved.id, saved.day_of_week, saved.start_time, saved.end_time)
        return saved

    def update_slot(self, slot_id: int, payload: SlotIn) -> TrainingSlot:
        try:
            slot = self.slots.get(slot_id)
            self._check(payload)
            self.slots.replace(slot, self._values(payload), self._assignments(payload))
            self._s.commit()
            saved = self.slots.get(slot_id)
        except SQLAlchemyError as e:
            self._failed("Failed to update training slot %s", slot_id)
            raise PersistenceError("Could not update the training slot") from e
        logger.info("Updated training slot %s (%d assignment(s))", slot_id, len(payload.assignments))
        return saved

    def deactivate_slot(self, slot_id: int) -> None:
        """Soft delete; the slot's overrides stay as history."""
        try:
            slot = self.slots.get(slot_id)
            if not slot.is_active:
                return
            self.slots.deactivate(slot)
            self._s.commit()
        except SQLAlchemyError as e:
            self._failed("Failed to deactivate training slot %s", slot_id)
            raise PersistenceError("Could not delete the training slot") from e
        logger.info("Deactivated training slot %s", slot_id)
