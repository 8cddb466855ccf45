# backend/coachplan/editors/override_editor.py
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coachplan.errors import OverrideValidationError, PersistenceError, SlotNotFoundError
from coachplan.models.training_slot import TrainingSlot
from coachplan.models.training_slot_override import TrainingSlotOverride
from coachplan.scheduling.calendar import day_name
from coachplan.schemas.override import OverrideIn
from coachplan.stores.override_store import OverrideStore
from coachplan.stores.slot_store import SlotStore

logger = logging.getLogger(__name__)


def _clean_location(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_override(payload: OverrideIn, slot: Optional[TrainingSlot]) -> tuple[list[dict], list[str]]:
    """
    (errors, warnings) for an override form.

    Warnings never block the save: a modification that changes nothing, or a
    date the slot does not run on, is still stored.
    """
    errors: list[dict] = []
    warnings: list[str] = []

    if payload.override_date is None:
        errors.append({"field": "override_date", "message": "override_date is required"})
    if slot is None:
        errors.append({"field": "slot_id", "message": f"Unknown slot_id {payload.slot_id}"})
        return errors, warnings
    if not slot.is_active:
        errors.append({"field": "slot_id", "message": "Slot is no longer active"})

    if payload.override_date is not None and payload.override_date.isoweekday() != slot.day_of_week:
        warnings.append(
            f"{payload.override_date.isoformat()} is not a {day_name(slot.day_of_week)}; "
            "this exception will not apply to any session"
        )

    if payload.status == "modified":
        start = payload.new_start_time if payload.new_start_time is not None else slot.start_time
        end = payload.new_end_time if payload.new_end_time is not None else slot.end_time
        if start >= end:
            errors.append({"field": "new_end_time", "message": "end time must be after start time"})

        if payload.new_location is not None and not payload.new_location.strip():
            errors.append({"field": "new_location", "message": "new_location cannot be blank"})
        new_location = _clean_location(payload.new_location)
        changed = (
            (payload.new_start_time is not None and payload.new_start_time != slot.start_time)
            or (payload.new_end_time is not None and payload.new_end_time != slot.end_time)
            or (new_location is not None and new_location != slot.location)
        )
        if not changed:
            warnings.append("Modification does not change anything from the regular slot")

    return errors, warnings


class OverrideEditor:
    def __init__(self, session: Session) -> None:
        self._s = session
        self.slots = SlotStore(session)
        self.overrides = OverrideStore(session)

    def _find_slot(self, slot_id: int) -> Optional[TrainingSlot]:
        try:
            return self.slots.get(slot_id)
        except SlotNotFoundError:
            return None

    def create_override(self, payload: OverrideIn) -> tuple[TrainingSlotOverride, list[str], Optional[int]]:
        """
        Store an override; returns (override, warnings, id of the override it replaced).

        Overrides are never edited in place: an existing one for the same
        (slot, date) is deleted and the new one inserted in the same transaction.
        """
        replaced_id = None
        try:
            errors, warnings = validate_override(payload, self._find_slot(payload.slot_id))
            if errors:
                logger.warning("Rejected slot override: %s", errors)
                raise OverrideValidationError(errors)
            for w in warnings:
                logger.warning("Slot override for slot %s: %s", payload.slot_id, w)

            modified = payload.status == "modified"
            values = {
                "slot_id": payload.slot_id,
                "override_date": payload.override_date,
                "status": payload.status,
                "new_start_time": payload.new_start_time if modified else None,
                "new_end_time": payload.new_end_time if modified else None,
                "new_location": _clean_location(payload.new_location) if modified else None,
                "reason": (payload.reason or "").strip() or None,
            }

            existing = self.overrides.find(payload.slot_id, payload.override_date)
            if existing is not None:
                replaced_id = existing.id
                self.overrides.delete(existing)
            row = self.overrides.add(values, created_by=payload.created_by)
            self._s.commit()
        except SQLAlchemyError as e:
            self._s.rollback()
            logger.exception("Failed to save override for slot %s on %s", payload.slot_id, payload.override_date)
            raise PersistenceError("Could not save the exception") from e

        logger.info(
            "Saved %s override %s for slot %s on %s%s",
            row.status, row.id, row.slot_id, row.override_date.isoformat(),
            f" (replaces {replaced_id})" if replaced_id else "",
        )
        return row, warnings, replaced_id

    def delete_override(self, override_id: int) -> None:
        """Reverts that date to the slot's regular pattern."""
        try:
            row = self.overrides.get(override_id)
            self.overrides.delete(row)
            self._s.commit()
        except SQLAlchemyError as e:
            self._s.rollback()
            logger.exception("Failed to delete override %s", override_id)
            raise PersistenceError("Could not delete the exception") from e
        logger.info("Deleted override %s", override_id)
