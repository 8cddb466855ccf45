# backend/coachplan/routers/training_slots.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from coachplan.db import get_db
from coachplan.editors.slot_editor import SlotEditor
from coachplan.schemas.training_slot import SlotIn, SlotOut
from coachplan.serializers import slot_out
from coachplan.stores.slot_store import SlotStore

router = APIRouter(prefix="/training-slots", tags=["training-slots"])


@router.get("", response_model=List[SlotOut])
def list_slots(
    group_id: Optional[int] = Query(None, description="Only slots training this group"),
    coach_id: Optional[int] = Query(None, description="Only slots coached by this coach"),
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
):
    """
    GET /training-slots
    GET /training-slots?group_id=1
    """
    rows = SlotStore(db).list_slots(
        active_only=not include_inactive, group_id=group_id, coach_id=coach_id
    )
    return [slot_out(r) for r in rows]


@router.get("/{slot_id}", response_model=SlotOut)
def get_slot(slot_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return slot_out(SlotStore(db).get(slot_id))


@router.post("", response_model=SlotOut, status_code=201)
def create_slot(payload: SlotIn, db: Session = Depends(get_db)):
    return slot_out(SlotEditor(db).create_slot(payload))


@router.put("/{slot_id}", response_model=SlotOut)
def update_slot(payload: SlotIn, slot_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    """Full replacement, assignments included."""
    return slot_out(SlotEditor(db).update_slot(slot_id, payload))


@router.delete("/{slot_id}", status_code=204)
def delete_slot(slot_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    """Soft delete: the slot stops recurring, its exceptions are kept."""
    SlotEditor(db).deactivate_slot(slot_id)
    return None
