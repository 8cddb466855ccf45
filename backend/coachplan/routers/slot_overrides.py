# backend/coachplan/routers/slot_overrides.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from coachplan.db import get_db
from coachplan.deps import get_today
from coachplan.editors.override_editor import OverrideEditor
from coachplan.schemas.override import OverrideIn, OverrideOut, OverrideSaved
from coachplan.serializers import override_out
from coachplan.stores.override_store import OverrideStore

router = APIRouter(prefix="/training-slots/overrides", tags=["training-slots"])


@router.get("", response_model=List[OverrideOut])
def list_overrides(
    from_date: Optional[date] = Query(None, description="YYYY-MM-DD, defaults to today"),
    to_date: Optional[date] = Query(None, description="YYYY-MM-DD, inclusive"),
    slot_id: Optional[int] = Query(None),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    start = from_date or today
    if to_date is not None and to_date < start:
        bound = "from_date" if from_date is not None else f"today ({today.isoformat()}), the default from_date"
        raise HTTPException(status_code=400, detail=f"to_date must be on/after {bound}")
    rows = OverrideStore(db).list_overrides(from_date=start, to_date=to_date, slot_id=slot_id)
    return [override_out(r) for r in rows]


@router.post("", response_model=OverrideSaved, status_code=201)
def create_override(payload: OverrideIn, db: Session = Depends(get_db)):
    """
    POST /training-slots/overrides
    Body: { "slot_id": 1, "override_date": "YYYY-MM-DD", "status": "cancelled" }
    """
    row, warnings, replaced_id = OverrideEditor(db).create_override(payload)
    return OverrideSaved(override=override_out(row), warnings=warnings, replaced_override_id=replaced_id)


@router.delete("/{override_id}", status_code=204)
def delete_override(override_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    OverrideEditor(db).delete_override(override_id)
    return None
