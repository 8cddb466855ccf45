# backend/coachplan/schemas/override.py
from __future__ import annotations
from datetime import date, datetime, time
from typing import List, Literal, Optional
from pydantic import BaseModel
from pydantic.config import ConfigDict

OverrideStatusIn = Literal["cancelled", "modified"]


class OverrideIn(BaseModel):
    slot_id: int
    # optional here so a missing date is reported with the other form errors
    override_date: Optional[date] = None
    status: OverrideStatusIn
    new_start_time: Optional[time] = None
    new_end_time: Optional[time] = None
    new_location: Optional[str] = None
    reason: Optional[str] = None
    created_by: Optional[int] = None


class OverrideOut(BaseModel):
    id: int
    slot_id: int
    override_date: date
    status: OverrideStatusIn
    new_start_time: Optional[time] = None
    new_end_time: Optional[time] = None
    new_location: Optional[str] = None
    reason: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OverrideSaved(BaseModel):
    override: OverrideOut
    warnings: List[str] = []
    replaced_override_id: Optional[int] = None
