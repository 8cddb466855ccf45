# backend/coachplan/schemas/training_slot.py
from __future__ import annotations
from datetime import datetime, time
from typing import List, Optional
from pydantic import BaseModel
from pydantic.config import ConfigDict
from pydantic import field_validator


class AssignmentIn(BaseModel):
    group_id: int
    coach_id: int
    lane_count: Optional[int] = None


class SlotIn(BaseModel):
    """Full slot definition; an update replaces every field and the whole assignments list."""
    day_of_week: int
    start_time: time
    end_time: time
    location: str
    assignments: List[AssignmentIn] = []
    created_by: Optional[int] = None

    @field_validator("location")
    @classmethod
    def _strip_location(cls, v: str) -> str:
        return v.strip()


class AssignmentOut(BaseModel):
    group_id: int
    group_name: str
    coach_id: int
    coach_name: str
    lane_count: Optional[int] = None


class SlotOut(BaseModel):
    id: int
    day_of_week: int
    day_name: str
    start_time: time
    end_time: time
    location: str
    session_kind: str
    active: bool
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None
    assignments: List[AssignmentOut]

    model_config = ConfigDict(from_attributes=True)
