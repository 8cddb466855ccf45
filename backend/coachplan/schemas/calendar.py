# backend/coachplan/schemas/calendar.py
from __future__ import annotations
import datetime as dt
from typing import List, Literal, Optional
from pydantic import BaseModel

from .training_slot import AssignmentOut


class OccurrenceOut(BaseModel):
    occurrence_id: str
    slot_id: int
    date: dt.date
    start_time: dt.time
    end_time: dt.time
    location: str
    status: Literal["scheduled", "cancelled", "modified"]
    session_kind: str
    assignments: List[AssignmentOut]
    override_id: Optional[int] = None
    reason: Optional[str] = None
    has_conflict: bool = False


class ConflictOut(BaseModel):
    kind: Literal["double_booking", "room_clash"]
    date: dt.date
    occurrence_ids: List[str]
    overlap_start: dt.time
    overlap_end: dt.time
    coach_id: Optional[int] = None
    location: Optional[str] = None


class OccurrencesResponse(BaseModel):
    start: dt.date
    end: dt.date
    scheduled_count: int
    items: List[OccurrenceOut]


class DayOccurrences(BaseModel):
    date: dt.date
    day_name: str
    items: List[OccurrenceOut]


class WeekResponse(BaseModel):
    week_start: dt.date
    week_end: dt.date
    iso_week: int
    scheduled_count: int
    days: List[DayOccurrences]
    conflicts: List[ConflictOut]


class WindowOut(BaseModel):
    start_hour: int
    end_hour: int


class PlacementOut(BaseModel):
    occurrence: OccurrenceOut
    column: int
    column_count: int
    top: float
    height: float
    left: float
    width: float
    truncated_start: bool
    truncated_end: bool


class DayLayoutResponse(BaseModel):
    day: dt.date
    window: WindowOut
    column_count: int
    placements: List[PlacementOut]
    conflicts: List[ConflictOut]
