# backend/coachplan/routers/calendar.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from coachplan.db import get_db
from coachplan.deps import get_today
from coachplan.scheduling import DateRange, TimeWindow, count_scheduled, detect, fit_window, layout, resolve, week_view
from coachplan.scheduling.calendar import day_name
from coachplan.scheduling.conflicts import conflicting_occurrence_ids
from coachplan.scheduling.layout import default_window
from coachplan.scheduling.resolver import slots_for_coach, slots_for_group
from coachplan.schemas.calendar import (
    ConflictOut,
    DayLayoutResponse,
    DayOccurrences,
    OccurrencesResponse,
    PlacementOut,
    WeekResponse,
    WindowOut,
)
from coachplan.serializers import conflicts_out, occurrence_out
from coachplan.stores.override_store import OverrideStore
from coachplan.stores.slot_store import SlotStore

router = APIRouter(prefix="/calendar", tags=["calendar"])

# Upper bound on a single request's date range
MAX_RANGE_DAYS = 366


def _date_range(start: date, end: Optional[date]) -> DateRange:
    end = end or start
    if end < start:
        raise HTTPException(status_code=400, detail="end must be on/after start")
    rng = DateRange(start, end)
    if len(rng) > MAX_RANGE_DAYS:
        raise HTTPException(status_code=400, detail=f"Range too long (max {MAX_RANGE_DAYS} days)")
    return rng


def _snapshots(db: Session, rng: DateRange, group_id: Optional[int] = None, coach_id: Optional[int] = None):
    slots = SlotStore(db).snapshot()
    if group_id is not None:
        slots = slots_for_group(slots, group_id)
    if coach_id is not None:
        slots = slots_for_coach(slots, coach_id)
    overrides = OverrideStore(db).snapshot(from_date=rng.start, to_date=rng.end)
    return slots, overrides


@router.get("/occurrences", response_model=OccurrencesResponse)
def list_occurrences(
    start: date = Query(..., description="YYYY-MM-DD"),
    end: Optional[date] = Query(None, description="YYYY-MM-DD, inclusive; defaults to start"),
    group_id: Optional[int] = Query(None),
    coach_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    rng = _date_range(start, end)
    slots, overrides = _snapshots(db, rng, group_id, coach_id)
    occurrences = resolve(slots, overrides, rng)
    flagged = conflicting_occurrence_ids(detect(occurrences))
    return OccurrencesResponse(
        start=rng.start,
        end=rng.end,
        scheduled_count=count_scheduled(occurrences),
        items=[occurrence_out(o, flagged) for o in occurrences],
    )


@router.get("/week", response_model=WeekResponse)
def get_week(
    offset: int = Query(0, description="0 = this week, -1 = last week, 1 = next week"),
    group_id: Optional[int] = Query(None),
    coach_id: Optional[int] = Query(None),
    today: date = Depends(get_today),
    db: Session = Depends(get_db),
):
    week = DateRange.week_of(today, offset)
    slots, overrides = _snapshots(db, week, group_id, coach_id)
    view = week_view(slots, overrides, week)
    flagged = conflicting_occurrence_ids(view.conflicts)
    return WeekResponse(
        week_start=week.start,
        week_end=week.end,
        iso_week=view.iso_week,
        scheduled_count=count_scheduled(view.occurrences),
        days=[
            DayOccurrences(
                date=d,
                day_name=day_name(d.isoweekday()),
                items=[occurrence_out(o, flagged) for o in view.by_date.get(d, [])],
            )
            for d in week.days()
        ],
        conflicts=conflicts_out(view.conflicts),
    )


@router.get("/conflicts", response_model=List[ConflictOut])
def list_conflicts(
    start: date = Query(..., description="YYYY-MM-DD"),
    end: Optional[date] = Query(None, description="YYYY-MM-DD, inclusive; defaults to start"),
    db: Session = Depends(get_db),
):
    rng = _date_range(start, end)
    slots, overrides = _snapshots(db, rng)
    return conflicts_out(detect(resolve(slots, overrides, rng)))


@router.get("/day-layout", response_model=DayLayoutResponse)
def get_day_layout(
    day: date = Query(..., description="YYYY-MM-DD"),
    start_hour: Optional[int] = Query(None, ge=0, le=23),
    end_hour: Optional[int] = Query(None, ge=1, le=24),
    fit: bool = Query(False, description="Fit the window around the day's sessions"),
    db: Session = Depends(get_db),
):
    """
    Timeline placements for one day.

    Cancelled sessions get no placement; sessions outside the window are
    clamped to its edges and flagged as truncated.
    """
    rng = DateRange.single(day)
    slots, overrides = _snapshots(db, rng)
    occurrences = resolve(slots, overrides, rng)

    base = default_window()
    try:
        window = TimeWindow(
            start_hour if start_hour is not None else base.start_hour,
            end_hour if end_hour is not None else base.end_hour,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if fit:
        window = fit_window(occurrences, fallback=window)

    by_id = {o.occurrence_id: o for o in occurrences}
    conflicts = detect(occurrences)
    flagged = conflicting_occurrence_ids(conflicts)
    placements = layout(occurrences, window)

    return DayLayoutResponse(
        day=day,
        window=WindowOut(start_hour=window.start_hour, end_hour=window.end_hour),
        column_count=max((p.column_count for p in placements), default=0),
        placements=[
            PlacementOut(
                occurrence=occurrence_out(by_id[p.occurrence_id], flagged),
                column=p.column,
                column_count=p.column_count,
                top=p.top,
                height=p.height,
                left=p.left,
                width=p.width,
                truncated_start=p.truncated_start,
                truncated_end=p.truncated_end,
            )
            for p in placements
        ],
        conflicts=conflicts_out(conflicts),
    )
