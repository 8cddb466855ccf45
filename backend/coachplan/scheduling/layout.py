# backend/coachplan/scheduling/layout.py
"""
Day timeline layout: vertical position from time of day, horizontal columns
from interval partitioning so simultaneous occurrences never share a column.
"""
from __future__ import annotations

from datetime import time
from typing import Iterable, Optional

from coachplan.config import TIMELINE_END_HOUR, TIMELINE_START_HOUR
from coachplan.scheduling.calendar import ceil_hour, floor_hour, minutes_of
from coachplan.scheduling.models import Occurrence, Placement, TimeWindow


def default_window() -> TimeWindow:
    return TimeWindow(TIMELINE_START_HOUR, TIMELINE_END_HOUR)


def assign_columns(occurrences: Iterable[Occurrence]) -> tuple[list[tuple[Occurrence, int]], int]:
    """
    Greedy interval partitioning.

    Occurrences are taken by start time; each goes into the first column whose
    last end is <= its start, otherwise a new column is opened. Returns the
    (occurrence, column) pairs and the number of columns used.
    """
    ordered = sorted(
        occurrences,
        key=lambda o: (o.effective_start, o.effective_end, o.occurrence_id),
    )
    column_ends: list[time] = []
    placed: list[tuple[Occurrence, int]] = []
    for occ in ordered:
        for idx, last_end in enumerate(column_ends):
            if last_end <= occ.effective_start:
                column_ends[idx] = occ.effective_end
                placed.append((occ, idx))
                break
        else:
            column_ends.append(occ.effective_end)
            placed.append((occ, len(column_ends) - 1))
    return placed, len(column_ends)


def _vertical(occ: Occurrence, window: TimeWindow) -> tuple[float, float, bool, bool]:
    start = minutes_of(occ.effective_start)
    end = minutes_of(occ.effective_end)
    lo, hi = window.start_minutes, window.end_minutes

    truncated_start = start < lo
    truncated_end = end > hi
    # an occurrence entirely outside the window collapses onto the nearest edge
    top_m = min(max(start, lo), hi)
    bottom_m = min(max(end, lo), hi)
    if start >= hi:
        truncated_end = True
    if end <= lo:
        truncated_start = True

    span = window.span_minutes
    return (top_m - lo) / span, (bottom_m - top_m) / span, truncated_start, truncated_end


def layout(
    occurrences: Iterable[Occurrence],
    window: Optional[TimeWindow] = None,
) -> list[Placement]:
    """
    One placement per visible occurrence.

    Meant for a single day; occurrences of several dates are laid out day by
    day, each day with its own column count.
    """
    window = window or default_window()

    by_date: dict = {}
    for occ in occurrences:
        if occ.is_visible:
            by_date.setdefault(occ.date, []).append(occ)

    out: list[Placement] = []
    for day in sorted(by_date):
        placed, column_count = assign_columns(by_date[day])
        width = 1.0 / column_count if column_count else 1.0
        for occ, column in placed:
            top, height, t_start, t_end = _vertical(occ, window)
            out.append(Placement(
                occurrence_id=occ.occurrence_id,
                slot_id=occ.slot_id,
                date=occ.date,
                column=column,
                column_count=column_count,
                top=top,
                height=height,
                left=column * width,
                width=width,
                truncated_start=t_start,
                truncated_end=t_end,
            ))
    return out


def fit_window(
    occurrences: Iterable[Occurrence],
    fallback: Optional[TimeWindow] = None,
) -> TimeWindow:
    """Smallest whole-hour window around the visible occurrences, one hour of margin each side."""
    visible = [o for o in occurrences if o.is_visible]
    if not visible:
        return fallback or default_window()
    lo = min(floor_hour(o.effective_start) for o in visible)
    hi = max(ceil_hour(o.effective_end) for o in visible)
    if lo >= hi:
        return fallback or default_window()
    return TimeWindow(max(0, lo - 1), min(24, hi + 1))
