"""
Pure scheduling core: slot/override snapshots in, occurrences, conflicts and
timeline placements out. No database or HTTP imports here.
"""

from .models import (
    Conflict,
    ConflictKind,
    DateRange,
    Occurrence,
    OccurrenceStatus,
    OverrideStatus,
    Placement,
    Slot,
    SlotAssignment,
    SlotOverride,
    TimeWindow,
    WeekView,
)
from .resolver import count_scheduled, group_by_date, resolve, week_view
from .conflicts import detect, detect_range
from .layout import fit_window, layout

__all__ = [
    "Conflict",
    "ConflictKind",
    "DateRange",
    "Occurrence",
    "OccurrenceStatus",
    "OverrideStatus",
    "Placement",
    "Slot",
    "SlotAssignment",
    "SlotOverride",
    "TimeWindow",
    "WeekView",
    "resolve",
    "count_scheduled",
    "group_by_date",
    "week_view",
    "detect",
    "detect_range",
    "layout",
    "fit_window",
]
