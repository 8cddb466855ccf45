# backend/coachplan/scheduling/models.py
"""
Snapshot values the pure scheduling functions work on.

Nothing here touches the database: stores convert ORM rows into these frozen
dataclasses, so a snapshot can be hashed, cached and compared.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time, timedelta
from enum import Enum
from typing import Iterator, Optional

from coachplan.scheduling.calendar import monday_of_week


class OverrideStatus(str, Enum):
    CANCELLED = "cancelled"
    MODIFIED = "modified"


class OccurrenceStatus(str, Enum):
    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"
    MODIFIED = "modified"


class ConflictKind(str, Enum):
    DOUBLE_BOOKING = "double_booking"  # same coach in two places at once
    ROOM_CLASH = "room_clash"          # same location used twice at once


@dataclass(frozen=True)
class SlotAssignment:
    group_id: int
    coach_id: int
    lane_count: Optional[int] = None
    group_name: Optional[str] = None
    coach_name: Optional[str] = None


@dataclass(frozen=True)
class Slot:
    """A weekly recurring training pattern (day_of_week: 1=Monday .. 7=Sunday)."""
    id: int
    day_of_week: int
    start_time: time
    end_time: time
    location: str
    assignments: tuple[SlotAssignment, ...] = ()
    active: bool = True

    def __post_init__(self) -> None:
        # callers may hand in a list; keep the snapshot hashable
        object.__setattr__(self, "assignments", tuple(self.assignments))

    @property
    def coach_ids(self) -> frozenset[int]:
        return frozenset(a.coach_id for a in self.assignments)

    @property
    def group_ids(self) -> frozenset[int]:
        return frozenset(a.group_id for a in self.assignments)


@dataclass(frozen=True)
class SlotOverride:
    """A date-specific exception to one slot. None in a new_* field means inherit."""
    id: int
    slot_id: int
    override_date: date
    status: OverrideStatus
    new_start_time: Optional[time] = None
    new_end_time: Optional[time] = None
    new_location: Optional[str] = None
    reason: Optional[str] = None

    @property
    def key(self) -> tuple[int, date]:
        return (self.slot_id, self.override_date)


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar date range."""
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError("DateRange end must be on/after start")

    @classmethod
    def single(cls, day: date) -> "DateRange":
        return cls(day, day)

    @classmethod
    def week_of(cls, day: date, offset: int = 0) -> "DateRange":
        """Monday..Sunday week containing `day`, shifted by `offset` weeks."""
        monday = monday_of_week(day, offset)
        return cls(monday, monday + timedelta(days=6))

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[date]:
        d = self.start
        while d <= self.end:
            yield d
            d += timedelta(days=1)


@dataclass(frozen=True)
class Occurrence:
    """A concrete calendar-date instance of a slot once its override is applied."""
    slot_id: int
    date: date
    effective_start: time
    effective_end: time
    effective_location: str
    status: OccurrenceStatus
    assignments: tuple[SlotAssignment, ...] = ()
    override_id: Optional[int] = None
    reason: Optional[str] = None

    @property
    def occurrence_id(self) -> str:
        return f"{self.slot_id}:{self.date.isoformat()}"

    @property
    def is_visible(self) -> bool:
        return self.status is not OccurrenceStatus.CANCELLED

    @property
    def coach_ids(self) -> frozenset[int]:
        return frozenset(a.coach_id for a in self.assignments)

    def overlaps(self, other: "Occurrence") -> bool:
        """Strict [start, end) intersection on the same date; touching ends do not overlap."""
        return (
            self.date == other.date
            and self.effective_start < other.effective_end
            and other.effective_start < self.effective_end
        )


@dataclass(frozen=True)
class Conflict:
    kind: ConflictKind
    date: date
    occurrence_ids: tuple[str, str]
    overlap_start: time
    overlap_end: time
    coach_id: Optional[int] = None
    location: Optional[str] = None


@dataclass(frozen=True)
class TimeWindow:
    """Visible part of a day on the timeline, [start_hour, end_hour)."""
    start_hour: int = 6
    end_hour: int = 22

    def __post_init__(self) -> None:
        if not (0 <= self.start_hour < self.end_hour <= 24):
            raise ValueError("TimeWindow needs 0 <= start_hour < end_hour <= 24")

    @property
    def start_minutes(self) -> int:
        return self.start_hour * 60

    @property
    def end_minutes(self) -> int:
        return self.end_hour * 60

    @property
    def span_minutes(self) -> int:
        return self.end_minutes - self.start_minutes


@dataclass(frozen=True)
class Placement:
    """
    Where one occurrence goes on a day timeline.

    top/height are fractions of the window height, left/width fractions of the
    day column width.
    """
    occurrence_id: str
    slot_id: int
    date: date
    column: int
    column_count: int
    top: float
    height: float
    left: float
    width: float
    truncated_start: bool = False
    truncated_end: bool = False

    @property
    def truncated(self) -> bool:
        return self.truncated_start or self.truncated_end


@dataclass
class WeekView:
    """One Monday-based week of occurrences, grouped by date."""
    dates: DateRange
    iso_week: int
    by_date: dict[date, list[Occurrence]] = field(default_factory=dict)
    conflicts: list[Conflict] = field(default_factory=list)

    @property
    def occurrences(self) -> list[Occurrence]:
        return [o for d in self.dates.days() for o in self.by_date.get(d, [])]
