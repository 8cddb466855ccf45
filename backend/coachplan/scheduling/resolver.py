# backend/coachplan/scheduling/resolver.py
"""
Recurring slot + override projection onto concrete dates.

resolve() is pure: it reads frozen snapshots only, so identical inputs give
identical output and results are cached on (slots, overrides, range).
"""
from __future__ import annotations

import logging
from collections import defaultdict
from functools import lru_cache
from typing import Iterable, Optional

from coachplan.scheduling.calendar import iso_week_number
from coachplan.scheduling.conflicts import detect
from coachplan.scheduling.models import (
    DateRange,
    Occurrence,
    OccurrenceStatus,
    OverrideStatus,
    Slot,
    SlotOverride,
    WeekView,
)

logger = logging.getLogger(__name__)


def resolve(
    slots: Iterable[Slot],
    overrides: Iterable[SlotOverride],
    date_range: DateRange,
) -> list[Occurrence]:
    """
    One occurrence per (active slot, matching weekday in range).

    Orphaned overrides (unknown or inactive slot, or outside the range) are
    ignored. Output is sorted by (date, effective_start, slot_id).
    """
    return list(_resolve_snapshot(tuple(slots), tuple(overrides), date_range))


@lru_cache(maxsize=256)
def _resolve_snapshot(
    slots: tuple[Slot, ...],
    overrides: tuple[SlotOverride, ...],
    date_range: DateRange,
) -> tuple[Occurrence, ...]:
    # last snapshot of a slot id wins, so duplicates never double an occurrence
    by_id: dict[int, Slot] = {}
    for s in slots:
        by_id[s.id] = s

    by_weekday: dict[int, list[Slot]] = defaultdict(list)
    for s in by_id.values():
        if s.active:
            by_weekday[s.day_of_week].append(s)

    override_map: dict[tuple, SlotOverride] = {}
    for o in overrides:
        if o.override_date in date_range:
            override_map[o.key] = o

    orphans = [
        key for key in override_map
        if key[0] not in by_id or not by_id[key[0]].active
    ]
    if orphans:
        logger.debug("Ignoring %d orphaned slot override(s)", len(orphans))

    out: list[Occurrence] = []
    for day in date_range.days():
        for slot in by_weekday.get(day.isoweekday(), ()):
            out.append(_occurrence_for(slot, day, override_map.get((slot.id, day))))

    out.sort(key=lambda o: (o.date, o.effective_start, o.slot_id))
    return tuple(out)


def _occurrence_for(slot: Slot, day, override: Optional[SlotOverride]) -> Occurrence:
    if override is None:
        return Occurrence(
            slot_id=slot.id,
            date=day,
            effective_start=slot.start_time,
            effective_end=slot.end_time,
            effective_location=slot.location,
            status=OccurrenceStatus.SCHEDULED,
            assignments=slot.assignments,
        )

    if override.status is OverrideStatus.CANCELLED:
        return Occurrence(
            slot_id=slot.id,
            date=day,
            effective_start=slot.start_time,
            effective_end=slot.end_time,
            effective_location=slot.location,
            status=OccurrenceStatus.CANCELLED,
            assignments=slot.assignments,
            override_id=override.id,
            reason=override.reason,
        )

    # modified: every field falls back to the slot on its own
    start = override.new_start_time if override.new_start_time is not None else slot.start_time
    end = override.new_end_time if override.new_end_time is not None else slot.end_time
    if start >= end:
        logger.warning(
            "Override %s for slot %s on %s gives an empty time range; keeping slot times",
            override.id, slot.id, day.isoformat(),
        )
        start, end = slot.start_time, slot.end_time
    location = override.new_location if override.new_location else slot.location

    return Occurrence(
        slot_id=slot.id,
        date=day,
        effective_start=start,
        effective_end=end,
        effective_location=location,
        status=OccurrenceStatus.MODIFIED,
        assignments=slot.assignments,
        override_id=override.id,
        reason=override.reason,
    )


def count_scheduled(occurrences: Iterable[Occurrence]) -> int:
    """Sessions that actually take place; cancelled ones never count."""
    return sum(1 for o in occurrences if o.is_visible)


def group_by_date(occurrences: Iterable[Occurrence]) -> dict:
    out: dict = {}
    for o in occurrences:
        out.setdefault(o.date, []).append(o)
    return out


def slots_for_group(slots: Iterable[Slot], group_id: int) -> list[Slot]:
    return [s for s in slots if group_id in s.group_ids]


def slots_for_coach(slots: Iterable[Slot], coach_id: int) -> list[Slot]:
    return [s for s in slots if coach_id in s.coach_ids]


def week_view(
    slots: Iterable[Slot],
    overrides: Iterable[SlotOverride],
    week: DateRange,
) -> WeekView:
    """Occurrences of one week grouped per day, plus that week's conflicts."""
    occurrences = resolve(slots, overrides, week)
    by_date = {d: [] for d in week.days()}
    by_date.update(group_by_date(occurrences))
    return WeekView(
        dates=week,
        iso_week=iso_week_number(week.start),
        by_date=by_date,
        conflicts=detect(occurrences),
    )
