# backend/coachplan/scheduling/conflicts.py
"""
Double-booking and room-clash detection between resolved occurrences.

Conflicts are warnings for the coach: detection never raises and never
blocks a save.
"""
from __future__ import annotations

from typing import Iterable

from coachplan.scheduling.models import Conflict, ConflictKind, Occurrence


def _same_place(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


def detect(occurrences: Iterable[Occurrence]) -> list[Conflict]:
    """
    Pairwise conflicts among visible occurrences whose [start, end) strictly intersect.

    Only occurrences on the same date are compared, so a whole week can be
    passed in at once. A pair sharing two coaches yields two double_booking
    conflicts (one per coach).
    """
    visible = sorted(
        (o for o in occurrences if o.is_visible),
        key=lambda o: (o.date, o.effective_start, o.effective_end, o.occurrence_id),
    )

    out: list[Conflict] = []
    for i, a in enumerate(visible):
        for b in visible[i + 1:]:
            # sorted by (date, start): nothing further along can overlap `a`
            if b.date != a.date or b.effective_start >= a.effective_end:
                break
            if not a.overlaps(b):
                continue

            ids = tuple(sorted((a.occurrence_id, b.occurrence_id)))
            overlap_start = max(a.effective_start, b.effective_start)
            overlap_end = min(a.effective_end, b.effective_end)

            for coach_id in sorted(a.coach_ids & b.coach_ids):
                out.append(Conflict(
                    kind=ConflictKind.DOUBLE_BOOKING,
                    date=a.date,
                    occurrence_ids=ids,
                    overlap_start=overlap_start,
                    overlap_end=overlap_end,
                    coach_id=coach_id,
                ))

            if _same_place(a.effective_location, b.effective_location):
                out.append(Conflict(
                    kind=ConflictKind.ROOM_CLASH,
                    date=a.date,
                    occurrence_ids=ids,
                    overlap_start=overlap_start,
                    overlap_end=overlap_end,
                    location=a.effective_location,
                ))
    return out


def conflicting_occurrence_ids(conflicts: Iterable[Conflict]) -> set[str]:
    """Ids to badge on the calendar."""
    return {oid for c in conflicts for oid in c.occurrence_ids}


def detect_range(occurrences: Iterable[Occurrence]) -> dict:
    """Conflicts of a multi-day list, keyed by date; days without conflicts are left out."""
    by_date: dict = {}
    for o in occurrences:
        by_date.setdefault(o.date, []).append(o)
    out: dict = {}
    for day in sorted(by_date):
        found = detect(by_date[day])
        if found:
            out[day] = found
    return out
