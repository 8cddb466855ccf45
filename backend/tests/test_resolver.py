"""
Unit tests for recurrence projection.

Everything here runs on frozen snapshots only: no database, no HTTP.
"""

from datetime import date, timedelta

import pytest

from coachplan.scheduling import (
    DateRange,
    OccurrenceStatus,
    OverrideStatus,
    SlotAssignment,
    SlotOverride,
    count_scheduled,
    group_by_date,
    resolve,
    week_view,
)
from coachplan.scheduling.calendar import (
    day_name,
    iso_week_number,
    monday_of_week,
    session_kind,
)
from coachplan.scheduling.models import Slot
from coachplan.scheduling.resolver import slots_for_coach, slots_for_group

from conftest import hm, make_slot

MONDAY = date(2025, 1, 6)


def monday_slot():
    """Monday 08:00-09:00, Piscine A, coach C1 / group G1 on 4 lanes."""
    return Slot(
        id=1,
        day_of_week=1,
        start_time=hm(8),
        end_time=hm(9),
        location="Piscine A",
        assignments=[SlotAssignment(group_id=1, coach_id=1, lane_count=4)],
    )


def override(oid, slot_id, day, status, **kw):
    return SlotOverride(id=oid, slot_id=slot_id, override_date=day, status=status, **kw)


# ---------------------------------------------------------------------------
# Worked scenarios
# ---------------------------------------------------------------------------

class TestScenarios:

    def test_modified_times_inherit_location(self):
        """A modified override without new_location keeps the slot's pool."""
        ov = override(10, 1, MONDAY, OverrideStatus.MODIFIED, new_start_time=hm(9), new_end_time=hm(10))

        result = resolve([monday_slot()], [ov], DateRange.single(MONDAY))

        assert len(result) == 1
        occ = result[0]
        assert occ.status is OccurrenceStatus.MODIFIED
        assert (occ.effective_start, occ.effective_end) == (hm(9), hm(10))
        assert occ.effective_location == "Piscine A"
        assert occ.assignments[0].lane_count == 4
        assert occ.override_id == 10

    def test_cancelled_session_is_kept_but_not_counted(self):
        day = date(2025, 1, 13)
        ov = override(11, 1, day, OverrideStatus.CANCELLED, reason="Compétition")

        result = resolve([monday_slot()], [ov], DateRange.week_of(day))

        assert len(result) == 1
        assert result[0].status is OccurrenceStatus.CANCELLED
        assert result[0].reason == "Compétition"
        assert count_scheduled(result) == 0

    def test_count_over_two_weeks_skips_only_the_cancelled_one(self):
        ov = override(11, 1, date(2025, 1, 13), OverrideStatus.CANCELLED)
        result = resolve([monday_slot()], [ov], DateRange(MONDAY, date(2025, 1, 19)))

        assert [o.status for o in result] == [OccurrenceStatus.SCHEDULED, OccurrenceStatus.CANCELLED]
        assert count_scheduled(result) == 1


# ---------------------------------------------------------------------------
# Projection properties
# ---------------------------------------------------------------------------

class TestProjection:

    def test_occurrence_iff_active_and_weekday_in_range(self):
        """Checked exhaustively over every weekday and a two-month range."""
        slots = [
            make_slot(dow * 10 + n, dow, hm(7 + n), hm(8 + n), active=(n == 0))
            for dow in range(1, 8)
            for n in range(2)
        ]
        rng = DateRange(date(2025, 1, 1), date(2025, 2, 28))

        got = {(o.slot_id, o.date) for o in resolve(slots, [], rng)}

        expected = {
            (s.id, d)
            for s in slots
            for d in rng.days()
            if s.active and d.isoweekday() == s.day_of_week
        }
        assert got == expected

    def test_no_occurrence_outside_range(self):
        rng = DateRange(date(2025, 1, 7), date(2025, 1, 12))  # Tuesday..Sunday
        assert resolve([monday_slot()], [], rng) == []

    def test_at_most_one_occurrence_per_slot_and_date(self):
        """Duplicate slot snapshots and duplicate overrides never double an occurrence."""
        ovs = [
            override(1, 1, MONDAY, OverrideStatus.CANCELLED),
            override(2, 1, MONDAY, OverrideStatus.MODIFIED, new_location="Piscine B"),
        ]
        result = resolve([monday_slot(), monday_slot()], ovs, DateRange.week_of(MONDAY))

        assert len(result) == 1
        # last override for a key wins
        assert result[0].status is OccurrenceStatus.MODIFIED
        assert result[0].effective_location == "Piscine B"

    def test_per_field_fallback(self):
        ov = override(3, 1, MONDAY, OverrideStatus.MODIFIED, new_end_time=hm(9, 30))
        occ = resolve([monday_slot()], [ov], DateRange.single(MONDAY))[0]

        assert occ.effective_start == hm(8)
        assert occ.effective_end == hm(9, 30)
        assert occ.effective_location == "Piscine A"

    def test_blank_new_location_inherits(self):
        ov = override(3, 1, MONDAY, OverrideStatus.MODIFIED, new_location="")
        occ = resolve([monday_slot()], [ov], DateRange.single(MONDAY))[0]
        assert occ.effective_location == "Piscine A"

    def test_inverted_modified_range_keeps_slot_times(self):
        ov = override(4, 1, MONDAY, OverrideStatus.MODIFIED, new_start_time=hm(10), new_location="Piscine B")
        occ = resolve([monday_slot()], [ov], DateRange.single(MONDAY))[0]

        assert (occ.effective_start, occ.effective_end) == (hm(8), hm(9))
        assert occ.effective_location == "Piscine B"
        assert occ.status is OccurrenceStatus.MODIFIED

    def test_output_sorted_by_date_start_then_slot(self):
        slots = [
            make_slot(3, 1, hm(18), hm(19)),
            make_slot(2, 1, hm(7), hm(8)),
            make_slot(1, 1, hm(7), hm(9)),
            make_slot(4, 2, hm(6), hm(7)),
        ]
        result = resolve(slots, [], DateRange(MONDAY, MONDAY + timedelta(days=1)))
        assert [o.slot_id for o in result] == [1, 2, 3, 4]

    def test_occurrence_id_is_slot_and_iso_date(self):
        occ = resolve([monday_slot()], [], DateRange.single(MONDAY))[0]
        assert occ.occurrence_id == "1:2025-01-06"


# ---------------------------------------------------------------------------
# Orphans and purity
# ---------------------------------------------------------------------------

class TestOrphansAndPurity:

    def test_orphaned_overrides_are_ignored(self):
        inactive = make_slot(2, 1, hm(10), hm(11), active=False)
        ovs = [
            override(1, 99, MONDAY, OverrideStatus.CANCELLED),
            override(2, 2, MONDAY, OverrideStatus.MODIFIED, new_location="Salle"),
        ]
        result = resolve([monday_slot(), inactive], ovs, DateRange.single(MONDAY))

        assert [o.slot_id for o in result] == [1]
        assert result[0].status is OccurrenceStatus.SCHEDULED

    def test_inactive_slot_produces_nothing(self):
        slot = make_slot(5, 1, hm(8), hm(9), active=False)
        assert resolve([slot], [], DateRange.week_of(MONDAY)) == []

    def test_same_inputs_same_output(self):
        slots = [monday_slot(), make_slot(2, 3, hm(10), hm(11))]
        ovs = [override(1, 1, MONDAY, OverrideStatus.CANCELLED)]
        rng = DateRange(MONDAY, date(2025, 2, 2))

        first = resolve(slots, ovs, rng)
        second = resolve(list(slots), list(ovs), rng)

        assert first == second
        assert first is not second

    def test_inputs_are_not_mutated(self):
        slots = [monday_slot()]
        ovs = [override(1, 1, MONDAY, OverrideStatus.CANCELLED)]
        before = (list(slots), list(ovs))

        resolve(slots, ovs, DateRange.week_of(MONDAY))

        assert (slots, ovs) == before

    def test_caller_cannot_corrupt_cached_result(self):
        rng = DateRange.week_of(MONDAY)
        result = resolve([monday_slot()], [], rng)
        result.clear()
        assert len(resolve([monday_slot()], [], rng)) == 1


# ---------------------------------------------------------------------------
# Date range and week helpers
# ---------------------------------------------------------------------------

class TestDateRange:

    def test_rejects_inverted_range(self):
        with pytest.raises(ValueError, match="on/after start"):
            DateRange(date(2025, 1, 2), date(2025, 1, 1))

    def test_week_of_is_monday_based(self):
        week = DateRange.week_of(date(2025, 1, 12))  # a Sunday
        assert (week.start, week.end) == (MONDAY, date(2025, 1, 12))
        assert len(week) == 7

    def test_week_offset(self):
        assert DateRange.week_of(date(2025, 1, 8), -1).start == date(2024, 12, 30)
        assert monday_of_week(date(2025, 1, 8), 1) == date(2025, 1, 13)

    def test_contains_is_inclusive(self):
        week = DateRange.week_of(MONDAY)
        assert MONDAY in week
        assert date(2025, 1, 12) in week
        assert date(2025, 1, 13) not in week

    def test_week_of_starts_on_monday_of_week(self):
        for offset in (-2, 0, 3):
            for day in DateRange.week_of(MONDAY).days():
                assert DateRange.week_of(day, offset).start == monday_of_week(day, offset)

    def test_iso_week(self):
        assert iso_week_number(MONDAY) == 2
        # ISO week 1 of 2025 starts in December 2024
        assert iso_week_number(date(2024, 12, 30)) == 1


class TestWeekView:

    def test_every_day_present_and_grouped(self):
        slots = [monday_slot(), make_slot(2, 3, hm(10), hm(11))]
        view = week_view(slots, [], DateRange.week_of(MONDAY))

        assert list(view.by_date) == list(DateRange.week_of(MONDAY).days())
        assert [o.slot_id for o in view.by_date[MONDAY]] == [1]
        assert [o.slot_id for o in view.by_date[date(2025, 1, 8)]] == [2]
        assert view.by_date[date(2025, 1, 7)] == []
        assert view.iso_week == 2
        assert [o.slot_id for o in view.occurrences] == [1, 2]

    def test_includes_conflicts(self):
        slots = [make_slot(1, 3, hm(10), hm(11), "Piscine A"), make_slot(2, 3, hm(10), hm(11), "Piscine B")]
        view = week_view(slots, [], DateRange.week_of(MONDAY))
        assert len(view.conflicts) == 1

    def test_group_by_date(self):
        result = resolve([monday_slot()], [], DateRange(MONDAY, date(2025, 1, 13)))
        grouped = group_by_date(result)
        assert sorted(grouped) == [MONDAY, date(2025, 1, 13)]


class TestSlotFilters:

    def test_filter_by_group_and_coach(self):
        slots = [
            make_slot(1, 1, hm(8), hm(9), coaches=(1,), groups=(1,)),
            make_slot(2, 2, hm(8), hm(9), coaches=(2,), groups=(2,)),
            make_slot(3, 3, hm(8), hm(9), coaches=(1, 2), groups=(1, 2)),
        ]
        assert [s.id for s in slots_for_group(slots, 2)] == [2, 3]
        assert [s.id for s in slots_for_coach(slots, 1)] == [1, 3]


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

class TestCalendarHelpers:

    def test_day_names(self):
        assert day_name(1) == "Lundi"
        assert day_name(7) == "Dimanche"

    @pytest.mark.parametrize("location,kind", [
        ("Piscine A", "swim"),
        ("Grand bassin", "swim"),
        ("Salle de muscu", "dryland"),
        ("PPG gymnase", "dryland"),
        ("Lac", "swim"),
    ])
    def test_session_kind(self, location, kind):
        assert session_kind(location) == kind
