"""Tests for the scheduling rules."""

import asyncio
import datetime as dt

import pytest

from crewboard.domain.scheduling.time_slots import TimeSlotModel
from crewboard.domain.scheduling.validator import (
    booking_interval,
    busy_people,
    check_booking,
    crew_conflicts,
    find_overlap,
    fits_in_day,
    has_overlap,
)
from crewboard.exceptions import BookingConflictError, OutsideWorkingHoursError

SLOTS = TimeSlotModel(8, 18, 30)


class TestWorkingHours:
    """A booking must start on the grid and end by closing time."""

    @pytest.mark.parametrize("start", ["08:00", "12:00", "17:30"])
    def test_containment_for_every_half_hour_duration(self, make_booking, start):
        start_index = SLOTS.slot_index(start)
        for n in range(1, 2 * SLOTS.slot_count() + 1):
            booking = make_booking(start=start, hours=n * 0.5)
            assert fits_in_day(booking, SLOTS) == (start_index + n <= SLOTS.slot_count())

    def test_full_day_fits(self, make_booking):
        assert fits_in_day(make_booking(start="08:00", hours=10), SLOTS)
        assert not fits_in_day(make_booking(start="08:00", hours=10.5), SLOTS)

    def test_missing_fields_do_not_fit(self, make_booking):
        assert not fits_in_day(make_booking(start=None), SLOTS)
        assert not fits_in_day(make_booking(hours=None), SLOTS)

    def test_off_grid_start_does_not_fit(self, make_booking):
        assert not fits_in_day(make_booking(start="07:30"), SLOTS)
        assert not fits_in_day(make_booking(start="09:15"), SLOTS)


class TestOverlap:
    def test_intervals_in_minutes(self, make_booking):
        assert booking_interval(make_booking(start="09:30", hours=1.5)) == (570, 660)
        assert booking_interval(make_booking(start=None)) is None

    def test_touching_bookings_do_not_overlap(self, make_booking):
        existing = [make_booking("a", start="09:00", hours=1)]
        assert not has_overlap(make_booking(start="10:00"), existing)
        assert not has_overlap(make_booking(start="08:00"), existing)

    def test_intersecting_bookings_overlap(self, make_booking):
        existing = [make_booking("a", start="09:00", hours=1)]
        assert find_overlap(make_booking(start="09:30"), existing).id == "a"
        assert has_overlap(make_booking(start="08:00", hours=3), existing)

    def test_other_team_or_day_never_overlaps(self, make_booking, monday):
        existing = [make_booking("a", team_id="T2"), make_booking("b", day=monday + dt.timedelta(days=1))]
        assert not has_overlap(make_booking(), existing)

    def test_booking_does_not_overlap_itself(self, make_booking):
        booking = make_booking("a")
        assert not has_overlap(booking, [booking])

    def test_incomplete_candidate_cannot_overlap(self, make_booking):
        existing = [make_booking("a")]
        assert not has_overlap(make_booking(team_id=None), existing)
        assert not has_overlap(make_booking(hours=None), existing)

    def test_validation_is_repeatable(self, make_booking):
        booking = make_booking(start="09:30")
        existing = [make_booking("a")]
        results = {(fits_in_day(booking, SLOTS), has_overlap(booking, existing)) for _ in range(3)}
        assert results == {(True, True)}

    def test_accepted_creates_never_double_book(self, store, make_booking):
        """Every booking the store accepted leaves the team's intervals disjoint."""

        async def fill():
            for start in SLOTS.labels:
                for hours in (1.5, 0.5, 2):
                    try:
                        await store.create_booking(make_booking(start=start, hours=hours))
                    except BookingConflictError:
                        pass
            return await store.list_bookings_for_day(make_booking().date)

        bookings = asyncio.run(fill())
        assert len(bookings) > 1
        for booking in bookings:
            others = [b for b in bookings if b.id != booking.id]
            assert not has_overlap(booking, others)


class TestCheckBooking:
    def test_outside_hours_message(self, make_booking):
        with pytest.raises(OutsideWorkingHoursError) as exc:
            check_booking(make_booking(start="17:30", hours=1), [], SLOTS)
        assert exc.value.message == "Outside working hours."

    def test_conflict_message_is_caller_specific(self, make_booking):
        existing = [make_booking("a")]
        with pytest.raises(BookingConflictError) as exc:
            check_booking(make_booking(start="09:30"), existing, SLOTS, "Overlaps with another booking for that team.")
        assert exc.value.message == "Overlaps with another booking for that team."
        assert exc.value.status_code == 409

    def test_valid_booking_passes(self, make_booking):
        check_booking(make_booking(start="10:00"), [make_booking("a")], SLOTS)


class TestCrewAvailability:
    def test_busy_people_excludes_own_team(self, make_booking, monday):
        bookings = [make_booking("a", crew=["p1", "p2"]), make_booking("b", team_id="T2", crew=["p3"])]
        assert busy_people(monday, bookings) == {"p1", "p2", "p3"}
        assert busy_people(monday, bookings, exclude_team_id="T1") == {"p3"}

    def test_crew_conflicts_are_advisory(self, make_booking):
        other_team = make_booking("a", team_id="T2", start="14:00", crew=["p1"])
        candidate = make_booking(crew=["p1", "p2"])
        assert crew_conflicts(candidate, [other_team]) == {"p1"}
        # The write-gating check does not look at crew
        check_booking(candidate, [other_team], SLOTS)

    def test_same_team_crew_is_not_a_conflict(self, make_booking):
        same_team = make_booking("a", start="14:00", crew=["p1"])
        assert crew_conflicts(make_booking(crew=["p1"]), [same_team]) == set()
