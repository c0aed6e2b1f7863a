"""
Scheduling rules checked before any booking is written.

All arithmetic is on whole minutes parsed from HH:MM so that half-hour
durations never drift through float slot indices. Nothing here keeps
state between calls.
"""

import datetime as dt
from typing import Iterable, Optional

from ...exceptions import BookingConflictError, OutsideWorkingHoursError
from ...schemas import Booking
from .time_slots import TimeSlotModel, to_minutes

DEFAULT_SLOTS = TimeSlotModel()


def booking_interval(booking: Booking) -> Optional[tuple[int, int]]:
    """Half-open [start, end) minute interval, or None if start/duration are missing"""
    if not booking.startTime or not booking.durationHours:
        return None
    start = to_minutes(booking.startTime)
    return start, start + round(booking.durationHours * 60)


def fits_in_day(booking: Booking, slots: TimeSlotModel = DEFAULT_SLOTS) -> bool:
    """True when the booking starts on the grid and ends by the close of the day"""
    if not booking.startTime or not booking.durationHours:
        return False
    start_index = slots.slot_index(booking.startTime)
    if start_index is None:
        return False
    return start_index + slots.slots_for_hours(booking.durationHours) <= slots.slot_count()


def find_overlap(booking: Booking, bookings: Iterable[Booking]) -> Optional[Booking]:
    """
    First other booking of the same team and date whose interval intersects.

    Returns None, meaning "cannot tell yet", when the candidate is missing
    its team, date, start or duration.
    """
    if not booking.teamId or not booking.date:
        return None
    interval = booking_interval(booking)
    if interval is None:
        return None
    start, end = interval

    for other in bookings:
        if other.id is not None and other.id == booking.id:
            continue
        if other.teamId != booking.teamId or other.date != booking.date:
            continue
        other_interval = booking_interval(other)
        if other_interval is None:
            continue
        other_start, other_end = other_interval
        if start < other_end and end > other_start:
            return other
    return None


def has_overlap(booking: Booking, bookings: Iterable[Booking]) -> bool:
    return find_overlap(booking, bookings) is not None


def check_booking(
    booking: Booking,
    bookings: Iterable[Booking],
    slots: TimeSlotModel = DEFAULT_SLOTS,
    conflict_message: str = "This team already has a booking at that time.",
) -> None:
    """
    Run both write-gating rules.

    Raises:
        OutsideWorkingHoursError: start not on the grid or end past closing
        BookingConflictError: same team and date already busy in that interval
    """
    if not fits_in_day(booking, slots):
        raise OutsideWorkingHoursError()
    if has_overlap(booking, bookings):
        raise BookingConflictError(conflict_message)


def busy_people(day: dt.date, bookings: Iterable[Booking], exclude_team_id: Optional[str] = None) -> set[str]:
    """People on the crew of any booking that day, optionally ignoring one team"""
    people = set()
    for other in bookings:
        if other.date != day:
            continue
        if exclude_team_id is not None and other.teamId == exclude_team_id:
            continue
        people.update(other.crew)
    return people


def crew_conflicts(booking: Booking, bookings: Iterable[Booking]) -> set[str]:
    """
    Crew members of `booking` already out with a different team that day.

    Advisory only: data-entry screens use it to grey people out, the
    write path does not reject on it.
    """
    if not booking.date or not booking.crew:
        return set()
    others = [b for b in bookings if b.id is None or b.id != booking.id]
    return set(booking.crew) & busy_people(booking.date, others, exclude_team_id=booking.teamId)
