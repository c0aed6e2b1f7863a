"""Booking service - Schedule reads and validated booking writes shared by the API and the gesture controller"""

import datetime as dt
import logging
from typing import Iterable, Optional

from ...config import STEP_HOURS
from ...events import EventBus, ScheduleEvent
from ...exceptions import BookingConflictError, IncompleteBookingError, NotFoundError
from ...schemas import Booking, TeamView
from ..store.base import StoreAdapter
from .grid import DayGrid, SlotRef, layout_days
from .navigator import PeriodNavigator, get_monday
from .time_slots import TimeSlotModel
from .validator import DEFAULT_SLOTS, busy_people, check_booking

logger = logging.getLogger(__name__)

MOVE_CONFLICT = "Overlaps with another booking for that team."
RESIZE_CONFLICT = "New length would overlap another booking."
CREATE_CONFLICT = "This team already has a booking at that time."


def _require_complete(booking: Booking) -> None:
    """The validator passes half-filled forms; nothing half-filled is written"""
    if not (booking.date and booking.teamId and booking.startTime and booking.durationHours):
        raise IncompleteBookingError()


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, store: StoreAdapter, bus: EventBus, slots: TimeSlotModel = DEFAULT_SLOTS):
        self.store = store
        self.bus = bus
        self.slots = slots

    async def get_booking(self, booking_id: str) -> Booking:
        booking = await self.store.get_booking(booking_id)
        if not booking:
            raise NotFoundError("Booking", booking_id)
        return booking

    async def list_week(self, day: dt.date) -> list[Booking]:
        """Bookings of the Monday-based week containing `day`"""
        return await self.store.list_bookings_for_week(get_monday(day))

    async def get_schedule(self, navigator: PeriodNavigator) -> tuple[list[TeamView], list[DayGrid]]:
        """Teams and laid-out day grids for the navigator's visible days"""
        teams = await self.store.list_teams()
        bookings = await self.store.list_bookings_for_week(navigator.week_start)
        return teams, layout_days(navigator.visible_days(), bookings, teams, self.slots)

    async def _context(self, booking: Booking, context: Optional[Iterable[Booking]]) -> list[Booking]:
        """Bookings to validate against: the caller's snapshot, else the store's view of that day"""
        if context is not None:
            return list(context)
        if not booking.date:
            return []
        return await self.store.list_bookings_for_day(booking.date)

    async def create_booking(
        self, draft: Booking, context: Optional[Iterable[Booking]] = None
    ) -> Booking:
        """Create a booking after the working-hours and overlap checks"""
        _require_complete(draft)
        check_booking(draft, await self._context(draft, context), self.slots, CREATE_CONFLICT)
        booking = await self.store.create_booking(draft)
        logger.info(f"📥 Booking {booking.id} created for team {booking.teamId}")
        await self.bus.publish(ScheduleEvent.BOOKINGS_UPDATED)
        return booking

    async def commit(
        self,
        candidate: Booking,
        context: Optional[Iterable[Booking]] = None,
        conflict_message: str = CREATE_CONFLICT,
    ) -> Booking:
        """
        Validate a modified booking and write it.

        Nothing is written when validation fails, so the stored booking
        keeps its previous values.

        Raises:
            IncompleteBookingError: a scheduling field is missing
            OutsideWorkingHoursError, BookingConflictError: candidate rejected
            NotFoundError: booking or its team no longer exists
            StoreError: backing store failed
        """
        _require_complete(candidate)
        check_booking(candidate, await self._context(candidate, context), self.slots, conflict_message)
        try:
            saved = await self.store.update_booking(candidate)
        except BookingConflictError:
            # Store saw a booking the caller's snapshot did not
            raise BookingConflictError(conflict_message) from None
        logger.info(
            f"✅ Booking {saved.id} saved: {saved.date} {saved.startTime} "
            f"{saved.durationHours}h team {saved.teamId}"
        )
        await self.bus.publish(ScheduleEvent.BOOKINGS_UPDATED)
        return saved

    async def update_booking(self, booking: Booking, context: Optional[Iterable[Booking]] = None) -> Booking:
        await self.get_booking(booking.id)
        return await self.commit(booking, context, CREATE_CONFLICT)

    async def delete_booking(self, booking_id: str) -> None:
        await self.store.delete_booking(booking_id)
        logger.info(f"🗑️ Booking {booking_id} deleted")
        await self.bus.publish(ScheduleEvent.BOOKINGS_UPDATED)

    # Reschedule paths

    def moved(self, booking: Booking, target: SlotRef) -> Booking:
        """Candidate with the drop slot's date, team and start; duration unchanged"""
        return booking.model_copy(
            update={"date": target.date, "teamId": target.teamId, "startTime": target.startTime}, deep=True
        )

    def resized(self, booking: Booking, span: int) -> Booking:
        return booking.model_copy(update={"durationHours": self.slots.hours_for_slots(span)}, deep=True)

    def stepped(self, booking: Booking, direction: int) -> Booking:
        """Candidate one step longer (direction 1) or shorter (-1), never below one step"""
        current = booking.durationHours or STEP_HOURS
        hours = max(STEP_HOURS, current + STEP_HOURS * (1 if direction >= 0 else -1))
        return booking.model_copy(update={"durationHours": hours}, deep=True)

    async def move_booking(
        self, booking_id: str, target: SlotRef, context: Optional[Iterable[Booking]] = None
    ) -> Booking:
        booking = await self.get_booking(booking_id)
        return await self.commit(self.moved(booking, target), context, MOVE_CONFLICT)

    async def resize_booking(
        self, booking_id: str, span: int, context: Optional[Iterable[Booking]] = None
    ) -> Booking:
        booking = await self.get_booking(booking_id)
        if span < 1:
            raise ValueError("A booking spans at least one slot")
        return await self.commit(self.resized(booking, span), context, RESIZE_CONFLICT)

    async def step_booking(
        self, booking_id: str, direction: int, context: Optional[Iterable[Booking]] = None
    ) -> Booking:
        booking = await self.get_booking(booking_id)
        return await self.commit(self.stepped(booking, direction), context, RESIZE_CONFLICT)

    async def unavailable_crew(self, day: dt.date, team_id: Optional[str] = None) -> set[str]:
        """People already out with another team that day (advisory)"""
        return busy_people(day, await self.store.list_bookings_for_day(day), exclude_team_id=team_id)
