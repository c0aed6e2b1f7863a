"""Scheduling session - the board's data snapshot, period and gesture controller in one place"""

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Optional

from ...events import EventBus
from ...schemas import Booking, Person, Product, TeamView
from ..store.base import StoreAdapter
from .grid import DayGrid, layout_days
from .interaction import InteractionController
from .navigator import PeriodNavigator, ViewMode
from .service import BookingService
from .time_slots import TimeSlotModel
from .validator import DEFAULT_SLOTS, busy_people, crew_conflicts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScheduleSnapshot:
    """Everything one render reads; replaced whole, never edited in place"""

    teams: tuple[TeamView, ...] = ()
    bookings: tuple[Booking, ...] = ()
    people: tuple[Person, ...] = ()
    products: tuple[Product, ...] = ()
    week_start: Optional[dt.date] = None

    def find_booking(self, booking_id: Optional[str]) -> Optional[Booking]:
        for booking in self.bookings:
            if booking.id == booking_id:
                return booking
        return None


class SchedulingSession:
    """
    Owns the state the board works from.

    Subscribes to every change event on the bus and answers each one with
    a full refresh, so any component that writes through the store only
    has to publish.
    """

    def __init__(
        self,
        store: StoreAdapter,
        bus: EventBus,
        navigator: Optional[PeriodNavigator] = None,
        slots: TimeSlotModel = DEFAULT_SLOTS,
    ):
        self.store = store
        self.bus = bus
        self.navigator = navigator or PeriodNavigator()
        self.slots = slots
        self.snapshot = ScheduleSnapshot()
        self.service = BookingService(store, bus, slots)
        self.controller = InteractionController(self, self.service)
        self.bus.subscribe_all(self.refresh)

    def close(self) -> None:
        self.bus.unsubscribe_all(self.refresh)

    async def refresh(self) -> ScheduleSnapshot:
        """Re-fetch teams, the visible week's bookings, people and products"""
        week_start = self.navigator.week_start
        teams = await self.store.list_teams()
        bookings = await self.store.list_bookings_for_week(week_start)
        people = await self.store.list_people()
        products = await self.store.list_products()
        self.snapshot = ScheduleSnapshot(
            teams=tuple(teams),
            bookings=tuple(bookings),
            people=tuple(people),
            products=tuple(products),
            week_start=week_start,
        )
        logger.debug(f"📊 Snapshot refreshed: {len(teams)} teams, {len(bookings)} bookings for week {week_start}")
        return self.snapshot

    def find_booking(self, booking_id: Optional[str]) -> Optional[Booking]:
        return self.snapshot.find_booking(booking_id)

    def grid(self) -> list[DayGrid]:
        snapshot = self.snapshot
        return layout_days(self.navigator.visible_days(), snapshot.bookings, snapshot.teams, self.slots)

    def unavailable_crew(self, day: dt.date, team_id: Optional[str] = None) -> set[str]:
        """People already booked with another team that day; used to grey out crew pickers"""
        return busy_people(day, self.snapshot.bookings, exclude_team_id=team_id)

    def crew_warnings(self, booking: Booking) -> set[str]:
        return crew_conflicts(booking, self.snapshot.bookings)

    # Navigation, each followed by a refresh when it leaves the loaded week

    async def _navigated(self) -> None:
        if self.navigator.week_start != self.snapshot.week_start:
            await self.refresh()

    async def next_period(self) -> None:
        self.navigator.next()
        await self._navigated()

    async def prev_period(self) -> None:
        self.navigator.prev()
        await self._navigated()

    async def go_to_today(self) -> None:
        self.navigator.today()
        await self._navigated()

    async def go_to(self, day: dt.date) -> None:
        self.navigator.go_to(day)
        await self._navigated()

    async def set_view_mode(self, view_mode: ViewMode) -> None:
        self.navigator.set_view_mode(view_mode)
        await self._navigated()
