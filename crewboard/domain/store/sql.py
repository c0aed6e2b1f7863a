"""SQLAlchemy-backed store for a shared (remote) database"""

import asyncio
import datetime as dt
import logging
from typing import Callable, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...exceptions import BookingConflictError, NotFoundError, StoreError
from ...schemas import Booking, Person, Product, Team, TeamView
from ..scheduling.validator import has_overlap
from .base import StoreAdapter, week_bounds
from .repository import (
    ScheduleRepository,
    row_to_booking,
    row_to_person,
    row_to_product,
    row_to_team,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlStore(StoreAdapter):
    """
    Store over a SQLAlchemy session factory.

    Each call opens its own session on a worker thread (asyncio.to_thread)
    so database latency never stalls the event loop. Overlap checks and
    the write that follows are not one transaction; two racing writers can
    both pass the check.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory
        self.repo = ScheduleRepository()

    async def _call(self, work: Callable[[Session], T]) -> T:
        def run() -> T:
            db = self._session_factory()
            try:
                return work(db)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"❌ Schedule database error: {e}")
                raise StoreError("Unable to reach the schedule database") from e
            finally:
                db.close()

        return await asyncio.to_thread(run)

    def _team_view(self, db: Session, row) -> TeamView:
        team = row_to_team(row)
        people = {p.id: row_to_person(p) for p in self.repo.get_people_by_ids(db, team.memberIds)}
        members = [people[pid] for pid in team.memberIds if pid in people]
        return TeamView(**team.model_dump(), members=members)

    # Teams

    async def list_teams(self) -> list[TeamView]:
        return await self._call(lambda db: [self._team_view(db, row) for row in self.repo.get_teams(db)])

    async def create_team(self, team: Team) -> TeamView:
        def work(db):
            row = self.repo.create_team(db, team)
            logger.info(f"👥 Created team {row.id} ({row.name})")
            return self._team_view(db, row)

        return await self._call(work)

    async def update_team(self, team: Team) -> TeamView:
        def work(db):
            row = self.repo.get_team_by_id(db, team.id)
            if not row:
                raise NotFoundError("Team", team.id)
            return self._team_view(db, self.repo.update_team(db, row, team))

        return await self._call(work)

    async def delete_team(self, team_id: str) -> None:
        def work(db):
            row = self.repo.get_team_by_id(db, team_id)
            if not row:
                raise NotFoundError("Team", team_id)
            removed = self.repo.delete_team(db, row)
            logger.info(f"🗑️ Deleted team {team_id} and {removed} booking(s)")

        await self._call(work)

    # People

    async def list_people(self) -> list[Person]:
        return await self._call(lambda db: [row_to_person(row) for row in self.repo.get_people(db)])

    async def create_person(self, person: Person) -> Person:
        return await self._call(lambda db: row_to_person(self.repo.save_person(db, person)))

    async def update_person(self, person: Person) -> Person:
        def work(db):
            row = self.repo.get_person_by_id(db, person.id)
            if not row:
                raise NotFoundError("Person", person.id)
            return row_to_person(self.repo.save_person(db, person, row))

        return await self._call(work)

    async def delete_person(self, person_id: str) -> None:
        def work(db):
            row = self.repo.get_person_by_id(db, person_id)
            if not row:
                raise NotFoundError("Person", person_id)
            self.repo.delete_person(db, row)

        await self._call(work)

    # Products

    async def list_products(self) -> list[Product]:
        return await self._call(lambda db: [row_to_product(row) for row in self.repo.get_products(db)])

    async def create_product(self, product: Product) -> Product:
        return await self._call(lambda db: row_to_product(self.repo.save_product(db, product)))

    async def update_product(self, product: Product) -> Product:
        def work(db):
            row = self.repo.get_product_by_id(db, product.id)
            if not row:
                raise NotFoundError("Product", product.id)
            return row_to_product(self.repo.save_product(db, product, row))

        return await self._call(work)

    async def delete_product(self, product_id: str) -> None:
        def work(db):
            row = self.repo.get_product_by_id(db, product_id)
            if not row:
                raise NotFoundError("Product", product_id)
            self.repo.delete_product(db, row)

        await self._call(work)

    # Bookings

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        def work(db):
            row = self.repo.get_booking_by_id(db, booking_id)
            return row_to_booking(row) if row else None

        return await self._call(work)

    async def list_bookings_for_week(self, monday: dt.date) -> list[Booking]:
        first, last = week_bounds(monday)
        return await self._call(
            lambda db: [row_to_booking(row) for row in self.repo.get_bookings_between(db, first, last)]
        )

    async def list_bookings_for_day(self, day: dt.date) -> list[Booking]:
        return await self._call(
            lambda db: [row_to_booking(row) for row in self.repo.get_bookings_between(db, day, day)]
        )

    def _check_team_overlap(self, db: Session, booking: Booking) -> None:
        if not booking.teamId or not booking.date:
            return
        same_day = [row_to_booking(row) for row in self.repo.get_team_bookings_on(db, booking.teamId, booking.date)]
        if has_overlap(booking, same_day):
            raise BookingConflictError()

    async def create_booking(self, draft: Booking) -> Booking:
        def work(db):
            if not self.repo.get_team_by_id(db, draft.teamId):
                raise NotFoundError("Team", draft.teamId)
            self._check_team_overlap(db, draft.model_copy(update={"id": None}))
            row = self.repo.create_booking(db, draft)
            logger.info(f"📅 Created booking {row.id} for team {row.team_id} on {row.date} {row.start_time}")
            return row_to_booking(row)

        return await self._call(work)

    async def update_booking(self, booking: Booking) -> Booking:
        def work(db):
            row = self.repo.get_booking_by_id(db, booking.id)
            if not row:
                raise NotFoundError("Booking", booking.id)
            if booking.teamId != row.team_id and not self.repo.get_team_by_id(db, booking.teamId):
                raise NotFoundError("Team", booking.teamId)
            self._check_team_overlap(db, booking)
            return row_to_booking(self.repo.update_booking(db, row, booking))

        return await self._call(work)

    async def delete_booking(self, booking_id: str) -> None:
        def work(db):
            row = self.repo.get_booking_by_id(db, booking_id)
            if not row:
                raise NotFoundError("Booking", booking_id)
            self.repo.delete_booking(db, row)

        await self._call(work)
