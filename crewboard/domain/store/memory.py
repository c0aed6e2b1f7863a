"""In-process store; the demo backend and the one the tests run against"""

import datetime as dt
import logging
from typing import Iterable, Optional

from ...exceptions import BookingConflictError, NotFoundError
from ...schemas import Booking, Person, Product, Team, TeamView
from ...shared.ids import generate_id
from ..scheduling.validator import has_overlap
from .base import StoreAdapter, week_bounds

logger = logging.getLogger(__name__)


def clone(model):
    return model.model_copy(deep=True)


class InMemoryStore(StoreAdapter):
    """
    Dict-backed store.

    Nothing awaits inside a method, so under asyncio each call runs to
    completion before another starts. Teams keep insertion order.
    """

    def __init__(
        self,
        people: Iterable[Person] = (),
        teams: Iterable[Team] = (),
        products: Iterable[Product] = (),
        bookings: Iterable[Booking] = (),
    ):
        self._people: dict[str, Person] = {}
        self._teams: dict[str, Team] = {}
        self._products: dict[str, Product] = {}
        self._bookings: dict[str, Booking] = {}

        for person in people:
            self._put(self._people, person, "p")
        for team in teams:
            self._put(self._teams, Team(**team.model_dump(include=set(Team.model_fields))), "team")
        for product in products:
            self._put(self._products, product, "prod")
        for booking in bookings:
            self._put(self._bookings, booking, "b")

    @staticmethod
    def _put(table: dict, model, prefix: str):
        stored = clone(model)
        if not stored.id:
            stored.id = generate_id(prefix)
        table[stored.id] = stored
        return stored

    def _team_view(self, team: Team) -> TeamView:
        members = [clone(self._people[pid]) for pid in team.memberIds if pid in self._people]
        return TeamView(**clone(team).model_dump(), members=members)

    # Teams

    async def list_teams(self) -> list[TeamView]:
        return [self._team_view(team) for team in self._teams.values()]

    async def create_team(self, team: Team) -> TeamView:
        stored = self._put(self._teams, Team(**team.model_dump(include=set(Team.model_fields), exclude={"id"})), "team")
        logger.info(f"👥 Created team {stored.id} ({stored.name})")
        return self._team_view(stored)

    async def update_team(self, team: Team) -> TeamView:
        if team.id not in self._teams:
            raise NotFoundError("Team", team.id)
        stored = Team(**team.model_dump(include=set(Team.model_fields)))
        self._teams[team.id] = stored
        return self._team_view(stored)

    async def delete_team(self, team_id: str) -> None:
        if team_id not in self._teams:
            raise NotFoundError("Team", team_id)
        del self._teams[team_id]
        orphaned = [bid for bid, b in self._bookings.items() if b.teamId == team_id]
        for booking_id in orphaned:
            del self._bookings[booking_id]
        logger.info(f"🗑️ Deleted team {team_id} and {len(orphaned)} booking(s)")

    # People

    async def list_people(self) -> list[Person]:
        return sorted((clone(p) for p in self._people.values()), key=lambda p: p.name.lower())

    async def create_person(self, person: Person) -> Person:
        return clone(self._put(self._people, person.model_copy(update={"id": None}), "p"))

    async def update_person(self, person: Person) -> Person:
        if person.id not in self._people:
            raise NotFoundError("Person", person.id)
        self._people[person.id] = clone(person)
        return clone(person)

    async def delete_person(self, person_id: str) -> None:
        if person_id not in self._people:
            raise NotFoundError("Person", person_id)
        del self._people[person_id]
        # Keep team membership consistent: a removed person cannot lead or belong
        for team in self._teams.values():
            if person_id in team.memberIds:
                team.memberIds = [pid for pid in team.memberIds if pid != person_id]
            if team.teamLeadId == person_id:
                team.teamLeadId = None

    # Products

    async def list_products(self) -> list[Product]:
        return sorted((clone(p) for p in self._products.values()), key=lambda p: p.name.lower())

    async def create_product(self, product: Product) -> Product:
        return clone(self._put(self._products, product.model_copy(update={"id": None}), "prod"))

    async def update_product(self, product: Product) -> Product:
        if product.id not in self._products:
            raise NotFoundError("Product", product.id)
        self._products[product.id] = clone(product)
        return clone(product)

    async def delete_product(self, product_id: str) -> None:
        if product_id not in self._products:
            raise NotFoundError("Product", product_id)
        del self._products[product_id]

    # Bookings

    async def get_booking(self, booking_id: str) -> Optional[Booking]:
        booking = self._bookings.get(booking_id)
        return clone(booking) if booking else None

    async def list_bookings_for_week(self, monday: dt.date) -> list[Booking]:
        first, last = week_bounds(monday)
        return [clone(b) for b in self._bookings.values() if b.date and first <= b.date <= last]

    async def list_bookings_for_day(self, day: dt.date) -> list[Booking]:
        return [clone(b) for b in self._bookings.values() if b.date == day]

    async def create_booking(self, draft: Booking) -> Booking:
        candidate = draft.model_copy(update={"id": None}, deep=True)
        if candidate.teamId not in self._teams:
            raise NotFoundError("Team", candidate.teamId)
        if has_overlap(candidate, self._bookings.values()):
            raise BookingConflictError()
        stored = self._put(self._bookings, candidate, "b")
        logger.info(f"📅 Created booking {stored.id} for team {stored.teamId} on {stored.date} {stored.startTime}")
        return clone(stored)

    async def update_booking(self, booking: Booking) -> Booking:
        if booking.id not in self._bookings:
            raise NotFoundError("Booking", booking.id)
        if booking.teamId not in self._teams:
            raise NotFoundError("Team", booking.teamId)
        if has_overlap(booking, self._bookings.values()):
            raise BookingConflictError()
        self._bookings[booking.id] = clone(booking)
        return clone(booking)

    async def delete_booking(self, booking_id: str) -> None:
        if booking_id not in self._bookings:
            raise NotFoundError("Booking", booking_id)
        del self._bookings[booking_id]
