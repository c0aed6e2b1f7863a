"""
Store Adapter contract.

Every method is a coroutine. Values handed in are never kept by reference
and values handed out are owned copies, so callers can mutate what they
get back without touching stored state.
"""

import datetime as dt
from abc import ABC, abstractmethod
from typing import Optional

from ...schemas import Booking, Person, Product, Team, TeamView

WEEK_DAYS = 7


def week_bounds(monday: dt.date) -> tuple[dt.date, dt.date]:
    """Inclusive first and last day of the week starting at `monday`"""
    return monday, monday + dt.timedelta(days=WEEK_DAYS - 1)


class StoreAdapter(ABC):
    # Teams

    @abstractmethod
    async def list_teams(self) -> list[TeamView]:
        """Teams in display (column) order, with member Person objects resolved"""

    @abstractmethod
    async def create_team(self, team: Team) -> TeamView: ...

    @abstractmethod
    async def update_team(self, team: Team) -> TeamView:
        """Replace a team's fields; raises NotFoundError if it does not exist"""

    @abstractmethod
    async def delete_team(self, team_id: str) -> None:
        """Delete a team and every booking that references it"""

    # People

    @abstractmethod
    async def list_people(self) -> list[Person]: ...

    @abstractmethod
    async def create_person(self, person: Person) -> Person: ...

    @abstractmethod
    async def update_person(self, person: Person) -> Person: ...

    @abstractmethod
    async def delete_person(self, person_id: str) -> None: ...

    # Products

    @abstractmethod
    async def list_products(self) -> list[Product]: ...

    @abstractmethod
    async def create_product(self, product: Product) -> Product: ...

    @abstractmethod
    async def update_product(self, product: Product) -> Product: ...

    @abstractmethod
    async def delete_product(self, product_id: str) -> None: ...

    # Bookings

    @abstractmethod
    async def get_booking(self, booking_id: str) -> Optional[Booking]: ...

    @abstractmethod
    async def list_bookings_for_week(self, monday: dt.date) -> list[Booking]:
        """Bookings dated monday..monday+6 inclusive"""

    @abstractmethod
    async def list_bookings_for_day(self, day: dt.date) -> list[Booking]: ...

    @abstractmethod
    async def create_booking(self, draft: Booking) -> Booking:
        """Assign an id and store; raises BookingConflictError on a team overlap"""

    @abstractmethod
    async def update_booking(self, booking: Booking) -> Booking:
        """
        Replace a stored booking.

        Raises NotFoundError for an unknown id and BookingConflictError when
        the new interval overlaps a different booking of the same team.
        """

    @abstractmethod
    async def delete_booking(self, booking_id: str) -> None:
        """Raises NotFoundError for an unknown id"""
