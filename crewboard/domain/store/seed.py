"""Demo crew used when a fresh board starts empty"""

import datetime as dt
import logging
from typing import Optional

from ...schemas import Booking, JobType, Person, PersonRole, Team
from .base import StoreAdapter

logger = logging.getLogger(__name__)

DEMO_PEOPLE = [
    ("Alice", PersonRole.FITTER),
    ("Ben", PersonRole.FITTER),
    ("Cara", PersonRole.FITTER),
    ("Dan", PersonRole.OTHER),
    ("Eve", PersonRole.FITTER),
    ("Sam", PersonRole.SALES),
]


async def seed_store(store: StoreAdapter, today: Optional[dt.date] = None) -> bool:
    """
    Create two install teams, their people and one booking for today.

    Does nothing when the store already has teams.

    Returns:
        True if demo data was written
    """
    if await store.list_teams():
        return False

    people = {}
    for name, role in DEMO_PEOPLE:
        people[name] = await store.create_person(Person(name=name, role=role))

    team_a = await store.create_team(
        Team(
            name="Install Team A",
            teamLeadId=people["Alice"].id,
            memberIds=[people["Alice"].id, people["Ben"].id, people["Dan"].id],
        )
    )
    await store.create_team(
        Team(name="Install Team B", teamLeadId=people["Cara"].id, memberIds=[people["Cara"].id, people["Eve"].id])
    )

    await store.create_booking(
        Booking(
            date=today or dt.date.today(),
            teamId=team_a.id,
            startTime="09:00",
            durationHours=2,
            customerName="Smith Residence",
            jobType=JobType.MEASURE,
            notes="Measure and quote - lounge windows",
            crew=[people["Alice"].id, people["Ben"].id],
            salespersonId=people["Sam"].id,
        )
    )
    logger.info(f"🌱 Seeded demo board: {len(people)} people, 2 teams, 1 booking")
    return True
