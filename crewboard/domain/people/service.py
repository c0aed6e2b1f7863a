"""People service - Business logic for crew and staff records"""

import logging

from ...events import EventBus, ScheduleEvent
from ...exceptions import NotFoundError
from ...schemas import Person
from ..store.base import StoreAdapter
from .schemas import PersonUpdate

logger = logging.getLogger(__name__)


class PeopleService:
    """Service layer for people business logic"""

    def __init__(self, store: StoreAdapter, bus: EventBus):
        self.store = store
        self.bus = bus

    async def get_people(self) -> list[Person]:
        return await self.store.list_people()

    async def get_person(self, person_id: str) -> Person:
        for person in await self.store.list_people():
            if person.id == person_id:
                return person
        raise NotFoundError("Person", person_id)

    async def create_person(self, data: Person) -> Person:
        person = await self.store.create_person(data)
        logger.info(f"📥 Created person {person.id} ({person.role.value})")
        await self.bus.publish(ScheduleEvent.PEOPLE_UPDATED)
        return person

    async def update_person(self, person_id: str, data: PersonUpdate) -> Person:
        existing = await self.get_person(person_id)
        person = Person(**{**existing.model_dump(), **data.model_dump(exclude_none=True), "id": person_id})
        saved = await self.store.update_person(person)
        await self.bus.publish(ScheduleEvent.PEOPLE_UPDATED)
        await self.bus.publish(ScheduleEvent.TEAMS_UPDATED)
        return saved

    async def delete_person(self, person_id: str) -> dict:
        """Delete a person; they are also removed from every team"""
        await self.store.delete_person(person_id)
        await self.bus.publish(ScheduleEvent.PEOPLE_UPDATED)
        await self.bus.publish(ScheduleEvent.TEAMS_UPDATED)
        return {"message": "Person deleted successfully"}
