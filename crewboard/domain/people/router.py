"""People router - FastAPI endpoints for people operations"""

from fastapi import APIRouter, Depends

from ...dependencies import get_event_bus, get_store
from ...events import EventBus
from ...schemas import Person
from ..store.base import StoreAdapter
from .schemas import PersonUpdate
from .service import PeopleService

router = APIRouter(prefix="/people", tags=["People"])


def get_people_service(
    store: StoreAdapter = Depends(get_store), bus: EventBus = Depends(get_event_bus)
) -> PeopleService:
    """Dependency injection for PeopleService"""
    return PeopleService(store, bus)


@router.get("", response_model=list[Person])
async def get_people(service: PeopleService = Depends(get_people_service)):
    """All people, sorted by name"""
    return await service.get_people()


@router.get("/{person_id}", response_model=Person)
async def get_person(person_id: str, service: PeopleService = Depends(get_people_service)):
    return await service.get_person(person_id)


@router.post("", response_model=Person)
async def create_person(data: Person, service: PeopleService = Depends(get_people_service)):
    return await service.create_person(data)


@router.patch("/{person_id}", response_model=Person)
async def update_person(person_id: str, data: PersonUpdate, service: PeopleService = Depends(get_people_service)):
    return await service.update_person(person_id, data)


@router.delete("/{person_id}")
async def delete_person(person_id: str, service: PeopleService = Depends(get_people_service)):
    return await service.delete_person(person_id)
