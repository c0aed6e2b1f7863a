"""Team router - FastAPI endpoints for team operations"""

import logging

from fastapi import APIRouter, Depends

from ...dependencies import get_event_bus, get_store
from ...events import EventBus
from ...schemas import Team, TeamView
from ..store.base import StoreAdapter
from .schemas import TeamUpdate
from .service import TeamService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/teams", tags=["Teams"])


def get_team_service(
    store: StoreAdapter = Depends(get_store), bus: EventBus = Depends(get_event_bus)
) -> TeamService:
    """Dependency injection for TeamService"""
    return TeamService(store, bus)


@router.get("", response_model=list[TeamView])
async def get_teams(service: TeamService = Depends(get_team_service)):
    """Teams in column order with their members"""
    return await service.get_teams()


@router.get("/{team_id}", response_model=TeamView)
async def get_team(team_id: str, service: TeamService = Depends(get_team_service)):
    return await service.get_team(team_id)


@router.post("", response_model=TeamView)
async def create_team(data: Team, service: TeamService = Depends(get_team_service)):
    return await service.create_team(data)


@router.patch("/{team_id}", response_model=TeamView)
async def update_team(team_id: str, data: TeamUpdate, service: TeamService = Depends(get_team_service)):
    return await service.update_team(team_id, data)


@router.delete("/{team_id}")
async def delete_team(team_id: str, service: TeamService = Depends(get_team_service)):
    """Delete a team and all of its bookings"""
    return await service.delete_team(team_id)
