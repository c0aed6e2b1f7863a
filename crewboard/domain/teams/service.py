"""Team service - Business logic for team (schedule column) operations"""

import logging

from ...events import EventBus, ScheduleEvent
from ...exceptions import NotFoundError
from ...schemas import Team, TeamView
from ..store.base import StoreAdapter
from .schemas import TeamUpdate

logger = logging.getLogger(__name__)


class TeamService:
    """Service layer for team business logic"""

    def __init__(self, store: StoreAdapter, bus: EventBus):
        self.store = store
        self.bus = bus

    async def get_teams(self) -> list[TeamView]:
        return await self.store.list_teams()

    async def get_team(self, team_id: str) -> TeamView:
        for team in await self.store.list_teams():
            if team.id == team_id:
                return team
        raise NotFoundError("Team", team_id)

    async def create_team(self, data: Team) -> TeamView:
        logger.info(f"📥 Creating team '{data.name}'")
        team = await self.store.create_team(data)
        await self.bus.publish(ScheduleEvent.TEAMS_UPDATED)
        return team

    async def update_team(self, team_id: str, data: TeamUpdate) -> TeamView:
        existing = await self.get_team(team_id)
        updates = data.model_dump(exclude_unset=True)
        for key in ("name", "memberIds"):
            if updates.get(key) is None:
                updates.pop(key, None)
        team = Team(**{**existing.model_dump(include=set(Team.model_fields)), **updates, "id": team_id})
        saved = await self.store.update_team(team)
        await self.bus.publish(ScheduleEvent.TEAMS_UPDATED)
        return saved

    async def delete_team(self, team_id: str) -> dict:
        """Delete a team together with every booking it owns"""
        await self.store.delete_team(team_id)
        await self.bus.publish(ScheduleEvent.TEAMS_UPDATED)
        await self.bus.publish(ScheduleEvent.BOOKINGS_UPDATED)
        return {"message": "Team deleted successfully"}
