"""Request dependencies - the store, event bus and session created in the app lifespan"""

from fastapi import Request

from .domain.scheduling.service import BookingService
from .domain.scheduling.session import SchedulingSession
from .domain.store.base import StoreAdapter
from .events import EventBus


def get_store(request: Request) -> StoreAdapter:
    return request.app.state.store


def get_event_bus(request: Request) -> EventBus:
    return request.app.state.bus


def get_session(request: Request) -> SchedulingSession:
    return request.app.state.session


def get_booking_service(request: Request) -> BookingService:
    """Dependency injection for BookingService"""
    return request.app.state.session.service
