"""Scheduling router - FastAPI endpoints for the board and booking operations"""

import datetime as dt
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ...dependencies import get_booking_service
from ...schemas import Booking
from .grid import SlotRef
from .navigator import PeriodNavigator, ViewMode
from .schemas import (
    BookingCreate,
    BookingUpdate,
    CrewAvailabilityResponse,
    MoveRequest,
    ResizeRequest,
    ScheduleResponse,
    SlotsResponse,
    StepRequest,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scheduling"])


# ============================================================================
# BOARD
# ============================================================================


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(
    date: Optional[dt.date] = Query(None, description="Any day in the period; defaults to today"),
    view: ViewMode = Query(ViewMode.DAY),
    service: BookingService = Depends(get_booking_service),
):
    """Grid of the visible day (or Monday-Saturday week) with teams as columns"""
    navigator = PeriodNavigator(current_date=date, view_mode=view)
    teams, days = await service.get_schedule(navigator)
    return ScheduleResponse(
        label=navigator.label(),
        viewMode=navigator.view_mode,
        weekStart=navigator.week_start,
        slots=list(service.slots.labels),
        teams=teams,
        days=days,
    )


@router.get("/schedule/slots", response_model=SlotsResponse)
async def get_slots(service: BookingService = Depends(get_booking_service)):
    """Bookable start times of the working day"""
    slots = service.slots
    return SlotsResponse(
        slots=list(slots.labels),
        slotMinutes=slots.slot_minutes,
        startHour=slots.start_hour,
        endHour=slots.end_hour,
    )


@router.get("/schedule/crew-availability", response_model=CrewAvailabilityResponse)
async def get_crew_availability(
    date: dt.date = Query(...),
    teamId: Optional[str] = Query(None, description="Team being edited; its own bookings are ignored"),
    service: BookingService = Depends(get_booking_service),
):
    """People already out with another team that day (advisory, never enforced)"""
    unavailable = await service.unavailable_crew(date, teamId)
    return CrewAvailabilityResponse(date=date, teamId=teamId, unavailable=sorted(unavailable))


# ============================================================================
# BOOKINGS
# ============================================================================


@router.get("/bookings", response_model=list[Booking])
async def get_bookings(
    date: Optional[dt.date] = Query(None, description="Any day of the week to list"),
    service: BookingService = Depends(get_booking_service),
):
    """Bookings of the Monday-based week containing `date`"""
    return await service.list_week(date or dt.date.today())


@router.get("/bookings/{booking_id}", response_model=Booking)
async def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    return await service.get_booking(booking_id)


@router.post("/bookings", response_model=Booking)
async def create_booking(data: BookingCreate, service: BookingService = Depends(get_booking_service)):
    """Create a booking; rejected outside working hours or on a team overlap"""
    logger.info(f"📥 Creating booking for team {data.teamId} on {data.date} {data.startTime}")
    draft = Booking(**data.model_dump(exclude={"id"}))
    return await service.create_booking(draft)


@router.patch("/bookings/{booking_id}", response_model=Booking)
async def update_booking(
    booking_id: str,
    data: BookingUpdate,
    service: BookingService = Depends(get_booking_service),
):
    """Update the fields sent; the result is validated like a new booking"""
    existing = await service.get_booking(booking_id)
    updates = data.model_dump(exclude_unset=True, exclude={"id"})
    merged = Booking(**{**existing.model_dump(), **updates, "id": booking_id})
    return await service.update_booking(merged)


@router.delete("/bookings/{booking_id}")
async def delete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    await service.delete_booking(booking_id)
    return {"message": "Booking deleted successfully"}


@router.post("/bookings/{booking_id}/move", response_model=Booking)
async def move_booking(
    booking_id: str,
    data: MoveRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Commit a drag-move: new date, team and start, same duration"""
    target = SlotRef(date=data.date, teamId=data.teamId, startTime=data.startTime)
    return await service.move_booking(booking_id, target)


@router.post("/bookings/{booking_id}/resize", response_model=Booking)
async def resize_booking(
    booking_id: str,
    data: ResizeRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Commit a drag-resize to `span` slots"""
    return await service.resize_booking(booking_id, data.span)


@router.post("/bookings/{booking_id}/step", response_model=Booking)
async def step_booking(
    booking_id: str,
    data: StepRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Lengthen (1) or shorten (-1) by half an hour"""
    return await service.step_booking(booking_id, data.direction)
