"""Scheduling domain schemas - Request and response models for the board API"""

import datetime as dt
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...config import DEFAULT_DURATION_HOURS
from ...schemas import Booking, TeamView
from ...shared.validators import normalize_time
from .grid import DayGrid
from .navigator import ViewMode


class BookingCreate(Booking):
    """Schema for creating a booking; the form pre-fills a 1.5 hour duration"""

    date: dt.date
    teamId: str
    startTime: str
    durationHours: float = DEFAULT_DURATION_HOURS


class BookingUpdate(Booking):
    """
    Schema for editing a booking; only the fields sent are changed.

    Scheduling fields can be changed but not cleared, and list fields
    take a list, so a sent null is a 422 rather than a booking that is
    off the grid.
    """

    @field_validator("date", "teamId", "startTime", "durationHours")
    @classmethod
    def validate_not_cleared(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be cleared")
        return v


class MoveRequest(BaseModel):
    """Drop target of a drag-move"""

    date: dt.date
    teamId: str
    startTime: str

    @field_validator("startTime")
    @classmethod
    def validate_start_time(cls, v):
        return normalize_time(v)


class ResizeRequest(BaseModel):
    span: int = Field(ge=1, description="Number of slots the booking should cover")


class StepRequest(BaseModel):
    direction: Literal[-1, 1] = 1


class SlotsResponse(BaseModel):
    slots: list[str]
    slotMinutes: int
    startHour: int
    endHour: int


class CrewAvailabilityResponse(BaseModel):
    date: dt.date
    teamId: Optional[str] = None
    unavailable: list[str]


class ScheduleResponse(BaseModel):
    """Grid for the visible days plus the columns it was built from"""

    label: str
    viewMode: ViewMode
    weekStart: dt.date
    slots: list[str]
    teams: list[TeamView]
    days: list[DayGrid]
