"""Entity schemas shared by the store, the scheduling core and the API"""

import datetime as dt
import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .shared.validators import dedupe, normalize_phone, normalize_time, parse_hours, validate_email


class JobType(str, Enum):
    MEASURE = "measure"
    INSTALL = "install"
    SERVICE = "service"
    TRANSIT = "transit"
    OTHER = "other"


class PersonRole(str, Enum):
    FITTER = "fitter"
    SALES = "sales"
    ADMIN = "admin"
    OTHER = "other"


class Person(BaseModel):
    id: Optional[str] = None
    name: str
    role: PersonRole = PersonRole.FITTER
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return normalize_phone(v)
        return v


class Product(BaseModel):
    id: Optional[str] = None
    name: str
    category: Optional[str] = None
    subType: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class Team(BaseModel):
    """
    A crew unit and one column of the schedule grid.

    The lead is always a member and members are unique; both are
    normalized on construction rather than rejected.
    """

    id: Optional[str] = None
    name: str
    teamLeadId: Optional[str] = None
    memberIds: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def normalize_members(self):
        member_ids = dedupe(self.memberIds)
        if self.teamLeadId and self.teamLeadId not in member_ids:
            member_ids.append(self.teamLeadId)
        self.memberIds = member_ids
        return self


class TeamView(Team):
    """Team with member Person objects resolved for display"""

    members: list[Person] = Field(default_factory=list)


class ProductLine(BaseModel):
    productId: str
    quantity: int = Field(default=1, ge=1)


class Booking(BaseModel):
    """
    A scheduled job.

    Scheduling fields are optional so a half-filled form can still be
    passed to the validator, which treats missing fields as "cannot
    validate yet".
    """

    id: Optional[str] = None
    date: Optional[dt.date] = None
    teamId: Optional[str] = None
    startTime: Optional[str] = None
    durationHours: Optional[float] = None

    customerName: Optional[str] = None
    jobType: JobType = JobType.OTHER
    notes: Optional[str] = None
    address: Optional[str] = None
    clientPhone: Optional[str] = None
    clientEmail: Optional[str] = None
    orderNumbers: Optional[str] = None

    crew: list[str] = Field(default_factory=list)
    products: list[ProductLine] = Field(default_factory=list)
    salespersonId: Optional[str] = None

    @field_validator("startTime", mode="before")
    @classmethod
    def validate_start_time(cls, v):
        if isinstance(v, dt.time):
            v = v.strftime("%H:%M")
        if v == "":
            return None
        return normalize_time(v)

    @field_validator("durationHours", mode="before")
    @classmethod
    def validate_duration(cls, v):
        hours = parse_hours(v)
        if hours is not None and not math.isfinite(hours):
            raise ValueError("Duration must be a number of hours")
        if hours is not None and hours <= 0:
            raise ValueError("Duration must be greater than 0")
        return hours

    @field_validator("crew")
    @classmethod
    def validate_crew(cls, v):
        return dedupe(v)

    @field_validator("clientPhone")
    @classmethod
    def validate_client_phone(cls, v):
        if v:
            return normalize_phone(v)
        return v

    @field_validator("clientEmail")
    @classmethod
    def validate_client_email(cls, v):
        return validate_email(v)
