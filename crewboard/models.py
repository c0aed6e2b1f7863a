from sqlalchemy import JSON, Column, Date, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base
from .shared.ids import generate_id


class Person(Base):
    __tablename__ = "people"

    id = Column(String(36), primary_key=True, default=lambda: generate_id("p"))
    name = Column(String(255), nullable=False)
    role = Column(String(20), default="fitter", nullable=False)  # fitter, sales, admin, other
    phone = Column(String(50), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Team(Base):
    __tablename__ = "teams"

    id = Column(String(36), primary_key=True, default=lambda: generate_id("team"))
    name = Column(String(255), nullable=False)
    team_lead_id = Column(String(36), nullable=True)  # always one of member_ids
    member_ids = Column(JSON, default=list, nullable=False)  # ["p-...", ...] no duplicates
    created_at = Column(DateTime, server_default=func.now())

    # Deleting a team deletes its bookings
    bookings = relationship("Booking", back_populates="team", cascade="all, delete-orphan")


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: generate_id("prod"))
    name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=True)
    sub_type = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: generate_id("b"))
    date = Column(Date, nullable=False, index=True)
    team_id = Column(String(36), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    start_time = Column(String(8), nullable=False)  # HH:MM, aligned to the slot grid
    duration_hours = Column(Float, nullable=False)

    # Job metadata
    customer_name = Column(String(255), nullable=True)
    job_type = Column(String(20), default="other", nullable=False)  # measure, install, service, transit, other
    notes = Column(Text, nullable=True)
    address = Column(String(500), nullable=True)
    client_phone = Column(String(50), nullable=True)
    client_email = Column(String(255), nullable=True)
    order_numbers = Column(String(255), nullable=True)

    crew = Column(JSON, default=list, nullable=False)  # person ids doing the job
    products = Column(JSON, default=list, nullable=False)  # [{"productId": "...", "quantity": 2}]
    salesperson_id = Column(String(36), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    team = relationship("Team", back_populates="bookings")
