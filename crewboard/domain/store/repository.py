"""Schedule repository - Database operations for bookings, teams, people and products"""

import datetime as dt
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Booking as BookingRow
from ...models import Person as PersonRow
from ...models import Product as ProductRow
from ...models import Team as TeamRow
from ...schemas import Booking, Person, Product, ProductLine, Team


def row_to_booking(row: BookingRow) -> Booking:
    return Booking(
        id=row.id,
        date=row.date,
        teamId=row.team_id,
        startTime=row.start_time,  # validator trims "08:30:00" to "08:30"
        durationHours=row.duration_hours,
        customerName=row.customer_name,
        jobType=row.job_type or "other",
        notes=row.notes,
        address=row.address,
        clientPhone=row.client_phone,
        clientEmail=row.client_email,
        orderNumbers=row.order_numbers,
        crew=row.crew or [],
        products=[ProductLine(**line) for line in (row.products or [])],
        salespersonId=row.salesperson_id,
    )


def booking_to_columns(booking: Booking) -> dict:
    return {
        "date": booking.date,
        "team_id": booking.teamId,
        "start_time": booking.startTime,
        "duration_hours": booking.durationHours,
        "customer_name": booking.customerName,
        "job_type": booking.jobType.value,
        "notes": booking.notes,
        "address": booking.address,
        "client_phone": booking.clientPhone,
        "client_email": booking.clientEmail,
        "order_numbers": booking.orderNumbers,
        "crew": list(booking.crew),
        "products": [line.model_dump() for line in booking.products],
        "salesperson_id": booking.salespersonId,
    }


def row_to_team(row: TeamRow) -> Team:
    return Team(id=row.id, name=row.name, teamLeadId=row.team_lead_id, memberIds=row.member_ids or [])


def row_to_person(row: PersonRow) -> Person:
    return Person(id=row.id, name=row.name, role=row.role, phone=row.phone)


def row_to_product(row: ProductRow) -> Product:
    return Product(id=row.id, name=row.name, category=row.category, subType=row.sub_type)


class ScheduleRepository:
    """Repository for schedule database operations"""

    # Teams

    @staticmethod
    def get_teams(db: Session) -> list[TeamRow]:
        return db.query(TeamRow).order_by(TeamRow.name.asc()).all()

    @staticmethod
    def get_team_by_id(db: Session, team_id: str) -> Optional[TeamRow]:
        return db.query(TeamRow).filter(TeamRow.id == team_id).first()

    @staticmethod
    def create_team(db: Session, team: Team) -> TeamRow:
        row = TeamRow(name=team.name, team_lead_id=team.teamLeadId, member_ids=list(team.memberIds))
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def update_team(db: Session, row: TeamRow, team: Team) -> TeamRow:
        row.name = team.name
        row.team_lead_id = team.teamLeadId
        row.member_ids = list(team.memberIds)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def delete_team(db: Session, row: TeamRow) -> int:
        """Delete a team; the relationship cascade removes its bookings"""
        removed = len(row.bookings)
        db.delete(row)
        db.commit()
        return removed

    # People

    @staticmethod
    def get_people(db: Session) -> list[PersonRow]:
        return db.query(PersonRow).order_by(PersonRow.name.asc()).all()

    @staticmethod
    def get_people_by_ids(db: Session, person_ids: list[str]) -> list[PersonRow]:
        if not person_ids:
            return []
        return db.query(PersonRow).filter(PersonRow.id.in_(person_ids)).all()

    @staticmethod
    def get_person_by_id(db: Session, person_id: str) -> Optional[PersonRow]:
        return db.query(PersonRow).filter(PersonRow.id == person_id).first()

    @staticmethod
    def save_person(db: Session, person: Person, row: Optional[PersonRow] = None) -> PersonRow:
        if row is None:
            row = PersonRow()
            db.add(row)
        row.name = person.name
        row.role = person.role.value
        row.phone = person.phone
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def delete_person(db: Session, row: PersonRow) -> None:
        """Delete a person and drop them from any team they belong to or lead"""
        for team in db.query(TeamRow).all():
            members = team.member_ids or []
            if row.id in members:
                team.member_ids = [pid for pid in members if pid != row.id]
            if team.team_lead_id == row.id:
                team.team_lead_id = None
        db.delete(row)
        db.commit()

    # Products

    @staticmethod
    def get_products(db: Session) -> list[ProductRow]:
        return db.query(ProductRow).order_by(ProductRow.name.asc()).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: str) -> Optional[ProductRow]:
        return db.query(ProductRow).filter(ProductRow.id == product_id).first()

    @staticmethod
    def save_product(db: Session, product: Product, row: Optional[ProductRow] = None) -> ProductRow:
        if row is None:
            row = ProductRow()
            db.add(row)
        row.name = product.name
        row.category = product.category
        row.sub_type = product.subType
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def delete_product(db: Session, row: ProductRow) -> None:
        db.delete(row)
        db.commit()

    # Bookings

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: str) -> Optional[BookingRow]:
        return db.query(BookingRow).filter(BookingRow.id == booking_id).first()

    @staticmethod
    def get_bookings_between(db: Session, first: dt.date, last: dt.date) -> list[BookingRow]:
        """Bookings dated first..last inclusive"""
        return (
            db.query(BookingRow)
            .filter(BookingRow.date >= first, BookingRow.date <= last)
            .order_by(BookingRow.date.asc(), BookingRow.start_time.asc())
            .all()
        )

    @staticmethod
    def get_team_bookings_on(db: Session, team_id: str, day: dt.date) -> list[BookingRow]:
        return db.query(BookingRow).filter(BookingRow.team_id == team_id, BookingRow.date == day).all()

    @staticmethod
    def create_booking(db: Session, booking: Booking) -> BookingRow:
        row = BookingRow(**booking_to_columns(booking))
        db.add(row)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def update_booking(db: Session, row: BookingRow, booking: Booking) -> BookingRow:
        for key, value in booking_to_columns(booking).items():
            setattr(row, key, value)
        db.commit()
        db.refresh(row)
        return row

    @staticmethod
    def delete_booking(db: Session, row: BookingRow) -> None:
        db.delete(row)
        db.commit()
