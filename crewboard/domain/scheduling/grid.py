"""
Grid layout: projects a day's bookings onto team columns × time slots.

Every column has exactly one cell per slot. A booking longer than one
slot owns an anchor cell carrying its row span; the slots it covers below
the anchor are continuation cells that a table renderer must skip.
"""

import datetime as dt
import logging
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from ...schemas import Booking, Team
from .time_slots import TimeSlotModel
from .validator import DEFAULT_SLOTS

logger = logging.getLogger(__name__)


class CellKind(str, Enum):
    EMPTY = "empty"
    START = "occupied-start"
    CONTINUATION = "occupied-continuation"


class SlotRef(BaseModel):
    """Coordinates of one bookable cell"""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    teamId: str
    startTime: str


class GridCell(BaseModel):
    kind: CellKind
    date: dt.date
    teamId: str
    time: str
    booking: Optional[Booking] = None
    rowSpan: int = 1

    @property
    def ref(self) -> SlotRef:
        return SlotRef(date=self.date, teamId=self.teamId, startTime=self.time)

    @property
    def renderable(self) -> bool:
        return self.kind != CellKind.CONTINUATION


class GridRow(BaseModel):
    time: str
    cells: list[GridCell]


class DayGrid(BaseModel):
    date: dt.date
    teamIds: list[str]
    slots: list[str]
    columns: dict[str, list[GridCell]] = Field(default_factory=dict)

    def cell(self, team_id: str, index: int) -> GridCell:
        return self.columns[team_id][index]

    def cell_at(self, team_id: str, time: str) -> Optional[GridCell]:
        if team_id not in self.columns or time not in self.slots:
            return None
        return self.columns[team_id][self.slots.index(time)]

    def anchors(self) -> Iterator[GridCell]:
        for team_id in self.teamIds:
            for cell in self.columns[team_id]:
                if cell.kind == CellKind.START:
                    yield cell

    def rows(self) -> list[GridRow]:
        """Row-major view with continuation cells left out, as a table renders it"""
        return [
            GridRow(
                time=label,
                cells=[self.columns[team_id][i] for team_id in self.teamIds if self.columns[team_id][i].renderable],
            )
            for i, label in enumerate(self.slots)
        ]


def booking_span(booking: Booking, slots: TimeSlotModel = DEFAULT_SLOTS) -> int:
    """Slots a booking covers on the grid, never less than one"""
    return max(1, slots.slots_for_hours(booking.durationHours or 0))


def build_day_grid(
    day: dt.date,
    bookings: Iterable[Booking],
    teams: Sequence[Team],
    slots: TimeSlotModel = DEFAULT_SLOTS,
) -> DayGrid:
    """
    Lay out one day.

    Bookings on another date, off the slot grid, or for a team that is not
    displayed are skipped without error. Overlapping input is not
    validated here: a later booking overwrites whatever cells an earlier
    one claimed.
    """
    labels = list(slots.labels)
    count = slots.slot_count()
    columns = {
        team.id: [
            GridCell(kind=CellKind.EMPTY, date=day, teamId=team.id, time=label) for label in labels
        ]
        for team in teams
    }

    for booking in bookings:
        if booking.date != day:
            continue
        column = columns.get(booking.teamId)
        if column is None:
            logger.debug(f"Skipping booking {booking.id}: team {booking.teamId} not displayed")
            continue
        start_index = slots.slot_index(booking.startTime)
        if start_index is None:
            logger.debug(f"Skipping booking {booking.id}: start {booking.startTime} not on the grid")
            continue

        end_index = min(count, start_index + booking_span(booking, slots))
        column[start_index] = GridCell(
            kind=CellKind.START,
            date=day,
            teamId=booking.teamId,
            time=labels[start_index],
            booking=booking,
            rowSpan=end_index - start_index,
        )
        for i in range(start_index + 1, end_index):
            column[i] = GridCell(kind=CellKind.CONTINUATION, date=day, teamId=booking.teamId, time=labels[i])

    return DayGrid(date=day, teamIds=[team.id for team in teams], slots=labels, columns=columns)


def layout_days(
    days: Sequence[dt.date],
    bookings: Iterable[Booking],
    teams: Sequence[Team],
    slots: TimeSlotModel = DEFAULT_SLOTS,
) -> list[DayGrid]:
    """Lay out each visible day from one (typically week-wide) booking list"""
    by_day: dict[dt.date, list[Booking]] = {day: [] for day in days}
    for booking in bookings:
        if booking.date in by_day:
            by_day[booking.date].append(booking)
    return [build_day_grid(day, by_day[day], teams, slots) for day in days]
