"""Current date and day/week view mode of the board"""

import datetime as dt
from enum import Enum
from typing import Callable, Optional

WEEK_VIEW_DAYS = 6


class ViewMode(str, Enum):
    DAY = "day"
    WEEK = "week"


def get_monday(day: dt.date) -> dt.date:
    """Monday on or before `day`"""
    return day - dt.timedelta(days=day.weekday())


def format_day_short(day: dt.date) -> str:
    return f"{day:%a} {day.day} {day:%b}"


class PeriodNavigator:
    def __init__(
        self,
        current_date: Optional[dt.date] = None,
        view_mode: ViewMode = ViewMode.DAY,
        today: Callable[[], dt.date] = dt.date.today,
    ):
        self._today = today
        self.current_date = current_date or today()
        self.view_mode = ViewMode(view_mode)

    @property
    def week_start(self) -> dt.date:
        return get_monday(self.current_date)

    def visible_days(self) -> list[dt.date]:
        if self.view_mode == ViewMode.DAY:
            return [self.current_date]
        monday = self.week_start
        return [monday + dt.timedelta(days=i) for i in range(WEEK_VIEW_DAYS)]

    def set_view_mode(self, view_mode: ViewMode) -> None:
        self.view_mode = ViewMode(view_mode)

    def go_to(self, day: dt.date) -> None:
        self.current_date = day

    def step(self) -> int:
        return 1 if self.view_mode == ViewMode.DAY else 7

    def next(self) -> None:
        self.current_date += dt.timedelta(days=self.step())

    def prev(self) -> None:
        self.current_date -= dt.timedelta(days=self.step())

    def today(self) -> None:
        self.current_date = self._today()

    def label(self) -> str:
        if self.view_mode == ViewMode.DAY:
            day = self.current_date
            return f"{day:%a} {day.day} {day:%b %Y}"
        days = self.visible_days()
        return f"Week of {format_day_short(days[0])} - {format_day_short(days[-1])}"
