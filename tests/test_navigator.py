"""Tests for the day/week period navigator."""

import datetime as dt

from crewboard.domain.scheduling.navigator import PeriodNavigator, ViewMode, get_monday

WEDNESDAY = dt.date(2024, 6, 5)


class TestVisibleDays:
    def test_day_view_shows_current_date(self):
        nav = PeriodNavigator(current_date=WEDNESDAY)
        assert nav.visible_days() == [WEDNESDAY]

    def test_week_view_shows_monday_to_saturday(self):
        nav = PeriodNavigator(current_date=WEDNESDAY, view_mode=ViewMode.WEEK)
        days = nav.visible_days()
        assert len(days) == 6
        assert days[0] == dt.date(2024, 6, 3)
        assert days[-1] == dt.date(2024, 6, 8)

    def test_sunday_belongs_to_the_week_before(self):
        assert get_monday(dt.date(2024, 6, 9)) == dt.date(2024, 6, 3)
        assert get_monday(dt.date(2024, 6, 3)) == dt.date(2024, 6, 3)


class TestStepping:
    def test_day_mode_steps_one_day(self):
        nav = PeriodNavigator(current_date=WEDNESDAY)
        nav.next()
        assert nav.current_date == dt.date(2024, 6, 6)
        nav.prev()
        nav.prev()
        assert nav.current_date == dt.date(2024, 6, 4)

    def test_week_mode_steps_seven_days(self):
        nav = PeriodNavigator(current_date=WEDNESDAY, view_mode="week")
        nav.next()
        assert nav.current_date == dt.date(2024, 6, 12)
        assert nav.week_start == dt.date(2024, 6, 10)
        nav.prev()
        assert nav.current_date == WEDNESDAY

    def test_today_resets(self):
        nav = PeriodNavigator(current_date=WEDNESDAY, today=lambda: dt.date(2024, 1, 15))
        nav.today()
        assert nav.current_date == dt.date(2024, 1, 15)

    def test_defaults_to_today(self):
        nav = PeriodNavigator(today=lambda: dt.date(2024, 1, 15))
        assert nav.current_date == dt.date(2024, 1, 15)
        assert nav.view_mode == ViewMode.DAY


class TestLabel:
    def test_day_label(self):
        assert PeriodNavigator(current_date=dt.date(2024, 6, 3)).label() == "Mon 3 Jun 2024"

    def test_week_label(self):
        nav = PeriodNavigator(current_date=WEDNESDAY)
        nav.set_view_mode(ViewMode.WEEK)
        assert nav.label() == "Week of Mon 3 Jun - Sat 8 Jun"
