"""Tests for the working-day slot model."""

import pytest

from crewboard.domain.scheduling.time_slots import TimeSlotModel, format_label, to_minutes


class TestLabels:
    def test_default_day_has_twenty_half_hour_slots(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.slot_count() == 20
        assert len(slots) == 20
        assert slots.labels[0] == "08:00"
        assert slots.labels[1] == "08:30"
        assert slots.labels[-1] == "17:30"

    def test_hourly_slots(self):
        slots = TimeSlotModel(7, 10, 60)
        assert list(slots) == ["07:00", "08:00", "09:00"]
        assert slots.slots_per_hour == 1

    def test_slot_index_and_lookup(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.slot_index("09:00") == 2
        assert slots.slot_at(2) == "09:00"
        assert slots.contains("17:30")

    def test_off_grid_times_have_no_index(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.slot_index("09:15") is None
        assert slots.slot_index("18:00") is None
        assert slots.slot_index("07:30") is None
        assert slots.slot_index(None) is None
        assert not slots.contains("")

    def test_slot_at_out_of_range(self):
        slots = TimeSlotModel(8, 18, 30)
        with pytest.raises(IndexError):
            slots.slot_at(20)
        with pytest.raises(IndexError):
            slots.slot_at(-1)

    def test_end_label_of_last_slot_is_day_end(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.end_label(19) == "18:00"
        assert slots.end_label(0) == "08:30"


class TestSpanArithmetic:
    def test_whole_slot_durations(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.slots_for_hours(0.5) == 1
        assert slots.slots_for_hours(1) == 2
        assert slots.slots_for_hours(1.5) == 3

    def test_half_slot_rounds_up(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.slots_for_hours(0.25) == 1
        assert slots.slots_for_hours(0.75) == 2
        assert slots.slots_for_hours(1.25) == 3

    def test_hours_for_slots(self):
        slots = TimeSlotModel(8, 18, 30)
        assert slots.hours_for_slots(3) == 1.5
        assert TimeSlotModel(8, 18, 15).hours_for_slots(3) == 0.75


class TestConstruction:
    def test_end_before_start_rejected(self):
        with pytest.raises(ValueError):
            TimeSlotModel(18, 8, 30)

    def test_slot_must_divide_an_hour(self):
        with pytest.raises(ValueError):
            TimeSlotModel(8, 18, 25)


def test_minute_helpers():
    assert to_minutes("09:30") == 570
    assert to_minutes("09:30:00") == 570
    assert format_label(570) == "09:30"
    assert format_label(480) == "08:00"
