"""
Discrete slot sequence of one working day.

The labels ("08:00", "08:30", ...) are the only valid booking start
times, and slot indices drive grid rows and span arithmetic.
"""

import math
from typing import Optional

from ...config import END_HOUR, SLOT_MINUTES, START_HOUR


def to_minutes(label: str) -> int:
    """Minutes since midnight of an HH:MM label"""
    hours, minutes = map(int, label.split(":")[:2])
    return hours * 60 + minutes


def format_label(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


class TimeSlotModel:
    def __init__(self, start_hour: int = START_HOUR, end_hour: int = END_HOUR, slot_minutes: int = SLOT_MINUTES):
        if end_hour <= start_hour:
            raise ValueError("end_hour must be after start_hour")
        if slot_minutes <= 0 or 60 % slot_minutes != 0:
            raise ValueError("slot_minutes must divide an hour evenly")

        self.start_hour = start_hour
        self.end_hour = end_hour
        self.slot_minutes = slot_minutes
        self._labels = tuple(
            format_label(minute) for minute in range(start_hour * 60, end_hour * 60, slot_minutes)
        )
        self._index = {label: i for i, label in enumerate(self._labels)}

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    @property
    def slots_per_hour(self) -> int:
        return 60 // self.slot_minutes

    @property
    def day_start_minutes(self) -> int:
        return self.start_hour * 60

    @property
    def day_end_minutes(self) -> int:
        return self.end_hour * 60

    def slot_count(self) -> int:
        return len(self._labels)

    def slot_index(self, label: Optional[str]) -> Optional[int]:
        """Index of a label, or None when it is not on the grid"""
        if not label:
            return None
        return self._index.get(label)

    def slot_at(self, index: int) -> str:
        if index < 0 or index >= len(self._labels):
            raise IndexError(f"Slot index {index} outside 0..{len(self._labels) - 1}")
        return self._labels[index]

    def contains(self, label: Optional[str]) -> bool:
        return self.slot_index(label) is not None

    def slots_for_hours(self, hours: float) -> int:
        """Number of slots a duration covers, half a slot rounding up"""
        return math.floor(hours * self.slots_per_hour + 0.5)

    def hours_for_slots(self, slots: int) -> float:
        return slots * self.slot_minutes / 60

    def end_label(self, index: int) -> str:
        """Label of the boundary after slot `index` (the day end for the last slot)"""
        return format_label(self.day_start_minutes + (index + 1) * self.slot_minutes)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self):
        return iter(self._labels)

    def __repr__(self) -> str:
        return f"TimeSlotModel({self._labels[0]}-{format_label(self.day_end_minutes)}, {self.slot_minutes}m)"
