"""Pytest configuration for crewboard tests."""

import datetime as dt
import os
import sys
from pathlib import Path

import pytest

# Ensure project root is on PYTHONPATH
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Deterministic in-process backend with the default 08:00-18:00 / 30 minute grid
os.environ["STORE_BACKEND"] = "memory"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["START_HOUR"] = "8"
os.environ["END_HOUR"] = "18"
os.environ["SLOT_MINUTES"] = "30"
os.environ["DRAG_THRESHOLD_PX"] = "4"
os.environ["DB_LOG_SLOW_QUERIES"] = "false"

from crewboard.domain.store.memory import InMemoryStore  # noqa: E402
from crewboard.events import EventBus  # noqa: E402
from crewboard.schemas import Booking, Person, Team  # noqa: E402

MONDAY = dt.date(2024, 6, 3)


@pytest.fixture
def monday():
    return MONDAY


@pytest.fixture
def make_booking():
    """Factory for a scheduled booking on Monday 3 June 2024"""

    def make(booking_id=None, team_id="T1", start="09:00", hours=1.0, day=MONDAY, **fields) -> Booking:
        return Booking(id=booking_id, date=day, teamId=team_id, startTime=start, durationHours=hours, **fields)

    return make


@pytest.fixture
def teams():
    return [Team(id="T1", name="Install Team A"), Team(id="T2", name="Install Team B")]


@pytest.fixture
def store(teams):
    """Two teams, two people and no bookings"""
    people = [Person(id="p-alice", name="Alice"), Person(id="p-ben", name="Ben")]
    return InMemoryStore(people=people, teams=teams)


@pytest.fixture
def bus():
    return EventBus()
