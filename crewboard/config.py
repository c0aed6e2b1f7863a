import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./crewboard.db")

# "memory" keeps everything in process (demo / tests), "database" uses DATABASE_URL
STORE_BACKEND = os.getenv("STORE_BACKEND", "memory").lower()

# Seed the demo crew (people, teams, one booking) when the store is empty
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

# Working window of the schedule grid
START_HOUR = int(os.getenv("START_HOUR", "8"))
END_HOUR = int(os.getenv("END_HOUR", "18"))
SLOT_MINUTES = int(os.getenv("SLOT_MINUTES", "30"))

# Pixels the pointer must travel before a press on a booking becomes a drag
DRAG_THRESHOLD_PX = int(os.getenv("DRAG_THRESHOLD_PX", "4"))

# Pre-filled duration of the "new booking" form
DEFAULT_DURATION_HOURS = float(os.getenv("DEFAULT_DURATION_HOURS", "1.5"))

# Click-to-step resize increment
STEP_HOURS = float(os.getenv("STEP_HOURS", "0.5"))

if END_HOUR <= START_HOUR:
    raise ValueError(f"END_HOUR ({END_HOUR}) must be after START_HOUR ({START_HOUR})")
if SLOT_MINUTES <= 0 or 60 % SLOT_MINUTES != 0:
    raise ValueError(f"SLOT_MINUTES must divide an hour evenly, got {SLOT_MINUTES}")

# Frontend origins allowed to call the API
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:5173,http://localhost:3000",
).split(",")
