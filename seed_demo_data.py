"""
Seed the demo crew into the configured database
Usage: python seed_demo_data.py [YYYY-MM-DD]

The optional date is the day the sample booking is placed on (default today).
Nothing is written when the database already has teams.
"""
import asyncio
import datetime as dt
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from crewboard.domain.store import build_store
from crewboard.domain.store.seed import seed_store
from crewboard.exceptions import CrewboardError

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)


async def seed(day: dt.date) -> bool:
    store = build_store("database")
    seeded = await seed_store(store, today=day)

    teams = await store.list_teams()
    logger.info("📋 Teams:")
    for team in teams:
        logger.info(f"   - {team.name}: {', '.join(m.name for m in team.members)}")
    return seeded


if __name__ == "__main__":
    day = dt.date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else dt.date.today()
    try:
        if asyncio.run(seed(day)):
            logger.info("✅ Demo data seeded successfully!")
        else:
            logger.info("ℹ️ Teams already exist, nothing seeded")
    except CrewboardError as e:
        logger.error(f"❌ Error: {e.message}")
        sys.exit(1)
