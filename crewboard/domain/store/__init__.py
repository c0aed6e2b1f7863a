"""Store domain - Booking Store Adapter and its backings"""

import logging

from ...config import STORE_BACKEND
from .base import StoreAdapter, week_bounds
from .memory import InMemoryStore

logger = logging.getLogger(__name__)


def build_store(backend: str = STORE_BACKEND) -> StoreAdapter:
    """Create the configured store ("memory" or "database")"""
    if backend == "memory":
        logger.info("🧠 Using in-memory store")
        return InMemoryStore()
    if backend == "database":
        # Imported lazily so the memory backend never opens a database engine
        from ... import models  # noqa: F401 - registers tables on Base
        from ...database import Base, SessionLocal, engine
        from .sql import SqlStore

        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("🗄️ Using database store")
        return SqlStore(SessionLocal)
    raise ValueError(f"Unknown STORE_BACKEND '{backend}', expected 'memory' or 'database'")


__all__ = ["InMemoryStore", "StoreAdapter", "build_store", "week_bounds"]
