# utils/deps.py
import logging
from fastapi import Request

from config import Settings
from storage.base import Storage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """Construct the storage backend once, at application startup."""
    if settings.STORAGE_BACKEND == "sql":
        from database import SessionLocal, init_db
        from storage.sql import SqlStorage

        init_db()
        storage: Storage = SqlStorage(SessionLocal)
    else:
        from storage.memory import MemStorage

        storage = MemStorage()

    if settings.SEED_DEFAULT_CATEGORIES:
        from utils.seed import seed_categories

        seed_categories(storage)

    logger.info("Storage ready: backend=%s", settings.STORAGE_BACKEND)
    return storage


# Retrieve the storage instance injected into the running app
def get_storage(request: Request) -> Storage:
    return request.app.state.storage
