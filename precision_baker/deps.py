"""FastAPI dependencies for Precision Baker API.

Provides:
- Repository resolution (SQL session or in-memory store, per settings)
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from .db import get_db
from .repository import Repository, SqlRepository, get_memory_repository
from .settings import settings


def get_repository(db: Session = Depends(get_db)) -> Repository:
    """Resolve the storage backend.

    The SQL session is lazy: in memory mode it is opened and closed
    without ever touching the database.
    """
    if settings.storage_backend == "memory":
        return get_memory_repository()
    return SqlRepository(db)
