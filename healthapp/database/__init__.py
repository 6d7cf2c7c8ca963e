from healthapp.database.async_db import (
    dispose_engine,
    get_async_db,
    get_async_db_context,
    get_async_engine,
)
from healthapp.database.base import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "dispose_engine",
    "get_async_db",
    "get_async_db_context",
    "get_async_engine",
]
