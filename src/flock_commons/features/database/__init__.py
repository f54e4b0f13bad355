"""Database feature: repository protocol and asyncpg implementation."""

from .entities import DatabaseRepository
from .repositories import AsyncpgDatabaseRepository, create_database_pool

__all__ = [
    "DatabaseRepository",
    "AsyncpgDatabaseRepository",
    "create_database_pool",
]
