"""Database repository implementations."""

from .asyncpg_repository import AsyncpgDatabaseRepository, create_database_pool

__all__ = [
    "AsyncpgDatabaseRepository",
    "create_database_pool",
]
