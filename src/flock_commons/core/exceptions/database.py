"""Database-related exceptions for flock-commons."""

from .base import FlockCommonsError


class DatabaseError(FlockCommonsError):
    """Base class for database-related errors."""
    pass


class RepositoryError(DatabaseError):
    """Raised when a repository operation fails."""
    pass


class EntityNotFoundError(DatabaseError):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(
            f"{entity_type} {entity_id} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
