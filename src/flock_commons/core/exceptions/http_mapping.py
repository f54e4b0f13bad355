"""HTTP status code mapping for exceptions."""

from .base import FlockCommonsError
from .domain import (
    BusinessLogicError,
    ConfigurationError,
    InvalidStateError,
    TenantContextError,
    TenantError,
)
from .database import DatabaseError, EntityNotFoundError, RepositoryError


HTTP_STATUS_MAP = {
    # 400 Bad Request
    TenantContextError: 400,
    TenantError: 400,
    BusinessLogicError: 400,

    # 404 Not Found
    EntityNotFoundError: 404,

    # 409 Conflict
    InvalidStateError: 409,

    # 500 Internal Server Error
    RepositoryError: 500,
    DatabaseError: 500,
    ConfigurationError: 500,
    FlockCommonsError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Resolve the HTTP status for an exception by walking its MRO."""
    for exc_type in type(exception).__mro__:
        if exc_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exc_type]
    return 500
