"""Exceptions module for flock-commons.

This module provides the complete exception hierarchy for flock-commons,
organized by domain concerns and infrastructure concerns.
"""

from .base import (
    FlockCommonsError,
    get_http_status_code,
    create_error_response,
)

from .domain import (
    ConfigurationError,
    TenantError,
    TenantContextError,
    BusinessLogicError,
    InvalidStateError,
)

from .database import (
    DatabaseError,
    RepositoryError,
    EntityNotFoundError,
)

__all__ = [
    # Base
    "FlockCommonsError",
    "get_http_status_code",
    "create_error_response",

    # Domain
    "ConfigurationError",
    "TenantError",
    "TenantContextError",
    "BusinessLogicError",
    "InvalidStateError",

    # Database
    "DatabaseError",
    "RepositoryError",
    "EntityNotFoundError",
]
