"""Domain-specific exceptions for flock-commons.

This module defines exceptions that relate to business logic and
domain concepts: tenant scoping, transaction workflow and onboarding.
"""

from typing import Optional

from .base import FlockCommonsError


# Configuration Errors
class ConfigurationError(FlockCommonsError):
    """Raised when there's a configuration issue."""
    pass


# Tenant Errors
class TenantError(FlockCommonsError):
    """Base class for tenant-related errors."""
    pass


class TenantContextError(TenantError):
    """Raised when an operation needs a tenant but none is bound to the request."""

    def __init__(self, message: str = "No tenant context available"):
        super().__init__(message)


# Business Logic Errors
class BusinessLogicError(FlockCommonsError):
    """Raised when business logic validation fails."""
    pass


class InvalidStateError(BusinessLogicError):
    """Raised when operation is invalid in current state."""

    def __init__(self, message: str, current_state: Optional[str] = None):
        details = {"current_state": current_state} if current_state else None
        super().__init__(message, details=details)
        self.current_state = current_state
