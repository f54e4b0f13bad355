"""Base exception for flock-commons.

Every library error carries a machine-readable ``error_code`` (the class
name unless given) and a ``details`` dict that is rendered into API error
bodies by ``create_error_response``.
"""

from typing import Any, Dict, Optional


class FlockCommonsError(Exception):
    """Root of the flock-commons exception hierarchy."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def get_http_status_code(exception: Exception) -> int:
    """HTTP status for an exception; 500 for anything unmapped."""
    from .http_mapping import get_http_status_code as _lookup_status_code
    return _lookup_status_code(exception)


def create_error_response(exception: FlockCommonsError) -> Dict[str, Any]:
    """Render ``{"error": {code, message, details, type}}`` for an API response."""
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
