"""API helpers: exception handlers and the application factory."""

from .exception_handlers import ExceptionHandlerRegistry, register_exception_handlers
from .app import create_app

__all__ = [
    "ExceptionHandlerRegistry",
    "register_exception_handlers",
    "create_app",
]
