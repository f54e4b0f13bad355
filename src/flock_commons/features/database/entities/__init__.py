"""Database domain protocols."""

from .protocols import DatabaseRepository

__all__ = ["DatabaseRepository"]
