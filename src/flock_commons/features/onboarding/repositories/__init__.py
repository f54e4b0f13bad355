"""Onboarding repositories."""

from .seed_repository import SeedRecordDatabaseRepository

__all__ = ["SeedRecordDatabaseRepository"]
