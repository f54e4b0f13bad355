"""Configuration: settings, constants and logging setup."""

from .constants import (
    CacheTTL,
    TransactionType,
    TransactionStatus,
    SeedStatus,
    FeatureCodes,
    SeedTables,
    FinanceTables,
    DEFAULT_SEARCH_LIMIT,
)
from .settings import FlockSettings, get_settings
from .logging_config import LoggingConfig, setup_logging

__all__ = [
    "CacheTTL",
    "TransactionType",
    "TransactionStatus",
    "SeedStatus",
    "FeatureCodes",
    "SeedTables",
    "FinanceTables",
    "DEFAULT_SEARCH_LIMIT",
    "FlockSettings",
    "get_settings",
    "LoggingConfig",
    "setup_logging",
]
