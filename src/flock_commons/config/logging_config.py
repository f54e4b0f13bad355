"""Logging setup for services embedding flock-commons.

Builds a ``dictConfig`` mapping from ``FlockSettings``. Every console record
carries the tenant and request id bound with ``tenant_scope`` so onboarding
runs and transaction mutations can be traced per tenant.
"""

import logging
import logging.config
from enum import Enum
from typing import Any, Dict, Optional

from ..core.shared.context import get_request_context
from .settings import FlockSettings, get_settings


class LogVerbosity(str, Enum):
    """Verbosity presets mapped onto root log levels."""
    QUIET = "QUIET"
    NORMAL = "NORMAL"
    VERBOSE = "VERBOSE"
    DEBUG = "DEBUG"


class LogFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"


VERBOSITY_LEVELS = {
    LogVerbosity.QUIET: "ERROR",
    LogVerbosity.NORMAL: "WARNING",
    LogVerbosity.VERBOSE: "INFO",
    LogVerbosity.DEBUG: "DEBUG",
}

FORMAT_STRINGS = {
    LogFormat.SIMPLE: "%(asctime)s %(levelname)s [tenant=%(tenant_id)s] %(message)s",
    LogFormat.DETAILED: (
        "%(asctime)s %(levelname)s %(name)s:%(lineno)d "
        "[tenant=%(tenant_id)s request=%(request_id)s] %(message)s"
    ),
    LogFormat.JSON: (
        '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s",'
        '"tenant_id":"%(tenant_id)s","request_id":"%(request_id)s","message":"%(message)s"}'
    ),
}


def get_log_level_from_verbosity(verbosity: str) -> str:
    """Root level for a verbosity preset; unknown presets mean NORMAL."""
    try:
        return VERBOSITY_LEVELS[LogVerbosity(verbosity.upper())]
    except ValueError:
        return VERBOSITY_LEVELS[LogVerbosity.NORMAL]


class TenantContextFilter(logging.Filter):
    """Stamp records with the tenant and request bound to the current task."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = get_request_context()
        if not hasattr(record, "tenant_id"):
            record.tenant_id = context.tenant_id if context else "-"
        if not hasattr(record, "request_id"):
            record.request_id = context.request_id if context else "-"
        return True


class LoggingConfig:
    """Builds and applies the logging configuration."""

    # Seeding and cache activity stays visible at INFO regardless of verbosity
    AUDIT_MODULES = [
        "flock_commons.features.onboarding",
        "flock_commons.features.finance.services",
    ]

    # Chatty third-party loggers
    MODULE_LEVELS = {
        "asyncpg": "WARNING",
        "httpx": "ERROR",
        "httpcore": "ERROR",
        "asyncio": "ERROR",
    }

    @classmethod
    def build_config(cls, settings: FlockSettings) -> Dict[str, Any]:
        """Build a dictConfig mapping from settings."""
        root_level = get_log_level_from_verbosity(settings.log_verbosity)
        if settings.log_level.upper() == "DEBUG":
            root_level = "DEBUG"

        try:
            log_format = LogFormat(settings.log_format.lower())
        except ValueError:
            log_format = LogFormat.SIMPLE

        loggers = {
            module: cls._logger_entry("DEBUG" if root_level == "DEBUG" else "INFO")
            for module in cls.AUDIT_MODULES
        }
        loggers.update({
            module: cls._logger_entry(level)
            for module, level in cls.MODULE_LEVELS.items()
        })

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "tenant_context": {"()": TenantContextFilter},
            },
            "formatters": {
                "default": {
                    "format": FORMAT_STRINGS[log_format],
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": "DEBUG",
                    "formatter": "default",
                    "filters": ["tenant_context"],
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"level": root_level, "handlers": ["console"]},
            "loggers": loggers,
        }

    @staticmethod
    def _logger_entry(level: str) -> Dict[str, Any]:
        return {"level": level, "handlers": ["console"], "propagate": False}

    @classmethod
    def configure(cls, settings: Optional[FlockSettings] = None) -> None:
        settings = settings or get_settings()
        config = cls.build_config(settings)
        logging.config.dictConfig(config)
        logging.getLogger(__name__).debug(
            f"Logging configured for {settings.app_name}: "
            f"root={config['root']['level']}, format={settings.log_format}"
        )

    @classmethod
    def set_module_level(cls, module_name: str, level: str) -> None:
        """Override the level of one logger at runtime."""
        logging.getLogger(module_name).setLevel(level.upper())


def setup_logging(settings: Optional[FlockSettings] = None) -> None:
    """Configure logging once at application startup."""
    LoggingConfig.configure(settings)
