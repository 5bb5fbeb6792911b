"""Configuration module for spinstats.

This module provides a type-safe configuration system using Pydantic Settings
and a Loguru logging setup.

Public API:
----------
settings: Settings instance
    Pydantic settings object with nested configuration

get_logger(name: str) -> Logger
    Get a context-aware logger for your module

setup_loguru_logger(verbose: bool = False) -> None
    Configure Loguru logger for the application

resilient_operation(operation_name: str)
    Decorator for logging errors in async boundary calls

log_startup_info() -> None
    Log effective configuration at startup

Usage:
------
```python
from src.config import settings
threshold = settings.matching.acceptance_threshold

from src.config import get_logger
logger = get_logger(__name__)
logger.info("Starting session")
```
"""

from .logging import (
    get_logger,
    log_startup_info,
    resilient_operation,
    setup_loguru_logger,
)
from .settings import (
    ListeningConfig,
    LoggingConfig,
    MatchingConfig,
    Settings,
    StatisticsConfig,
    settings,
)

__all__ = [
    "ListeningConfig",
    "LoggingConfig",
    "MatchingConfig",
    "Settings",
    "StatisticsConfig",
    "get_logger",
    "log_startup_info",
    "resilient_operation",
    "settings",
    "setup_loguru_logger",
]
