"""Configuration management for lookalike.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RulesOfSimilarity: Thresholds for letterform comparison
- ComparisonConfig: Comparison run settings
- LoggingConfig: Logging settings
- LookalikeSettings: Main application settings
"""

from lookalike.config.settings import (
    DEFAULT_TEST_STRING,
    ComparisonConfig,
    LoggingConfig,
    LookalikeSettings,
    RulesOfSimilarity,
    get_default_settings,
)

__all__ = [
    "DEFAULT_TEST_STRING",
    "ComparisonConfig",
    "LoggingConfig",
    "LookalikeSettings",
    "RulesOfSimilarity",
    "get_default_settings",
]
