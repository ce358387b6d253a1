"""Configuration management for fontgarden.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- StorageConfig: On-disk file and directory names
- ImportConfig: Import routing settings
- ClosureConfig: Composite closure settings
- ExportConfig: Output document settings
- LoggingConfig: Logging settings
- FontgardenSettings: Main application settings
"""

from fontgarden.config.settings import (
    ClosureConfig,
    CyclePolicy,
    ExportConfig,
    FontgardenSettings,
    ImportConfig,
    LoggingConfig,
    StorageConfig,
    get_default_settings,
)

__all__ = [
    "ClosureConfig",
    "CyclePolicy",
    "ExportConfig",
    "FontgardenSettings",
    "ImportConfig",
    "LoggingConfig",
    "StorageConfig",
    "get_default_settings",
]
