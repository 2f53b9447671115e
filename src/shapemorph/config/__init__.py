"""Configuration management for shapemorph.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- MorphConfig: Measurement settings for matching
- OutputConfig: Frame sampling and formatting settings
- LoggingConfig: Logging settings
- ShapeMorphSettings: Main application settings
"""

from shapemorph.config.settings import (
    LoggingConfig,
    MorphConfig,
    OutputConfig,
    ShapeMorphSettings,
    get_default_settings,
)

__all__ = [
    "LoggingConfig",
    "MorphConfig",
    "OutputConfig",
    "ShapeMorphSettings",
    "get_default_settings",
]
