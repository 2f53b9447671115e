"""Configuration settings for shapemorph."""

from pathlib import Path

from pydantic import BaseModel, Field

from shapemorph.core.measure import LengthMeasurer


class MorphConfig(BaseModel):
    """Configuration for outline measurement and matching."""

    measure_segments: int = Field(
        default=3,
        ge=1,
        le=64,
        description="Number of chords used to approximate the arc length of each cubic",
    )

    def create_measurer(self) -> LengthMeasurer:
        """Build the length measurer described by this config."""
        return LengthMeasurer(self.measure_segments)


class OutputConfig(BaseModel):
    """Configuration for CLI frame output."""

    steps: int = Field(
        default=5,
        ge=2,
        le=1000,
        description="Number of evenly spaced frames sampled between start and end",
    )
    precision: int = Field(
        default=4,
        ge=0,
        le=12,
        description="Decimal places for printed coordinates",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class ShapeMorphSettings(BaseModel):
    """Main application settings."""

    morph: MorphConfig = Field(default_factory=MorphConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> ShapeMorphSettings:
    """Get default application settings."""
    return ShapeMorphSettings()
