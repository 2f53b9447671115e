"""Logging utilities for shapemorph."""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_installed_handlers: list[logging.Handler] = []


@dataclass
class MorphStats:
    """Statistics from a CLI run."""

    shapes_built: int = 0
    morphs_built: int = 0
    frames_sampled: int = 0
    cubics_emitted: int = 0
    build_time_ms: float = 0.0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate run duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("shapemorph")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class MorphLogger:
    """Logger for tracking shape and morph activity and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = MorphStats()

    def start(self) -> None:
        """Mark the start of a run."""
        self._stats.start_time = time.perf_counter()

    def finish(self) -> None:
        """Mark the end of a run."""
        self._stats.end_time = time.perf_counter()

    def log_shape_built(self, name: str, features: int, cubics: int) -> None:
        """Log a shape construction."""
        self._logger.debug("Shape built", shape=name, features=features, cubics=cubics)
        self._stats.shapes_built += 1

    def log_morph_built(
        self,
        start: str,
        end: str,
        pairs: int,
        duration_ms: float,
    ) -> None:
        """Log a completed morph match."""
        self._logger.info(
            "Morph built",
            start=start,
            end=end,
            pairs=pairs,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.morphs_built += 1
        self._stats.build_time_ms += duration_ms

    def log_frame_sampled(self, progress: float, cubics: int) -> None:
        """Log one sampled frame."""
        self._logger.debug("Frame sampled", progress=round(progress, 6), cubics=cubics)
        self._stats.frames_sampled += 1
        self._stats.cubics_emitted += cubics

    def log_error(self, context: str, error: Exception) -> None:
        """Log a failed operation."""
        self._logger.error(
            "Operation failed",
            context=context,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.errors.append((context, str(error)))

    @property
    def stats(self) -> MorphStats:
        """Get current run statistics."""
        return self._stats
