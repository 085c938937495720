"""Structured logging configuration for uiextract using structlog.

Provides structured logging for detection runs, with stage timings and run
summaries emitted as key/value events.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structured logging for uiextract.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by UIEXTRACT_DISABLE_CONSOLE_LOGGING)
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    global _logging_initialized

    if os.getenv("UIEXTRACT_DISABLE_CONSOLE_LOGGING") == "1":
        console = False

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        # stdout is reserved for command output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )

    _logging_initialized = True


_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    try:
        settings = get_settings()
        log_file = None
        if settings.log_path is not None:
            log_file = settings.log_path / f"uiextract_{datetime.now().strftime('%Y%m%d')}.log"
        setup_logging(
            level="DEBUG" if settings.debug_mode else settings.log_level,
            log_file=log_file,
            structured=not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (AttributeError, OSError, ValueError):
        # Invalid settings or log path, fall back to readable console logging
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.BoundLogger, structlog.get_logger(name))


class DetectionLogger:
    """Logger for detection stage timings and run summaries."""

    def __init__(self, base_logger: structlog.BoundLogger | None = None) -> None:
        """Initialize detection logger.

        Args:
            base_logger: Base logger to use
        """
        self.logger = base_logger or get_logger(__name__)
        self.metrics: dict[str, list[float]] = {}

    def log_timing(self, stage: str, duration: float, **kwargs) -> None:
        """Log a pipeline stage timing.

        Args:
            stage: Stage name (extract, measure, classify)
            duration: Duration in seconds
            **kwargs: Additional context
        """
        self.metrics.setdefault(stage, []).append(duration)
        self.logger.debug("stage_timing", stage=stage, duration=duration, **kwargs)

    def log_run(
        self,
        strategy: str,
        regions: int,
        components: int,
        duration: float,
        **kwargs,
    ) -> None:
        """Log the summary of one detection run.

        Args:
            strategy: Extraction strategy used
            regions: Candidate regions extracted
            components: Components kept after confidence filtering
            duration: Total duration in seconds
            **kwargs: Additional context
        """
        self.logger.info(
            "detection_completed",
            strategy=strategy,
            regions=regions,
            components=components,
            duration=duration,
            **kwargs,
        )

    def get_stats(self, stage: str | None = None) -> dict[str, Any]:
        """Get timing statistics.

        Args:
            stage: Optional specific stage

        Returns:
            Statistics dict
        """
        if stage:
            values = self.metrics.get(stage)
            return self._summarize(values) if values else {}

        return {name: self._summarize(values) for name, values in self.metrics.items() if values}

    @staticmethod
    def _summarize(values: list[float]) -> dict[str, Any]:
        return {
            "count": len(values),
            "mean": sum(values) / len(values),
            "min": min(values),
            "max": max(values),
            "total": sum(values),
        }
