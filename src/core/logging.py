"""
Logging configuration for Resilient Fetch.

Uses loguru for structured logging. The library only emits records; sinks
are installed by setup_logging(), which the CLI calls once at startup.
"""

import sys
import time

from loguru import logger

from config import settings as settings_module


def setup_logging() -> None:
    """Configure logging based on settings.

    Sets up:
    - Console output with color and formatting
    - File output with rotation and retention (when enabled)
    - Log levels from configuration
    """
    settings = settings_module.settings

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        colorize=True,
    )

    if settings.log_to_file:
        log_dir = settings.logs_dir
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "resilient-fetch_{time:YYYY-MM-DD}.log",
            level="DEBUG",  # Always log everything to file
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="gz",
            enqueue=True,
        )

    logger.debug("Logging initialized (level={})", settings.log_level)


def get_logger(name: str):
    """Get a logger instance for a specific module.

    Example:
        >>> from core.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Fetching {}", url)
    """
    return logger.bind(module=name)


class log_operation:
    """Context manager for logging operations with timing.

    Example:
        >>> with log_operation("Request", level="INFO", url=url) as op:
        ...     execute(url)
        >>> op.duration_ms
    """

    def __init__(self, operation: str, *, level: str = "INFO", **context):
        self.operation = operation
        self.level = level
        self.context = context
        self.start_time = None
        self.duration_ms = None

    def _context_str(self) -> str:
        return " ".join(f"{k}={v}" for k, v in self.context.items())

    def __enter__(self):
        self.start_time = time.monotonic()
        logger.log(self.level, "{} [{}] starting...", self.operation, self._context_str())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.monotonic() - self.start_time) * 1000

        if exc_type is None:
            logger.log(
                self.level,
                "{} [{}] completed in {:.0f} ms",
                self.operation,
                self._context_str(),
                self.duration_ms,
            )
        else:
            logger.log(
                self.level,
                "{} [{}] failed after {:.0f} ms: {}",
                self.operation,
                self._context_str(),
                self.duration_ms,
                exc_val,
            )

        return False  # Don't suppress exceptions
