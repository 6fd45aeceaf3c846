"""Logging configuration and diagnostics for the exporter."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

from snipsnap_export.config import Settings


def setup_logging(settings: Settings, verbose: bool = False) -> logging.Logger:
    """Send the package's log records to stderr, and to a file if configured.

    Diagnostics already carry their ``prog:`` prefix, so the default format
    is the bare message. Calling this again replaces the previous handlers.
    """
    log_settings = settings.logging
    level_name = "DEBUG" if verbose else log_settings.level.upper()
    level = getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_settings.file:
        log_path = Path(log_settings.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(log_settings.format)
    logger = logging.getLogger("snipsnap_export")
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger below the package logger, e.g. ``snipsnap_export.diagnostics``."""
    return logging.getLogger(f"snipsnap_export.{name}")


@dataclass
class Reporter:
    """Writes ``prog: message[: os error]`` diagnostic lines.

    The program name travels with the reporter instead of living in a
    module global, so every component that reports gets it passed in.
    """

    prog: str
    logger: logging.Logger = field(
        default_factory=lambda: get_logger("diagnostics")
    )
    errors: int = 0
    warnings: int = 0

    def format(self, message: str, exc: BaseException | None = None) -> str:
        """Build a diagnostic line, appending the OS error description if any."""
        line = f"{self.prog}: {message}"
        if isinstance(exc, OSError) and exc.strerror:
            line += f": {exc.strerror}"
        elif exc is not None and str(exc):
            line += f": {exc}"
        return line

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors += 1
        self.logger.error(self.format(message, exc))

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings += 1
        self.logger.warning(self.format(message, exc))
