#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Operation logs for the roundup tools.

Each command (readdb, journal2sql, roundup2md) logs through one
RoundupLogger named after it:

    <log_dir>/<component>.log   every record of the component
    <log_dir>/errors.log        errors of every component
    stderr                      warnings only (errors are printed by the CLI)

Records carry a short kind prefix and, when given, their details as JSON:

    OPERATION - scan_complete: {"directory": "...", "entries": 3, "errors": 0}
    WARNING - skipping file: {"path": "...", "error": "..."}

Code that may run without a logger calls ``safe_logger(logger)``.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(message)s"


def _rotating_handler(
    path: Path, level: int, max_bytes: int, backup_count: int
) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _below_error(record: logging.LogRecord) -> bool:
    return record.levelno < logging.ERROR


def _with_details(kind: str, message: str, details: Optional[Dict[str, Any]]) -> str:
    """Render ``KIND - message`` with the details appended as JSON."""
    if not details:
        return f"{kind} - {message}"
    return f"{kind} - {message}: {json.dumps(details, default=str)}"


class RoundupLogger:
    """
    Logger of one roundup component.

    Attributes:
        log_dir: Directory holding the log files
        component_name: Component the records belong to
        logger: Underlying ``logging`` logger (does not propagate)
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "reading_roundup",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
    ) -> None:
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.logger = logging.getLogger(f"reading_roundup.{component_name}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        # A second instance for the same component replaces the first one's handlers
        self.close()

        self.logger.addHandler(
            _rotating_handler(
                self.log_dir / f"{component_name}.log", logging.DEBUG, max_bytes, backup_count
            )
        )
        self.logger.addHandler(
            _rotating_handler(
                self.log_dir / "errors.log", logging.ERROR, max_bytes, backup_count
            )
        )

        console = logging.StreamHandler()
        console.setLevel(logging.WARNING)
        console.addFilter(_below_error)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
        self.logger.addHandler(console)

    def close(self) -> None:
        """Flush and detach every handler, releasing the log files."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Record a completed step (scan, ingest, export, store operation)."""
        self.logger.info(_with_details("OPERATION", operation, details or {}))

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.debug(_with_details("DEBUG", message, details))

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.logger.warning(_with_details("WARNING", message, details))

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Record an exception with its context and traceback.

        The traceback is taken from the exception itself, so the call does
        not have to happen inside the ``except`` block that caught it.
        """
        message = f"ERROR - {type(error).__name__}: {error}"
        if context:
            message += " [" + ", ".join(f"{k}={v}" for k, v in context.items()) + "]"
        self.logger.error(message, exc_info=(type(error), error, error.__traceback__))


class NullLogger:
    """Stand-in for RoundupLogger that records nothing."""

    def close(self) -> None:
        pass

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass


_null_logger = NullLogger()


def safe_logger(logger: Optional[RoundupLogger]) -> RoundupLogger:
    """Return ``logger``, or the shared NullLogger when it is None."""
    return logger if logger is not None else _null_logger  # type: ignore[return-value]


def handle_cli_error(
    ctx: click.Context,
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Log a failed command, print ``❌ <Type>: <message>`` on stderr and exit.

    With ``--verbose`` the traceback is printed as well.

    Args:
        ctx: Click context; ``ctx.obj`` holds ``logger`` and ``verbose``
        error: Exception that stopped the command
        operation: Command name, recorded in the error context
        additional_context: Extra context such as the roundup date
        exit_code: Process exit status
    """
    context = {"operation": operation, **(additional_context or {})}
    safe_logger(ctx.obj.get("logger")).log_error(error, context)

    message = f"❌ {type(error).__name__}: {error}"
    if ctx.obj.get("verbose", False):
        tb = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        message = f"{message}\n\n{tb}"

    click.echo(message, err=True)
    sys.exit(exit_code)
