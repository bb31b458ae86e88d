#!/usr/bin/env python3
"""
cli_utils.py
-------------------
Shared CLI utilities for Reading Roundup commands.

Functions:
    setup_logger: Initialize RoundupLogger for CLI operations

Usage:
    from reading_roundup.core.cli_utils import setup_logger

    logger = setup_logger(log_dir, "journal2sql")
"""
from pathlib import Path
from reading_roundup.core.logging_manager import RoundupLogger


def setup_logger(log_dir: Path, component_name: str) -> RoundupLogger:
    """
    Setup logging for CLI operations.

    Creates the operations log directory if it doesn't exist and initializes
    a RoundupLogger instance for the specified component.

    Args:
        log_dir: Base log directory (typically from paths.LOG_DIR)
        component_name: Component identifier for logging (e.g., 'journal2sql')

    Returns:
        Configured RoundupLogger instance
    """
    operations_log_dir = Path(log_dir) / "operations"
    operations_log_dir.mkdir(parents=True, exist_ok=True)
    return RoundupLogger(operations_log_dir, component_name=component_name)
