"""
Structured logging utility.
Single responsibility: provide consistent event logging across the application.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional
import json


LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARN": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class StructuredLogger:
    """
    Structured logger emitting event names with keyword context.
    """

    def __init__(self, name: str = "sheetmerge",
                 log_file: Optional[Path] = None,
                 level: str = "INFO"):
        """
        Initialize logger.

        Args:
            name: Logger name
            log_file: Optional JSON-lines file
            level: Minimum level to emit
        """
        self.name = name
        self.log_file = Path(log_file) if log_file else None
        self.level = _resolve_level(level)

    def is_enabled(self, level: str) -> bool:
        """Whether messages at ``level`` are emitted."""
        return LEVELS[level] >= self.level

    def _format_message(self, level: str, message: str,
                       **kwargs) -> Dict[str, Any]:
        """
        Build a log entry.

        Args:
            level: Log level name
            message: Event name or message
            **kwargs: Context fields

        Returns:
            Log entry dictionary
        """
        entry = {
            "timestamp": datetime.now().isoformat(),
            "level": level,
            "logger": self.name,
            "message": message
        }

        if kwargs:
            entry["context"] = kwargs

        return entry

    def _output(self, entry: Dict[str, Any]):
        """
        Write entry to stderr and, when configured, to the log file.

        Args:
            entry: Log entry dictionary
        """
        timestamp = entry["timestamp"].split("T")[1][:8]

        print(f"[{timestamp}] {entry['level']:5} | {entry['message']}",
              file=sys.stderr)

        for key, value in entry.get("context", {}).items():
            print(f"  {key}={value}", file=sys.stderr)

        if self.log_file:
            with open(self.log_file, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry, default=str) + "\n")

    def _log(self, level: str, message: str, **kwargs):
        if not self.is_enabled(level):
            return
        self._output(self._format_message(level, message, **kwargs))

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._log("INFO", message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._log("DEBUG", message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._log("WARN", message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message."""
        self._log("CRITICAL", message, **kwargs)


def _resolve_level(level: str) -> int:
    name = level.upper()
    if name == "WARNING":
        name = "WARN"
    if name not in LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    return LEVELS[name]


# Global logger instance
_logger: Optional[StructuredLogger] = None


def get_logger(name: str = "sheetmerge") -> StructuredLogger:
    """
    Get or create the shared logger instance.

    Args:
        name: Logger name (used only on first call)

    Returns:
        Logger instance
    """
    global _logger
    if _logger is None:
        _logger = StructuredLogger(name)
    return _logger


def configure_logger(level: Optional[str] = None,
                     log_file: Optional[Path] = None) -> StructuredLogger:
    """
    Reconfigure the shared logger in place.

    Modules hold a reference obtained at import time, so the instance is
    updated rather than replaced.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: JSON-lines file to append entries to

    Returns:
        The shared logger
    """
    logger = get_logger()
    if level is not None:
        logger.level = _resolve_level(level)
    if log_file is not None:
        logger.log_file = Path(log_file)
    return logger
