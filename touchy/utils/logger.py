"""
Logging for touchy with RFC 5424 syslog severity levels.

A singleton logger writes user-facing messages to stderr (prefixed with the
program name, colored on terminals) and, optionally, a detailed log file.
"""

import logging
import os
import sys
import threading
from datetime import datetime
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Optional


# ============================================================================
# RFC 5424 Syslog Severity Levels
# ============================================================================

# RFC 5424: 0=Emergency, 1=Alert, 2=Critical, 3=Error, 4=Warning, 5=Notice, 6=Informational, 7=Debug
EMERGENCY = 70
ALERT = 60
NOTICE = 25

logging.addLevelName(EMERGENCY, "EMERGENCY")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(NOTICE, "NOTICE")


# ============================================================================
# Formatters
# ============================================================================


class DetailedFormatter(logging.Formatter):
    """Formatter with location tracking (module:function:line) for log files."""

    def format(self, record: logging.LogRecord) -> str:
        record.location = f"{record.module}:{record.funcName}:{record.lineno}"
        return super().format(record)


class ConsoleFormatter(logging.Formatter):
    """Formats console lines as 'prog: message', colored by severity when enabled."""

    RED = "\033[31m"
    YELLOW = "\033[33m"
    RESET = "\033[0m"

    def __init__(self, prog_name: str = "touch", use_color: bool = False):
        super().__init__(fmt="%(message)s")
        self.prog_name = prog_name
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        message = f"{self.prog_name}: {super().format(record)}"
        color = self._color_for(record.levelno)
        if self.use_color and color:
            return f"{color}{message}{self.RESET}"
        return message

    def _color_for(self, levelno: int) -> Optional[str]:
        if levelno >= logging.ERROR:
            return self.RED
        if levelno >= logging.WARNING:
            return self.YELLOW
        return None


def stream_supports_color(stream) -> bool:
    """True when the stream is a terminal and NO_COLOR is not set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


# ============================================================================
# Singleton Logger
# ============================================================================


class TouchyLogger:
    """
    Thread-safe singleton logger for touchy.

    Features:
    - RFC 5424 syslog severity levels
    - Console output on stderr, prefixed with the program name
    - Optional file output with location tracking and rotation
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self._logger = logging.getLogger("touchy")
        self._logger.setLevel(logging.INFO)
        self._logger.propagate = False

        self._console_handler = None
        self._file_handler = None
        self._log_dir = None

        self._remove_handlers()

    def configure(
        self,
        log_level: str = "INFO",
        prog_name: str = "touch",
        enable_console: bool = True,
        enable_file: bool = False,
        log_dir: str = "logs",
        rotation_type: Optional[str] = None,
        max_bytes: int = 1048576,  # 1 MB
        backup_count: int = 3,
        when: str = "midnight",
    ) -> None:
        """
        Configure the logger with specified settings.

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            prog_name: Program name prefixed to console messages
            enable_console: Enable console output on stderr
            enable_file: Enable file output
            log_dir: Directory for log files
            rotation_type: None for a plain file, "size" or "time" to rotate
            max_bytes: Max bytes for size-based rotation
            backup_count: Number of rotated files to keep
            when: When to rotate for time-based rotation (e.g., "midnight", "H")
        """
        self._remove_handlers()
        self._console_handler = None
        self._file_handler = None
        self._log_dir = None

        level = getattr(logging, log_level.upper(), logging.INFO)
        self._logger.setLevel(level)

        if enable_console:
            stream = sys.stderr
            self._console_handler = logging.StreamHandler(stream)
            self._console_handler.setLevel(level)
            self._console_handler.setFormatter(ConsoleFormatter(prog_name, use_color=stream_supports_color(stream)))
            self._logger.addHandler(self._console_handler)

        if enable_file:
            log_path = Path(log_dir)
            log_path.mkdir(parents=True, exist_ok=True)
            self._log_dir = log_path
            log_file = log_path / f"touchy_{datetime.now().strftime('%Y%m%d')}.log"

            if rotation_type is None:
                self._file_handler = logging.FileHandler(log_file, encoding="utf-8", delay=True)
            elif rotation_type == "size":
                self._file_handler = RotatingFileHandler(
                    log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8", delay=True
                )
            elif rotation_type == "time":
                self._file_handler = TimedRotatingFileHandler(
                    log_file, when=when, backupCount=backup_count, encoding="utf-8", delay=True
                )
            else:
                raise ValueError(f"Invalid rotation_type: {rotation_type}. Must be 'size' or 'time'.")

            self._file_handler.setLevel(logging.DEBUG)
            self._file_handler.setFormatter(
                DetailedFormatter(
                    fmt="%(asctime)s [%(levelname)s] [%(location)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
                )
            )
            # The file always records debug detail, the console keeps its own level
            self._logger.setLevel(logging.DEBUG)
            self._logger.addHandler(self._file_handler)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance."""
        return self._logger

    def close(self) -> None:
        """Close and detach all handlers."""
        self._remove_handlers()
        self._console_handler = None
        self._file_handler = None

    def _remove_handlers(self) -> None:
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)

    # Convenience methods for RFC 5424 severity levels

    def emergency(self, msg: str, *args, **kwargs) -> None:
        """Log emergency message (severity 0)."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.log(EMERGENCY, msg, *args, **kwargs)

    def alert(self, msg: str, *args, **kwargs) -> None:
        """Log alert message (severity 1)."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.log(ALERT, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.critical(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.warning(msg, *args, **kwargs)

    def notice(self, msg: str, *args, **kwargs) -> None:
        """Log notice message (severity 5 - normal but significant)."""
        kwargs.setdefault("stacklevel", 2)
        self._logger.log(NOTICE, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.debug(msg, *args, **kwargs)


# ============================================================================
# Global Logger Instance
# ============================================================================


def get_logger() -> TouchyLogger:
    """
    Get the global TouchyLogger instance.

    Returns:
        Singleton TouchyLogger instance
    """
    return TouchyLogger()
