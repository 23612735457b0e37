"""Console logging utilities for the CHIP-8 emulator.

Loggers print levelled, optionally coloured and timestamped lines to stdout.
One logger is kept per name so modules can fetch theirs at import time and
the command line can change the level of all of them at once.
"""

import time
import sys
from typing import Dict


LEVELS = {
    "DEBUG": 0,
    "INFO": 1,
    "WARNING": 2,
    "ERROR": 3,
    "CRITICAL": 4,
}

_loggers: Dict[str, "ConsoleLogger"] = {}
_default_level = "INFO"


class ConsoleLogger:
    """Flexible console logger with level filtering and colours."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.use_colors = (
            use_colors and hasattr(sys.stdout, "isatty") and sys.stdout.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {k: "" for k in [*LEVELS, "RESET"]}
        )

    def set_level(self, log_level: str):
        """Change the minimum level that gets printed."""
        log_level = log_level.upper()
        if log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.log_level = log_level

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return LEVELS.get(level.upper(), 1) >= LEVELS.get(self.log_level, 1)

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


def get_logger(name: str = "chip8vm") -> ConsoleLogger:
    """Return the shared logger for ``name``, creating it on first use."""
    if name not in _loggers:
        _loggers[name] = ConsoleLogger(name, log_level=_default_level)
    return _loggers[name]


def set_log_level(log_level: str):
    """Set the level of every existing and future logger."""
    global _default_level
    log_level = log_level.upper()
    if log_level not in LEVELS:
        raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
    _default_level = log_level
    for logger in _loggers.values():
        logger.set_level(log_level)
