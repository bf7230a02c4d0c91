"""
debug.py - Logging and timing support for the Connect Four engine

This module wraps the standard logging package in a single DebugManager
instance so that the board, the engine and the harnesses all log through
one configurable channel, tagged by component.
"""

import logging
import sys
import time
from enum import Enum
from typing import List, Optional, Dict, Set


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


# TRACE has no stdlib counterpart, it is emitted as DEBUG with a prefix
LEVEL_MAP = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

LOGGER_NAME = "c4engine"


class DebugManager:
    """Routes engine log messages to a shared logger."""

    def __init__(self):
        self._level = DebugLevel.WARNING
        self._enabled = True
        self._log_file: Optional[str] = None
        self._enabled_components: Set[str] = set()  # empty means all
        self._logger = self._setup_logger()
        self._performance_markers: Dict[str, float] = {}

    @property
    def level(self) -> DebugLevel:
        return self._level

    def _setup_logger(self) -> logging.Logger:
        """
        Return the package logger, configuring it on first use only.

        Later managers share the logger as it is, so creating one never
        changes the level or routing other managers rely on.
        """
        logger = logging.getLogger(LOGGER_NAME)

        if not any(getattr(h, "_c4engine_console", False) for h in logger.handlers):
            logger.setLevel(LEVEL_MAP[self._level])
            logger.propagate = False
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
            console_handler._c4engine_console = True
            logger.addHandler(console_handler)

        return logger

    def configure(self, level: DebugLevel = None,
                  enabled: bool = None,
                  log_file: str = None,
                  components: List[str] = None):
        """
        Change the debug settings. Arguments left as None keep their value.

        Args:
            level: Minimum level that gets logged
            enabled: Master switch for all output
            log_file: Also write to this file ("" removes the file handler)
            components: Only log these components (empty list for all)
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(LEVEL_MAP[level])

        if enabled is not None:
            self._enabled = enabled

        if log_file is not None:
            for handler in self._logger.handlers[:]:
                if isinstance(handler, logging.FileHandler):
                    self._logger.removeHandler(handler)
                    handler.close()

            self._log_file = log_file or None
            if self._log_file:
                file_handler = logging.FileHandler(self._log_file)
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
                self._logger.addHandler(file_handler)

        if components is not None:
            self._enabled_components = set(components)

    def _should_log(self, level: DebugLevel, component: str = None) -> bool:
        if not self._enabled or self._level == DebugLevel.NONE:
            return False

        if level.value > self._level.value:
            return False

        if component and self._enabled_components and component not in self._enabled_components:
            return False

        return True

    def log(self, level: DebugLevel, message: str, component: str = None):
        """
        Log a message at the given level.

        Args:
            level: Debug level for the message
            message: The message to log
            component: Optional component tag used for filtering
        """
        if not self._should_log(level, component):
            return

        if component:
            message = f"[{component}] {message}"

        if level == DebugLevel.ERROR:
            self._logger.error(message)
        elif level == DebugLevel.WARNING:
            self._logger.warning(message)
        elif level == DebugLevel.INFO:
            self._logger.info(message)
        elif level == DebugLevel.DEBUG:
            self._logger.debug(message)
        elif level == DebugLevel.TRACE:
            self._logger.debug(f"TRACE: {message}")

    def error(self, message: str, component: str = None):
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: str = None):
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: str = None):
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: str = None):
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: str = None):
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, marker_name: str):
        """Start a named timer."""
        self._performance_markers[marker_name] = time.perf_counter()

    def end_timer(self, marker_name: str, component: str = None) -> Optional[float]:
        """
        Stop a named timer and log the elapsed time at TRACE level.

        Returns:
            Elapsed seconds, or None if the timer was never started
        """
        started = self._performance_markers.pop(marker_name, None)
        if started is None:
            self.warning(f"Timer '{marker_name}' not started", "debug")
            return None

        elapsed = time.perf_counter() - started
        self.trace(f"Performance [{marker_name}]: {elapsed:.6f} seconds", component)
        return elapsed

    def set_from_string(self, level_str: str) -> bool:
        """Set the level from a command-line string such as "debug"."""
        try:
            level = DebugLevel[level_str.upper()]
        except KeyError:
            self.warning(f"Unknown debug level: {level_str}")
            return False

        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


debug = DebugManager()
