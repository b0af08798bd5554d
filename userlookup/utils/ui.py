"""User interface utilities (leveled diagnostic messages)

The library reports what it does --refreshes, dropped lines, failed
reads-- through a process-wide `UI` instance instead of printing or
configuring loggers on its own. Callers can swap the instance with
:py:func:`instance` or :py:func:`userlookup.utils.init_ui`.
"""
from __future__ import annotations

from typing import Any, Protocol

from typing_extensions import Literal

DEBUG: Literal[0] = 0
INFO: Literal[1] = 1
NOTICE: Literal[2] = 2
WARNING: Literal[3] = 3
ERROR: Literal[4] = 4
FATAL: Literal[5] = 5

LEVEL_LITERAL = Literal[0, 1, 2, 3, 4, 5]

LEVEL_STRING = {
    0: "DEBUG",
    1: "INFO",
    2: "NOTICE",
    3: "WARNING",
    4: "ERROR",
    5: "FATAL",
}


class UI(Protocol):
    """User interface *interface*; available library-wide to avoid using print"""

    level: int

    def message(self, level: LEVEL_LITERAL, *values: str | Any) -> None:
        ...

    def debug(self, *values: str | Any) -> None:
        """Print a debug message."""
        self.message(DEBUG, *values)

    def info(self, *values: str | Any) -> None:
        """Print an informational message"""
        self.message(INFO, *values)

    def notice(self, *values: str | Any) -> None:
        """Notify a relevant message to the user."""
        self.message(NOTICE, *values)

    def warning(self, *values: str | Any) -> None:
        """Notify a warning."""
        self.message(WARNING, *values)

    def error(self, *values: str | Any) -> None:
        """Notify an error."""
        self.message(ERROR, *values)

    def fatal(self, *values: str | Any) -> None:
        """Notify a fatal error."""
        self.message(FATAL, *values)


_ui: UI


def instance(new: None | UI = None) -> UI:
    """Get or override the current instance"""
    global _ui
    if new is not None:
        _ui = new
    return _ui
