"""Support module containing common utilities"""
from __future__ import annotations

import pathlib
from typing import TextIO

from . import _ui_log, ui


def content(file: pathlib.Path | str, encoding: str = "utf8") -> str:
    """Return the contents of the file as a string"""

    file = pathlib.Path(file).expanduser()
    with open(file, "r", encoding=encoding, newline="") as stream:
        return stream.read()


def init_ui(verbosity_level: int = ui.WARNING, stream: None | TextIO = None) -> None:
    """Install the log UI with the given verbosity"""

    ui.instance(_ui_log.LogUI(verbosity_level, stream))
