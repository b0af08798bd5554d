"""Errors and exceptions raised by the library
"""

from __future__ import annotations

import errno
import pathlib


class DatabaseReadError(OSError):
    """Raised when an account database file cannot be read.

    For instance, when the file is missing, is a directory, or the
    process lacks permission to read it. The exception is raised from
    whichever lookup triggered the refresh; the store keeps its
    previous snapshot and will retry the read on the next lookup.
    """

    def __init__(self, path: pathlib.Path, cause: OSError | UnicodeDecodeError) -> None:
        """
        Args:
            path: The file that could not be read.
            cause: The original error raised by the read. Content that is
                not valid text is reported with ``EILSEQ``.
        """
        if isinstance(cause, UnicodeDecodeError):
            super().__init__(errno.EILSEQ, str(cause), str(path))
        else:
            super().__init__(cause.errno, cause.strerror or str(cause), str(path))

        self.path = path
        """The database file that failed"""

        self.cause = cause
        """The original exception"""


class InvalidSetting(ValueError):
    """Raised when a configuration value is rejected"""

    def __init__(self, msg: None | str = None) -> None:
        """
        Args:
            msg: The exception message.
        """
        super().__init__(msg)
