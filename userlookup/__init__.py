"""Library entry point.

Lookup of Unix users and groups in ``/etc/passwd`` and ``/etc/group``
formatted files, with a time based cache to avoid reading the files
more than needed.

On import the library executes the following sequence of actions:

- Load the default settings.
- Setup the global UI instance.
- Import the readers and record types.
"""
from __future__ import annotations

from typing import Any

import userlookup.utils
import userlookup.utils.config


def initlib(**settings: Any) -> None:
    """Initialize the library.

    Can be called again to re-initialize in another point; for instance
    when running tests.

    Args:
        settings: Overrides applied on top of the default settings. See
            :py:class:`userlookup.utils.config.Settings`.

    Raises:
        InvalidSetting: If an override is rejected.
    """
    if not hasattr(userlookup.utils.config, "conf"):
        userlookup.utils.config.conf = userlookup.utils.config.Configuration()
    else:
        userlookup.utils.config.conf.reset()
    userlookup.utils.config.conf.load_settings(**settings)
    userlookup.utils.init_ui(userlookup.utils.config.conf.settings.verbosity)


initlib()

# Load public API --------------------------------------------------------------
from userlookup.async_reader import AsyncGroupReader, AsyncPasswdReader
from userlookup.errors import DatabaseReadError, InvalidSetting
from userlookup.fileparse import GroupEntry, PasswdEntry
from userlookup.reader import GroupReader, PasswdReader
