"""Library configuration.

Settings are kept in a single, process-wide :py:class:`Configuration`
instance (``conf``), created by :py:func:`userlookup.initlib`. Values are
validated with pydantic; nothing is read from disk or from the
environment, callers override settings explicitly::

    from userlookup.utils.config import conf

    conf.load_settings(passwd_file="/srv/chroot/etc/passwd", cache_lifetime=30)
"""
from __future__ import annotations

import pathlib
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from userlookup.errors import InvalidSetting
from userlookup.utils import constants, ui


class Settings(BaseModel):
    """User adjustable settings"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    passwd_file: pathlib.Path = constants.DEFAULT_PASSWD_FILE
    """Account database read by readers constructed without a path"""

    group_file: pathlib.Path = constants.DEFAULT_GROUP_FILE
    """Group database read by readers constructed without a path"""

    cache_lifetime: float = Field(default=0.0, ge=0)
    """Seconds a snapshot is served before re-reading; ``0`` disables caching"""

    strict_members: bool = False
    """Parse an empty group member field as no members instead of ``[""]``"""

    verbosity: int = Field(default=ui.WARNING, ge=ui.DEBUG, le=ui.FATAL)
    """Minimum level of the messages printed by the UI"""


class Configuration:
    """Holds the current settings of the library"""

    settings: Settings

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Discard every override and return to the default settings"""
        self.settings = Settings()

    def load_settings(self, **overrides: Any) -> Settings:
        """Apply *overrides* on top of the current settings.

        Args:
            overrides: Setting names and their new values.

        Raises:
            InvalidSetting: If a name is unknown or a value is rejected.
                The current settings are kept.

        Returns:
            The new settings.
        """
        try:
            self.settings = Settings(**{**self.settings.model_dump(), **overrides})
        except ValidationError as exce:
            raise InvalidSetting(str(exce)) from exce
        return self.settings

    def default_file(self, database: constants.DATABASE_LITERAL) -> pathlib.Path:
        """Return the configured path for *database*"""
        if database == "passwd":
            return self.settings.passwd_file
        if database == "group":
            return self.settings.group_file
        raise ValueError(f"Unknown database {database}")


conf: Configuration
