"""Collection of global constants and useful definitions"""
from __future__ import annotations

import pathlib

from typing_extensions import Final, Literal, TypeAlias

DEFAULT_PASSWD_FILE: Final = pathlib.Path("/etc/passwd")
"""Canonical location of the account database"""

DEFAULT_GROUP_FILE: Final = pathlib.Path("/etc/group")
"""Canonical location of the group database"""

FIELD_SEPARATOR: Final = ":"
MEMBER_SEPARATOR: Final = ","

PASSWD_FIELDS: Final = 7
"""Number of colon separated columns in a passwd line::

    username:password:uid:gid:comment:home:shell
"""

GROUP_FIELDS: Final = 4
"""Number of colon separated columns in a group line::

    name:password:gid:member1,member2,...
"""

ID_MAX: Final = 2**32 - 1
"""Largest valid uid/gid; ids are unsigned 32-bit integers"""

DATABASE_LITERAL: TypeAlias = Literal["passwd", "group"]
"""Known account database formats"""
