"""Parsers for the account database file formats.

Both formats hold one record per line, with colon separated columns::

    username:password:uid:gid:comment:home:shell     (passwd)
    name:password:gid:member1,member2,...            (group)

A line either produces a complete record or nothing at all; the parsers
never raise on malformed input.
"""

from __future__ import annotations

import re
from typing import Iterable, NamedTuple, Optional

from userlookup.utils import constants

_unsigned_re = re.compile(r"\+?[0-9]+")


class PasswdEntry(NamedTuple):
    """Python structure for storage of passwd entries"""

    username: str
    password: str
    uid: int
    gid: int
    comment: str
    home: str
    shell: str


class GroupEntry(NamedTuple):
    """Python structure for storage of group entries"""

    name: str
    password: str
    gid: int
    members: tuple[str, ...]


def parse_id(value: str) -> Optional[int]:
    """Convert a uid/gid column into an integer.

    Only plain decimal digits, optionally preceded by ``+``, are accepted;
    whitespace, negative numbers and values that do not fit in an unsigned
    32-bit integer are rejected.

    Return:
        The id, or ``None`` if the column is not a valid id.
    """
    if _unsigned_re.fullmatch(value) is None:
        return None
    ret = int(value)
    if ret > constants.ID_MAX:
        return None
    return ret


def strip_line_end(line: str) -> str:
    """Remove one trailing ``\\n`` and then one trailing ``\\r``, if present"""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def lines(text: str) -> list[str]:
    """Split the content of a database file into lines.

    Lines end with ``\\n``, a trailing ``\\r`` is removed, and a final
    newline does not produce an extra empty line. No other character is
    treated as a line break.
    """
    ret = text.split("\n")
    if ret[-1] == "":
        ret.pop()
    return [strip_line_end(line) for line in ret]


def parse_passwd(line: str) -> Optional[PasswdEntry]:
    """Parse a single line of a passwd file.

    The line is split in at most 7 columns, so colons in the shell column
    are kept as they are.

    Return:
        The entry, or ``None`` if the line has less than 7 columns or the
        uid/gid are not valid ids.
    """
    cols = line.split(constants.FIELD_SEPARATOR, maxsplit=constants.PASSWD_FIELDS - 1)
    if len(cols) < constants.PASSWD_FIELDS:
        return None
    uid = parse_id(cols[2])
    gid = parse_id(cols[3])
    if uid is None or gid is None:
        return None
    return PasswdEntry(
        username=cols[0],
        password=cols[1],
        uid=uid,
        gid=gid,
        comment=cols[4],
        home=cols[5],
        shell=cols[6],
    )


def parse_group(line: str, strict_members: bool = False) -> Optional[GroupEntry]:
    """Parse a single line of a group file.

    Args:
        line: The line, without the trailing newline.
        strict_members: An empty member column results in ``()``. By
            default the column is split as is, resulting in ``("",)``.

    Return:
        The entry, or ``None`` if the line has less than 4 columns or the
        gid is not a valid id.
    """
    cols = line.split(constants.FIELD_SEPARATOR, maxsplit=constants.GROUP_FIELDS - 1)
    if len(cols) < constants.GROUP_FIELDS:
        return None
    gid = parse_id(cols[2])
    if gid is None:
        return None
    if strict_members and cols[3] == "":
        members: tuple[str, ...] = ()
    else:
        members = tuple(cols[3].split(constants.MEMBER_SEPARATOR))
    return GroupEntry(name=cols[0], password=cols[1], gid=gid, members=members)


def passwd(content: Iterable[str]) -> list[PasswdEntry]:
    """Convert the content of a passwd file into a list of PasswdEntry.

    Args:
        content: The lines of a passwd file. A trailing newline is ignored.

    Return:
        The valid entries found in the data provided, in order.
    """
    ret: list[PasswdEntry] = []
    for line in content:
        entry = parse_passwd(strip_line_end(line))
        if entry is not None:
            ret.append(entry)
    return ret


def group(content: Iterable[str], strict_members: bool = False) -> list[GroupEntry]:
    """Convert the content of a group file into a list of GroupEntry.

    Args:
        content: The lines of a group file. A trailing newline is ignored.
        strict_members: Passed to :py:func:`parse_group`.

    Return:
        The valid entries found in the data provided, in order.
    """
    ret: list[GroupEntry] = []
    for line in content:
        entry = parse_group(strip_line_end(line), strict_members)
        if entry is not None:
            ret.append(entry)
    return ret
