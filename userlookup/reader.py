"""Blocking readers for the account databases.

Example::

    import userlookup

    reader = userlookup.PasswdReader(cache_lifetime=30)
    print(reader.get_username_by_uid(1000))

All lookups may raise :py:class:`~userlookup.errors.DatabaseReadError` if
the snapshot is stale and the file cannot be read.
"""

from __future__ import annotations

import threading
from typing import Any, Iterator, Optional, TypeVar

from userlookup.fileparse import GroupEntry, PasswdEntry
from userlookup.store import GroupStore, PasswdStore, RecordStore
from userlookup.utils import content

T = TypeVar("T")


class BlockingStore(RecordStore[T]):
    """Refreshes the snapshot with a blocking read.

    Refreshes are serialized with a lock; threads that were waiting for a
    refresh in progress reuse its result if it is still fresh.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._lock = threading.Lock()

    def ensure_fresh(self) -> None:
        """Read the file again if the snapshot is stale.

        Raises:
            DatabaseReadError: If the file could not be read.
        """
        if not self.is_stale():
            return
        with self._lock:
            if not self.is_stale():
                return
            self._refresh()

    def refresh(self) -> None:
        """Read the file, regardless of the age of the snapshot.

        Raises:
            DatabaseReadError: If the file could not be read.
        """
        with self._lock:
            self._refresh()

    def _refresh(self) -> None:
        path = self.path
        try:
            text = content(path)
        except (OSError, UnicodeDecodeError) as exce:
            raise self.read_failed(path, exce) from exce
        self.replace(path, text)

    def __iter__(self) -> Iterator[T]:
        self.ensure_fresh()
        return self.traverse()


class PasswdReader(BlockingStore[PasswdEntry], PasswdStore):
    """Read and lookup user information from a passwd file.

    The information is cached for ``cache_lifetime`` to avoid reading the
    file more than needed::

        reader = PasswdReader.from_file("tests/data/passwd", 0)
        assert len(reader.get_entries()) == 3
        assert reader.get_username_by_uid(1000) == "user1"
    """

    def get_entries(self) -> list[PasswdEntry]:
        """Get the entire list of passwd entries.

        The list is a copy; later refreshes do not modify it.
        """
        self.ensure_fresh()
        return self.snapshot()

    def iter_entries(self) -> Iterator[PasswdEntry]:
        """Iterate over the passwd entries"""
        self.ensure_fresh()
        return self.traverse()

    def get_by_username(self, username: str) -> Optional[PasswdEntry]:
        """Look up a PasswdEntry by username"""
        self.ensure_fresh()
        return self.first("username", username)

    def get_by_uid(self, uid: int) -> Optional[PasswdEntry]:
        """Look up a PasswdEntry by uid"""
        self.ensure_fresh()
        return self.first("uid", uid)

    def get_username_by_uid(self, uid: int) -> Optional[str]:
        """Look up a username by uid"""
        self.ensure_fresh()
        return self.first_field("uid", uid, "username")

    def get_uid_by_username(self, username: str) -> Optional[int]:
        """Look up a user ID by username"""
        self.ensure_fresh()
        return self.first_field("username", username, "uid")


class GroupReader(BlockingStore[GroupEntry], GroupStore):
    """Read and lookup group information from a group file.

    The information is cached for ``cache_lifetime`` to avoid reading the
    file more than needed::

        reader = GroupReader.from_file("tests/data/group", 0)
        assert len(reader.get_groups()) == 3
        assert reader.get_name_by_gid(100) == "users"
    """

    def get_groups(self) -> list[GroupEntry]:
        """Get the entire list of group entries.

        The list is a copy; later refreshes do not modify it.
        """
        self.ensure_fresh()
        return self.snapshot()

    def iter_groups(self) -> Iterator[GroupEntry]:
        """Iterate over the group entries"""
        self.ensure_fresh()
        return self.traverse()

    def get_by_name(self, name: str) -> Optional[GroupEntry]:
        """Look up a GroupEntry by the group name"""
        self.ensure_fresh()
        return self.first("name", name)

    def get_by_gid(self, gid: int) -> Optional[GroupEntry]:
        """Look up a GroupEntry by gid"""
        self.ensure_fresh()
        return self.first("gid", gid)

    def get_name_by_gid(self, gid: int) -> Optional[str]:
        """Look up a group name by gid"""
        self.ensure_fresh()
        return self.first_field("gid", gid, "name")

    def get_gid_by_name(self, name: str) -> Optional[int]:
        """Look up a group ID by the group name"""
        self.ensure_fresh()
        return self.first_field("name", name, "gid")
